"""Storage and caching."""

from predicta.storage.cache import CacheStore, TTLCache

__all__ = ["CacheStore", "TTLCache"]
