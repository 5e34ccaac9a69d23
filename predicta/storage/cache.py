"""Cache interfaces."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import json
import logging
import threading
import time

logger = logging.getLogger(__name__)


class CacheStore:
    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def invalidate(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def size(self) -> int:
        raise NotImplementedError


class TTLCache(CacheStore):
    """Key/value store whose entries expire ``ttl_seconds`` after insertion.

    Expired entries are evicted lazily when read. When ``persist_path`` is
    given the whole map is written to that JSON file after each mutation and
    read back on construction; persistence problems are logged and ignored,
    so the cache always keeps working in memory.
    """

    def __init__(
        self,
        ttl_seconds: float,
        persist_path: Optional[Union[str, Path]] = None,
        clock: Callable[[], float] = time.time,
        name: str = "cache",
    ) -> None:
        self._ttl = max(0.0, float(ttl_seconds))
        self._path = Path(persist_path) if persist_path else None
        self._clock = clock
        self._name = name
        self._data: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._load()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, inserted_at = entry
            if self._clock() - inserted_at < self._ttl:
                return value
            self._data.pop(key, None)
            snapshot = dict(self._data)
        logger.debug("%s: evicted expired entry %s", self._name, key)
        self._save(snapshot)
        return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = (value, self._clock())
            snapshot = dict(self._data)
        self._save(snapshot)

    def invalidate(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is None:
                return
            snapshot = dict(self._data)
        self._save(snapshot)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
        if self._path is None:
            return
        try:
            self._path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("%s: failed to remove %s: %s", self._name, self._path, exc)

    def size(self) -> int:
        with self._lock:
            return len(self._data)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data)

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
            entries = {
                str(key): (entry["value"], float(entry["timestamp"]))
                for key, entry in payload.items()
            }
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.warning("%s: failed to load cache from %s: %s", self._name, self._path, exc)
            return
        self._data.update(entries)
        logger.debug("%s: loaded %d entries from %s", self._name, len(entries), self._path)

    def _save(self, snapshot: Dict[str, Tuple[Any, float]]) -> None:
        if self._path is None:
            return
        payload = {
            key: {"value": value, "timestamp": inserted_at}
            for key, (value, inserted_at) in snapshot.items()
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload), encoding="utf-8")
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("%s: failed to persist cache to %s: %s", self._name, self._path, exc)
