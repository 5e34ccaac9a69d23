"""
Custom exceptions for the Predicta fixture and prediction core.

Upstream failures are raised as typed errors so callers can decide which
ones to retry, which ones to fall back from, and which ones to surface.

Usage:
    from predicta.exceptions import RateLimitError, DataFetchError

    try:
        payload = await client.get_standings("PL")
    except RateLimitError as e:
        print(f"Slow down: {e}")
    except DataFetchError as e:
        print(f"Data fetch failed: {e}")
"""

from typing import Optional


class PredictaError(Exception):
    """
    Base exception for all Predicta errors.

    All custom exceptions inherit from this, allowing:
        except PredictaError:
            # Catch any system error
    """
    pass


# =============================================================================
# DATA ERRORS
# =============================================================================

class DataFetchError(PredictaError):
    """
    Error fetching data from the provider.

    Raised when:
    - API request fails (network error, timeout)
    - API returns error status code
    - Response body cannot be decoded
    """

    def __init__(self, source: str, message: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        self.source = source
        self.original_error = original_error
        msg = f"Error fetching from {source}"
        if message:
            msg += f": {message}"
        if original_error:
            msg += f" (caused by: {type(original_error).__name__}: {original_error})"
        super().__init__(msg)


class NetworkError(DataFetchError):
    """Connection failure or timeout before a response arrived."""
    pass


class UpstreamError(DataFetchError):
    """
    The provider answered with an error status.

    Raised when:
    - Response status is not 2xx
    - Response body is not valid JSON
    """

    def __init__(self, source: str, message: Optional[str] = None,
                 status_code: Optional[int] = None, response_body: Optional[str] = None):
        self.status_code = status_code
        self.response_body = response_body
        msg = message or "request failed"
        if status_code:
            msg += f" (status: {status_code})"
        super().__init__(source, msg)


class AuthenticationError(UpstreamError):
    """
    API token missing or rejected.

    Raised when:
    - No token is configured
    - Provider returns 401 or 403
    """
    pass


class RateLimitError(UpstreamError):
    """
    Provider returned "too many requests".

    The request queue retries these in place with backoff.
    """

    def __init__(self, source: str, retry_after: Optional[float] = None,
                 message: Optional[str] = None):
        self.retry_after = retry_after
        msg = message or "rate limit exceeded"
        if retry_after:
            msg += f", retry after {retry_after:g}s"
        super().__init__(source, msg, status_code=429)


class RateLimitExceededError(RateLimitError):
    """Rate limited on every attempt the queue was allowed to make."""

    def __init__(self, source: str, attempts: int, retry_after: Optional[float] = None):
        self.attempts = attempts
        super().__init__(
            source,
            retry_after=retry_after,
            message=f"rate limit still exceeded after {attempts} attempts",
        )


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(PredictaError):
    """
    Configuration or setup error.

    Raised when:
    - An explicit config file does not exist
    - Invalid configuration value
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Configuration error ({setting}): {message}")
