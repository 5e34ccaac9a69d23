"""Serialized, rate-limited execution of upstream requests.

Every call to the provider goes through one ``RequestQueue``. Operations run
strictly one at a time in submission order, consecutive starts are spaced by
``request_delay`` seconds, and "too many requests" responses are retried in
place with exponential backoff before the queue moves on.
"""

from collections import deque
from typing import Any, Awaitable, Callable, Deque, Optional, Tuple
import asyncio
import logging
import random
import time

from predicta.exceptions import RateLimitError, RateLimitExceededError
from predicta.ops.metrics import MetricsRecorder, get_metrics_recorder

logger = logging.getLogger(__name__)

Operation = Callable[[], Awaitable[Any]]


class RequestQueue:
    """
    FIFO queue with a single worker for provider calls.

    Args:
        request_delay: Minimum seconds between the starts of two requests
        max_attempts: Attempts per operation when it keeps getting rate limited
        backoff_base: Backoff wait is ``backoff_base * 2 ** attempt`` seconds
        max_backoff: Cap for a single backoff wait
        max_jitter: Upper bound of the random jitter added to each backoff
        adaptive_threshold: Consecutive rate limits tolerated before
            ``request_delay`` is raised
        delay_step: Increase applied to ``request_delay`` each time
        max_request_delay: Ceiling for the adaptive delay
        operation_timeout: Seconds allowed per attempt, None for no limit
        clock, sleep, rng: Injected for deterministic tests
    """

    def __init__(
        self,
        request_delay: float = 6.5,
        max_attempts: int = 5,
        backoff_base: float = 1.5,
        max_backoff: float = 60.0,
        max_jitter: float = 1.0,
        adaptive_threshold: int = 3,
        delay_step: float = 0.5,
        max_request_delay: Optional[float] = None,
        operation_timeout: Optional[float] = 20.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
        metrics: Optional[MetricsRecorder] = None,
    ) -> None:
        self._request_delay = max(0.0, float(request_delay))
        if max_request_delay is None:
            max_request_delay = self._request_delay * 2
        self._max_request_delay = max(self._request_delay, float(max_request_delay))
        self._max_attempts = max(1, int(max_attempts))
        self._backoff_base = max(0.0, float(backoff_base))
        self._max_backoff = max(0.0, float(max_backoff))
        self._max_jitter = max(0.0, float(max_jitter))
        self._adaptive_threshold = max(0, int(adaptive_threshold))
        self._delay_step = max(0.0, float(delay_step))
        self._operation_timeout = operation_timeout
        self._clock = clock
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._metrics = metrics or get_metrics_recorder()

        self._pending: Deque[Tuple[Operation, asyncio.Future]] = deque()
        self._worker: Optional[asyncio.Task] = None
        self._last_started: Optional[float] = None
        self._consecutive_rate_limits = 0

    @property
    def request_delay(self) -> float:
        return self._request_delay

    def queue_length(self) -> int:
        """Operations submitted but not yet started."""
        return len(self._pending)

    async def submit(self, operation: Operation) -> Any:
        """Run ``operation`` after everything submitted before it.

        Returns the operation's result or raises its exception. An operation
        rate limited on every attempt raises ``RateLimitExceededError``.
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._pending.append((operation, future))
        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain())
        return await future

    async def close(self) -> None:
        """Stop the worker and cancel every operation still pending or running."""
        while self._pending:
            _, future = self._pending.popleft()
            future.cancel()
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
        self._worker = None

    async def _drain(self) -> None:
        while self._pending:
            operation, future = self._pending.popleft()
            try:
                result = await self._execute_with_retry(operation)
            except asyncio.CancelledError:
                # Closed mid-request; release whoever is awaiting submit()
                future.cancel()
                raise
            except Exception as exc:
                self._metrics.increment("queue.failed")
                if not future.done():
                    future.set_exception(exc)
            else:
                if not future.done():
                    future.set_result(result)

    async def _execute_with_retry(self, operation: Operation) -> Any:
        await self._wait_for_slot()
        attempt = 0
        while True:
            attempt += 1
            self._last_started = self._clock()
            self._metrics.increment("queue.attempts")
            started = time.perf_counter()
            try:
                result = await self._run_once(operation)
            except RateLimitError as exc:
                self._record_timing(started)
                self._metrics.increment("queue.rate_limited")
                self._note_rate_limit()
                if attempt >= self._max_attempts:
                    logger.warning(
                        "Giving up on %s after %d rate-limited attempts.", exc.source, attempt
                    )
                    raise RateLimitExceededError(
                        exc.source, attempts=attempt, retry_after=exc.retry_after
                    ) from exc
                wait = self._backoff(attempt, exc.retry_after)
                logger.warning(
                    "Rate limited by %s (%d consecutive). Waiting %.1fs (attempt %d/%d).",
                    exc.source,
                    self._consecutive_rate_limits,
                    wait,
                    attempt,
                    self._max_attempts,
                )
                await self._sleep(wait)
                continue
            except BaseException:
                self._record_timing(started)
                raise
            self._record_timing(started)
            self._consecutive_rate_limits = 0
            return result

    async def _run_once(self, operation: Operation) -> Any:
        if self._operation_timeout:
            return await asyncio.wait_for(operation(), timeout=self._operation_timeout)
        return await operation()

    async def _wait_for_slot(self) -> None:
        if self._last_started is None:
            return
        remaining = self._request_delay - (self._clock() - self._last_started)
        if remaining > 0:
            logger.debug("Waiting %.2fs before next request (%d queued).", remaining, len(self._pending))
            await self._sleep(remaining)

    def _backoff(self, attempt: int, retry_after: Optional[float]) -> float:
        wait = self._backoff_base * (2 ** attempt) + self._rng.uniform(0, self._max_jitter)
        if retry_after:
            wait = max(wait, float(retry_after))
        return min(wait, self._max_backoff)

    def _note_rate_limit(self) -> None:
        self._consecutive_rate_limits += 1
        if self._consecutive_rate_limits <= self._adaptive_threshold:
            return
        if self._request_delay >= self._max_request_delay:
            return
        self._request_delay = min(self._max_request_delay, self._request_delay + self._delay_step)
        logger.info("Raised request delay to %.2fs after repeated rate limiting.", self._request_delay)

    def _record_timing(self, started: float) -> None:
        self._metrics.timing("queue.request_ms", (time.perf_counter() - started) * 1000)
