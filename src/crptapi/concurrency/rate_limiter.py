"""Fixed-window rate limiter with a background reset thread."""

from __future__ import annotations

import asyncio
import logging
import math
import threading
import time
from types import TracebackType

from crptapi.errors.exceptions import Cancelled, Misconfiguration
from crptapi.types import TimeUnit

logger = logging.getLogger(__name__)


class RateLimiter:
    """Admits at most ``limit`` operations per fixed window of ``window`` seconds.

    A daemon thread zeroes the admission counter every ``window`` seconds,
    the first time one full window after construction. A caller that finds
    the window full undoes its increment and sleeps one whole window before
    checking again, so admission after a full window is up to ``window``
    seconds late.

    ``limit=0`` is accepted but admits nothing: every ``acquire()`` waits
    until it is cancelled or the limiter is shut down.

    The reset thread runs until ``shutdown()``; use the limiter as a context
    manager to guarantee that.
    """

    def __init__(self, limit: int, window: float) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise Misconfiguration(
                f"Rate limit must be a non-negative integer, got {limit!r}",
                setting="request_limit",
            )
        if not window > 0:
            raise Misconfiguration(
                f"Rate limit window must be positive, got {window!r}",
                setting="window",
            )
        if limit == 0:
            logger.warning(
                "Rate limiter created with limit=0: acquire() will block until cancelled"
            )

        self._limit = limit
        self._window = float(window)

        # Window state, guarded by _lock
        self._count = 0
        self._lock = threading.Lock()
        self._closed = threading.Event()

        # Stats
        self._total_admitted = 0
        self._total_backoffs = 0
        self._total_resets = 0
        self._total_wait_seconds = 0.0

        self._reset_thread = threading.Thread(
            target=self._run_resets,
            name="crptapi-rate-limiter",
            daemon=True,
        )
        self._reset_thread.start()

    @classmethod
    def per(cls, time_unit: TimeUnit | str, limit: int) -> RateLimiter:
        """Build a limiter admitting ``limit`` calls per one ``time_unit``."""
        try:
            unit = TimeUnit(time_unit)
        except ValueError:
            raise Misconfiguration(
                f"Unknown time unit {time_unit!r}; expected one of "
                f"{', '.join(u.value for u in TimeUnit)}",
                setting="time_unit",
            ) from None
        return cls(limit, unit.seconds)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window(self) -> float:
        return self._window

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def acquire(self, cancel_event: threading.Event | None = None) -> None:
        """Block until admitted.

        Raises Cancelled if ``cancel_event`` is set while waiting, or if the
        limiter is shut down. A cancelled call leaves no admission behind.
        """
        started = time.monotonic()
        waiter = cancel_event if cancel_event is not None else self._closed

        while True:
            if self._closed.is_set():
                raise Cancelled("Rate limiter has been shut down", reason="shutdown")
            if self._try_admit():
                break
            if waiter.wait(self._window):
                reason = "shutdown" if waiter is self._closed else "cancelled"
                raise Cancelled("Cancelled while waiting for rate limit", reason=reason)

        self._record_wait(time.monotonic() - started)

    async def acquire_async(self) -> None:
        """Wait until admitted without blocking the event loop.

        Task cancellation propagates as asyncio.CancelledError; a limiter
        shut down meanwhile raises Cancelled on the next check.
        """
        started = time.monotonic()

        while True:
            if self._closed.is_set():
                raise Cancelled("Rate limiter has been shut down", reason="shutdown")
            if self._try_admit():
                break
            await asyncio.sleep(self._window)

        self._record_wait(time.monotonic() - started)

    def try_acquire(self) -> bool:
        """Single non-blocking attempt. False means retry in a later window."""
        if self._closed.is_set():
            return False
        return self._try_admit()

    def shutdown(self) -> None:
        """Stop the reset thread and cancel pending waiters. Idempotent."""
        self._closed.set()
        if self._reset_thread is not threading.current_thread():
            self._reset_thread.join()
        logger.debug("Rate limiter shut down after %d resets", self._total_resets)

    @property
    def stats(self) -> dict:
        """Return current rate limiter statistics."""
        with self._lock:
            return {
                "limit": self._limit,
                "window_seconds": self._window,
                "in_window": self._count,
                "total_admitted": self._total_admitted,
                "total_backoffs": self._total_backoffs,
                "total_resets": self._total_resets,
                "total_wait_seconds": self._total_wait_seconds,
                "closed": self._closed.is_set(),
            }

    def __enter__(self) -> RateLimiter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

    def _try_admit(self) -> bool:
        """Increment-and-compare; an over-limit attempt is undone in place."""
        with self._lock:
            self._count += 1
            if self._count <= self._limit:
                self._total_admitted += 1
                return True
            self._count -= 1
            self._total_backoffs += 1

        logger.debug("Rate limit of %d reached, backing off %.3fs", self._limit, self._window)
        return False

    def _record_wait(self, seconds: float) -> None:
        with self._lock:
            self._total_wait_seconds += seconds

    def _run_resets(self) -> None:
        """Zero the counter on a fixed-rate schedule until shut down."""
        next_reset = time.monotonic() + self._window

        while not self._closed.wait(max(0.0, next_reset - time.monotonic())):
            with self._lock:
                self._count = 0
                self._total_resets += 1

            # A late wake-up collapses the missed boundaries into this reset
            now = time.monotonic()
            missed = max(0, math.floor((now - next_reset) / self._window))
            next_reset += (missed + 1) * self._window
            logger.debug("Rate limit window reset")
