"""
In-memory fixed-window rate limiting enforcement.

This module contains the enforcement logic - the "how" of rate limiting.
For configuration and result types, see rate_limit_config.py.

Per-process only: running multiple workers multiplies the effective limit.
A client can get up to 2 * max_requests through in a short span that straddles
a window boundary.
"""
import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from core.rate_limit_config import RateLimitConfig, RateLimitResult

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 300.0


@dataclass
class _WindowState:
    count: int
    reset_at: int  # epoch milliseconds


class FixedWindowRateLimiter:
    """
    Rate limiter counting requests per identifier in fixed windows.

    A window opens on an identifier's first request and lasts window_ms. Expired
    windows are reset lazily on the next check, and removed by sweep() so that
    identifiers which stop sending requests do not accumulate.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_ms: int = 60_000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the limiter.

        Args:
            max_requests: Maximum allowed requests per window.
            window_ms: Window length in milliseconds.
            clock: Time source returning Unix time in seconds.

        Raises:
            ValueError: If max_requests or window_ms is not positive.
        """
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")

        self.max_requests = max_requests
        self.window_ms = window_ms
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, _WindowState] = {}
        self._sweeper: threading.Thread | None = None
        self._stop_sweeper = threading.Event()

    @classmethod
    def from_config(
        cls, config: RateLimitConfig, clock: Callable[[], float] = time.time,
    ) -> "FixedWindowRateLimiter":
        """Build a limiter from a RateLimitConfig."""
        return cls(max_requests=config.max_requests, window_ms=config.window_ms, clock=clock)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def check(self, identifier: str) -> RateLimitResult:
        """Record a request for identifier and report whether it is allowed."""
        now = self._now_ms()
        with self._lock:
            state = self._windows.get(identifier)

            # No record or expired window - start a new one
            if state is None or state.reset_at <= now:
                state = _WindowState(count=1, reset_at=now + self.window_ms)
                self._windows[identifier] = state
                return self._allowed(state)

            if state.count < self.max_requests:
                state.count += 1
                return self._allowed(state)

            reset_at = state.reset_at

        return RateLimitResult(
            allowed=False,
            limit=self.max_requests,
            remaining=0,
            reset_at=reset_at,
            retry_after=max(0, math.ceil((reset_at - now) / 1000)),
        )

    def _allowed(self, state: _WindowState) -> RateLimitResult:
        return RateLimitResult(
            allowed=True,
            limit=self.max_requests,
            remaining=self.max_requests - state.count,
            reset_at=state.reset_at,
            retry_after=0,
        )

    def sweep(self) -> int:
        """Remove entries whose window has already elapsed. Returns the number removed."""
        now = self._now_ms()
        with self._lock:
            expired = [key for key, state in self._windows.items() if state.reset_at <= now]
            for key in expired:
                del self._windows[key]
        if expired:
            logger.debug("rate_limit_sweep", extra={"removed": len(expired)})
        return len(expired)

    def clear(self) -> None:
        """Forget every tracked identifier."""
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        """Number of identifiers currently tracked."""
        with self._lock:
            return len(self._windows)

    def start_sweeper(self, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS) -> None:
        """Start a daemon thread that calls sweep() every interval_seconds."""
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        if self._sweeper is not None and self._sweeper.is_alive():
            return

        self._stop_sweeper.clear()

        def _run() -> None:
            while not self._stop_sweeper.wait(interval_seconds):
                self.sweep()

        self._sweeper = threading.Thread(
            target=_run, name="rate-limit-sweeper", daemon=True,
        )
        self._sweeper.start()

    def stop_sweeper(self) -> None:
        """Stop the sweeper thread if it is running."""
        self._stop_sweeper.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=5)
            self._sweeper = None
