# src/tcprovider/infrastructure/protection/rate_limiter.py
import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional


@dataclass
class RateLimit:
    count: int
    window_start: float
    lock: Lock


class RateLimiter:
    """
    Admission limiter for API actions.

    Every action name gets its own fixed window. A caller that finds the
    window full waits for the next one instead of failing.
    """

    def __init__(self,
                 requests_per_second: int = 20,
                 window_size: float = 1.0,
                 overrides: Optional[Dict[str, int]] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self._requests_per_second = requests_per_second
        self._window_size = window_size
        self._overrides = dict(overrides or {})
        self._limits: Dict[str, RateLimit] = {}
        self._registry_lock = Lock()
        self._clock = clock
        self._sleep = sleep
        self._logger = logging.getLogger(__name__)

    def limit_for(self, key: str) -> int:
        """Requests allowed per window for a key."""
        return self._overrides.get(key, self._requests_per_second)

    def check(self, key: str) -> None:
        """
        Block until a request for key may proceed.

        Args:
            key: Identifier for the rate limit (the API action name)
        """
        with self._registry_lock:
            if key not in self._limits:
                self._limits[key] = RateLimit(0, self._clock(), Lock())
            limit = self._limits[key]

        allowed = self.limit_for(key)
        while True:
            with limit.lock:
                current_time = self._clock()

                # Check if window has expired
                if current_time - limit.window_start >= self._window_size:
                    limit.count = 0
                    limit.window_start = current_time

                if limit.count < allowed:
                    limit.count += 1
                    self._logger.debug(f"Request count for {key}: {limit.count}")
                    return

                wait = self._window_size - (current_time - limit.window_start)

            self._logger.debug(f"Rate limit of {allowed} per {self._window_size}s reached for {key}, waiting {wait:.3f}s")
            self._sleep(max(wait, 0.0))

    def reset(self, key: str) -> None:
        """Reset rate limit for a key."""
        with self._registry_lock:
            self._limits.pop(key, None)
