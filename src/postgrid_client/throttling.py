"""
Rate limiting implementations for controlling API request rates.

Provides thread-safe rate limiters that every outbound call passes
through before the HTTP request is issued.
"""

from __future__ import annotations

import time
import threading
from typing import Optional

from .base import RateLimiter
from .constants import DEFAULT_RATE_LIMIT, DEFAULT_BURST
from .errors import CancelledError


class TokenBucket(RateLimiter):
    """
    Token bucket rate limiter.

    Maintains a bucket of "tokens" that refill at a specified rate
    (requests per second). Each request consumes one token. When the
    bucket is empty, requests wait until tokens become available.

    The lock only guards the token accounting. Waiting happens outside
    it, so callers only hold each other up by competing for tokens.
    """

    def __init__(
        self,
        rate: float = DEFAULT_RATE_LIMIT,
        capacity: Optional[int] = DEFAULT_BURST,
        max_sleep_s: float = 0.05,
    ):
        """
        Initialize token bucket.

        Args:
            rate: Tokens per second (i.e., requests per second allowed)
            capacity: Maximum bucket size, i.e. the burst (defaults to 2x rate if None)
            max_sleep_s: Longest single sleep between retries while waiting
        """
        if rate <= 0:
            raise ValueError("rate must be > 0")
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be > 0")

        self.rate = float(rate)
        self.capacity = capacity if capacity is not None else max(1, int(rate * 2))
        self.tokens = float(self.capacity)
        self.last_refill = time.perf_counter()
        self.lock = threading.Lock()
        self.max_sleep_s = max_sleep_s

    def __repr__(self) -> str:
        return f"TokenBucket(rate={self.rate}, capacity={self.capacity})"

    def wait(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until it's safe to make a request."""
        self.acquire(1, cancel=cancel)

    def acquire(self, count: int = 1, cancel: Optional[threading.Event] = None) -> None:
        """
        Acquire one or more tokens.

        Blocks until the requested number of tokens are available.

        Args:
            count: Number of tokens to acquire
            cancel: Optional event that abandons the wait when set

        Raises:
            CancelledError: if ``cancel`` is set before the tokens are taken
        """
        if count <= 0:
            raise ValueError("count must be > 0")
        if count > self.capacity:
            raise ValueError(f"count {count} exceeds bucket capacity {self.capacity}")

        while True:
            if cancel is not None and cancel.is_set():
                raise CancelledError("cancelled while waiting for rate limiter")

            with self.lock:
                now = time.perf_counter()
                elapsed = now - self.last_refill
                self.last_refill = now

                # Add new tokens
                self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)

                # Check if we have enough
                if self.tokens >= count:
                    self.tokens -= count
                    return

                deficit_s = (count - self.tokens) / self.rate

            delay = min(deficit_s, self.max_sleep_s)
            if cancel is not None:
                cancel.wait(delay)
            else:
                time.sleep(delay)


class NoOpRateLimiter(RateLimiter):
    """
    Rate limiter that does nothing (for testing/development).

    Still honours a cancel signal that is already set.
    """

    def wait(self, cancel: Optional[threading.Event] = None) -> None:
        self.acquire(1, cancel=cancel)

    def acquire(self, count: int = 1, cancel: Optional[threading.Event] = None) -> None:
        if cancel is not None and cancel.is_set():
            raise CancelledError("cancelled before request was issued")
