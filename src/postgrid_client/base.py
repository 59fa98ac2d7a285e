"""
Abstract base classes for the client's pluggable collaborators.
"""

from abc import ABC, abstractmethod
from threading import Event
from typing import Optional


class RateLimiter(ABC):
    """
    Abstract base for rate limiters.

    Rate limiters control the rate at which requests are made, and are
    shared by every call issued through one client. Implementations must
    be thread-safe.
    """

    @abstractmethod
    def wait(self, cancel: Optional[Event] = None) -> None:
        """Block until it's safe to make another request."""
        pass

    @abstractmethod
    def acquire(self, count: int = 1, cancel: Optional[Event] = None) -> None:
        """
        Acquire one or more request slots.

        Args:
            count: Number of requests to acquire
            cancel: Optional event; if it is set before the slots are
                acquired the wait is abandoned

        Raises:
            CancelledError: if ``cancel`` is set before the slots are acquired
        """
        pass
