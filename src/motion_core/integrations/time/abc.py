"""Time operations abstraction for testing.

This module provides an ABC for clock and sleep operations so cache freshness
and retry backoff can be tested without waiting on the wall clock.
"""

from abc import ABC, abstractmethod


class Time(ABC):
    """Abstract time operations for dependency injection."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Sleep for specified number of seconds.

        Args:
            seconds: Number of seconds to sleep
        """
        ...

    @abstractmethod
    def now(self) -> float:
        """Current time as seconds since the Unix epoch."""
        ...
