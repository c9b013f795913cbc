"""Real time implementation using the time module."""

import time

from motion_core.integrations.time.abc import Time


class RealTime(Time):
    """Production implementation using actual time.sleep() and time.time()."""

    def sleep(self, seconds: float) -> None:
        """Sleep for specified number of seconds using time.sleep().

        Args:
            seconds: Number of seconds to sleep
        """
        time.sleep(seconds)

    def now(self) -> float:
        return time.time()
