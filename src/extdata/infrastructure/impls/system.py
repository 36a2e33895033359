"""Default implementations of infrastructure abstractions."""

import time

from extdata.infrastructure.ports.system import IClock


class SystemClock(IClock):
    """Default implementation using system time."""

    def time(self) -> int:
        """Get current unix time in whole seconds."""
        return int(time.time())
