"""System infrastructure port definitions."""

from abc import ABC, abstractmethod


class IClock(ABC):
    """Abstract interface for clock operations."""

    @abstractmethod
    def time(self) -> int:
        """Get current unix time in whole seconds."""
        ...
