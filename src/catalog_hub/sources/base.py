"""Base source interface."""

from abc import ABC, abstractmethod
from pathlib import Path

Location = str | Path
RawRow = dict[str, str | None]


class BaseSource(ABC):
    """Abstract base class for raw record sources."""

    @abstractmethod
    def read_rows(self, location: Location) -> list[RawRow]:
        """Read raw rows from a source location.

        Args:
            location: Local path or URL of the source

        Returns:
            One dict per non-empty row, keyed by normalized column name
        """
        pass
