"""Abstract interface for the transcript table."""

from abc import ABC, abstractmethod
from typing import Any


class TranscriptRepository(ABC):
    """Abstract base class for append-only transcript stores."""

    @abstractmethod
    def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        """
        Inserts one transcript row.

        Args:
            row: Column values for the new row.

        Returns:
            The stored row as returned by the database.

        Raises:
            InsertFailedError: If the insert fails or returns nothing.
        """

    @abstractmethod
    def get(self, record_id: Any) -> dict[str, Any] | None:
        """
        Reads back a stored row by its id.

        Returns:
            The row, or None when it does not exist.
        """
