"""Exceptions raised by store implementations.

Classes:
    StoreError:
        Generic persistence failure (connection issues, locked database,
        closed store, etc.).

    UniqueViolationError:
        Raised by insert when a uniquely indexed column already holds the
        value. ``column`` names the offending column.
"""

from typing import Optional


class StoreError(Exception):
    """Generic base class for store failures."""

    pass


class UniqueViolationError(StoreError):
    """Exception raised when an insert would duplicate a unique column."""

    def __init__(self, column: Optional[str], message: str = ""):
        super().__init__(message or f"unique constraint violated on {column}")
        self.column = column
