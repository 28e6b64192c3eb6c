"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import URLRecord


class URLStoreBase(ABC):
    """Abstract base class for URL record persistence.

    Lookups return ``None`` on a miss and raise ``StoreError`` on failure;
    the two are never conflated.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backing structures if they don't exist. Idempotent."""
        pass

    @abstractmethod
    async def find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        """Get the record for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_canonical(self, canonical_url: str) -> Optional[URLRecord]:
        """Get the record for a canonical URL.

        Args:
            canonical_url: The canonical URL to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def short_code_exists(self, short_code: str) -> bool:
        """Check if a short code already exists.

        Args:
            short_code: The short code to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def insert(self, record: URLRecord) -> URLRecord:
        """Insert a new record.

        Args:
            record: The record to store (``id`` is ignored)

        Returns:
            The stored record with its assigned ``id``

        Raises:
            UniqueViolationError: If short_code or canonical_url already exists
            StoreError: On any other failure
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored records."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop accepting operations and wait for in-flight ones to finish."""
        pass
