"""Data models for URL shortener."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class URLRecord:
    """Represents a URL mapping in the database."""

    short_code: str
    original_url: str
    canonical_url: str
    id: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "short_code": self.short_code,
            "original_url": self.original_url,
            "canonical_url": self.canonical_url,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "URLRecord":
        """Create from a database row (sqlite3.Row or dict)."""
        return cls(
            id=row["id"],
            short_code=row["short_code"],
            original_url=row["original_url"],
            canonical_url=row["canonical_url"],
        )
