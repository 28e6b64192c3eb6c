"""Database layer for URL shortener."""

from .base import URLStoreBase
from .cache import RedisCache
from .exceptions import StoreError, UniqueViolationError
from .models import URLRecord
from .sqlite import URLShortenerSQLite

__all__ = [
    "URLStoreBase",
    "URLShortenerSQLite",
    "URLRecord",
    "RedisCache",
    "StoreError",
    "UniqueViolationError",
]
