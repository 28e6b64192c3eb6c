"""Business logic service for URL shortener."""

import logging
from typing import Any, Dict, Optional

from .canonical import canonicalize
from .common.validators import MAX_URL_LENGTH, is_valid_short_code, is_valid_url
from .database.base import URLStoreBase
from .database.cache import RedisCache
from .database.exceptions import StoreError, UniqueViolationError
from .database.models import URLRecord
from .exceptions import (
    CodeGenerationExhaustedError,
    InvalidShortCodeError,
    InvalidURLError,
    NotFoundError,
    StoreFailureError,
)
from .shortcode import ShortCodeGenerator


class URLShortenerService:
    """Service layer for URL shortening business logic.

    Stateless across requests; the store arbitrates concurrent inserts
    through its unique indexes.
    """

    def __init__(
        self,
        db: URLStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ):
        """Initialize URL shortener service.

        Args:
            db: Store instance
            cache: Optional resolve cache
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Number of code attempts before giving up
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.db = db
        self.cache = cache
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries

    async def shorten(self, raw_url: str) -> str:
        """Return the short code for a URL, creating a record if needed.

        Args:
            raw_url: The URL as submitted

        Returns:
            Short code; the same one for every URL sharing a canonical form

        Raises:
            InvalidURLError: If the URL is rejected
            CodeGenerationExhaustedError: If every attempt collided
            StoreFailureError: On store failure
        """
        is_valid, error = is_valid_url(raw_url)
        if not is_valid:
            raise InvalidURLError(error)

        canonical = canonicalize(raw_url)
        # An empty path grows to "/" when canonicalized
        if len(canonical) > MAX_URL_LENGTH:
            raise InvalidURLError(f"URL is too long (max {MAX_URL_LENGTH} characters)")

        existing = await self._find_by_canonical(canonical)
        if existing:
            self.logger.debug(f"Existing short code for {canonical}: {existing.short_code}")
            return existing.short_code

        attempt = 0
        while True:
            short_code, attempt = await self._generate_unique_short_code(canonical, attempt)
            record = URLRecord(
                short_code=short_code,
                original_url=raw_url,
                canonical_url=canonical,
            )
            try:
                stored = await self.db.insert(record)
            except UniqueViolationError as e:
                if e.column == "canonical_url":
                    return await self._resolve_insert_race(canonical)
                # Another request took the code between the check and the insert
                self.logger.warning(f"Short code {short_code} taken at insert, retrying")
                attempt += 1
                continue
            except StoreError as e:
                raise StoreFailureError(f"failed to save URL: {e}") from e

            self.logger.info(f"Created short URL: {stored.short_code} -> {raw_url}")
            return stored.short_code

    async def resolve(self, short_code: str) -> str:
        """Return the original URL for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The original URL exactly as it was submitted

        Raises:
            InvalidShortCodeError: If the code is malformed (store not touched)
            NotFoundError: If no record matches
            StoreFailureError: On store failure
        """
        is_valid, error = is_valid_short_code(short_code)
        if not is_valid:
            raise InvalidShortCodeError(error)

        if self.cache:
            cached_url = await self.cache.get(short_code)
            if cached_url:
                self.logger.debug(f"Cache hit for {short_code}")
                return cached_url

        record = await self._find_by_short_code(short_code)
        if record is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError("short code not found")

        if self.cache:
            await self.cache.set(short_code, record.original_url)

        self.logger.debug(f"Retrieved URL: {short_code} -> {record.original_url}")
        return record.original_url

    async def get_url_info(self, short_code: str) -> Dict[str, Any]:
        """Get the complete record for a short code.

        Raises:
            InvalidShortCodeError: If the code is malformed
            NotFoundError: If no record matches
            StoreFailureError: On store failure
        """
        is_valid, error = is_valid_short_code(short_code)
        if not is_valid:
            raise InvalidShortCodeError(error)

        record = await self._find_by_short_code(short_code)
        if record is None:
            raise NotFoundError("short code not found")
        return record.to_dict()

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def _generate_unique_short_code(self, canonical: str, start_attempt: int = 0):
        """Find a free short code, starting at ``start_attempt``.

        Returns:
            Tuple of (short_code, attempt that produced it)

        Raises:
            CodeGenerationExhaustedError: If the attempt bound is reached
        """
        for attempt in range(start_attempt, self.max_collision_retries):
            code = self.generator.generate(canonical, attempt)
            try:
                taken = await self.db.short_code_exists(code)
            except StoreError as e:
                raise StoreFailureError(f"failed to check short code availability: {e}") from e

            if not taken:
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code, attempt

            self.logger.warning(f"Short code collision on attempt {attempt}: {code}")

        self.logger.error(
            f"Unable to generate unique short code for {canonical} "
            f"after {self.max_collision_retries} attempts"
        )
        raise CodeGenerationExhaustedError(
            f"failed to generate unique short code after {self.max_collision_retries} attempts"
        )

    async def _resolve_insert_race(self, canonical: str) -> str:
        """A concurrent request stored the same canonical URL first; use its code."""
        self.logger.warning(f"Concurrent insert for {canonical}, re-reading winner")
        winner = await self._find_by_canonical(canonical)
        if winner is None:
            raise StoreFailureError("canonical URL reported as duplicate but not found")
        return winner.short_code

    async def _find_by_canonical(self, canonical: str) -> Optional[URLRecord]:
        try:
            return await self.db.find_by_canonical(canonical)
        except StoreError as e:
            raise StoreFailureError(f"failed to look up URL: {e}") from e

    async def _find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        try:
            return await self.db.find_by_short_code(short_code)
        except StoreError as e:
            raise StoreFailureError(f"failed to look up short code: {e}") from e

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
