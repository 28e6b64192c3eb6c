"""SQLite implementation for URL shortener."""

import asyncio
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Callable, Optional, Set

from .base import URLStoreBase
from .exceptions import StoreError, UniqueViolationError
from .models import URLRecord

DATABASE_FILENAME = "urlshortener.db"

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS urls (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    short_code TEXT NOT NULL,
    original_url TEXT NOT NULL,
    canonical_url TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_urls_short_code ON urls (short_code);
CREATE UNIQUE INDEX IF NOT EXISTS idx_urls_canonical_url ON urls (canonical_url);
"""

UNIQUE_COLUMNS = ("short_code", "canonical_url")


class URLShortenerSQLite(URLStoreBase):
    """SQLite store for URL records.

    Each operation opens a short-lived connection in a worker thread, so the
    store is safe to share between concurrent requests. The unique indexes
    make SQLite the arbiter of insert races.
    """

    def __init__(
        self,
        db_path: str,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the store. No I/O happens until the first operation.

        Args:
            db_path: Path of the database file (parent directory is created)
            timeout_seconds: How long to wait on a locked database
            logger: Optional logger instance
        """
        self.db_path = db_path
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

        self._schema_lock = threading.Lock()
        self._schema_ready = False
        self._closed = False
        self._pending: Set[asyncio.Future] = set()

    @contextmanager
    def _connect(self):
        conn = sqlite3.connect(self.db_path, timeout=self.timeout_seconds)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._schema_lock:
            if self._schema_ready:
                return
            directory = os.path.dirname(os.path.abspath(self.db_path))
            if not os.path.isdir(directory):
                os.makedirs(directory, exist_ok=True)
                self.logger.info(f"Directory created: {directory}")
            with self._connect() as conn:
                conn.executescript(SCHEMA_SQL)
                conn.commit()
            self._schema_ready = True
            self.logger.debug(f"Schema ready in {self.db_path}")

    def _call(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking operation, translating driver errors to StoreError."""
        try:
            self._ensure_schema()
            return func(*args)
        except StoreError:
            raise
        except (sqlite3.Error, OSError) as e:
            self.logger.error(f"Store operation {func.__name__} failed: {e}")
            raise StoreError(str(e)) from e

    def _forget(self, future: asyncio.Future) -> None:
        self._pending.discard(future)
        if not future.cancelled():
            # Mark the exception retrieved when the awaiting request went away
            future.exception()

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run ``func`` in a worker thread, tracked so close() can drain it.

        The thread keeps running if the caller is cancelled; a committed
        insert stays committed.
        """
        if self._closed:
            raise StoreError("store is closed")
        future = asyncio.ensure_future(asyncio.to_thread(self._call, func, *args))
        self._pending.add(future)
        future.add_done_callback(self._forget)
        return await asyncio.shield(future)

    async def initialize(self) -> None:
        """Create the table and unique indexes if they don't exist."""
        await self._run(self._ensure_schema)
        self.logger.info(f"Database initialized at {self.db_path}")

    def _find_sync(self, column: str, value: str) -> Optional[URLRecord]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT id, short_code, original_url, canonical_url FROM urls WHERE {column} = ? LIMIT 1",
                (value,),
            ).fetchone()
        return URLRecord.from_row(row) if row else None

    async def find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        return await self._run(self._find_sync, "short_code", short_code)

    async def find_by_canonical(self, canonical_url: str) -> Optional[URLRecord]:
        return await self._run(self._find_sync, "canonical_url", canonical_url)

    def _exists_sync(self, short_code: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM urls WHERE short_code = ? LIMIT 1",
                (short_code,),
            ).fetchone()
        return row is not None

    async def short_code_exists(self, short_code: str) -> bool:
        return await self._run(self._exists_sync, short_code)

    def _insert_sync(self, record: URLRecord) -> URLRecord:
        with self._connect() as conn:
            try:
                with conn:
                    cursor = conn.execute(
                        "INSERT INTO urls (short_code, original_url, canonical_url) VALUES (?, ?, ?)",
                        (record.short_code, record.original_url, record.canonical_url),
                    )
            except sqlite3.IntegrityError as e:
                column = _violated_column(str(e))
                if column is None:
                    raise
                raise UniqueViolationError(column, str(e)) from e
        return URLRecord(
            id=cursor.lastrowid,
            short_code=record.short_code,
            original_url=record.original_url,
            canonical_url=record.canonical_url,
        )

    async def insert(self, record: URLRecord) -> URLRecord:
        stored = await self._run(self._insert_sync, record)
        self.logger.debug(f"Inserted record {stored.id}: {stored.short_code}")
        return stored

    def _count_sync(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM urls").fetchone()[0]

    async def count(self) -> int:
        return await self._run(self._count_sync)

    async def health_check(self) -> bool:
        try:
            await self._run(self._count_sync)
            return True
        except StoreError as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Refuse new operations and wait for in-flight ones to finish."""
        self._closed = True
        if self._pending:
            self.logger.info(f"Draining {len(self._pending)} in-flight store operations")
            await asyncio.wait(set(self._pending))
        self.logger.info("Database closed")


def _violated_column(message: str) -> Optional[str]:
    """Extract the column from "UNIQUE constraint failed: urls.<column>"."""
    if "UNIQUE constraint failed" not in message:
        return None
    for column in UNIQUE_COLUMNS:
        if f"urls.{column}" in message:
            return column
    return None
