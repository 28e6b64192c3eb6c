"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator, Callable, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from urlshortener.common.logging_config import setup_logging
from urlshortener.database.base import URLStoreBase
from urlshortener.database.exceptions import StoreError, UniqueViolationError
from urlshortener.database.models import URLRecord
from urlshortener.database.sqlite import URLShortenerSQLite
from urlshortener.service import URLShortenerService
from urlshortener.shortcode import ShortCodeGenerator
from web_app import create_app

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "..", "templates")


class FakeStore(URLStoreBase):
    """In-memory store with hooks for scripting collisions, races and failures."""

    def __init__(self):
        self.records: Dict[str, URLRecord] = {}
        self.reserved_codes = set()
        self.calls: List[tuple] = []
        self.fail_with: Optional[StoreError] = None
        # Called once with the record right before an insert is applied
        self.before_insert: Optional[Callable[[URLRecord], None]] = None
        self.closed = False
        self._next_id = 1

    def add(self, short_code: str, original_url: str, canonical_url: str) -> URLRecord:
        record = URLRecord(short_code, original_url, canonical_url, id=self._next_id)
        self._next_id += 1
        self.records[short_code] = record
        return record

    def _record_call(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if self.fail_with is not None:
            raise self.fail_with

    async def initialize(self) -> None:
        pass

    async def find_by_short_code(self, short_code: str) -> Optional[URLRecord]:
        self._record_call("find_by_short_code", short_code)
        return self.records.get(short_code)

    async def find_by_canonical(self, canonical_url: str) -> Optional[URLRecord]:
        self._record_call("find_by_canonical", canonical_url)
        for record in self.records.values():
            if record.canonical_url == canonical_url:
                return record
        return None

    async def short_code_exists(self, short_code: str) -> bool:
        self._record_call("short_code_exists", short_code)
        return short_code in self.records or short_code in self.reserved_codes

    async def insert(self, record: URLRecord) -> URLRecord:
        self._record_call("insert", record.short_code)
        if self.before_insert is not None:
            hook, self.before_insert = self.before_insert, None
            hook(record)
        if record.short_code in self.records:
            raise UniqueViolationError("short_code")
        if any(r.canonical_url == record.canonical_url for r in self.records.values()):
            raise UniqueViolationError("canonical_url")
        return self.add(record.short_code, record.original_url, record.canonical_url)

    async def count(self) -> int:
        return len(self.records)

    async def health_check(self) -> bool:
        return self.fail_with is None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "database" / "urlshortener.db")


@pytest.fixture
async def test_db(db_path, logger) -> AsyncGenerator[URLShortenerSQLite, None]:
    """Create test database instance backed by a temporary file."""
    db = URLShortenerSQLite(db_path=db_path, logger=logger)
    await db.initialize()

    yield db

    await db.close()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=7)


@pytest.fixture
def service(test_db, short_code_generator, logger) -> URLShortenerService:
    """Create service instance over the SQLite store."""
    return URLShortenerService(
        db=test_db,
        cache=None,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def fake_service(fake_store, short_code_generator, logger) -> URLShortenerService:
    """Create service instance over the scripted in-memory store."""
    return URLShortenerService(
        db=fake_store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def test_config(tmp_path) -> Config:
    return Config(
        _env_file=None,
        database_path=str(tmp_path / "database"),
        templates_dir=TEMPLATES_DIR,
        short_domain="sho.rt",
    )


@pytest.fixture
def app(test_db, service, test_config):
    """Create test FastAPI app."""
    return create_app(
        db_instance=test_db,
        cache_instance=None,
        service_instance=service,
        config=test_config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/page",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456?tab=votes#answers",
    ]
