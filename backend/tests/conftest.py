"""
NoteShelf Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── database: real Database on a throwaway SQLite file (aiosqlite)
    ├── note_service / tag_service: services bound to that database
    ├── test_client: HTTPX AsyncClient over an app using that database
    └── recording_database_factory: in-memory stand-in that counts session
        acquire/release and can be told to fail
"""

import os
from contextlib import asynccontextmanager
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any noteshelf import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./noteshelf_test.db"
os.environ["API_PREFIX"] = "/api"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from noteshelf.database import Database  # noqa: E402
from noteshelf.main import create_app  # noqa: E402
from noteshelf.services.note_service import NoteService  # noqa: E402
from noteshelf.services.tag_service import TagService  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Store fakes
# ══════════════════════════════════════════════════════════════════════════

class RecordingDatabase:
    """
    Stand-in for Database that records how sessions are used.

    Every `session()` hands out the same AsyncMock session. Set `failure`
    to make every store call on that session raise it.
    """

    def __init__(self, failure: Optional[BaseException] = None):
        self.acquired = 0
        self.released = 0
        self.session_mock = AsyncMock()
        self.session_mock.add = MagicMock()
        if failure is not None:
            self.session_mock.execute.side_effect = failure
            self.session_mock.get.side_effect = failure
            self.session_mock.flush.side_effect = failure

    @asynccontextmanager
    async def session(self):
        self.acquired += 1
        try:
            yield self.session_mock
        finally:
            self.released += 1

    async def ping(self) -> None:
        await self.session_mock.execute("SELECT 1")

    async def close(self) -> None:
        pass


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(tmp_path):
    """
    A real Database backed by a fresh SQLite file.

    Why a file (not :memory:): every pooled aiosqlite connection to
    :memory: would see its own empty database.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'noteshelf.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def note_service(database):
    return NoteService(database)


@pytest.fixture
def tag_service(database):
    return TagService(database)


@pytest.fixture
def recording_database_factory():
    """Builds RecordingDatabase instances, optionally failing with a given error."""
    return RecordingDatabase


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient wired to an app that uses the `database` fixture.

    ASGITransport does not run the lifespan, so the Database is injected
    through create_app() instead of being created at startup.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_client():
    """
    Builds a client around any database-like object.

    `raise_app_exceptions=False` lets the 500 response through instead of
    re-raising the server error into the test.
    """

    def _make(db) -> AsyncClient:
        app = create_app(database=db)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make
