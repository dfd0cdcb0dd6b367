"""
Bookmarks Service: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    mock_db_session:     AsyncMock session for service unit tests (no DB)
    test_bookmarks:      four plain bookmarks with fixed ids
    malicious_bookmark:  (stored XSS bookmark, expected sanitized bookmark)
    bookmarks_table:     creates the table in a SQLite file, drops it afterwards
    insert_bookmarks:    writes rows straight to the table
    test_client:         HTTPX AsyncClient bound to a fresh app
    auth_headers:        valid Authorization header

The SQLite directory is created at import time and removed when the
session ends.
"""

import os
import shutil
import tempfile
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must happen BEFORE any `app` import: settings are read at import time
TEST_API_TOKEN = "test-api-token"
_db_dir = tempfile.mkdtemp(prefix="bookmarks_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/bookmarks.db"
os.environ["API_TOKEN"] = TEST_API_TOKEN
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database_dir():
    """Deletes the temporary SQLite directory once the session ends."""
    yield
    shutil.rmtree(_db_dir, ignore_errors=True)


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_bookmarks() -> List[Dict[str, Any]]:
    """Bookmarks with fixed ids 1-4, free of markup characters."""
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "bookmarkurl": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "bookmarkurl": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "bookmarkurl": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
        {
            "id": 4,
            "title": "Python docs",
            "bookmarkurl": "https://docs.python.org/3/",
            "description": "Standard library reference",
            "rating": 3,
        },
    ]


@pytest.fixture
def malicious_bookmark():
    """
    A bookmark carrying stored XSS payloads and what the API must return.

    Returns:
        (stored, expected) tuple of dicts.
    """
    stored = {
        "id": 911,
        "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "bookmarkurl": "https://www.hackers.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "rating": 1,
    }
    expected = {
        **stored,
        "title": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            "But not <strong>all</strong> bad."
        ),
    }
    return stored, expected


# ══════════════════════════════════════════════════════════════════════════
# Mock Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def bookmarks_table():
    """
    Fresh, empty bookmarks table for one test.

    Dropping the table afterwards also resets the id sequence.
    """
    from app.database import Base, create_tables, engine

    await create_tables()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def insert_bookmarks(bookmarks_table):
    """Returns an async helper that inserts rows (dicts) into the table."""
    from app.database import async_session_factory
    from app.models.bookmark import Bookmark

    async def _insert(rows: List[Dict[str, Any]]) -> None:
        async with async_session_factory() as session:
            session.add_all([Bookmark(**row) for row in rows])
            await session.commit()

    return _insert


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TEST_API_TOKEN}"}


@pytest_asyncio.fixture
async def test_client(bookmarks_table):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to a fresh app instance.

    Usage:
        async def test_list(test_client, auth_headers):
            response = await test_client.get("/bookmarks", headers=auth_headers)
            assert response.status_code == 200
    """
    from app.main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
