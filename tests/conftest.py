"""
Jokebox — Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory store, mocked Motor
       collection, temp upload dir, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_store: In-memory JokeStore double (no MongoDB needed)
    ├── mock_collection: MagicMock/AsyncMock shaped like a Motor collection
    ├── upload_dir: Temporary directory for uploaded files
    ├── app: FastAPI app wired to memory_store and upload_dir
    ├── test_client: HTTPX AsyncClient, store already connected, no lifespan
    └── started_client: HTTPX AsyncClient after the real lifespan startup ran
"""

import os
import tempfile
from typing import Any, Dict, List, Mapping, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any jokebox import so the settings singleton picks them up
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["DB_NAME"] = "jokesdb_test"
os.environ["COLLECTION_NAME"] = "jokestable_test"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jokebox_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from jokebox.database import JokeStore, _to_joke  # noqa: E402
from jokebox.exceptions import (  # noqa: E402
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)
from jokebox.schemas.joke import Joke  # noqa: E402
from jokebox.services.upload_service import UploadService  # noqa: E402


class InMemoryJokeStore(JokeStore):
    """
    JokeStore double backed by a dict.

    Honors the same contract as the Motor-backed store, including raising
    StoreConnectionError before connect(). Set `fail_reads`, `fail_writes`
    or `fail_connect` to simulate an unavailable MongoDB.
    """

    def __init__(self) -> None:
        super().__init__(uri="mongodb://memory", db_name="memory", collection_name="jokes")
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.connected = False
        self.fail_reads = False
        self.fail_writes = False
        self.fail_connect = False
        self.insert_many_calls = 0

    async def connect(self) -> None:
        if self.fail_connect:
            raise StoreConnectionError(context={"error": "simulated"})
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    async def ping(self) -> bool:
        return self.connected and not self.fail_reads

    def _require_connection(self) -> None:
        if not self.connected:
            raise StoreConnectionError(message="JokeStore used before connect()")

    async def count(self) -> int:
        self._require_connection()
        if self.fail_reads:
            raise StoreReadError(context={"operation": "count"})
        return len(self.documents)

    async def find_all(self) -> List[Joke]:
        self._require_connection()
        if self.fail_reads:
            raise StoreReadError(context={"operation": "find_all"})
        return [_to_joke({"_id": key, **doc}) for key, doc in self.documents.items()]

    async def insert_one(self, doc: Mapping[str, Any]) -> str:
        self._require_connection()
        if self.fail_writes:
            raise StoreWriteError(context={"operation": "insert_one"})
        key = str(ObjectId())
        self.documents[key] = dict(doc)
        return key

    async def insert_many(self, docs: Sequence[Mapping[str, Any]]) -> List[str]:
        self._require_connection()
        self.insert_many_calls += 1
        if self.fail_writes:
            raise StoreWriteError(context={"operation": "insert_many"})
        return [await self.insert_one(doc) for doc in docs]


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    """A fresh, not-yet-connected in-memory store."""
    return InMemoryJokeStore()


@pytest_asyncio.fixture
async def connected_store(memory_store):
    """The in-memory store after connect()."""
    await memory_store.connect()
    return memory_store


@pytest.fixture
def mock_collection():
    """
    Provides a mock Motor collection.

    Motor's find() is synchronous and returns a cursor whose to_list() is
    awaitable; the remaining methods are coroutines.

    Usage:
        mock_collection.count_documents.return_value = 3
        store._collection = mock_collection
    """
    collection = MagicMock()
    collection.count_documents = AsyncMock(return_value=0)
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.insert_many = AsyncMock(return_value=MagicMock(inserted_ids=[]))
    return collection


@pytest.fixture
def upload_dir(tmp_path):
    """A fresh upload directory path (not created yet)."""
    return str(tmp_path / "uploads")


@pytest.fixture
def app(memory_store, upload_dir):
    """FastAPI app wired to the in-memory store and a temp upload dir."""
    from jokebox.main import create_app
    return create_app(store=memory_store, upload_service=UploadService(upload_dir))


@pytest_asyncio.fixture
async def test_client(app, memory_store):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the store is connected here
    directly and nothing is seeded.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/jokes")
            assert response.status_code == 200
    """
    await memory_store.connect()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def started_client(app):
    """
    Async HTTP client for an app whose real lifespan has run: configuration
    validated, upload dir created, store connected and seeded.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
