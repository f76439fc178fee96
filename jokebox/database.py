"""
Jokebox — Document Store Client
================================

What:  JokeStore wraps one Motor (async MongoDB) client and one collection.
Why:   Every touch of persistent storage goes through this class, so driver
       exceptions are translated into StoreError subclasses in one place.
How:   connect() builds the client and pings the server; the remaining
       methods are thin awaits over the collection.
Who:   Created once by the app factory, kept on `app.state.store`, and handed
       to JokeService and the seeder.
When:  Connected in the lifespan before the server accepts traffic; closed on
       shutdown.

Connection Model:
    One AsyncIOMotorClient per process. Motor keeps its own connection pool,
    so concurrent requests share the client safely and MongoDB provides
    per-document write atomicity. No locking happens here.

    The driver connects lazily, so a bad host would otherwise only surface on
    the first query. connect() issues a `ping` so an unreachable or
    unauthenticated store fails startup instead.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
)
from pymongo.errors import PyMongoError

from jokebox.config import settings
from jokebox.exceptions import (
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)
from jokebox.schemas.joke import Joke

logger = logging.getLogger(__name__)


_SCALARS = (str, bool, int, float)


def _field_value(value: Any) -> Any:
    # Documents written by other clients may hold any BSON type here
    if value is None or isinstance(value, _SCALARS):
        return value
    return str(value)


def _to_joke(doc: Mapping[str, Any]) -> Joke:
    """
    Converts a raw MongoDB document into a Joke.

    The ObjectId is stringified. Non-scalar title/description values
    (ObjectId, datetime, nested documents) are stringified too, so one odd
    document never breaks a listing.
    """
    return Joke(
        id=str(doc.get("_id")),
        title=_field_value(doc.get("title")),
        description=_field_value(doc.get("description")),
    )


class JokeStore:
    """
    Async client for the jokes collection.

    Contract:
        - connect() must succeed before any other operation
        - count() is never negative
        - find_all() returns a fully materialized list, order unspecified
        - insert_one()/insert_many() return string identities
        - Caller dicts are never mutated (Motor adds `_id` in place, so copies
          are inserted)
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        db_name: Optional[str] = None,
        collection_name: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        self.uri = uri if uri is not None else settings.mongo_uri
        self.db_name = db_name or settings.db_name
        self.collection_name = collection_name or settings.collection_name
        self.timeout_ms = timeout_ms or settings.mongo_timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._collection: Optional[AsyncIOMotorCollection] = None

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def connect(self) -> None:
        """
        Establish the client and verify the server answers.

        Raises:
            StoreConnectionError: empty URI, malformed URI, unreachable host,
                                  or failed authentication.
        """
        if not self.uri:
            raise StoreConnectionError(
                message="MONGO_URI is not configured",
                context={"db_name": self.db_name},
            )

        try:
            client = AsyncIOMotorClient(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
        except PyMongoError as e:
            raise StoreConnectionError(
                message="Invalid MongoDB connection string",
                context={"error": str(e)},
            ) from e

        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            raise StoreConnectionError(
                context={"db_name": self.db_name, "error": str(e)},
            ) from e

        self._client = client
        self._collection = client[self.db_name][self.collection_name]
        logger.info(
            "Connected to MongoDB (db=%s, collection=%s)",
            self.db_name,
            self.collection_name,
        )

    async def close(self) -> None:
        """Close the client. Safe to call when never connected."""
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._collection = None

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self._collection is None:
            raise StoreConnectionError(message="JokeStore used before connect()")
        return self._collection

    async def ping(self) -> bool:
        """Liveness check for /health. Never raises."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False

    # ── Reads ─────────────────────────────────────────────────────────────

    async def count(self) -> int:
        collection = self.collection
        try:
            return await collection.count_documents({})
        except PyMongoError as e:
            raise StoreReadError(context={"operation": "count", "error": str(e)}) from e

    async def find_all(self) -> List[Joke]:
        collection = self.collection
        try:
            docs = await collection.find({}).to_list(length=None)
        except PyMongoError as e:
            raise StoreReadError(context={"operation": "find_all", "error": str(e)}) from e
        return [_to_joke(doc) for doc in docs]

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert_one(self, doc: Mapping[str, Any]) -> str:
        collection = self.collection
        try:
            result = await collection.insert_one(dict(doc))
        except PyMongoError as e:
            raise StoreWriteError(context={"operation": "insert_one", "error": str(e)}) from e
        return str(result.inserted_id)

    async def insert_many(self, docs: Sequence[Mapping[str, Any]]) -> List[str]:
        """
        Insert a batch of documents.

        Each document becomes visible as soon as it is written; there is no
        all-or-nothing guarantee. ordered=False lets the server keep going
        past a failed document, and the failure is still reported.
        """
        collection = self.collection
        payload: List[Dict[str, Any]] = [dict(doc) for doc in docs]
        if not payload:
            return []
        try:
            result = await collection.insert_many(payload, ordered=False)
        except PyMongoError as e:
            raise StoreWriteError(context={"operation": "insert_many", "error": str(e)}) from e
        return [str(inserted_id) for inserted_id in result.inserted_ids]


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_store(request: Request) -> JokeStore:
    """
    Returns the process-wide JokeStore kept on `app.state`.

    Routes do not take the store directly; they wrap it in a service:
        def get_joke_service(store: JokeStore = Depends(get_store)) -> JokeService:
            return JokeService(store)

        @router.get("/jokes")
        async def list_jokes(service: JokeService = Depends(get_joke_service)):
            return await service.list_all()
    """
    return request.app.state.store
