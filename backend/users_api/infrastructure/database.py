"""Database Connection Manager — one cached MongoDB handle per process.

Invariants:
    - First get_database() establishes the client (ping) and caches the handle
    - Later calls return the cached handle without reconnecting or health-checking
    - Establishment failures raise DatabaseConnectionError; nothing is cached
    - First-use establishment is serialized by an asyncio.Lock (no double connect)

Design Decisions:
    - Module-level singleton: a Lambda instance serves one request at a time and
      keeps the process warm between invocations, so the handle outlives requests
    - No retry, no backoff: the driver's connect/socket timeouts bound every call
    - close() exists for long-running servers; the Lambda adapter never calls it
"""

import asyncio
import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from users_api.config import get_settings
from users_api.core.errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


class MongoConnectionManager:
    """Lazily establishes and caches the database handle."""

    def __init__(
        self,
        mongodb_uri: str,
        db_name: str,
        connect_timeout_ms: int = 5000,
        socket_timeout_ms: int = 30_000,
    ):
        self.mongodb_uri = mongodb_uri
        self.db_name = db_name
        self.connect_timeout_ms = connect_timeout_ms
        self.socket_timeout_ms = socket_timeout_ms
        self._client: AsyncMongoClient | None = None
        self._database: AsyncDatabase | None = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def get_database(self) -> AsyncDatabase:
        """Return the cached handle, establishing it on first use."""
        if self._database is not None:
            return self._database
        async with self._lock:
            if self._database is None:
                await self._connect()
        return self._database

    async def _connect(self) -> None:
        client = AsyncMongoClient(
            self.mongodb_uri,
            connectTimeoutMS=self.connect_timeout_ms,
            socketTimeoutMS=self.socket_timeout_ms,
            serverSelectionTimeoutMS=self.connect_timeout_ms,
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB connection failed: {e}")
            await client.close()
            raise DatabaseConnectionError(str(e)) from e
        self._client = client
        self._database = client[self.db_name]
        logger.info(f"MongoDB connection established (db={self.db_name})")

    async def ping(self) -> bool:
        """Check connectivity of the cached handle (for the readiness check)."""
        try:
            db = await self.get_database()
            await db.command("ping")
            return True
        except (PyMongoError, DatabaseConnectionError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._database = None


# Singleton (created on first use, lives for the process lifetime)
db_manager: MongoConnectionManager | None = None


def init_db() -> MongoConnectionManager:
    """Create the process-wide manager from settings if absent."""
    global db_manager
    if db_manager is None:
        settings = get_settings()
        db_manager = MongoConnectionManager(
            settings.mongodb_uri,
            settings.db_name,
            connect_timeout_ms=settings.connect_timeout_ms,
            socket_timeout_ms=settings.socket_timeout_ms,
        )
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.close()
    db_manager = None


async def get_db() -> AsyncDatabase:
    """FastAPI dependency for the shared handle (connects on first call)."""
    return await init_db().get_database()
