"""
MongoDB connection lifecycle.

Wraps one long-lived Motor client. The client pools its own sockets, so a
single open connection object is shared by every store call.
"""

import logging
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

from ..config import MONGO_URI, SERVER_SELECTION_TIMEOUT_MS
from ..error_handling import StorageUnavailable

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Owns the Motor client used by PlayDataStore.

    Usage:
        async with MongoConnection(uri) as conn:
            store = PlayDataStore(conn)
            await store.count_plays(13)
    """

    def __init__(self, uri: str = MONGO_URI,
                 server_selection_timeout_ms: int = SERVER_SELECTION_TIMEOUT_MS,
                 client_factory: Callable[..., AsyncIOMotorClient] = AsyncIOMotorClient):
        """
        Args:
            uri: MongoDB connection string
            server_selection_timeout_ms: How long the driver waits for a reachable server
            client_factory: Callable building the client, replaced in tests
        """
        self.uri = uri
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory
        self._client: Optional[AsyncIOMotorClient] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            raise StorageUnavailable("MongoDB connection is not open")
        return self._client

    def open(self) -> "MongoConnection":
        """Create the client. Calling open on an open connection does nothing."""
        if self._client is None:
            # The driver connects lazily; no I/O happens here.
            self._client = self._client_factory(
                self.uri, serverSelectionTimeoutMS=self.server_selection_timeout_ms
            )
            logger.info("Opened MongoDB client")
        return self

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        logger.info("Closed MongoDB client")

    def database(self, name: str) -> AsyncIOMotorDatabase:
        return self.client[name]

    async def ping(self) -> bool:
        """Round-trip to the server, raising StorageUnavailable if it cannot be reached."""
        try:
            await self.client.admin.command("ping")
        except ConnectionFailure as e:
            logger.error(f"MongoDB ping failed: {e}")
            raise StorageUnavailable(str(e)) from e
        return True

    async def __aenter__(self) -> "MongoConnection":
        return self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
