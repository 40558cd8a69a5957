"""
Database operations for board games, plays and board game status.

This module provides the data-access layer over the ``board-game-stats``
MongoDB database. Every method is a thin forward to the async driver: no
validation, no transactions and no retries. Connection failures surface as
StorageUnavailable; task cancellation propagates as asyncio.CancelledError.

Motor runs each driver call on a worker thread. Cancelling the task stops
the await, not the call already handed to the driver, so a cancelled
replace_one or delete_many may still be applied on the server.
"""

import logging
from typing import Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from ..config import (
    BOARD_GAME_COLLECTION,
    BOARD_GAME_STATUS_COLLECTION,
    DATABASE_NAME,
    PLAY_COLLECTION,
)
from ..error_handling import translate_storage_errors
from ..models import BoardGame, BoardGameStatus, Play
from .connection import MongoConnection

logger = logging.getLogger(__name__)


class PlayDataStore:
    """
    Typed access to the board game, play and status collections.
    """

    def __init__(self, connection: MongoConnection, database_name: str = DATABASE_NAME):
        """
        Initialize the play data store.

        Args:
            connection: Open MongoDB connection shared by all calls
            database_name: Name of the logical database
        """
        self.connection = connection
        self.database_name = database_name

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        return self.connection.database(self.database_name)[name]

    @translate_storage_errors
    async def list_board_games(self) -> List[BoardGame]:
        """
        Get every board game, in natural storage order.

        Returns:
            List of board games (unbounded)
        """
        collection = self._collection(BOARD_GAME_COLLECTION)
        docs = await collection.find({}).to_list(length=None)
        return [BoardGame.from_document(doc) for doc in docs]

    @translate_storage_errors
    async def count_plays(self, game_id: int) -> int:
        """Count stored plays for a BGG game id."""
        collection = self._collection(PLAY_COLLECTION)
        return await collection.count_documents({"ObjectId": game_id})

    async def insert_plays(self, plays: Optional[Iterable[Play]]) -> None:
        """
        Store plays, replacing any play that already has the same id.

        Plays are upserted one at a time, so repeating a call with overlapping
        ids never raises a duplicate key error.
        """
        await self._upsert_plays(plays, "Inserting")

    async def upsert_plays(self, plays: Optional[Iterable[Play]]) -> None:
        """Same as insert_plays; used by callers refreshing existing plays."""
        await self._upsert_plays(plays, "Upserting")

    @translate_storage_errors
    async def _upsert_plays(self, plays: Optional[Iterable[Play]], action: str) -> None:
        plays = list(plays or [])
        if not plays:
            logger.warning("Attempted to store an empty play list")
            return

        collection = self._collection(PLAY_COLLECTION)
        logger.debug(f"{action} {len(plays)} plays for ObjectId {plays[0].object_id}")

        # Sequential: a cancelled call keeps the plays already written.
        for play in plays:
            await collection.replace_one({"_id": play.id}, play.to_document(), upsert=True)

    @translate_storage_errors
    async def delete_plays_for(self, game_id: int) -> None:
        """Remove every stored play for a BGG game id."""
        collection = self._collection(PLAY_COLLECTION)
        result = await collection.delete_many({"ObjectId": game_id})
        logger.debug(f"Removed {result.deleted_count} plays for ObjectId {game_id}")

    @translate_storage_errors
    async def get_board_game_status(self, game_id: int) -> Optional[BoardGameStatus]:
        """
        Get the status document for a BGG game id.

        Returns:
            The status, or None if the game has none yet
        """
        collection = self._collection(BOARD_GAME_STATUS_COLLECTION)
        doc = await collection.find_one({"ObjectId": game_id})
        if doc is None:
            return None
        return BoardGameStatus.from_document(doc)

    @translate_storage_errors
    async def upsert_board_game_status(self, status: Optional[BoardGameStatus]) -> None:
        """Replace the status for the game, or insert it if the game has none."""
        if status is None:
            logger.warning("Attempted to upsert a null status")
            return

        collection = self._collection(BOARD_GAME_STATUS_COLLECTION)
        logger.debug(f"Upserting status for ObjectId {status.object_id}")
        await collection.replace_one(
            {"ObjectId": status.object_id}, status.to_document(), upsert=True
        )
