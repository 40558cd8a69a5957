"""
BGG Plays Package - board game play tracking on MongoDB.

This package provides:
1. Typed access to board games, plays and board game status in MongoDB
2. Collecting logged plays from BoardGameGeek and keeping them in sync
"""

__version__ = "0.1.0"
__author__ = "BGG Data Team"

# Main package imports for convenience
from .database import BGGPlayCollector, MongoConnection, PlayDataStore
from .error_handling import BGGPlaysError, CollectorError, StorageUnavailable
from .models import BoardGame, BoardGameStatus, Play, Player
from .sync import PlaySynchronizer
from .logging_config import setup_logging

__all__ = [
    "BGGPlayCollector",
    "MongoConnection",
    "PlayDataStore",
    "PlaySynchronizer",
    "BoardGame",
    "BoardGameStatus",
    "Play",
    "Player",
    "BGGPlaysError",
    "CollectorError",
    "StorageUnavailable",
    "setup_logging",
]
