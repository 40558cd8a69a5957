"""
Database module for BGG play data.

This module handles:
- MongoDB connection lifecycle
- Board game, play and status storage and retrieval
- Play collection from the BGG XML API
"""

from .collector import BGGPlayCollector
from .connection import MongoConnection
from .operations import PlayDataStore

__all__ = [
    "BGGPlayCollector",
    "MongoConnection",
    "PlayDataStore",
]
