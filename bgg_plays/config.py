"""
Configuration settings for the BGG play store.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent  # Go up one level to workspace root
# Logs directory for per-run logs
LOGS_DIR = PROJECT_ROOT / "bgg_plays_cache" / "logs"

# MongoDB connection
MONGO_URI = os.environ.get("BGG_PLAYS_MONGO_URI", "mongodb://localhost:27017")
DATABASE_NAME = os.environ.get("BGG_PLAYS_DATABASE", "board-game-stats")
SERVER_SELECTION_TIMEOUT_MS = int(os.environ.get("BGG_PLAYS_SERVER_TIMEOUT_MS", "5000"))

# Collection names
BOARD_GAME_COLLECTION = "board-games"
BOARD_GAME_STATUS_COLLECTION = "board-game-status"
PLAY_COLLECTION = "plays"

# BGG XML API
BGG_API_URL = os.environ.get("BGG_API_URL", "https://boardgamegeek.com/xmlapi2")
REQUEST_DELAY = float(os.environ.get("BGG_REQUEST_DELAY", "5"))  # seconds between API requests
REQUEST_TIMEOUT = 30
PLAYS_PER_PAGE = 100  # fixed by the BGG plays endpoint
MAX_QUEUED_RETRIES = 5  # retries while BGG answers 202 (request queued)
