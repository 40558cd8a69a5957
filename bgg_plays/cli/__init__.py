"""
Command-line interface for the BGG Plays package.

This module provides CLI commands for:
- Listing board games and play counts
- Importing and deleting plays
- Synchronising plays from BGG
"""

from .main import main

__all__ = [
    "main",
]
