"""
Error types and handling utilities for the BGG Plays package.
"""

import logging
from typing import Callable
from functools import wraps

from pymongo.errors import ConnectionFailure

logger = logging.getLogger(__name__)


class BGGPlaysError(Exception):
    """Base class for errors raised by this package."""


class StorageUnavailable(BGGPlaysError):
    """The MongoDB server could not be reached."""


class CollectorError(BGGPlaysError):
    """Fetching or parsing plays from the BGG XML API failed."""


def translate_storage_errors(func: Callable):
    """
    Decorator for store coroutines that surfaces driver connection failures
    as StorageUnavailable.

    Cancellation and any other driver error propagate unchanged.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ConnectionFailure as e:
            logger.error(f"Storage unavailable in {func.__name__}: {e}")
            raise StorageUnavailable(str(e)) from e
    return wrapper

