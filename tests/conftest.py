"""
Shared fixtures for the test suite.

The store tests run against an in-memory stand-in for the Motor client that
implements the handful of collection methods the store calls, with
equality-only filters.
"""

import asyncio
import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from bgg_plays.database import MongoConnection, PlayDataStore


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []
        self.fail_with = None
        self.block_on_id = None
        self.blocked = asyncio.Event()

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def find(self, query):
        self._check()
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def find_one(self, query):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def count_documents(self, query):
        self._check()
        return sum(1 for d in self.docs if _matches(d, query))

    async def replace_one(self, query, replacement, upsert=False):
        self._check()
        if self.block_on_id is not None and query.get("_id") == self.block_on_id:
            self.blocked.set()
            await asyncio.Event().wait()

        replacement = copy.deepcopy(replacement)
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                replacement["_id"] = doc["_id"]
                self.docs[i] = replacement
                return SimpleNamespace(matched_count=1, upserted_id=None)

        if upsert:
            replacement.setdefault("_id", ObjectId())
            self.docs.append(replacement)
            return SimpleNamespace(matched_count=0, upserted_id=replacement["_id"])
        return SimpleNamespace(matched_count=0, upserted_id=None)

    async def delete_many(self, query):
        self._check()
        kept = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def command(self, name):
        return {"ok": 1.0}


class FakeClient:
    def __init__(self, uri, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.databases = {}
        self.closed = False
        self.reachable = True

    def __getitem__(self, name):
        if name not in self.databases:
            self.databases[name] = FakeDatabase(name)
        return self.databases[name]

    @property
    def admin(self):
        client = self

        class _Admin:
            async def command(self, name):
                if not client.reachable:
                    raise ServerSelectionTimeoutError("localhost:27017: connection refused")
                return {"ok": 1.0}

        return _Admin()

    def close(self):
        self.closed = True


@pytest.fixture
def connection():
    conn = MongoConnection("mongodb://test", client_factory=FakeClient).open()
    yield conn
    conn.close()


@pytest.fixture
def store(connection):
    return PlayDataStore(connection, "board-game-stats")


@pytest.fixture
def collections(connection):
    """Direct access to the fake collections behind the store."""
    db = connection.database("board-game-stats")
    return SimpleNamespace(
        board_games=db["board-games"],
        status=db["board-game-status"],
        plays=db["plays"],
    )
