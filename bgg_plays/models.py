"""
Shared data models for the BGG Plays package.

Each model maps to one stored document. ``_id`` holds the persisted identity
and ``ObjectId`` the BGG game id used for domain lookups.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

_BOARD_GAME_FIELDS = {"_id", "ObjectId", "Name", "YearPublished", "Rank"}


@dataclass
class BoardGame:
    """Catalog entry for a board game."""
    object_id: Optional[int]
    name: str
    id: Optional[Any] = None
    year_published: Optional[int] = None
    rank: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_document(self) -> Dict[str, Any]:
        doc = dict(self.extra)
        if self.id is not None:
            doc["_id"] = self.id
        doc.update({
            "ObjectId": self.object_id,
            "Name": self.name,
            "YearPublished": self.year_published,
            "Rank": self.rank,
        })
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "BoardGame":
        return cls(
            object_id=doc.get("ObjectId"),
            name=doc.get("Name", ""),
            id=doc.get("_id"),
            year_published=doc.get("YearPublished"),
            rank=doc.get("Rank"),
            extra={k: v for k, v in doc.items() if k not in _BOARD_GAME_FIELDS},
        )


@dataclass
class Player:
    """One participant in a recorded play."""
    name: Optional[str] = None
    username: Optional[str] = None
    user_id: Optional[int] = None
    score: Optional[str] = None
    win: bool = False
    color: Optional[str] = None
    start_position: Optional[str] = None
    new: bool = False
    rating: Optional[float] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "Username": self.username,
            "UserId": self.user_id,
            "Score": self.score,
            "Win": self.win,
            "Color": self.color,
            "StartPosition": self.start_position,
            "New": self.new,
            "Rating": self.rating,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Player":
        return cls(
            name=doc.get("Name"),
            username=doc.get("Username"),
            user_id=doc.get("UserId"),
            score=doc.get("Score"),
            win=bool(doc.get("Win", False)),
            color=doc.get("Color"),
            start_position=doc.get("StartPosition"),
            new=bool(doc.get("New", False)),
            rating=doc.get("Rating"),
        )


@dataclass
class Play:
    """One recorded play session of a game."""
    id: int
    object_id: int
    date: Optional[str] = None
    quantity: int = 1
    length: int = 0
    incomplete: bool = False
    location: Optional[str] = None
    comments: Optional[str] = None
    user_id: Optional[int] = None
    players: List[Player] = field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "ObjectId": self.object_id,
            "Date": self.date,
            "Quantity": self.quantity,
            "Length": self.length,
            "Incomplete": self.incomplete,
            "Location": self.location,
            "Comments": self.comments,
            "UserId": self.user_id,
            "Players": [p.to_document() for p in self.players],
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Play":
        return cls(
            id=doc["_id"],
            object_id=doc["ObjectId"],
            date=doc.get("Date"),
            quantity=doc.get("Quantity", 1),
            length=doc.get("Length", 0),
            incomplete=bool(doc.get("Incomplete", False)),
            location=doc.get("Location"),
            comments=doc.get("Comments"),
            user_id=doc.get("UserId"),
            players=[Player.from_document(p) for p in doc.get("Players") or []],
        )


@dataclass
class BoardGameStatus:
    """Synchronisation status, one per game."""
    object_id: int
    play_count: int = 0
    pages: int = 0

    def to_document(self) -> Dict[str, Any]:
        return {
            "ObjectId": self.object_id,
            "PlayCount": self.play_count,
            "Pages": self.pages,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "BoardGameStatus":
        return cls(
            object_id=doc["ObjectId"],
            play_count=doc.get("PlayCount", 0),
            pages=doc.get("Pages", 0),
        )


@dataclass
class PlaysPage:
    """One page of plays returned by the BGG plays endpoint."""
    game_id: int
    page: int
    total: int
    plays: List[Play] = field(default_factory=list)


@dataclass
class SyncResult:
    """Result of synchronising the plays of one game."""
    game_id: int
    success: bool
    remote_total: int = 0
    stored_before: int = 0
    plays_written: int = 0
    deleted: bool = False
    skipped: bool = False
    error_message: Optional[str] = None
