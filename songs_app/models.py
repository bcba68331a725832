from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass(slots=True)
class Song:
    title: str
    rating: int
    genre: str
    explicit: bool
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def to_record(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "rating": self.rating,
            "genre": self.genre,
            "explicit": self.explicit,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Song":
        return cls(
            title=str(record["title"]),
            rating=int(record["rating"]),
            genre=str(record["genre"]),
            explicit=_parse_bool(record["explicit"]),
            created_at=_parse_timestamp(record["created_at"]),
            updated_at=_parse_timestamp(record["updated_at"]),
        )


@dataclass(slots=True)
class Artist:
    name: str
    founded_date: datetime
    genres: List[str] = field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "founded_date": self.founded_date.isoformat(),
            "genres": list(self.genres),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Artist":
        genres = record.get("genres") or []
        if isinstance(genres, str):
            genres = [genres]
        return cls(
            name=str(record["name"]),
            founded_date=_parse_timestamp(record["founded_date"]),
            genres=[str(genre) for genre in genres],
        )


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "y", "yes"}
    return bool(value)


def _parse_timestamp(value: object) -> datetime:
    # YAML hands back datetime objects, JSON/XML hand back strings.
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).strip())
