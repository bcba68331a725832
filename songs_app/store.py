from __future__ import annotations

import logging
import operator
from datetime import datetime, timedelta
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from .models import Artist, Song
from .persistence import PersistenceError, Serializer
from .seed import seed_artists, seed_songs

logger = logging.getLogger(__name__)

T = TypeVar("T")

Equality = Callable[[T, T], bool]


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


class CollectionStore(Generic[T]):
    """Ordered, index addressed collection of one entity kind.

    Indices are positions, not identifiers: deleting shifts everything after
    the removed entity down by one. Lookups by value use ``equals`` which
    defaults to structural equality, so two entities with identical fields
    cannot be told apart.
    """

    kind = "entity"

    def __init__(
        self,
        serializer: Optional[Serializer] = None,
        *,
        equals: Equality = operator.eq,
        clock: Callable[[], datetime] = _now,
    ) -> None:
        self.serializer = serializer
        self.equals = equals
        self.clock = clock
        self._items: List[T] = []

    def add(self, item: T) -> bool:
        self._items.append(item)
        return True

    def count(self) -> int:
        return len(self._items)

    def find_all(self) -> List[T]:
        return list(self._items)

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def is_valid_index_text(self, raw: Optional[str]) -> bool:
        if raw is None or not raw.strip():
            return False
        try:
            index = int(raw.strip())
        except ValueError:
            return False
        return self.is_valid_index(index)

    def find_by_index(self, index: int) -> Optional[T]:
        if not self.is_valid_index(index):
            return None
        return self._items[index]

    def find_by_value(self, item: T) -> Optional[T]:
        return next((existing for existing in self._items if self.equals(existing, item)), None)

    def find_index_by_value(self, item: T) -> int:
        for index, existing in enumerate(self._items):
            if self.equals(existing, item):
                return index
        return -1

    def update_at(self, index: int, new_values: T) -> bool:
        existing = self.find_by_index(index)
        if existing is None:
            return False
        self._apply_update(existing, new_values)
        return True

    def _apply_update(self, existing: T, new_values: T) -> None:
        raise NotImplementedError

    def delete_at(self, index: int) -> Optional[T]:
        if not self.is_valid_index(index):
            return None
        return self._items.pop(index)

    def remove_batch(self, items: Iterable[T]) -> int:
        """Remove every entity equal to any element of ``items``; return how many went."""
        batch = list(items)
        before = len(self._items)
        self._items = [
            existing for existing in self._items if not any(self.equals(existing, item) for item in batch)
        ]
        removed = before - len(self._items)
        logger.debug("Removed %d %s(s) in batch", removed, self.kind)
        return removed

    def replace_all(self, items: Iterable[T]) -> None:
        self._items = list(items)

    def load(self) -> bool:
        """Replace the collection from the serializer; keep it on any failure."""
        if self.serializer is None:
            logger.warning("No serializer configured for %s collection", self.kind)
            return False
        try:
            records = self.serializer.read()
            if records is None:
                return False
            loaded = [self._from_record(record) for record in records]
        except PersistenceError as exc:
            logger.warning("Could not load %s collection: %s", self.kind, exc)
            return False
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed %s record in %s: %s", self.kind, self.serializer.path, exc)
            return False
        self._items = loaded
        logger.debug("Loaded %d %s(s) from %s", len(loaded), self.kind, self.serializer.path)
        return True

    def store(self) -> None:
        if self.serializer is None:
            raise PersistenceError(f"No serializer configured for {self.kind} collection")
        self.serializer.write([self._to_record(item) for item in self._items])
        logger.debug("Stored %d %s(s) to %s", len(self._items), self.kind, self.serializer.path)

    def _from_record(self, record: dict) -> T:
        raise NotImplementedError

    def _to_record(self, item: T) -> dict:
        raise NotImplementedError


class SongStore(CollectionStore[Song]):
    kind = "song"

    def seed(self) -> None:
        self.replace_all(seed_songs())

    def _apply_update(self, existing: Song, new_values: Song) -> None:
        existing.title = new_values.title
        existing.rating = new_values.rating
        existing.genre = new_values.genre
        existing.explicit = new_values.explicit
        existing.updated_at = self.clock()

    def _from_record(self, record: dict) -> Song:
        return Song.from_record(record)

    def _to_record(self, item: Song) -> dict:
        return item.to_record()

    def explicitify(self, index: int) -> bool:
        song = self.find_by_index(index)
        if song is None:
            return False
        song.explicit = True
        song.updated_at = self.clock()
        return True

    def explicit_songs(self) -> List[Song]:
        return [song for song in self._items if song.explicit]

    def safe_songs(self) -> List[Song]:
        return [song for song in self._items if not song.explicit]

    def songs_by_rating(self, rating: int) -> List[Song]:
        return [song for song in self._items if song.rating == rating]

    def important_songs(self) -> List[Song]:
        return self.songs_by_rating(5)

    def stale_songs(self, days: int) -> List[Song]:
        cutoff = self.clock() - timedelta(days=days)
        stale = [song for song in self._items if song.updated_at < cutoff]
        return sorted(stale, key=lambda song: song.updated_at)

    def count_explicit(self) -> int:
        return len(self.explicit_songs())

    def count_safe(self) -> int:
        return len(self.safe_songs())

    def count_by_rating(self, rating: int) -> int:
        return len(self.songs_by_rating(rating))

    def count_important(self) -> int:
        return len(self.important_songs())

    def count_stale(self, days: int) -> int:
        return len(self.stale_songs(days))

    def search_by_title(self, text: str) -> List[tuple[int, Song]]:
        needle = text.lower()
        return [
            (index, song)
            for index, song in enumerate(self._items)
            if needle in song.title.lower()
        ]


class ArtistStore(CollectionStore[Artist]):
    kind = "artist"

    def seed(self) -> None:
        self.replace_all(seed_artists())

    def _apply_update(self, existing: Artist, new_values: Artist) -> None:
        existing.name = new_values.name
        existing.founded_date = new_values.founded_date
        existing.genres = list(new_values.genres)

    def _from_record(self, record: dict) -> Artist:
        return Artist.from_record(record)

    def _to_record(self, item: Artist) -> dict:
        return item.to_record()
