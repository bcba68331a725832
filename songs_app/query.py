from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

from .input_reader import ValidatedInputReader
from .prompt_io import PromptIO
from .store import CollectionStore

logger = logging.getLogger(__name__)

INVALID_OPTION = "Error: invalid option. Please enter a valid option."


@dataclass(frozen=True, slots=True)
class FilterOption:
    label: str
    property_name: str
    matches: Callable[[Any, Any], bool]


@dataclass(frozen=True, slots=True)
class SortOption:
    label: str
    key: Callable[[Any], Any]
    descending: bool = False


@dataclass(frozen=True, slots=True)
class QueryFields:
    singular: str
    plural: str
    index_property: str
    filters: Mapping[int, FilterOption]
    sorts: Mapping[int, SortOption]

    def filter_menu(self) -> str:
        return _menu(self.filters)

    def sort_menu(self) -> str:
        return _menu(self.sorts)


def _menu(options: Mapping[int, Any]) -> str:
    return ", ".join(f"{number} - {option.label}" for number, option in options.items())


def _contains_ignore_case(text: str, needle: str) -> bool:
    return needle.lower() in text.lower()


SONG_QUERY_FIELDS = QueryFields(
    singular="song",
    plural="songs",
    index_property="songIndex",
    filters={
        1: FilterOption("Title", "songTitle", lambda song, value: _contains_ignore_case(song.title, value)),
        2: FilterOption("Rating", "songRating", lambda song, value: song.rating == value),
        3: FilterOption("Genre", "songGenre", lambda song, value: song.genre == value),
        4: FilterOption("Explicit", "isSongExplicit", lambda song, value: song.explicit == value),
        5: FilterOption("Updated At", "updatedAt", lambda song, value: song.updated_at == value),
        6: FilterOption("Created At", "createdAt", lambda song, value: song.created_at == value),
    },
    sorts={
        1: SortOption("Title", lambda song: song.title),
        2: SortOption("Rating", lambda song: song.rating, descending=True),
        3: SortOption("Genre", lambda song: song.genre),
        4: SortOption("Explicit", lambda song: song.explicit),
        5: SortOption("Updated At", lambda song: song.updated_at),
        6: SortOption("Created At", lambda song: song.created_at),
    },
)

ARTIST_QUERY_FIELDS = QueryFields(
    singular="artist",
    plural="artists",
    index_property="artistIndex",
    filters={
        1: FilterOption("Name", "artistName", lambda artist, value: _contains_ignore_case(artist.name, value)),
        2: FilterOption("Founded Date", "artistFoundedDate", lambda artist, value: artist.founded_date == value),
        3: FilterOption(
            "Genres",
            "artistGenres",
            lambda artist, value: all(genre in artist.genres for genre in value),
        ),
    },
    sorts={
        1: SortOption("Name", lambda artist: artist.name),
        2: SortOption("Founded Date", lambda artist: artist.founded_date),
    },
)


class QueryPipeline:
    """Interactive selection -> filter -> sort over a working copy of a store.

    ``show`` renders a list of entities for the terminal. ``show_all`` renders
    the whole store (with indices) before each index prompt.
    """

    def __init__(
        self,
        reader: ValidatedInputReader,
        fields: QueryFields,
        *,
        show: Optional[Callable[[List[Any]], str]] = None,
        show_all: Optional[Callable[[], str]] = None,
    ) -> None:
        self.reader = reader
        self.fields = fields
        self.show = show
        self.show_all = show_all

    @property
    def prompt_io(self) -> PromptIO:
        return self.reader.prompt_io

    def pick_by_index(self, store: CollectionStore, *, prompt: Optional[str] = None) -> Optional[Any]:
        if store.count() == 0:
            self.prompt_io.print(f"No {self.fields.plural} found.")
            return None
        if self.show_all:
            self.prompt_io.print(self.show_all())
        index = self.reader.read(
            self.fields.index_property,
            validator=store.is_valid_index_text,
            prompt=prompt,
        )
        item = store.find_by_index(index)
        logger.debug("%s found at index %d: %s", self.fields.singular.capitalize(), index, item)
        if self.show and item is not None:
            self.prompt_io.print(f"\nThe following {self.fields.singular} was found:")
            self.prompt_io.print(self.show([item]))
        return item

    def select(self, store: CollectionStore) -> Optional[List[Any]]:
        plural = self.fields.plural
        if store.count() == 0:
            self.prompt_io.print(f"No {plural} found.")
            return None
        if not self.reader.ask_yes_no(
            f"Do you want to search for multiple {plural} using their index? (y/n): "
        ):
            logger.debug("Selecting all %s", plural)
            return store.find_all()

        selected: List[Any] = []
        while True:
            item = self.pick_by_index(store)
            if item is not None:
                if any(store.equals(existing, item) for existing in selected):
                    self.prompt_io.print(f"{self.fields.singular.capitalize()} already added to list.")
                else:
                    selected.append(item)
            again = self.reader.ask_yes_no(
                f"Do you want to add another {self.fields.singular} to the list using their index? (y/n): "
            )
            self.prompt_io.print()
            if not again:
                break
        return selected or None

    def filter(self, items: List[Any]) -> List[Any]:
        plural = self.fields.plural
        working = list(items)
        if not self.reader.ask_yes_no(f"Do you want to filter the {plural}? (y/n): "):
            logger.debug("Not filtering %s", plural)
            return working

        while working:
            option = self._choose(
                self.fields.filters,
                f"How do you want to filter the {plural}? ({self.fields.filter_menu()}): ",
            )
            value = self.reader.read(option.property_name)
            working = [item for item in working if option.matches(item, value)]
            logger.debug("Filtered %s by %s, %d left", plural, option.label, len(working))
            if not working:
                break
            again = self.reader.ask_yes_no(f"Do you want to filter the {plural} again? (y/n): ")
            self.prompt_io.print()
            if not again:
                break
        return working

    def sort(self, items: List[Any]) -> List[Any]:
        plural = self.fields.plural
        if not self.reader.ask_yes_no(f"Do you want to sort the {plural}? (y/n): "):
            logger.debug("Not sorting %s", plural)
            return list(items)
        option = self._choose(
            self.fields.sorts,
            f"How do you want to sort the {plural}? ({self.fields.sort_menu()}): ",
        )
        return sorted(items, key=option.key, reverse=option.descending)

    def run(self, store: CollectionStore) -> Optional[List[Any]]:
        """None when nothing could be selected; an empty list means no results."""
        selected = self.select(store)
        if selected is None:
            return None
        filtered = self.filter(selected)
        if not filtered:
            return []
        return self.sort(filtered)

    def _choose(self, options: Mapping[int, Any], prompt: str) -> Any:
        while True:
            raw = self.prompt_io.input(prompt).strip()
            try:
                option = options.get(int(raw))
            except ValueError:
                option = None
            if option is not None:
                return option
            self.prompt_io.print(INVALID_OPTION)


def song_pipeline(reader: ValidatedInputReader, **kwargs: Any) -> QueryPipeline:
    return QueryPipeline(reader, SONG_QUERY_FIELDS, **kwargs)


def artist_pipeline(reader: ValidatedInputReader, **kwargs: Any) -> QueryPipeline:
    return QueryPipeline(reader, ARTIST_QUERY_FIELDS, **kwargs)

