"""Prompt/validate/coerce contracts for every interactively entered property."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional

Validator = Callable[[Optional[str]], bool]

DATE_EXAMPLE = "2023-03-09T11:30:00"

# local date-time: date, "T", at least hours and minutes, no offset
_LOCAL_DATE_TIME = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?")


class ValueKind(Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    STRING_LIST = "string_list"


class UnknownPropertyError(LookupError):
    """Raised when code asks for a property name that was never registered."""


def string_is_valid(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def int_is_valid(value: Optional[str]) -> bool:
    if not string_is_valid(value) or "_" in value:
        return False
    try:
        int(value.strip())
    except ValueError:
        return False
    return True


def song_rating_is_valid(value: Optional[str]) -> bool:
    return int_is_valid(value) and 1 <= int(value.strip()) <= 5


def stale_days_is_valid(value: Optional[str]) -> bool:
    return int_is_valid(value) and int(value.strip()) >= 0


def yes_no_is_valid(value: Optional[str]) -> bool:
    return string_is_valid(value) and value[0].lower() in {"y", "n"}


def genres_is_valid(value: Optional[str]) -> bool:
    return string_is_valid(value) and all(part.strip() for part in value.split(","))


def timestamp_is_valid(value: Optional[str]) -> bool:
    if not string_is_valid(value) or not _LOCAL_DATE_TIME.fullmatch(value.strip()):
        return False
    try:
        datetime.fromisoformat(value.strip())
    except ValueError:
        return False
    return True


def no_default_validator(value: Optional[str]) -> bool:
    return False


def _to_string(raw: str) -> str:
    return raw.strip()


def _to_int(raw: str) -> int:
    return int(raw.strip())


def _to_bool(raw: str) -> bool:
    return raw[0].lower() == "y"


def _to_timestamp(raw: str) -> datetime:
    return datetime.fromisoformat(raw.strip())


def _to_genres(raw: str) -> List[str]:
    return [part.strip().lower().capitalize() for part in raw.split(",")]


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "y" if value else "n"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


_COERCERS: Mapping[ValueKind, Callable[[str], Any]] = MappingProxyType(
    {
        ValueKind.STRING: _to_string,
        ValueKind.INTEGER: _to_int,
        ValueKind.BOOLEAN: _to_bool,
        ValueKind.TIMESTAMP: _to_timestamp,
        ValueKind.STRING_LIST: _to_genres,
    }
)


@dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    name: str
    prompt_text: str
    error_text: str
    validate: Validator
    kind: ValueKind
    # index properties only make sense with a caller supplied bounds check
    requires_custom_validator: bool = False

    def prompt(self, old_value: Any = None) -> str:
        if old_value is None:
            return f"{self.prompt_text}: "
        return f"{self.prompt_text} ({self.format(old_value)}): "

    def coerce(self, raw: str) -> Any:
        return _COERCERS[self.kind](raw)

    @staticmethod
    def format(value: Any) -> str:
        return _format_value(value)


class DescriptorTable:
    """Immutable name -> descriptor mapping handed to the input reader."""

    def __init__(self, descriptors: Iterable[PropertyDescriptor]) -> None:
        self._descriptors: Mapping[str, PropertyDescriptor] = MappingProxyType(
            {descriptor.name: descriptor for descriptor in descriptors}
        )

    def resolve(self, name: str) -> PropertyDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownPropertyError(f"Invalid property name: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def names(self) -> List[str]:
        return list(self._descriptors)


def _date_error(label: str) -> str:
    return f"Error: {label} was invalid. Please enter a valid date and time (e.g. {DATE_EXAMPLE})"


def default_descriptor_table() -> DescriptorTable:
    return DescriptorTable(
        [
            PropertyDescriptor(
                "songTitle",
                "Enter song title",
                "Error: song title was invalid. Please enter a string",
                string_is_valid,
                ValueKind.STRING,
            ),
            PropertyDescriptor(
                "songRating",
                "Enter song rating (1-low, 2, 3, 4, 5-high)",
                "Error: song rating was invalid. Please enter an integer between 1 and 5",
                song_rating_is_valid,
                ValueKind.INTEGER,
            ),
            PropertyDescriptor(
                "songGenre",
                "Enter song genre",
                "Error: song genre was invalid. Please enter a string",
                string_is_valid,
                ValueKind.STRING,
            ),
            PropertyDescriptor(
                "isSongExplicit",
                "Enter song explicit status (y/n)",
                "Error: song explicit status was invalid. Please enter either 'y' or 'n'",
                yes_no_is_valid,
                ValueKind.BOOLEAN,
            ),
            PropertyDescriptor(
                "artistName",
                "Enter artist name",
                "Error: artist name was invalid. Please enter a string",
                string_is_valid,
                ValueKind.STRING,
            ),
            PropertyDescriptor(
                "artistFoundedDate",
                f"Enter artist founded date (e.g. {DATE_EXAMPLE})",
                _date_error("artist founded date"),
                timestamp_is_valid,
                ValueKind.TIMESTAMP,
            ),
            PropertyDescriptor(
                "artistGenres",
                "Enter artist genres (e.g. 'rock, pop, rap')",
                "Error: artist genres was invalid. Please enter a comma-separated list of strings",
                genres_is_valid,
                ValueKind.STRING_LIST,
            ),
            PropertyDescriptor(
                "updatedAt",
                f"Enter song updated at (e.g. {DATE_EXAMPLE})",
                _date_error("song updated at"),
                timestamp_is_valid,
                ValueKind.TIMESTAMP,
            ),
            PropertyDescriptor(
                "createdAt",
                f"Enter song created at (e.g. {DATE_EXAMPLE})",
                _date_error("song created at"),
                timestamp_is_valid,
                ValueKind.TIMESTAMP,
            ),
            PropertyDescriptor(
                "staleDays",
                "Show songs that haven't been updated in this many days",
                "Error: invalid number of days. Please enter a valid positive integer.",
                stale_days_is_valid,
                ValueKind.INTEGER,
            ),
            PropertyDescriptor(
                "songIndex",
                "Enter song index",
                "Error: invalid song index. Please enter a valid positive integer.",
                no_default_validator,
                ValueKind.INTEGER,
                requires_custom_validator=True,
            ),
            PropertyDescriptor(
                "artistIndex",
                "Enter artist index",
                "Error: invalid artist index. Please enter a valid positive integer.",
                no_default_validator,
                ValueKind.INTEGER,
                requires_custom_validator=True,
            ),
            PropertyDescriptor(
                "yesNo",
                "Continue? (y/n)",
                "Error: invalid input. Please enter either 'y' or 'n'.",
                yes_no_is_valid,
                ValueKind.BOOLEAN,
            ),
        ]
    )
