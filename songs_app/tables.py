from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from .models import Artist, Song

DATE_FORMAT = "%Y-%m-%d %H:%M"


def render_table(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    footer: Optional[str] = None,
) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    inner = sum(widths) + 3 * (len(widths) - 1)
    inner = max(inner, len(title), len(footer or ""))
    # stretch the last column when the title is wider than the data
    widths[-1] += inner - (sum(widths) + 3 * (len(widths) - 1))

    def line(cells: Sequence[str]) -> str:
        return "│ " + " │ ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(cells)) + " │"

    rule = "─" * (inner + 2)
    out = [f"╭{rule}╮", f"│ {title.center(inner)} │", f"├{rule}┤", line(headers), f"├{rule}┤"]
    out.extend(line(row) for row in rows)
    if footer:
        out.append(f"├{rule}┤")
        out.append(f"│ {footer.ljust(inner)} │")
    out.append(f"╰{rule}╯")
    return "\n".join(out)


def _when(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def _song_row(song: Song) -> List[str]:
    return [
        song.title,
        str(song.rating),
        song.genre,
        "Yes" if song.explicit else "No",
        _when(song.created_at),
        _when(song.updated_at),
    ]


SONG_HEADERS = ["Title", "Rating", "Genre", "Explicit", "Created At", "Updated At"]
ARTIST_HEADERS = ["Name", "Founded", "Genres"]


def song_table(songs: Sequence[Song], title: str = "Multiple Song Information", *, indexed: bool = False) -> str:
    if len(songs) == 1 and not indexed:
        title = "Song Information"
    headers = (["Index"] if indexed else []) + SONG_HEADERS
    rows = [([str(idx)] if indexed else []) + _song_row(song) for idx, song in enumerate(songs)]
    return render_table(title, headers, rows, footer=f"{len(songs)} song(s)")


def all_songs_table(songs: Sequence[Song]) -> str:
    if not songs:
        return "No songs stored"
    return song_table(songs, "All Song Information", indexed=True)


def artist_table(artists: Sequence[Artist], title: str = "Multiple Artist Information", *, indexed: bool = False) -> str:
    if len(artists) == 1 and not indexed:
        title = "Artist Information"
    headers = (["Index"] if indexed else []) + ARTIST_HEADERS
    rows = [
        ([str(idx)] if indexed else []) + [artist.name, _when(artist.founded_date), ", ".join(artist.genres)]
        for idx, artist in enumerate(artists)
    ]
    return render_table(title, headers, rows, footer=f"{len(artists)} artist(s)")


def all_artists_table(artists: Sequence[Artist]) -> str:
    if not artists:
        return "No artists stored"
    return artist_table(artists, "All Artist Information", indexed=True)


def menu(title: str, options: Sequence[tuple[str, str]]) -> str:
    rows = [[key, label] if key else ["", ""] for key, label in options]
    return render_table(title, ["Option", "Action"], rows)


MAIN_MENU = menu(
    "Main Menu",
    [("1", "Songs"), ("2", "Artists"), ("0", "Exit")],
)

SONG_MENU = menu(
    "Song Menu",
    [
        ("1", "Add Song"),
        ("2", "View Song"),
        ("3", "Update Song"),
        ("4", "Delete Song"),
        ("5", "Explicitify Song"),
        ("", ""),
        ("6", "Search Songs"),
        ("7", "Remove Multiple Songs"),
        ("", ""),
        ("8", "List Songs"),
        ("", ""),
        ("9", "Load Songs from File"),
        ("10", "Save Songs to File"),
        ("0", "Back"),
    ],
)

LIST_SONGS_MENU = menu(
    "List Songs",
    [
        ("1", "All Songs"),
        ("2", "Safe Songs"),
        ("3", "Explicit Songs"),
        ("4", "Songs by Rating"),
        ("5", "Stale Songs"),
        ("6", "Important Songs"),
        ("7", "Songs by Title"),
        ("0", "Back"),
    ],
)

ARTIST_MENU = menu(
    "Artist Menu",
    [
        ("1", "Add Artist"),
        ("2", "View Artist"),
        ("3", "Update Artist"),
        ("4", "Delete Artist"),
        ("", ""),
        ("5", "Search Artists"),
        ("6", "List Artists"),
        ("", ""),
        ("7", "Load Artists from File"),
        ("8", "Save Artists to File"),
        ("0", "Back"),
    ],
)


def title_search_table(hits: Sequence[tuple[int, Song]]) -> str:
    """Songs matched by title, keyed by their index in the store."""
    rows = [[str(index)] + _song_row(song) for index, song in hits]
    return render_table("Title Search", ["Index"] + SONG_HEADERS, rows, footer=f"{len(hits)} song(s)")
