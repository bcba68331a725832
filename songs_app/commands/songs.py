from __future__ import annotations

import logging
from typing import Callable, Optional

from ..app import SongsApp
from ..models import Song
from ..persistence import PersistenceError
from ..tables import LIST_SONGS_MENU, SONG_MENU, all_songs_table, song_table, title_search_table
from .menu import read_option

logger = logging.getLogger(__name__)


def generate_song(app: SongsApp, old: Optional[Song] = None) -> Song:
    read = app.reader.read
    title = read("songTitle", old.title if old else None)
    rating = read("songRating", old.rating if old else None)
    genre = read("songGenre", old.genre if old else None)
    explicit = read("isSongExplicit", old.explicit if old else None)
    return Song(title, rating, genre, explicit)


def add_song(app: SongsApp) -> None:
    song = generate_song(app)
    logger.debug("Adding song: %s", song)
    app.songs.add(song)
    app.prompt_io.print("\nThe following song was added successfully:\n")
    app.prompt_io.print(song_table([app.songs.find_by_value(song) or song]))


def view_song(app: SongsApp) -> None:
    app.song_query.pick_by_index(app.songs)


def update_song(app: SongsApp) -> None:
    song = app.song_query.pick_by_index(app.songs)
    if song is None:
        return
    index = app.songs.find_index_by_value(song)
    app.prompt_io.print("\nPlease enter the new details for the song (Enter nothing to keep previous value):")
    updated = generate_song(app, song)
    if not app.songs.update_at(index, updated):
        app.prompt_io.print("Update NOT Successful")
        return
    app.prompt_io.print("\nThe song was updated successfully:\n")
    app.prompt_io.print(song_table([app.songs.find_by_index(index)]))


def delete_song(app: SongsApp) -> None:
    if app.songs.count() == 0:
        app.prompt_io.print("No songs found.")
        return
    app.prompt_io.print(all_songs_table(app.songs.find_all()))
    index = app.reader.read(
        "songIndex",
        prompt="Enter song index to delete: ",
        validator=app.songs.is_valid_index_text,
    )
    deleted = app.songs.delete_at(index)
    if deleted is not None:
        app.prompt_io.print(f"Delete Successful! Deleted song: {deleted.title}")
    else:
        app.prompt_io.print("Delete NOT Successful")


def explicitify_song(app: SongsApp) -> None:
    if app.songs.count() == 0:
        app.prompt_io.print("No songs found.")
        return
    app.prompt_io.print(all_songs_table(app.songs.find_all()))
    index = app.reader.read(
        "songIndex",
        prompt="Enter song index to explicitify: ",
        validator=app.songs.is_valid_index_text,
    )
    if app.songs.explicitify(index):
        app.prompt_io.print("Explicitify Successful")
    else:
        app.prompt_io.print("Explicitify Failed")


def search_songs(app: SongsApp) -> None:
    results = app.song_query.run(app.songs)
    if results is None:
        return
    if not results:
        app.prompt_io.print("No songs matched your search.")
        return
    app.prompt_io.print("Here are the songs you wanted to view:")
    app.prompt_io.print(song_table(results))


def remove_multiple_songs(app: SongsApp) -> None:
    selected = app.song_query.select(app.songs)
    if selected is None:
        return
    app.prompt_io.print("Here are the songs you wanted to remove:")
    app.prompt_io.print(song_table(selected))
    if not app.reader.ask_yes_no("Are you sure you want to remove these songs? (y/n): "):
        app.prompt_io.print("Songs not deleted.")
        return
    removed = app.songs.remove_batch(selected)
    app.prompt_io.print(f"{removed} song(s) deleted.")


def _listing(count: int, songs: Callable[[], list[Song]], empty_message: str) -> str:
    if count == 0:
        return empty_message
    return song_table(songs())


def list_songs(app: SongsApp) -> None:
    app.prompt_io.print(LIST_SONGS_MENU)
    songs = app.songs
    match read_option(app.prompt_io):
        case 1:
            app.prompt_io.print(all_songs_table(songs.find_all()))
        case 2:
            app.prompt_io.print(_listing(songs.count_safe(), songs.safe_songs, "No safe songs stored"))
        case 3:
            app.prompt_io.print(_listing(songs.count_explicit(), songs.explicit_songs, "No explicit songs stored"))
        case 4:
            rating = app.reader.read("songRating")
            app.prompt_io.print(
                _listing(songs.count_by_rating(rating), lambda: songs.songs_by_rating(rating), "No songs with rating")
            )
        case 5:
            days = app.reader.read("staleDays")
            app.prompt_io.print(
                _listing(songs.count_stale(days), lambda: songs.stale_songs(days), "No stale songs stored")
            )
        case 6:
            app.prompt_io.print(
                _listing(songs.count_important(), songs.important_songs, "No important songs stored")
            )
        case 7:
            text = app.reader.read("songTitle")
            hits = songs.search_by_title(text)
            app.prompt_io.print(title_search_table(hits) if hits else f"No song titles contain '{text}'")
        case 0:
            pass
        case _:
            app.prompt_io.print("Invalid choice")


def load_songs(app: SongsApp, *, show: bool = True) -> bool:
    if not app.songs.load():
        app.prompt_io.print("Error loading songs, see debug log for more info")
        return False
    app.prompt_io.print("Songs loaded successfully")
    if show:
        app.prompt_io.print(all_songs_table(app.songs.find_all()))
    return True


def save_songs(app: SongsApp) -> bool:
    try:
        app.songs.store()
    except PersistenceError as exc:
        logger.error("Saving songs failed: %s", exc)
        app.prompt_io.print(f"Error writing to file: {exc}")
        return False
    app.prompt_io.print("Songs saved successfully:")
    app.prompt_io.print(all_songs_table(app.songs.find_all()))
    return True


def run(app: SongsApp) -> None:
    while True:
        app.prompt_io.print(SONG_MENU)
        option = read_option(app.prompt_io)
        logger.debug("Song menu option %s", option)
        match option:
            case 1:
                add_song(app)
            case 2:
                view_song(app)
            case 3:
                update_song(app)
            case 4:
                delete_song(app)
            case 5:
                explicitify_song(app)
            case 6:
                search_songs(app)
            case 7:
                remove_multiple_songs(app)
            case 8:
                list_songs(app)
            case 9:
                load_songs(app)
            case 10:
                save_songs(app)
            case -99:
                app.songs.seed()
                app.prompt_io.print("Seeded sample songs")
            case 0:
                return
            case _:
                app.prompt_io.print(f"Invalid option entered: {option}")
