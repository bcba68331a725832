from __future__ import annotations

import logging
from typing import Optional

from ..app import SongsApp
from ..models import Artist
from ..persistence import PersistenceError
from ..tables import ARTIST_MENU, all_artists_table, artist_table
from .menu import read_option

logger = logging.getLogger(__name__)


def generate_artist(app: SongsApp, old: Optional[Artist] = None) -> Artist:
    read = app.reader.read
    name = read("artistName", old.name if old else None)
    founded_date = read("artistFoundedDate", old.founded_date if old else None)
    genres = read("artistGenres", old.genres if old else None)
    return Artist(name, founded_date, list(genres))


def add_artist(app: SongsApp) -> None:
    artist = generate_artist(app)
    logger.debug("Adding artist: %s", artist)
    app.artists.add(artist)
    app.prompt_io.print("\nThe following artist was added successfully:\n")
    app.prompt_io.print(artist_table([app.artists.find_by_value(artist) or artist]))


def view_artist(app: SongsApp) -> None:
    app.artist_query.pick_by_index(app.artists)


def update_artist(app: SongsApp) -> None:
    artist = app.artist_query.pick_by_index(app.artists)
    if artist is None:
        return
    index = app.artists.find_index_by_value(artist)
    app.prompt_io.print("\nPlease enter the new details for the artist (Enter nothing to keep previous value):")
    updated = generate_artist(app, artist)
    if not app.artists.update_at(index, updated):
        app.prompt_io.print("Update NOT Successful")
        return
    app.prompt_io.print("\nThe artist was updated successfully:\n")
    app.prompt_io.print(artist_table([app.artists.find_by_index(index)]))


def delete_artist(app: SongsApp) -> None:
    if app.artists.count() == 0:
        app.prompt_io.print("No artists found.")
        return
    app.prompt_io.print(all_artists_table(app.artists.find_all()))
    index = app.reader.read(
        "artistIndex",
        prompt="Enter artist index to delete: ",
        validator=app.artists.is_valid_index_text,
    )
    deleted = app.artists.delete_at(index)
    if deleted is not None:
        app.prompt_io.print(f"Delete Successful! Deleted artist: {deleted.name}")
    else:
        app.prompt_io.print("Delete NOT Successful")


def search_artists(app: SongsApp) -> None:
    results = app.artist_query.run(app.artists)
    if results is None:
        return
    if not results:
        app.prompt_io.print("No artists matched your search.")
        return
    app.prompt_io.print("Here are the artists you wanted to view:")
    app.prompt_io.print(artist_table(results))


def load_artists(app: SongsApp, *, show: bool = True) -> bool:
    if not app.artists.load():
        app.prompt_io.print("Error loading artists, see debug log for more info")
        return False
    app.prompt_io.print("Artists loaded successfully")
    if show:
        app.prompt_io.print(all_artists_table(app.artists.find_all()))
    return True


def save_artists(app: SongsApp) -> bool:
    try:
        app.artists.store()
    except PersistenceError as exc:
        logger.error("Saving artists failed: %s", exc)
        app.prompt_io.print(f"Error writing to file: {exc}")
        return False
    app.prompt_io.print("Artists saved successfully:")
    app.prompt_io.print(all_artists_table(app.artists.find_all()))
    return True


def run(app: SongsApp) -> None:
    while True:
        app.prompt_io.print(ARTIST_MENU)
        option = read_option(app.prompt_io)
        logger.debug("Artist menu option %s", option)
        match option:
            case 1:
                add_artist(app)
            case 2:
                view_artist(app)
            case 3:
                update_artist(app)
            case 4:
                delete_artist(app)
            case 5:
                search_artists(app)
            case 6:
                app.prompt_io.print(all_artists_table(app.artists.find_all()))
            case 7:
                load_artists(app)
            case 8:
                save_artists(app)
            case -99:
                app.artists.seed()
                app.prompt_io.print("Seeded sample artists")
            case 0:
                return
            case _:
                app.prompt_io.print(f"Invalid option entered: {option}")
