from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .input_reader import ValidatedInputReader
from .persistence import make_serializer
from .prompt_io import ConsolePromptIO, PromptIO
from .properties import default_descriptor_table
from .query import QueryPipeline, artist_pipeline, song_pipeline
from .store import ArtistStore, SongStore
from .tables import all_artists_table, all_songs_table, artist_table, song_table


@dataclass
class SongsApp:
    settings: Settings
    songs: SongStore
    artists: ArtistStore
    reader: ValidatedInputReader
    song_query: QueryPipeline
    artist_query: QueryPipeline

    @property
    def prompt_io(self) -> PromptIO:
        return self.reader.prompt_io

    @classmethod
    def create(cls, settings: Settings, prompt_io: Optional[PromptIO] = None) -> "SongsApp":
        storage = settings.storage
        songs = SongStore(make_serializer(storage.format, storage.data_dir, storage.songs_file))
        artists = ArtistStore(make_serializer(storage.format, storage.data_dir, storage.artists_file))
        reader = ValidatedInputReader(default_descriptor_table(), prompt_io or ConsolePromptIO())
        song_query = song_pipeline(
            reader,
            show=song_table,
            show_all=lambda: all_songs_table(songs.find_all()),
        )
        artist_query = artist_pipeline(
            reader,
            show=artist_table,
            show_all=lambda: all_artists_table(artists.find_all()),
        )
        return cls(
            settings=settings,
            songs=songs,
            artists=artists,
            reader=reader,
            song_query=song_query,
            artist_query=artist_query,
        )
