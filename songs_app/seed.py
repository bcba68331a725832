from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List

from .models import Artist, Song
from .persistence import SERIALIZERS


def seed_songs() -> List[Song]:
    return [
        Song("Bohemian Rhapsody", 5, "Rock", False, datetime(2022, 1, 10, 9, 0), datetime(2022, 6, 1, 12, 0)),
        Song("Lose Yourself", 4, "Hip hop", True, datetime(2022, 2, 14, 18, 30), datetime(2023, 1, 5, 8, 15)),
        Song("Blinding Lights", 3, "Synthpop", False, datetime(2022, 3, 3, 21, 0), datetime(2022, 3, 3, 21, 0)),
        Song("Smells Like Teen Spirit", 4, "Grunge", False, datetime(2022, 4, 20, 14, 45), datetime(2023, 2, 11, 10, 0)),
        Song("HUMBLE.", 1, "Hip hop", True, datetime(2022, 5, 1, 7, 30), datetime(2022, 5, 2, 7, 30)),
    ]


def seed_artists() -> List[Artist]:
    return [
        Artist("Queen", datetime(1970, 6, 27, 0, 0), ["Rock", "Glam rock"]),
        Artist("Eminem", datetime(1988, 10, 17, 0, 0), ["Hip hop"]),
        Artist("The Weeknd", datetime(2010, 1, 1, 0, 0), ["R&b", "Synthpop"]),
        Artist("Nirvana", datetime(1987, 1, 1, 0, 0), ["Grunge", "Alternative rock"]),
    ]


def write_seed_files(directory: Path, songs_stem: str = "songs", artists_stem: str = "artists") -> List[Path]:
    """Write the seed collections once per supported storage format."""
    written: List[Path] = []
    song_records = [song.to_record() for song in seed_songs()]
    artist_records = [artist.to_record() for artist in seed_artists()]
    for cls in SERIALIZERS.values():
        for stem, records in ((songs_stem, song_records), (artists_stem, artist_records)):
            serializer = cls(Path(directory) / f"{stem}{cls.suffix}", collection=stem)
            serializer.write(records)
            written.append(serializer.path)
    return written
