import unittest
from datetime import datetime

from songs_app.models import Artist, Song
from songs_app.tables import all_artists_table, all_songs_table, render_table, song_table


class TestModels(unittest.TestCase):
    def test_structural_equality(self) -> None:
        stamp = datetime(2023, 3, 9, 11, 30)
        self.assertEqual(Song("A", 1, "Pop", False, stamp, stamp), Song("A", 1, "Pop", False, stamp, stamp))
        self.assertNotEqual(Song("A", 1, "Pop", False, stamp, stamp), Song("A", 2, "Pop", False, stamp, stamp))
        self.assertEqual(Artist("X", stamp, ["Rock"]), Artist("X", stamp, ["Rock"]))

    def test_song_record(self) -> None:
        song = Song("A", 3, "Pop", True, datetime(2023, 1, 1, 8, 0), datetime(2023, 1, 2, 9, 30))
        record = song.to_record()
        self.assertEqual(record["created_at"], "2023-01-01T08:00:00")
        self.assertEqual(Song.from_record(record), song)

    def test_from_record_accepts_text_fields(self) -> None:
        song = Song.from_record(
            {
                "title": "A",
                "rating": "4",
                "genre": "Pop",
                "explicit": "False",
                "created_at": "2023-01-01T08:00:00",
                "updated_at": datetime(2023, 1, 2, 9, 30),
            }
        )
        self.assertEqual(song.rating, 4)
        self.assertFalse(song.explicit)
        self.assertEqual(song.updated_at, datetime(2023, 1, 2, 9, 30))

    def test_new_songs_share_creation_time_resolution(self) -> None:
        song = Song("A", 3, "Pop", True)
        self.assertEqual(song.created_at.microsecond, 0)


class TestTables(unittest.TestCase):
    def test_render_table_lines_have_equal_width(self) -> None:
        text = render_table("A very long title for two columns", ["A", "B"], [["1", "two"], ["three", "4"]], footer="2 rows")
        widths = {len(line) for line in text.splitlines()}
        self.assertEqual(len(widths), 1)

    def test_empty_listings(self) -> None:
        self.assertEqual(all_songs_table([]), "No songs stored")
        self.assertEqual(all_artists_table([]), "No artists stored")

    def test_single_song_table(self) -> None:
        song = Song("Yesterday", 5, "Pop", False, datetime(1965, 8, 6), datetime(1965, 8, 6))
        text = song_table([song])
        self.assertIn("Song Information", text)
        self.assertIn("Yesterday", text)
        self.assertNotIn("Index", text)

    def test_all_songs_table_has_indices(self) -> None:
        stamp = datetime(2023, 1, 1)
        text = all_songs_table([Song("A", 1, "Pop", False, stamp, stamp), Song("B", 2, "Rock", True, stamp, stamp)])
        self.assertIn("Index", text)
        self.assertIn("2 song(s)", text)


if __name__ == "__main__":
    unittest.main()
