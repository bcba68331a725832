import unittest
from datetime import datetime, timedelta

from songs_app.models import Artist, Song
from songs_app.store import ArtistStore, SongStore

NOW = datetime(2023, 3, 9, 12, 0)


def fixture_songs() -> list[Song]:
    created = datetime(2023, 1, 1, 9, 0)
    return [
        Song("Learning Kotlin", 5, "College", False, created, NOW - timedelta(days=40)),
        Song("Summer Holiday to France", 1, "Holiday", False, created, NOW - timedelta(days=2)),
        Song("Code App", 4, "Work", True, created, NOW - timedelta(days=10)),
        Song("Test App", 4, "Work", False, created, NOW - timedelta(days=60)),
        Song("Swim - Pool", 3, "Hobby", True, created, NOW),
    ]


class TestSongStore(unittest.TestCase):
    def setUp(self) -> None:
        self.songs = fixture_songs()
        self.populated = SongStore(clock=lambda: NOW)
        for song in self.songs:
            self.populated.add(song)
        self.empty = SongStore(clock=lambda: NOW)

    def test_adding_appends_in_order(self) -> None:
        new_song = Song("Study Lambdas", 1, "College", False)
        self.assertEqual(self.populated.count(), 5)
        self.assertTrue(self.populated.add(new_song))
        self.assertEqual(self.populated.count(), 6)
        self.assertEqual(self.populated.find_by_index(5), new_song)

    def test_adding_to_empty_store(self) -> None:
        new_song = Song("Study Lambdas", 1, "College", False)
        self.assertTrue(self.empty.add(new_song))
        self.assertEqual(self.empty.count(), 1)
        self.assertEqual(self.empty.find_by_index(0), new_song)

    def test_find_by_index_out_of_range(self) -> None:
        self.assertIsNone(self.empty.find_by_index(0))
        self.assertIsNone(self.populated.find_by_index(-1))
        self.assertIsNone(self.populated.find_by_index(5))
        self.assertEqual(self.populated.find_by_index(4), self.songs[4])

    def test_is_valid_index(self) -> None:
        self.assertTrue(self.populated.is_valid_index(0))
        self.assertTrue(self.populated.is_valid_index(4))
        self.assertFalse(self.populated.is_valid_index(5))
        self.assertFalse(self.populated.is_valid_index(-1))
        self.assertFalse(self.empty.is_valid_index(0))

    def test_is_valid_index_text(self) -> None:
        self.assertTrue(self.populated.is_valid_index_text(" 3 "))
        self.assertFalse(self.populated.is_valid_index_text("5"))
        self.assertFalse(self.populated.is_valid_index_text("-1"))
        self.assertFalse(self.populated.is_valid_index_text("two"))
        self.assertFalse(self.populated.is_valid_index_text(""))
        self.assertFalse(self.populated.is_valid_index_text(None))

    def test_delete_out_of_range_returns_none(self) -> None:
        self.assertIsNone(self.empty.delete_at(0))
        self.assertIsNone(self.populated.delete_at(-1))
        self.assertIsNone(self.populated.delete_at(5))
        self.assertEqual(self.populated.count(), 5)

    def test_delete_shifts_following_indices(self) -> None:
        removed = self.populated.delete_at(1)
        self.assertEqual(removed, self.songs[1])
        self.assertEqual(self.populated.count(), 4)
        self.assertEqual(self.populated.delete_at(1), self.songs[2])
        self.assertEqual(self.populated.count(), 3)
        self.assertEqual(self.populated.find_all(), [self.songs[0], self.songs[3], self.songs[4]])

    def test_update_preserves_created_at_and_refreshes_updated_at(self) -> None:
        original = self.populated.find_by_index(4)
        created = original.created_at
        changed = Song("Updating Note", 2, "Work", False, datetime(2030, 1, 1), datetime(2030, 1, 1))
        self.assertTrue(self.populated.update_at(4, changed))
        updated = self.populated.find_by_index(4)
        self.assertIs(updated, original)
        self.assertEqual(updated.title, "Updating Note")
        self.assertEqual(updated.rating, 2)
        self.assertEqual(updated.genre, "Work")
        self.assertFalse(updated.explicit)
        self.assertEqual(updated.created_at, created)
        self.assertEqual(updated.updated_at, NOW)

    def test_update_invalid_index(self) -> None:
        changed = Song("Updating Note", 2, "Work", False)
        self.assertFalse(self.populated.update_at(6, changed))
        self.assertFalse(self.populated.update_at(-1, changed))
        self.assertFalse(self.empty.update_at(0, changed))

    def test_find_by_value_uses_structural_equality(self) -> None:
        twin = Song(**{name: getattr(self.songs[2], name) for name in Song.__slots__})
        self.assertIsNot(twin, self.songs[2])
        self.assertIs(self.populated.find_by_value(twin), self.songs[2])
        self.assertEqual(self.populated.find_index_by_value(twin), 2)
        self.assertIsNone(self.populated.find_by_value(Song("Missing", 1, "None", False)))
        self.assertEqual(self.populated.find_index_by_value(Song("Missing", 1, "None", False)), -1)

    def test_custom_equality(self) -> None:
        store = SongStore(equals=lambda a, b: a.title.lower() == b.title.lower())
        store.add(Song("Hey Jude", 5, "Rock", False))
        self.assertEqual(store.find_index_by_value(Song("HEY JUDE", 1, "Pop", True)), 0)

    def test_remove_batch_ignores_missing(self) -> None:
        missing = Song("Not Stored", 3, "Pop", False)
        removed = self.populated.remove_batch([self.songs[0], missing, self.songs[3]])
        self.assertEqual(removed, 2)
        self.assertEqual(self.populated.find_all(), [self.songs[1], self.songs[2], self.songs[4]])

    def test_remove_batch_removes_every_equal_entity(self) -> None:
        stamp = datetime(2023, 1, 1)
        first = Song("Twin", 3, "Pop", False, stamp, stamp)
        second = Song("Twin", 3, "Pop", False, stamp, stamp)
        self.empty.add(first)
        self.empty.add(Song("Other", 2, "Rock", False, stamp, stamp))
        self.empty.add(second)
        self.assertEqual(self.empty.remove_batch([first]), 2)
        self.assertEqual([song.title for song in self.empty.find_all()], ["Other"])

    def test_remove_batch_with_repeated_element(self) -> None:
        self.assertEqual(self.populated.remove_batch([self.songs[1], self.songs[1]]), 1)
        self.assertEqual(self.populated.count(), 4)

    def test_remove_batch_on_empty_store(self) -> None:
        self.assertEqual(self.empty.remove_batch(self.songs), 0)
        self.assertEqual(self.empty.count(), 0)

    def test_find_all_returns_copy(self) -> None:
        listing = self.populated.find_all()
        listing.clear()
        self.assertEqual(self.populated.count(), 5)

    def test_explicitify(self) -> None:
        self.assertTrue(self.populated.explicitify(0))
        self.assertTrue(self.populated.find_by_index(0).explicit)
        self.assertEqual(self.populated.find_by_index(0).updated_at, NOW)
        self.assertFalse(self.populated.explicitify(5))

    def test_listings(self) -> None:
        self.assertEqual(self.populated.explicit_songs(), [self.songs[2], self.songs[4]])
        self.assertEqual(len(self.populated.safe_songs()), 3)
        self.assertEqual(self.populated.songs_by_rating(4), [self.songs[2], self.songs[3]])
        self.assertEqual(self.populated.important_songs(), [self.songs[0]])
        self.assertEqual(self.empty.important_songs(), [])

    def test_counts_match_listings(self) -> None:
        self.assertEqual(self.populated.count_explicit(), 2)
        self.assertEqual(self.populated.count_safe(), 3)
        self.assertEqual(self.populated.count_by_rating(4), 2)
        self.assertEqual(self.populated.count_by_rating(2), 0)
        self.assertEqual(self.populated.count_important(), 1)
        self.assertEqual(self.populated.count_stale(30), 2)
        self.assertEqual(self.empty.count_explicit(), 0)
        self.assertEqual(self.empty.count_important(), 0)

    def test_update_does_not_check_updated_after_created(self) -> None:
        # known gap: a clock behind created_at is accepted as is
        earlier = datetime(2000, 1, 1)
        store = SongStore(clock=lambda: earlier)
        store.add(Song("Late", 3, "Pop", False, NOW, NOW))
        self.assertTrue(store.update_at(0, Song("Late", 4, "Pop", False)))
        song = store.find_by_index(0)
        self.assertEqual(song.updated_at, earlier)
        self.assertLess(song.updated_at, song.created_at)

    def test_stale_songs_sorted_oldest_first(self) -> None:
        self.assertEqual(self.populated.stale_songs(30), [self.songs[3], self.songs[0]])
        self.assertEqual(self.populated.stale_songs(365), [])
        self.assertEqual(len(self.populated.stale_songs(0)), 4)

    def test_search_by_title(self) -> None:
        hits = self.populated.search_by_title("app")
        self.assertEqual(hits, [(2, self.songs[2]), (3, self.songs[3])])
        self.assertEqual(self.populated.search_by_title("nothing"), [])

    def test_seed_replaces_collection(self) -> None:
        self.populated.seed()
        self.assertEqual(self.populated.count(), 5)
        self.assertNotIn(self.songs[0], self.populated.find_all())


class TestArtistStore(unittest.TestCase):
    def test_update_copies_fields(self) -> None:
        store = ArtistStore()
        artist = Artist("Queen", datetime(1970, 6, 27), ["Rock"])
        store.add(artist)
        genres = ["Rock", "Glam rock"]
        self.assertTrue(store.update_at(0, Artist("Queen II", datetime(1971, 1, 1), genres)))
        self.assertEqual(store.find_by_index(0), Artist("Queen II", datetime(1971, 1, 1), ["Rock", "Glam rock"]))
        genres.append("Opera")
        self.assertEqual(store.find_by_index(0).genres, ["Rock", "Glam rock"])

    def test_delete_and_seed(self) -> None:
        store = ArtistStore()
        store.seed()
        self.assertEqual(store.count(), 4)
        self.assertEqual(store.delete_at(0).name, "Queen")
        self.assertEqual(store.find_by_index(0).name, "Eminem")


if __name__ == "__main__":
    unittest.main()
