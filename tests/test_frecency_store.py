import os
import shutil
import tempfile
import threading
import unittest
from unittest.mock import MagicMock

from launcher.cache import FrecencyStore, InMemoryCountRepository, SqliteCountRepository, action_identity
from launcher.errors import PersistenceError


class TestActionIdentity(unittest.TestCase):

    def test_identity_is_stable(self):
        self.assertEqual(action_identity("file_path", "/tmp/a.txt"), "file_path:/tmp/a.txt")
        self.assertEqual(action_identity("web_url", "https://x.org"), action_identity("web_url", "https://x.org"))

    def test_identity_differs_per_category(self):
        self.assertNotEqual(action_identity("clipboard", "4"), action_identity("file_path", "4"))


class TestFrecencyStore(unittest.TestCase):

    def test_unknown_identity_counts_zero(self):
        store = FrecencyStore(InMemoryCountRepository())
        self.assertEqual(store.get_count("file_path:/nowhere"), 0)
        self.assertEqual(store.get_count(None), 0)

    def test_increment_returns_new_count_and_persists(self):
        repository = InMemoryCountRepository({"web_url:https://a.io": 2})
        store = FrecencyStore(repository)

        self.assertEqual(store.increment("web_url:https://a.io"), 3)
        self.assertEqual(store.get_count("web_url:https://a.io"), 3)
        self.assertEqual(repository.load_all()["web_url:https://a.io"], 3)

    def test_load_failure_degrades_to_memory(self):
        """A repository that cannot be read must not stop the store."""
        repository = MagicMock()
        repository.load_all.side_effect = PersistenceError("disk gone")

        store = FrecencyStore(repository)

        self.assertFalse(store.is_persistent)
        self.assertEqual(store.increment("clipboard:4"), 1)
        repository.save.assert_not_called()

    def test_save_failure_keeps_counting_in_memory(self):
        repository = MagicMock()
        repository.load_all.return_value = {}
        repository.save.side_effect = PersistenceError("read-only")

        store = FrecencyStore(repository)
        store.increment("clipboard:4")
        store.increment("clipboard:4")

        self.assertFalse(store.is_persistent)
        self.assertEqual(store.get_count("clipboard:4"), 2)
        # Only the first write was attempted
        self.assertEqual(repository.save.call_count, 1)

    def test_concurrent_increments_are_not_lost(self):
        store = FrecencyStore(InMemoryCountRepository())

        def work():
            for _ in range(200):
                store.increment("programs:/usr/share/applications/x.desktop")

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(store.get_count("programs:/usr/share/applications/x.desktop"), 1600)

    def test_no_repository_is_memory_only(self):
        store = FrecencyStore(None)
        self.assertFalse(store.is_persistent)
        store.increment("a:b")
        self.assertEqual(store.snapshot(), {"a:b": 1})


class TestSqliteCountRepository(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.db_path = os.path.join(self.tmp, "db", "usage_counts.db")

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_counts_survive_restart(self):
        """Counts written by one session are loaded by the next."""
        repository = SqliteCountRepository(self.db_path)
        store = FrecencyStore(repository)
        store.increment("file_path:/tmp/report.txt")
        store.increment("file_path:/tmp/report.txt")
        store.increment("web_url:https://example.com")
        repository.close()

        reopened = SqliteCountRepository(self.db_path)
        try:
            self.assertEqual(
                reopened.load_all(),
                {"file_path:/tmp/report.txt": 2, "web_url:https://example.com": 1},
            )
        finally:
            reopened.close()

    def test_unopenable_path_raises_persistence_error(self):
        blocker = os.path.join(self.tmp, "not_a_dir")
        with open(blocker, "w") as f:
            f.write("x")

        with self.assertRaises(PersistenceError):
            SqliteCountRepository(os.path.join(blocker, "usage_counts.db"))

    def test_write_after_close_raises_persistence_error(self):
        repository = SqliteCountRepository(self.db_path)
        repository.close()

        with self.assertRaises(PersistenceError):
            repository.save("a:b", 1)


if __name__ == "__main__":
    unittest.main()
