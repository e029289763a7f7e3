import asyncio
import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from launcher.cache import FrecencyStore, InMemoryCountRepository
from launcher.core import LauncherCore
from launcher.errors import ConfigError
from launcher.execution import InMemoryEmitter
from launcher.models import InboundMessage
from launcher.user_config import ConfigFileRepository, default_config


class TestLauncherCore(unittest.TestCase):

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.apps = self.tmp / "applications"
        self.apps.mkdir()
        (self.apps / "Notepad.desktop").write_text("[Desktop Entry]\n", encoding="utf-8")

        self.config_file = self.tmp / "config.json"
        self._write_config({})

        self.store = FrecencyStore(InMemoryCountRepository())
        self.emitter = InMemoryEmitter()
        self.core = LauncherCore(
            ConfigFileRepository(default_config(), self.config_file),
            self.store,
            self.emitter,
        )

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _write_config(self, overrides):
        document = {"programs": {
            "application_folders": [str(self.apps)],
            "application_file_extensions": [".desktop"],
        }}
        document.update(overrides)
        self.config_file.write_text(json.dumps(document), encoding="utf-8")

    # ─────────────────────────────────────────────────────────────────────────
    #  Search → execute → rank
    # ─────────────────────────────────────────────────────────────────────────
    @patch("launcher.execution.executors.file_path.launch_desktop_entry")
    def test_program_search_execute_and_count(self, mock_launch):
        """A launched program is counted under its execution identity."""
        path = str(self.apps / "Notepad.desktop")
        for _ in range(3):
            self.store.increment(f"file_path:{path}")

        results = asyncio.run(self.core.search("not"))

        self.assertEqual([(r.name, r.origin_category) for r in results], [("Notepad", "programs")])
        self.assertEqual(results[0].execution_argument, path)

        outcome = asyncio.run(self.core.execute(path))

        self.assertTrue(outcome.success)
        mock_launch.assert_called_once_with(path)
        self.assertEqual(self.store.snapshot(), {f"file_path:{path}": 4})
        self.assertEqual(self.emitter.on("execution-succeeded")[0]["category"], "file_path")

    @patch("launcher.execution.executors.clipboard.pyperclip.copy")
    def test_calculator_result_goes_to_clipboard(self, mock_copy):
        results = asyncio.run(self.core.search("2+2"))

        self.assertEqual([r.execution_argument for r in results], ["4"])

        asyncio.run(self.core.execute(results[0].execution_argument))

        mock_copy.assert_called_once_with("4")
        self.assertEqual(self.store.get_count("clipboard:4"), 1)

    @patch("launcher.execution.executors.web_url.webbrowser.open", return_value=True)
    def test_used_items_rank_higher(self, mock_open):
        """Executing an item moves it ahead of higher priority categories."""
        self._write_config({"custom_commands": {"commands": [
            {"name": "2+2 cheat sheet", "execution_argument": "https://example.com/sums"},
        ]}})
        self.core.reload()

        before = asyncio.run(self.core.search("2+2"))
        self.assertEqual([r.origin_category for r in before], ["calculator", "custom_commands"])

        asyncio.run(self.core.execute("https://example.com/sums"))

        after = asyncio.run(self.core.search("2+2"))
        self.assertEqual([r.origin_category for r in after], ["custom_commands", "calculator"])
        self.assertEqual(self.store.get_count("web_url:https://example.com/sums"), 1)

    def test_empty_query_has_no_results(self):
        self.assertEqual(asyncio.run(self.core.search("")), [])

    def test_missing_file_fails_without_counting(self):
        missing = str(self.tmp / "missing.txt")

        outcome = asyncio.run(self.core.execute(missing))

        self.assertFalse(outcome.success)
        self.assertIn("File not found", outcome.error)
        self.assertEqual(self.store.snapshot(), {})
        self.assertEqual(len(self.emitter.on("execution-failed")), 1)

    def test_unknown_argument_is_ignored(self):
        self.assertIsNone(asyncio.run(self.core.execute("just some words")))
        self.assertEqual(self.emitter.events, [])

    def test_auto_complete_path(self):
        suggestion = self.core.auto_complete(str(self.apps / "Note"))
        self.assertEqual(suggestion.completion, str(self.apps / "Notepad.desktop"))

    @patch("launcher.execution.executors.file_path.reveal_in_folder")
    def test_open_location_does_not_count(self, mock_reveal):
        path = str(self.apps / "Notepad.desktop")

        outcome = asyncio.run(self.core.open_location(path))

        self.assertTrue(outcome.success)
        mock_reveal.assert_called_once_with(path)
        self.assertEqual(self.store.snapshot(), {})

    # ─────────────────────────────────────────────────────────────────────────
    #  Reload
    # ─────────────────────────────────────────────────────────────────────────
    def test_reload_removes_disabled_category(self):
        self.assertTrue(asyncio.run(self.core.search("2+2")))
        old = self.core.snapshot

        self._write_config({"calculator": {"enabled": False}})
        new = self.core.reload()

        self.assertEqual(new.generation, old.generation + 1)
        self.assertEqual(asyncio.run(self.core.search("2+2")), [])
        self.assertNotIn("clipboard", [c.category for c in new.execution_registry.combinations()])
        # The previous snapshot is untouched
        self.assertTrue(asyncio.run(old.search_orchestrator.get_search_result("2+2")))

    def test_counts_survive_reload(self):
        self.store.increment("clipboard:4")
        self.core.reload()
        self.assertIs(self.core.frecency_store, self.store)
        self.assertEqual(self.store.get_count("clipboard:4"), 1)

    def test_broken_config_keeps_current_snapshot(self):
        current = self.core.snapshot
        self.config_file.write_text("{ broken", encoding="utf-8")

        with self.assertRaises(ConfigError):
            self.core.reload()

        self.assertIs(self.core.snapshot, current)

    def test_launcher_reload_command(self):
        generation = self.core.snapshot.generation

        outcome = asyncio.run(self.core.execute("launcher:reload"))

        self.assertTrue(outcome.success)
        self.assertEqual(self.core.snapshot.generation, generation + 1)
        self.assertEqual(self.emitter.on("config-reloaded"), [{"generation": generation + 1}])

    def test_launcher_exit_command(self):
        asyncio.run(self.core.execute("launcher:exit"))
        self.assertEqual(self.emitter.on("exit-requested"), [{}])

    def test_malformed_config_at_startup_is_fatal(self):
        self.config_file.write_text("[]", encoding="utf-8")
        with self.assertRaises(ConfigError):
            LauncherCore(ConfigFileRepository(default_config(), self.config_file), self.store, self.emitter)

    # ─────────────────────────────────────────────────────────────────────────
    #  Inbound messages
    # ─────────────────────────────────────────────────────────────────────────
    def test_config_updated_message_installs_and_saves(self):
        message = InboundMessage(type="config-updated", payload={"web_url": {"enabled": False}})

        asyncio.run(self.core.handle_message(message))

        self.assertFalse(self.core.snapshot.config.web_url.enabled)
        saved = json.loads(self.config_file.read_text(encoding="utf-8"))
        self.assertFalse(saved["web_url"]["enabled"])
        self.assertEqual(len(self.emitter.on("config-reloaded")), 1)

    def test_invalid_config_update_is_rejected(self):
        current = self.core.snapshot
        message = InboundMessage(type="config-updated", payload={"file_path": {"max_results": "lots"}})

        with self.assertRaises(ConfigError):
            asyncio.run(self.core.handle_message(message))

        self.assertIs(self.core.snapshot, current)

    def test_search_and_auto_complete_messages(self):
        results = asyncio.run(self.core.handle_message(InboundMessage(type="search-query", payload="2*3")))
        self.assertEqual(results[0].name, "6")

        suggestion = asyncio.run(self.core.handle_message(
            InboundMessage(type="auto-complete", payload="launcher:ex")
        ))
        self.assertEqual(suggestion.completion, "launcher:exit")

    def test_status(self):
        status = self.core.status()
        self.assertEqual(status["generation"], self.core.snapshot.generation)
        self.assertIn("programs", status["search_categories"])
        self.assertEqual(status["diagnostics"], [])


if __name__ == "__main__":
    unittest.main()
