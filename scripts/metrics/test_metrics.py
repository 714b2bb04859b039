#!/usr/bin/env python3
"""
Tests for shared utilities: configuration and JSONL helpers.

Run with: python3 -m pytest scripts/metrics/test_metrics.py -v
"""

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

# Add parent directory to path for imports when run directly
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).parent.parent))

from metrics.config import RedTagConfig, config
from metrics.jsonl_utils import JSONLReader, JSONLWriter


class TestRedTagConfig(unittest.TestCase):
    """Test configuration loading and overrides."""

    def setUp(self):
        """Set up temp directory."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Restore the default configuration."""
        config.reload()

    def test_singleton(self):
        """All instances share state."""
        self.assertIs(RedTagConfig(), config)

    def test_defaults(self):
        """Analysis defaults match the dashboard rules."""
        config.reload(self.temp_dir / "missing.json")

        self.assertEqual(config.get("analysis.top_n"), 5)
        self.assertEqual(config.get("analysis.recent_window_days"), 30)
        self.assertEqual(config.get("analysis.increasing_threshold"), 0.6)
        self.assertEqual(config.get("export.filename_prefix"), "red-tag-export")
        self.assertEqual(config.get("no.such.key", "fallback"), "fallback")

    def test_set_and_get(self):
        """Runtime values are readable with dot notation."""
        config.set("analysis.top_n", 3)
        config.set("custom.nested.value", "x")

        self.assertEqual(config.get("analysis.top_n"), 3)
        self.assertEqual(config.get("custom.nested.value"), "x")

    def test_file_merged_over_defaults(self):
        """A partial config file only overrides what it names."""
        config_path = self.temp_dir / "redtag_config.json"
        config_path.write_text(json.dumps({"analysis": {"top_n": 10}}))

        config.reload(config_path)

        self.assertEqual(config.get("analysis.top_n"), 10)
        self.assertEqual(config.get("analysis.recent_window_days"), 30)

    def test_invalid_file_falls_back_to_defaults(self):
        """Unreadable config files are ignored with a warning."""
        config_path = self.temp_dir / "redtag_config.json"
        config_path.write_text("{ not json")

        config.reload(config_path)

        self.assertEqual(config.get("analysis.top_n"), 5)

    def test_env_overrides(self):
        """Environment variables override paths and notifications."""
        env = {
            "REDTAG_RECORDS_PATH": str(self.temp_dir / "r.jsonl"),
            "REDTAG_EXPORT_DIR": str(self.temp_dir / "exports"),
            "REDTAG_SLACK_WEBHOOK_URL": "https://hooks.example.com/services/x",
        }
        with mock.patch.dict(os.environ, env):
            config.reload(self.temp_dir / "missing.json")

            self.assertEqual(config.get_path("records.log_path"), self.temp_dir / "r.jsonl")
            self.assertEqual(config.get_path("export.output_dir"), self.temp_dir / "exports")
            self.assertTrue(config.is_enabled("notifications"))

    def test_notifications_can_be_disabled(self):
        """An explicit flag wins over an implied enable."""
        env = {
            "REDTAG_SLACK_WEBHOOK_URL": "https://hooks.example.com/services/x",
            "REDTAG_NOTIFICATIONS_ENABLED": "false",
        }
        with mock.patch.dict(os.environ, env):
            config.reload(self.temp_dir / "missing.json")
            self.assertFalse(config.is_enabled("notifications"))

    def test_get_path_expands_user(self):
        """Paths with ~ are expanded."""
        config.set("records.log_path", "~/records.jsonl")
        self.assertEqual(config.get_path("records.log_path"), Path.home() / "records.jsonl")

    def test_get_all_is_a_copy(self):
        """Mutating get_all() output does not leak back."""
        snapshot = config.get_all()
        snapshot["analysis"]["top_n"] = 99
        self.assertNotEqual(config.get("analysis.top_n"), 99)


class TestJSONL(unittest.TestCase):
    """Test JSONL reading and writing."""

    def setUp(self):
        """Set up temp log path."""
        self.path = Path(tempfile.mkdtemp()) / "nested" / "log.jsonl"

    def test_write_then_read(self):
        """Appended entries read back in order."""
        writer = JSONLWriter(self.path)
        writer.append({"id": 1, "comments": "Ölwechsel"})
        writer.append_batch([{"id": 2}, {"id": 3}])

        entries = JSONLReader.read_log(self.path)
        self.assertEqual([e["id"] for e in entries], [1, 2, 3])
        self.assertEqual(entries[0]["comments"], "Ölwechsel")

    def test_filter(self):
        """Filter function selects entries."""
        JSONLWriter(self.path).append_batch([{"id": i} for i in range(5)])

        entries = JSONLReader.read_log(self.path, filter_fn=lambda e: e["id"] % 2 == 0)
        self.assertEqual([e["id"] for e in entries], [0, 2, 4])

    def test_missing_file(self):
        """Missing files read as empty."""
        self.assertEqual(JSONLReader.read_log(self.path), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
