"""Smoke tests for the LibrarySearch CLI."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from LibrarySearch.cli import cli


def _write_config(tmp: str, formats: str) -> Path:
    path = Path(tmp) / "config.yml"
    path.write_text(
        f"""
log:
  level: INFO
  to_file: false
  dir: {tmp}/log
output:
  base_dir: {tmp}/output
  formats: {formats}
""",
        encoding="utf-8",
    )
    return path


class TestCli(unittest.TestCase):
    def test_parse_logs_filter(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = _write_config(tmp, "[console]")
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "parse", "is:unread", "label:work", "report"]
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Query: report", result.output)
        self.assertIn("Read: UNREAD", result.output)
        self.assertIn("Labels: +work", result.output)

    def test_parse_each_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = _write_config(tmp, "[json]")
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "parse", "--each", "in:trash", "hello world"]
            )
            self.assertEqual(result.exit_code, 0, result.output)
            files = list((Path(tmp) / "output" / "json").glob("parse_*.json"))
            self.assertEqual(len(files), 1)
            data = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual([d["raw_query"] for d in data], ["in:trash", "hello world"])
        self.assertEqual(data[0]["filter"]["in_filter"], "TRASH")
        self.assertEqual(data[1]["filter"]["query"], "hello world")

    def test_sort_command(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = _write_config(tmp, "[console]")
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "sort", "--by", "saved_at", "--order", "ascending"]
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Sort: saved_at ASC", result.output)

    def test_config_path_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = _write_config(tmp, "[console]")
            result = CliRunner().invoke(
                cli, ["sort"], env={"LIBRARY_SEARCH_CONFIG": str(config_path)}
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Sort: updated_at DESC", result.output)

    def test_invalid_config_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "bad.yml"
            config_path.write_text("log:\n  level: LOUD\noutput:\n  formats: [console]\n", encoding="utf-8")
            result = CliRunner().invoke(cli, ["--config", str(config_path), "sort"])
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
