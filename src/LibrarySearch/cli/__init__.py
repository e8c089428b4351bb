"""CLI package for LibrarySearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from LibrarySearch.cli.runner import CommandRunner
from LibrarySearch.cli.ui import cli, run


def main() -> None:
    """Run the LibrarySearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    run()
