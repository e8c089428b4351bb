"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

from typing import Sequence

import click

from LibrarySearch.cli.commands import ParseCommand, SortCommand
from LibrarySearch.config import AppConfig
from LibrarySearch.parser import SortParams
from LibrarySearch.renderers import create_output_writer
from LibrarySearch.utils.log import configure_logging, log


class CommandRunner:
    """Runs one CLI command with logging set up and failures reported."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_parse(self, action: str, queries: Sequence[str]) -> None:
        """Normalize queries and write them with the configured writers.

        Args:
            action: The CLI command name (e.g., 'parse').
            queries: Raw query strings.

        Raises:
            click.Abort: When normalization or output fails.
        """
        self._configure_logging(action)
        try:
            output_writer = create_output_writer(self.config)
            ParseCommand(queries=queries, output_writer=output_writer).execute()
            output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Parse failed: %s", e)
            raise click.Abort from e

    def run_sort(self, action: str, params: SortParams | None) -> None:
        """Resolve and report a structured sort request.

        Raises:
            click.Abort: When resolution fails.
        """
        self._configure_logging(action)
        try:
            SortCommand(params=params).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Sort failed: %s", e)
            raise click.Abort from e
