"""Output renderers for command results.

The module exports the OutputWriter base class for new output formats and a
factory that instantiates writers from configuration.
"""

from __future__ import annotations

from LibrarySearch.config import AppConfig
from LibrarySearch.renderers.base import MultiOutputWriter, OutputWriter
from LibrarySearch.renderers.console import ConsoleOutputWriter, render_text
from LibrarySearch.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.

    Returns:
        Writer fanning out to every configured format.

    Raises:
        ValueError: If no format is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir, indent=config.output.indent))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
