"""Output domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from LibrarySearch.config.common import ConfigSection

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where and how normalized filters are written.

    Attributes:
        base_dir: Directory for file outputs.
        formats: Enabled writers, in order.
        indent: JSON indentation width.
    """

    base_dir: str
    formats: tuple[str, ...]
    indent: int


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load the `output` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed output configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = ConfigSection.from_root(raw, "output")
    return OutputConfig(
        base_dir=section.value("base_dir", str, "output"),
        formats=tuple(item.strip().lower() for item in section.str_list("formats")),
        indent=section.value("indent", int, 2),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If values violate output constraints.
    """
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = set(config.formats) - _ALLOWED_FORMATS
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {sorted(unknown)}")
    if "json" in config.formats and not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty")
    if config.indent < 0:
        raise ValueError("output.indent must not be negative")
