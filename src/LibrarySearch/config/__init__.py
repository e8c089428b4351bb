"""Public configuration API for LibrarySearch."""

from __future__ import annotations

from LibrarySearch.config.app import (
    AppConfig,
    apply_env_overrides,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from LibrarySearch.config.output import OutputConfig
from LibrarySearch.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "OutputConfig",
    "AppConfig",
    "apply_env_overrides",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
