"""Application config: YAML files, default layering and env overrides.

Load order, later wins:
1. `config/default.yml` (or the given defaults file)
2. the user's config file, deep-merged section by section
3. environment variables from `ENV_OVERRIDES` (a local `.env` is loaded by
   the CLI before this runs)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from LibrarySearch.config.output import OutputConfig, check_output, load_output
from LibrarySearch.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")

# env var -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "LIBRARY_SEARCH_LOG_LEVEL": ("log", "level"),
    "LIBRARY_SEARCH_OUTPUT_DIR": ("output", "base_dir"),
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    output: OutputConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Build and validate an AppConfig from an already merged mapping."""
    config = AppConfig(runtime=load_runtime(raw), output=load_output(raw))
    check_runtime(config.runtime)
    check_output(config.output)
    return config


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text whose root must be a mapping. Empty text is `{}`."""
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge `override` onto `base`. Lists and scalars are replaced."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_config_dicts(current, value)
        merged[key] = value
    return merged


def apply_env_overrides(
    raw: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> dict[str, Any]:
    """Overlay `ENV_OVERRIDES` that are set and non-empty onto `raw`."""
    env = os.environ if environ is None else environ
    overlay: dict[str, dict[str, str]] = {}
    for name, (section, field) in ENV_OVERRIDES.items():
        value = env.get(name, "").strip()
        if value:
            overlay.setdefault(section, {})[field] = value
    return merge_config_dicts(raw, overlay) if overlay else dict(raw)


def _read_yaml(path: Path) -> dict[str, Any]:
    return parse_yaml(path.read_text(encoding="utf-8"))


def load_config(path: Path, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load one YAML config file, without default layering."""
    return parse_config_dict(apply_env_overrides(_read_yaml(path), environ))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Load `config_path` layered over the defaults file."""
    raw = _read_yaml(default_path)
    if config_path != default_path:
        raw = merge_config_dicts(raw, _read_yaml(config_path))
    return parse_config_dict(apply_env_overrides(raw, environ))
