"""
conceptmapper.config.loader - Find, parse and merge configuration.

Precedence (lowest first): DEFAULT_CONFIG, the .conceptmapper.toml file,
then CONCEPTMAPPER_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Mapping

import tomlkit
from tomlkit import TOMLDocument

from conceptmapper.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG

ENV_PREFIX = "CONCEPTMAPPER_"


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML text, keeping formatting for round-trip edits."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python values."""
    return parse_toml_document(content).unwrap()


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk up from start (default: cwd) looking for .conceptmapper.toml.

    Returns:
        The first config file found, or None.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base; tables merge, values replace."""
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(raw: str) -> Any:
    """Parse an environment value into bool, int, JSON list/object, or str."""
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if raw.strip().startswith(("[", "{")):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    try:
        return int(raw)
    except ValueError:
        return raw


def _apply_env_overrides(config: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX):].lower().partition("_")
        if not key or not isinstance(config.get(section), dict):
            continue
        config[section][key] = _try_parse_env_value(raw)
    return config


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load configuration with defaults, file values and env overrides.

    Args:
        config_path: Explicit config file; discovered from cwd when None.
        environ: Environment mapping (defaults to os.environ).

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
    """
    if config_path is not None and not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = config_path or find_config_file()
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None:
        config = merge_configs(config, parse_toml(path.read_text(encoding="utf-8")))

    return _apply_env_overrides(config, os.environ if environ is None else environ)
