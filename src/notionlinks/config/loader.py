"""
notionlinks.config.loader - Load .notionlinks.toml and apply overrides.

Resolution order (later wins): DEFAULT_CONFIG, the TOML file,
NOTIONLINKS_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from notionlinks.config.defaults import DEFAULT_CONFIG
from notionlinks.errors import ConfigurationError

CONFIG_FILENAME = ".notionlinks.toml"
ENV_PREFIX = "NOTIONLINKS_"


def find_config_file(start: Path | None = None) -> Path | None:
    """Find .notionlinks.toml in start or any parent directory.

    Args:
        start: Directory to begin the search from (defaults to cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def parse_toml_document(text: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers."""
    try:
        return tomlkit.parse(text).unwrap()
    except ParseError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested dicts are merged key by key; any other value replaces the base.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment string as JSON container, bool, number or str."""
    stripped = value.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    for cast in (int, float):
        try:
            return cast(stripped)
        except ValueError:
            continue
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply NOTIONLINKS_<SECTION>_<KEY> variables to config in place.

    Only sections that already exist in config are addressable.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX) :].lower()
        section, _, key = remainder.partition("_")
        if not key or not isinstance(config.get(section), dict):
            continue
        config[section][key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        config_path: Explicit config file. When None, the file is searched
            for from the working directory; a missing file means defaults.

    Raises:
        ConfigurationError: If an explicit path is unreadable or the TOML
            is malformed.
    """
    if config_path is None:
        config_path = find_config_file()
        user: dict[str, Any] = {}
        if config_path is not None:
            user = parse_toml_document(config_path.read_text(encoding="utf-8"))
    else:
        try:
            text = Path(config_path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
        user = parse_toml_document(text)

    config = merge_configs(DEFAULT_CONFIG, user)
    return _apply_env_overrides(config)
