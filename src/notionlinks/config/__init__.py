"""
notionlinks.config - Configuration loading and defaults
"""

from notionlinks.config.defaults import DEFAULT_CONFIG
from notionlinks.config.loader import (
    CONFIG_FILENAME,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml_document,
)

__all__ = [
    "CONFIG_FILENAME",
    "load_config",
    "find_config_file",
    "merge_configs",
    "parse_toml_document",
    "DEFAULT_CONFIG",
]
