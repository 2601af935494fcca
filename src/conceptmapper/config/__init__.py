"""
conceptmapper.config - Configuration loading and defaults
"""

from conceptmapper.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from conceptmapper.config.loader import (
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
)

__all__ = [
    "load_config",
    "find_config_file",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "_try_parse_env_value",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
]
