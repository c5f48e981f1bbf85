"""Configuration module for NativeToolchains.

This module provides YAML configuration parsing and validation for
nativetoolchains.yaml and the -D property overrides.
"""

from nativetoolchains.config.parser import (
    CONFIG_FILENAME,
    AndroidConfig,
    NativeToolchainsConfig,
    load_config,
    parse_config,
    parse_property_overrides,
)
from nativetoolchains.core.exceptions import ConfigError

__all__ = [
    "CONFIG_FILENAME",
    "AndroidConfig",
    "NativeToolchainsConfig",
    "ConfigError",
    "load_config",
    "parse_config",
    "parse_property_overrides",
]
