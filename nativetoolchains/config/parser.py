"""YAML configuration parser for NativeToolchains.

This module provides parsing and validation for nativetoolchains.yaml files:

    version: 1
    properties:
      androidNdk: /opt/android-ndk-r21e
      osxcrossBin: /opt/osxcross/target/bin
    targets:
      - linux_x86-64
      - android_arm64-v8a
    android:
      api_level: 21
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import yaml

from ..core.exceptions import ConfigError, UnknownTargetError
from ..cross.arguments import DEFAULT_ANDROID_API_LEVEL
from ..cross.targets import DEFAULT_TARGETS, TargetTriple

CONFIG_FILENAME = "nativetoolchains.yaml"


@dataclass
class AndroidConfig:
    """Android NDK configuration."""

    api_level: int = DEFAULT_ANDROID_API_LEVEL


@dataclass
class NativeToolchainsConfig:
    """Complete NativeToolchains configuration."""

    version: int = 1
    properties: Dict[str, str] = field(default_factory=dict)
    targets: Tuple[TargetTriple, ...] = DEFAULT_TARGETS
    android: AndroidConfig = field(default_factory=AndroidConfig)

    def with_properties(self, overrides: Mapping[str, str]) -> "NativeToolchainsConfig":
        """Return a copy with property overrides (e.g. -D flags) applied."""
        properties = dict(self.properties)
        properties.update(overrides)
        return NativeToolchainsConfig(
            version=self.version,
            properties=properties,
            targets=self.targets,
            android=self.android,
        )


def parse_config(config_path: Path) -> NativeToolchainsConfig:
    """
    Parse nativetoolchains.yaml configuration file.

    Args:
        config_path: Path to nativetoolchains.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data)


def load_config(
    working_directory: Path, config_path: Optional[Path] = None
) -> NativeToolchainsConfig:
    """
    Load the configuration for a working directory.

    An explicit config_path must exist; the default nativetoolchains.yaml in
    the working directory is optional.

    Raises:
        ConfigError: If the configuration is missing (explicit path) or invalid
    """
    if config_path is not None:
        return parse_config(config_path)

    default_path = working_directory / CONFIG_FILENAME
    if not default_path.exists():
        return NativeToolchainsConfig()
    return parse_config(default_path)


def _parse_and_validate(data: dict) -> NativeToolchainsConfig:
    """Parse and validate configuration data."""
    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    return NativeToolchainsConfig(
        version=data["version"],
        properties=_parse_properties(data.get("properties") or {}),
        targets=_parse_targets(data.get("targets")),
        android=_parse_android(data.get("android") or {}),
    )


def _parse_properties(data) -> Dict[str, str]:
    """Parse build property overrides."""
    if not isinstance(data, dict):
        raise ConfigError("properties must be a dictionary")

    properties = {}
    for key, value in data.items():
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ConfigError(f"Property '{key}' must be a string")
        properties[str(key)] = str(value)
    return properties


def _parse_targets(data) -> Tuple[TargetTriple, ...]:
    """Parse declared target machines."""
    if data is None:
        return DEFAULT_TARGETS

    if not isinstance(data, list):
        raise ConfigError("targets must be a list")

    targets: List[TargetTriple] = []
    for name in data:
        try:
            target = TargetTriple.parse(str(name))
        except UnknownTargetError as e:
            raise ConfigError(str(e))
        if target in targets:
            raise ConfigError(f"Duplicate target: {target}")
        targets.append(target)

    return tuple(targets)


def _parse_android(data) -> AndroidConfig:
    """Parse Android NDK configuration."""
    if not isinstance(data, dict):
        raise ConfigError("android must be a dictionary")

    api_level = data.get("api_level", DEFAULT_ANDROID_API_LEVEL)
    if isinstance(api_level, bool) or not isinstance(api_level, int) or api_level < 1:
        raise ConfigError(f"Invalid android.api_level: {api_level}")

    return AndroidConfig(api_level=api_level)


def parse_property_overrides(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse KEY=VALUE property overrides.

    Raises:
        ConfigError: If a pair has no '=' or an empty key
    """
    overrides = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Invalid property override: {pair} (expected KEY=VALUE)")
        overrides[key.strip()] = value
    return overrides
