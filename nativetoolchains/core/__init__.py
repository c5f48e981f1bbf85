"""
Core functionality for NativeToolchains.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    HostPlatform,
    detect_host_platform,
    clear_host_platform_cache,
)

from .probe import PathProbe

from .exceptions import (
    NativeToolchainsError,
    ProbeNotFoundError,
    ToolkitUnavailableError,
    MalformedToolkitLayoutError,
    RegistrationError,
    ConfigurationConflictError,
    UnknownTargetError,
    ConfigError,
)

__all__ = [
    "HostPlatform",
    "detect_host_platform",
    "clear_host_platform_cache",
    "PathProbe",
    "NativeToolchainsError",
    "ProbeNotFoundError",
    "ToolkitUnavailableError",
    "MalformedToolkitLayoutError",
    "RegistrationError",
    "ConfigurationConflictError",
    "UnknownTargetError",
    "ConfigError",
]
