"""
Toolchain registration module for NativeToolchains.

This module provides functionality for:
- Declarative toolchain descriptors (family, targets, per-role tools)
- Registering every toolchain available on a host
"""

from nativetoolchains.toolchain.descriptor import (
    ToolRole,
    ToolchainFamily,
    ToolInvocation,
    PlatformToolchain,
    ToolchainDescriptor,
)
from nativetoolchains.toolchain.registry import ToolchainRegistry, register_all

__all__ = [
    # Descriptors
    "ToolRole",
    "ToolchainFamily",
    "ToolInvocation",
    "PlatformToolchain",
    "ToolchainDescriptor",
    # Registry
    "ToolchainRegistry",
    "register_all",
]
