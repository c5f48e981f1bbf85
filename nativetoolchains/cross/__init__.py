"""
Cross-compilation support for NativeToolchains.

This module provides the supported target machines, discovery of the Android
NDK and osxcross toolkits, and the extra arguments each target needs.
"""

from nativetoolchains.cross.targets import (
    TargetTriple,
    AndroidAbi,
    ANDROID_TARGETS,
    DEFAULT_TARGETS,
    android_abi,
)
from nativetoolchains.cross.locator import ToolkitKind, ToolkitLocation, ToolkitLocator
from nativetoolchains.cross.arguments import (
    ArgumentAction,
    ArgumentBuilder,
    ArgumentStep,
)

__all__ = [
    "TargetTriple",
    "AndroidAbi",
    "ANDROID_TARGETS",
    "DEFAULT_TARGETS",
    "android_abi",
    "ToolkitKind",
    "ToolkitLocation",
    "ToolkitLocator",
    "ArgumentAction",
    "ArgumentBuilder",
    "ArgumentStep",
]
