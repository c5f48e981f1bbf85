"""
NativeToolchains - per-target native toolchain resolution.

Decides, for every (host, target) pair of a multi-target native build, which
compiler family to use, where its executables live and which extra arguments
each tool needs.
"""

from nativetoolchains.core.platform import HostPlatform, detect_host_platform
from nativetoolchains.cross.targets import TargetTriple, DEFAULT_TARGETS
from nativetoolchains.toolchain.registry import ToolchainRegistry, register_all

__version__ = "0.1.0"

__all__ = [
    "HostPlatform",
    "detect_host_platform",
    "TargetTriple",
    "DEFAULT_TARGETS",
    "ToolchainRegistry",
    "register_all",
]
