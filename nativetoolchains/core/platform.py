"""
Host platform detection for NativeToolchains.

The host operating system decides which toolchain families can be registered
(cross compilation to Windows and macOS is only attempted from Linux). It is
detected once per process and cached.

Usage:
    from nativetoolchains.core.platform import HostPlatform, detect_host_platform

    host = detect_host_platform()
    if host is HostPlatform.LINUX:
        ...
"""

import enum
import functools
import platform


class HostPlatform(enum.Enum):
    """Operating system the build is running on."""

    LINUX = "linux"
    WINDOWS = "windows"
    MACOS = "macos"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "HostPlatform":
        """
        Parse a host name as accepted on the command line.

        Args:
            name: 'linux', 'windows', 'macos' or 'other' (case-insensitive)

        Raises:
            ValueError: If the name is not a known host
        """
        try:
            return cls(name.lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown host platform: {name} (expected one of {valid})")

    def __str__(self) -> str:
        return self.value


@functools.lru_cache(maxsize=1)
def detect_host_platform() -> HostPlatform:
    """
    Detect the running host platform.

    This function is cached - it only runs detection once per process.

    Returns:
        HostPlatform of the current process; unknown systems map to OTHER
    """
    return _host_from_system(platform.system())


def _host_from_system(system: str) -> HostPlatform:
    system = system.lower()

    if system == "linux":
        return HostPlatform.LINUX
    elif system == "windows" or system.startswith(("cygwin", "msys", "mingw")):
        return HostPlatform.WINDOWS
    elif system == "darwin":
        return HostPlatform.MACOS
    else:
        return HostPlatform.OTHER


def clear_host_platform_cache():
    """
    Clear the host detection cache.

    This forces the next call to detect_host_platform() to re-detect.
    Useful for testing.
    """
    detect_host_platform.cache_clear()


__all__ = [
    "HostPlatform",
    "detect_host_platform",
    "clear_host_platform_cache",
]
