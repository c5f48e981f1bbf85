"""
Target machines supported by NativeToolchains.

A target is an (operating system, architecture) pair drawn from a closed set.
Android targets additionally carry the triple prefixes the NDK uses for its
clang driver and its binutils.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.exceptions import UnknownTargetError


@dataclass(frozen=True)
class TargetTriple:
    """
    A compilation target.

    Attributes:
        operating_system: 'linux', 'windows', 'macos' or 'android'
        architecture: 'x86', 'x86-64', 'armv7a' or 'arm64-v8a'
    """

    operating_system: str
    architecture: str

    def __post_init__(self):
        if (self.operating_system, self.architecture) not in _SUPPORTED:
            raise UnknownTargetError(
                f"Unsupported target: {self.operating_system}_{self.architecture}"
            )

    @classmethod
    def parse(cls, name: str) -> "TargetTriple":
        """
        Parse a target name of the form '<os>_<arch>'.

        Example:
            >>> TargetTriple.parse("android_arm64-v8a")
            TargetTriple(operating_system='android', architecture='arm64-v8a')

        Raises:
            UnknownTargetError: If the name is malformed or not supported
        """
        os_name, sep, arch = name.strip().partition("_")
        if not sep:
            raise UnknownTargetError(
                f"Invalid target name: {name} (expected '<os>_<arch>')"
            )
        return cls(os_name.lower(), arch.lower())

    @property
    def is_android(self) -> bool:
        return self.operating_system == "android"

    @property
    def is_windows(self) -> bool:
        return self.operating_system == "windows"

    def __str__(self) -> str:
        return f"{self.operating_system}_{self.architecture}"


@dataclass(frozen=True)
class AndroidAbi:
    """
    Android NDK naming for one architecture.

    Attributes:
        clang_prefix: Prefix of the clang -target triple (API level is appended)
        binutils_prefix: Prefix of objcopy/ar/strip and the arch include subdir
        ms_extensions: Whether -fms-extensions must be passed
    """

    clang_prefix: str
    binutils_prefix: str
    ms_extensions: bool = False

    def clang_target(self, api_level: int) -> str:
        return f"{self.clang_prefix}{api_level}"

    def binutil(self, tool: str) -> str:
        return f"{self.binutils_prefix}-{tool}"


_SUPPORTED = frozenset(
    [
        ("linux", "x86"),
        ("linux", "x86-64"),
        ("windows", "x86"),
        ("windows", "x86-64"),
        ("macos", "x86-64"),
        ("android", "armv7a"),
        ("android", "arm64-v8a"),
        ("android", "x86"),
        ("android", "x86-64"),
    ]
)

LINUX_X86 = TargetTriple("linux", "x86")
LINUX_X86_64 = TargetTriple("linux", "x86-64")
WINDOWS_X86 = TargetTriple("windows", "x86")
WINDOWS_X86_64 = TargetTriple("windows", "x86-64")
MACOS_X86_64 = TargetTriple("macos", "x86-64")
ANDROID_ARMV7A = TargetTriple("android", "armv7a")
ANDROID_ARM64_V8A = TargetTriple("android", "arm64-v8a")
ANDROID_X86 = TargetTriple("android", "x86")
ANDROID_X86_64 = TargetTriple("android", "x86-64")

ANDROID_TARGETS: Tuple[TargetTriple, ...] = (
    ANDROID_ARMV7A,
    ANDROID_ARM64_V8A,
    ANDROID_X86,
    ANDROID_X86_64,
)

# Declaration order of the target machines a build asks for by default
DEFAULT_TARGETS: Tuple[TargetTriple, ...] = (
    WINDOWS_X86,
    WINDOWS_X86_64,
    MACOS_X86_64,
    LINUX_X86,
    LINUX_X86_64,
) + ANDROID_TARGETS

ANDROID_ABIS: Dict[TargetTriple, AndroidAbi] = {
    ANDROID_ARMV7A: AndroidAbi("armv7a-linux-androideabi", "arm-linux-androideabi"),
    ANDROID_ARM64_V8A: AndroidAbi(
        "aarch64-linux-android", "aarch64-linux-android", ms_extensions=True
    ),
    ANDROID_X86: AndroidAbi("i686-linux-android", "i686-linux-android"),
    ANDROID_X86_64: AndroidAbi("x86_64-linux-android", "x86_64-linux-android"),
}


def android_abi(target: TargetTriple) -> AndroidAbi:
    """
    Get the NDK naming for an android target.

    Raises:
        ValueError: If the target is not an android target
    """
    abi: Optional[AndroidAbi] = ANDROID_ABIS.get(target)
    if abi is None:
        raise ValueError(f"Not an android target: {target}")
    return abi


__all__ = [
    "TargetTriple",
    "AndroidAbi",
    "LINUX_X86",
    "LINUX_X86_64",
    "WINDOWS_X86",
    "WINDOWS_X86_64",
    "MACOS_X86_64",
    "ANDROID_ARMV7A",
    "ANDROID_ARM64_V8A",
    "ANDROID_X86",
    "ANDROID_X86_64",
    "ANDROID_TARGETS",
    "DEFAULT_TARGETS",
    "ANDROID_ABIS",
    "android_abi",
]
