"""
Cross-compilation toolkit discovery.

Finds the Android NDK and osxcross installs on the host. Each toolkit is
looked up through a fixed priority order of sources; the first source that
is configured wins and later sources are never consulted, even when the
winner turns out to be unusable.

Android NDK root:
    1. property 'androidNdk'
    2. environment variable ANDROID_NDK_ROOT
    3. environment variable ANDROID_NDK_HOME
    4. a working-directory entry named 'android-ndk*'

osxcross bin directory:
    1. property 'osxcrossBin'
    2. a working-directory entry named 'osxcross*' (uses <entry>/target/bin)
    3. the directory holding 'xcrun' on the search path

Relative property and environment values are resolved against the working
directory.

Results (including "not found") are cached per locator for the rest of the
process and diagnostics are only emitted on the first lookup.

Usage:
    locator = ToolkitLocator(Path.cwd())
    ndk = locator.locate_android_ndk()
    if ndk is not None:
        print(ndk.bin_dir)
"""

import enum
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from ..core.exceptions import (
    MalformedToolkitLayoutError,
    ProbeNotFoundError,
    ToolkitUnavailableError,
)
from ..core.probe import PathProbe

logger = logging.getLogger(__name__)

ANDROID_NDK_PROPERTY = "androidNdk"
ANDROID_NDK_ROOT_ENV = "ANDROID_NDK_ROOT"
ANDROID_NDK_HOME_ENV = "ANDROID_NDK_HOME"
ANDROID_NDK_DIR_PREFIX = "android-ndk"

OSXCROSS_PROPERTY = "osxcrossBin"
OSXCROSS_DIR_PREFIX = "osxcross"
XCRUN = "xcrun"

NDK_UNAVAILABLE_HINT = (
    "android builds will be unavailable. Please set the ANDROID_NDK_ROOT or "
    "ANDROID_NDK_HOME variables to the install location, pass "
    "-DandroidNdk=<Install Path>, or symlink the install path into the "
    "working directory."
)

OSXCROSS_UNAVAILABLE_HINT = (
    "macOS builds will be unavailable. Please add the osxcross/target/bin path "
    "to your PATH variable, pass -DosxcrossBin=<Bin Path>, or symlink the "
    "install path into the working directory."
)


class ToolkitKind(enum.Enum):
    """Kinds of cross-compilation toolkits."""

    ANDROID_NDK = "androidNdk"
    OSXCROSS = "osxcross"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ToolkitLocation:
    """
    A discovered toolkit.

    Attributes:
        kind: Toolkit kind
        bin_dir: Absolute path to the directory holding the toolkit executables
        source: Discovery mechanism that matched (e.g. 'property:androidNdk')
        extra_includes: NDK only, '<ndk-root>/sysroot/usr/include'
        sdk_path: osxcross only, first entry of '<bin_dir>/../SDK' if any
    """

    kind: ToolkitKind
    bin_dir: Path
    source: str
    extra_includes: Optional[Path] = None
    sdk_path: Optional[Path] = None

    @property
    def cxx_includes(self) -> Path:
        """libc++ headers shipped with the prebuilt toolchain."""
        return self.bin_dir.parent / "sysroot" / "usr" / "include" / "c++" / "v1"

    @property
    def binutils_dir(self) -> Path:
        """osxcross binutils, a sibling of the bin directory."""
        return self.bin_dir.parent / "binutils" / "bin"

    def __str__(self) -> str:
        return f"{self.kind} at {self.bin_dir} ({self.source})"


_UNSET = object()

DiagnosticSink = Callable[[str], None]


class ToolkitLocator:
    """
    Locate cross-compilation toolkits once and cache the result.

    Attributes:
        working_directory: Directory scanned for 'android-ndk*' / 'osxcross*'
        probe: PathProbe used for every lookup
    """

    def __init__(
        self,
        working_directory: Path,
        probe: Optional[PathProbe] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        self.working_directory = Path(working_directory).absolute()
        self.probe = probe or PathProbe()
        self._sink = sink or logger.warning
        self._lock = threading.Lock()
        self._cache: Dict[ToolkitKind, object] = {
            kind: _UNSET for kind in ToolkitKind
        }

    def locate_android_ndk(self) -> Optional[ToolkitLocation]:
        """Locate the Android NDK prebuilt LLVM bin directory."""
        return self.locate(ToolkitKind.ANDROID_NDK)

    def locate_osxcross(self) -> Optional[ToolkitLocation]:
        """Locate the osxcross bin directory."""
        return self.locate(ToolkitKind.OSXCROSS)

    def locate(self, kind: ToolkitKind) -> Optional[ToolkitLocation]:
        """
        Locate a toolkit, probing the filesystem only on the first call.

        Args:
            kind: Toolkit to locate

        Returns:
            ToolkitLocation, or None if the toolkit is unavailable
        """
        cached = self._cache[kind]
        if cached is not _UNSET:
            return cached

        with self._lock:
            cached = self._cache[kind]
            if cached is _UNSET:
                cached = self._discover(kind)
                self._cache[kind] = cached
        return cached

    def _discover(self, kind: ToolkitKind) -> Optional[ToolkitLocation]:
        resolvers = {
            ToolkitKind.ANDROID_NDK: (self._resolve_android_ndk, NDK_UNAVAILABLE_HINT),
            ToolkitKind.OSXCROSS: (self._resolve_osxcross, OSXCROSS_UNAVAILABLE_HINT),
        }
        resolve, hint = resolvers[kind]

        try:
            location = resolve()
        except ToolkitUnavailableError as e:
            self._sink(f"{e}, {hint}")
            return None

        logger.info(f"Located {location}")
        return location

    # ========================================================================
    # Android NDK
    # ========================================================================

    def _find_android_ndk_root(self) -> Optional[Tuple[Path, str]]:
        value = self.probe.read_property(ANDROID_NDK_PROPERTY)
        if value:
            return Path(value), f"property:{ANDROID_NDK_PROPERTY}"

        for env_name in (ANDROID_NDK_ROOT_ENV, ANDROID_NDK_HOME_ENV):
            value = self.probe.read_env(env_name)
            if value:
                return Path(value), f"env:{env_name}"

        match = self._match_working_directory(ANDROID_NDK_DIR_PREFIX)
        if match is not None:
            return match, "working-directory"

        return None

    def _resolve_android_ndk(self) -> ToolkitLocation:
        found = self._find_android_ndk_root()
        if found is None:
            raise ToolkitUnavailableError(
                ToolkitKind.ANDROID_NDK, "No Android NDK found"
            )
        root, source = found
        root = self.working_directory / root
        logger.debug(f"Android NDK root candidate {root} from {source}")

        prebuilt = root / "toolchains" / "llvm" / "prebuilt"
        try:
            hosts = self.probe.list_children(prebuilt)
        except ProbeNotFoundError:
            raise MalformedToolkitLayoutError(
                ToolkitKind.ANDROID_NDK, root, "toolchains/llvm/prebuilt"
            )

        if not hosts:
            raise MalformedToolkitLayoutError(
                ToolkitKind.ANDROID_NDK, root, "a prebuilt LLVM toolchain"
            )

        return ToolkitLocation(
            kind=ToolkitKind.ANDROID_NDK,
            bin_dir=hosts[0] / "bin",
            source=source,
            extra_includes=root / "sysroot" / "usr" / "include",
        )

    # ========================================================================
    # osxcross
    # ========================================================================

    def _find_osxcross_bin(self) -> Optional[Tuple[Path, str]]:
        value = self.probe.read_property(OSXCROSS_PROPERTY)
        if value:
            return Path(value), f"property:{OSXCROSS_PROPERTY}"

        match = self._match_working_directory(OSXCROSS_DIR_PREFIX)
        if match is not None:
            return match / "target" / "bin", "working-directory"

        xcrun = self.probe.find_on_search_path(XCRUN)
        if xcrun is not None:
            return xcrun.parent, "search-path"

        return None

    def _resolve_osxcross(self) -> ToolkitLocation:
        found = self._find_osxcross_bin()
        if found is None:
            raise ToolkitUnavailableError(ToolkitKind.OSXCROSS, "No osxcross found")
        bin_dir, source = found
        bin_dir = self.working_directory / bin_dir

        return ToolkitLocation(
            kind=ToolkitKind.OSXCROSS,
            bin_dir=bin_dir,
            source=source,
            sdk_path=self._first_sdk(bin_dir),
        )

    def _first_sdk(self, bin_dir: Path) -> Optional[Path]:
        try:
            sdks = self.probe.list_children(bin_dir.parent / "SDK")
        except ProbeNotFoundError:
            logger.debug(f"No SDK directory next to {bin_dir}")
            return None
        return sdks[0] if sdks else None

    # ========================================================================
    # Helpers
    # ========================================================================

    def _match_working_directory(self, prefix: str) -> Optional[Path]:
        try:
            children = self.probe.list_children(self.working_directory)
        except ProbeNotFoundError:
            logger.debug(f"Working directory {self.working_directory} not found")
            return None

        for child in children:
            if child.name.startswith(prefix) and self.probe.is_directory(child):
                return child
        return None


__all__ = [
    "ToolkitKind",
    "ToolkitLocation",
    "ToolkitLocator",
    "ANDROID_NDK_PROPERTY",
    "ANDROID_NDK_ROOT_ENV",
    "ANDROID_NDK_HOME_ENV",
    "OSXCROSS_PROPERTY",
]
