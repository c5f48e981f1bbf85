"""
Toolchain registration.

Builds the full set of ToolchainDescriptors for a host:

- Linux: gcc for linux x86/x86-64 plus MinGW gcc for windows x86/x86-64, and
  osxcross clang for macos x86-64 when osxcross is installed.
- Windows: Visual C++ (host native) and gcc for windows x86/x86-64. No cross
  compilation is attempted from Windows.
- Any host: Android NDK clang for the four android ABIs when an NDK is
  installed.

Missing toolkits only remove their targets (with a diagnostic); a target
claimed by two toolchains is a hard error.

Usage:
    from nativetoolchains.toolchain.registry import register_all

    for descriptor in register_all(working_directory=Path.cwd()):
        print(descriptor)
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import ConfigurationConflictError, RegistrationError
from ..core.platform import HostPlatform, detect_host_platform
from ..core.probe import PathProbe
from ..cross.arguments import ArgumentBuilder
from ..cross.locator import (
    DiagnosticSink,
    ToolkitKind,
    ToolkitLocation,
    ToolkitLocator,
)
from ..cross.targets import (
    ANDROID_TARGETS,
    DEFAULT_TARGETS,
    LINUX_X86,
    LINUX_X86_64,
    MACOS_X86_64,
    WINDOWS_X86,
    WINDOWS_X86_64,
    TargetTriple,
    android_abi,
)
from .descriptor import (
    PlatformToolchain,
    ToolchainDescriptor,
    ToolchainFamily,
    ToolRole,
    claimed_targets,
)

logger = logging.getLogger(__name__)

MINGW_PREFIXES = {
    WINDOWS_X86_64: "x86_64-w64-mingw32",
    WINDOWS_X86: "i686-w64-mingw32",
}

OSXCROSS_BINUTILS_PREFIX = "x86_64-apple-darwin19"


class ToolchainRegistry:
    """
    Compose toolkit discovery and argument building into descriptors.

    Locators are cached per working directory, so toolkit discovery runs at
    most once per directory for the lifetime of the registry.
    """

    def __init__(
        self,
        probe: Optional[PathProbe] = None,
        argument_builder: Optional[ArgumentBuilder] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        self.probe = probe or PathProbe()
        self.arguments = argument_builder or ArgumentBuilder()
        self._sink = sink or logger.warning
        self._locators: Dict[Path, ToolkitLocator] = {}
        self._descriptors: Tuple[ToolchainDescriptor, ...] = ()

    @property
    def descriptors(self) -> Tuple[ToolchainDescriptor, ...]:
        """Descriptors from the last registration pass."""
        return self._descriptors

    def locator(self, working_directory: Path) -> ToolkitLocator:
        """Get the (cached) toolkit locator for a working directory."""
        key = Path(working_directory).absolute()
        if key not in self._locators:
            self._locators[key] = ToolkitLocator(key, self.probe, self._sink)
        return self._locators[key]

    # ========================================================================
    # Registration
    # ========================================================================

    def register_all(
        self, host: HostPlatform, working_directory: Path
    ) -> Tuple[ToolchainDescriptor, ...]:
        """
        Build every toolchain available on a host.

        Args:
            host: Host platform to register for
            working_directory: Directory scanned for toolkit installs

        Returns:
            Descriptors in registration order

        Raises:
            ConfigurationConflictError: If a target is serviced twice
            RegistrationError: If two toolchains share a name
        """
        locator = self.locator(working_directory)

        register_host = _HOST_REGISTRATIONS.get(host, _register_nothing)
        descriptors = list(register_host(self, locator))

        ndk = locator.locate_android_ndk()
        if ndk is not None:
            descriptors.append(self.build_android_ndk(ndk))

        _check_unique(descriptors)
        self._descriptors = tuple(descriptors)

        logger.debug(
            f"Registered {len(self._descriptors)} toolchains for {host} host: "
            + ", ".join(d.name for d in self._descriptors)
        )
        return self._descriptors

    def resolve_targets(
        self, declared: Iterable[TargetTriple] = DEFAULT_TARGETS
    ) -> Dict[TargetTriple, ToolchainDescriptor]:
        """
        Assign each declared target to the toolchain servicing it.

        Targets no registered toolchain services are dropped with a warning.

        Args:
            declared: Target machines the build asks for

        Returns:
            Mapping of serviced targets to their descriptor, in declared order
        """
        resolved: Dict[TargetTriple, ToolchainDescriptor] = {}
        for target in declared:
            servicing = [d for d in self._descriptors if d.services(target)]
            if not servicing:
                self._sink(f"No toolchain available for target {target}, skipping it")
                continue
            resolved[target] = servicing[0]
        return resolved

    # ========================================================================
    # Toolchain builders
    # ========================================================================

    def build_gcc(self) -> ToolchainDescriptor:
        pic = self.arguments.position_independent()
        platforms = [
            PlatformToolchain.build(
                ToolchainFamily.GCC,
                target,
                actions={ToolRole.CPP_COMPILER: pic},
            )
            for target in (LINUX_X86_64, LINUX_X86)
        ]

        for target in (WINDOWS_X86_64, WINDOWS_X86):
            prefix = MINGW_PREFIXES[target]
            platforms.append(
                PlatformToolchain.build(
                    ToolchainFamily.GCC,
                    target,
                    executables={
                        ToolRole.C_COMPILER: f"{prefix}-gcc",
                        ToolRole.CPP_COMPILER: f"{prefix}-g++",
                        ToolRole.LINKER: f"{prefix}-g++",
                        ToolRole.STATIC_ARCHIVER: f"{prefix}-ar",
                    },
                    actions={ToolRole.CPP_COMPILER: pic},
                )
            )

        return ToolchainDescriptor("gcc", ToolchainFamily.GCC, tuple(platforms))

    def build_osxcross(self, location: ToolkitLocation) -> ToolchainDescriptor:
        platform_toolchain = PlatformToolchain.build(
            ToolchainFamily.CLANG,
            MACOS_X86_64,
            executables={
                ToolRole.C_COMPILER: "o64-clang",
                ToolRole.CPP_COMPILER: "o64-clang++",
                ToolRole.LINKER: "o64-clang++",
                ToolRole.ASSEMBLER: "o64-clang",
                ToolRole.SYMBOL_EXTRACTOR: f"{OSXCROSS_BINUTILS_PREFIX}-objcopy",
                ToolRole.STRIPPER: f"{OSXCROSS_BINUTILS_PREFIX}-strip",
            },
            actions={ToolRole.CPP_COMPILER: self.arguments.position_independent()},
        )

        if location.sdk_path is None:
            logger.debug(f"No macOS SDK found next to {location.bin_dir}")

        return ToolchainDescriptor(
            name="osxcross",
            family=ToolchainFamily.CLANG,
            platforms=(platform_toolchain,),
            search_paths=(location.bin_dir, location.binutils_dir),
            sdk_path=location.sdk_path,
        )

    def build_android_ndk(self, location: ToolkitLocation) -> ToolchainDescriptor:
        platforms = []
        for target in ANDROID_TARGETS:
            abi = android_abi(target)
            action = self.arguments.action_for(ToolkitKind.ANDROID_NDK, target, location)
            platforms.append(
                PlatformToolchain.build(
                    ToolchainFamily.CLANG,
                    target,
                    executables={
                        ToolRole.C_COMPILER: "clang",
                        ToolRole.CPP_COMPILER: "clang++",
                        ToolRole.LINKER: "clang++",
                        ToolRole.SYMBOL_EXTRACTOR: abi.binutil("objcopy"),
                        ToolRole.STATIC_ARCHIVER: abi.binutil("ar"),
                        ToolRole.STRIPPER: abi.binutil("strip"),
                    },
                    actions={
                        ToolRole.C_COMPILER: action,
                        ToolRole.CPP_COMPILER: action,
                        ToolRole.LINKER: action,
                    },
                )
            )

        return ToolchainDescriptor(
            name="androidNdk",
            family=ToolchainFamily.CLANG,
            platforms=tuple(platforms),
            search_paths=(location.bin_dir,),
        )


# ============================================================================
# Per-host registration
# ============================================================================


def _register_linux(
    registry: ToolchainRegistry, locator: ToolkitLocator
) -> List[ToolchainDescriptor]:
    descriptors = [registry.build_gcc()]

    osxcross = locator.locate_osxcross()
    if osxcross is not None:
        descriptors.append(registry.build_osxcross(osxcross))

    return descriptors


def _register_windows(
    registry: ToolchainRegistry, locator: ToolkitLocator
) -> List[ToolchainDescriptor]:
    gcc = ToolchainDescriptor(
        "gcc",
        ToolchainFamily.GCC,
        tuple(
            PlatformToolchain.build(ToolchainFamily.GCC, target)
            for target in (WINDOWS_X86_64, WINDOWS_X86)
        ),
    )
    return [ToolchainDescriptor("visualCpp", ToolchainFamily.VISUAL_CPP), gcc]


def _register_nothing(
    registry: ToolchainRegistry, locator: ToolkitLocator
) -> List[ToolchainDescriptor]:
    return []


_HOST_REGISTRATIONS = {
    HostPlatform.LINUX: _register_linux,
    HostPlatform.WINDOWS: _register_windows,
}


def _check_unique(descriptors: List[ToolchainDescriptor]) -> None:
    names = [d.name for d in descriptors]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise RegistrationError(f"Toolchain registered twice: {', '.join(duplicates)}")

    for target, claimants in claimed_targets(descriptors).items():
        if len(claimants) > 1:
            raise ConfigurationConflictError(target, claimants)


def register_all(
    host: Optional[HostPlatform] = None,
    working_directory: Optional[Path] = None,
    probe: Optional[PathProbe] = None,
    argument_builder: Optional[ArgumentBuilder] = None,
    sink: Optional[DiagnosticSink] = None,
) -> Tuple[ToolchainDescriptor, ...]:
    """
    Register every toolchain available on a host.

    Args:
        host: Host platform (default: detected)
        working_directory: Directory scanned for toolkits (default: cwd)
        probe: PathProbe (default: process environment and PATH)
        argument_builder: ArgumentBuilder (default: API level 21)
        sink: Diagnostic sink (default: logger warnings)

    Returns:
        Registered descriptors
    """
    registry = ToolchainRegistry(probe, argument_builder, sink)
    return registry.register_all(
        host or detect_host_platform(), working_directory or Path.cwd()
    )


__all__ = [
    "ToolchainRegistry",
    "register_all",
    "MINGW_PREFIXES",
    "OSXCROSS_BINUTILS_PREFIX",
]
