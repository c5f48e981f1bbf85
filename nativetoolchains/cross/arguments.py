"""
Extra compiler/linker arguments per target.

Arguments are described as ArgumentActions: ordered append/insert steps that
are applied to the argument list a build tool already generates. Insert steps
use fixed indices, so the Android include directories always end up in front
of whatever the tool generated, in the order they were declared.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, MutableSequence, Optional, Tuple

from .locator import ToolkitKind, ToolkitLocation
from .targets import TargetTriple, android_abi

PIC_FLAG = "-fPIC"
DEFAULT_ANDROID_API_LEVEL = 21


@dataclass(frozen=True)
class ArgumentStep:
    """Append a value, or insert it at a fixed index."""

    value: str
    index: Optional[int] = None

    def apply(self, args: MutableSequence[str]) -> None:
        if self.index is None:
            args.append(self.value)
        else:
            args.insert(self.index, self.value)


@dataclass(frozen=True)
class ArgumentAction:
    """An ordered sequence of argument steps."""

    steps: Tuple[ArgumentStep, ...] = ()

    def apply(self, args: MutableSequence[str]) -> MutableSequence[str]:
        """Apply every step to args in place and return it."""
        for step in self.steps:
            step.apply(args)
        return args

    def arguments(self) -> List[str]:
        """Result of applying the action to an empty argument list."""
        return list(self.apply([]))

    def append(self, *values: str) -> "ArgumentAction":
        return ArgumentAction(self.steps + tuple(ArgumentStep(v) for v in values))

    def insert(self, index: int, value: str) -> "ArgumentAction":
        return ArgumentAction(self.steps + (ArgumentStep(value, index),))


class ArgumentBuilder:
    """
    Build the argument actions for a (toolkit, target) pair.

    Attributes:
        api_level: Android API level embedded in the clang -target triple
    """

    def __init__(self, api_level: int = DEFAULT_ANDROID_API_LEVEL):
        self.api_level = api_level

    def position_independent(self) -> ArgumentAction:
        """Force position-independent code."""
        return ArgumentAction().append(PIC_FLAG)

    def cross_sysroot(
        self, location: ToolkitLocation, target: TargetTriple
    ) -> ArgumentAction:
        """
        Build the Android NDK clang arguments for an android target.

        Resulting order on an empty list:
            -isystem <extra includes>
            -isystem <extra includes>/<arch>
            -isystem <prebuilt sysroot>/usr/include/c++/v1
            -target <arch triple><api level>
            -fdeclspec [-fms-extensions] -fPIC

        Args:
            location: Located Android NDK
            target: Android target

        Raises:
            ValueError: If target is not android or the location has no
                NDK include paths
        """
        abi = android_abi(target)
        if location.kind is not ToolkitKind.ANDROID_NDK or not location.extra_includes:
            raise ValueError(f"Not an Android NDK location: {location}")

        extra_includes: Path = location.extra_includes

        action = (
            ArgumentAction()
            .append("-target", abi.clang_target(self.api_level))
            .insert(0, "-isystem")
            .insert(1, str(extra_includes))
            .insert(2, "-isystem")
            .insert(3, str(extra_includes / abi.binutils_prefix))
            .insert(4, "-isystem")
            .insert(5, str(location.cxx_includes))
            .append("-fdeclspec")
        )
        if abi.ms_extensions:
            action = action.append("-fms-extensions")
        return action.append(PIC_FLAG)

    def action_for(
        self,
        kind: Optional[ToolkitKind],
        target: TargetTriple,
        location: Optional[ToolkitLocation] = None,
    ) -> ArgumentAction:
        """
        Pick the argument policy for a toolkit kind and target.

        Android NDK targets get the cross-sysroot policy; everything else the
        position-independent-code policy.
        """
        if kind is ToolkitKind.ANDROID_NDK:
            if location is None:
                raise ValueError("Android NDK arguments need a toolkit location")
            return self.cross_sysroot(location, target)
        return self.position_independent()

    def build_arguments(
        self,
        kind: Optional[ToolkitKind],
        target: TargetTriple,
        location: Optional[ToolkitLocation] = None,
    ) -> List[str]:
        """Ordered extra arguments for a toolkit kind and target."""
        return self.action_for(kind, target, location).arguments()


__all__ = [
    "PIC_FLAG",
    "DEFAULT_ANDROID_API_LEVEL",
    "ArgumentStep",
    "ArgumentAction",
    "ArgumentBuilder",
]
