"""
nativetoolchains/toolchain/descriptor.py

Declarative toolchain descriptors.

A ToolchainDescriptor is what the registry hands to the build orchestrator:
a named compiler family, the targets it services and, per target, the
executable and extra arguments for every tool role.
"""

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..cross.arguments import ArgumentAction
from ..cross.targets import TargetTriple


class ToolRole(enum.Enum):
    """Tools a platform toolchain is made of."""

    C_COMPILER = "cCompiler"
    CPP_COMPILER = "cppCompiler"
    LINKER = "linker"
    STATIC_ARCHIVER = "staticLibArchiver"
    ASSEMBLER = "assembler"
    SYMBOL_EXTRACTOR = "symbolExtractor"
    STRIPPER = "stripper"

    def __str__(self) -> str:
        return self.value


class ToolchainFamily(enum.Enum):
    """Compiler families the orchestrator knows how to drive."""

    GCC = "gcc"
    CLANG = "clang"
    VISUAL_CPP = "visualCpp"

    def __str__(self) -> str:
        return self.value


FAMILY_DEFAULT_EXECUTABLES: Dict[ToolchainFamily, Dict[ToolRole, str]] = {
    ToolchainFamily.GCC: {
        ToolRole.C_COMPILER: "gcc",
        ToolRole.CPP_COMPILER: "g++",
        ToolRole.LINKER: "g++",
        ToolRole.STATIC_ARCHIVER: "ar",
        ToolRole.ASSEMBLER: "as",
        ToolRole.SYMBOL_EXTRACTOR: "objcopy",
        ToolRole.STRIPPER: "strip",
    },
    ToolchainFamily.CLANG: {
        ToolRole.C_COMPILER: "clang",
        ToolRole.CPP_COMPILER: "clang++",
        ToolRole.LINKER: "clang++",
        ToolRole.STATIC_ARCHIVER: "ar",
        ToolRole.ASSEMBLER: "as",
        ToolRole.SYMBOL_EXTRACTOR: "objcopy",
        ToolRole.STRIPPER: "strip",
    },
    ToolchainFamily.VISUAL_CPP: {
        ToolRole.C_COMPILER: "cl.exe",
        ToolRole.CPP_COMPILER: "cl.exe",
        ToolRole.LINKER: "link.exe",
        ToolRole.STATIC_ARCHIVER: "lib.exe",
        ToolRole.ASSEMBLER: "ml.exe",
    },
}


@dataclass(frozen=True)
class ToolInvocation:
    """
    How to invoke one tool.

    Attributes:
        role: Tool role
        executable: Executable name, looked up on the toolchain search paths
        actions: Argument actions applied to the generated arguments, in order
    """

    role: ToolRole
    executable: str
    actions: Tuple[ArgumentAction, ...] = ()

    @property
    def arguments(self) -> List[str]:
        """Extra arguments, applied to an empty list."""
        return self.apply([])

    def apply(self, args: List[str]) -> List[str]:
        """Apply the argument actions to generated arguments in place."""
        for action in self.actions:
            action.apply(args)
        return args

    def to_dict(self) -> Dict[str, Any]:
        return {"executable": self.executable, "arguments": self.arguments}


@dataclass(frozen=True)
class PlatformToolchain:
    """Tools for one target machine."""

    target: TargetTriple
    tools: Tuple[ToolInvocation, ...]

    @classmethod
    def build(
        cls,
        family: ToolchainFamily,
        target: TargetTriple,
        executables: Optional[Mapping[ToolRole, str]] = None,
        actions: Optional[Mapping[ToolRole, ArgumentAction]] = None,
    ) -> "PlatformToolchain":
        """
        Build a platform toolchain from family defaults plus overrides.

        Args:
            family: Compiler family supplying default executables
            target: Target machine
            executables: Executable overrides per role
            actions: Argument action per role
        """
        executables = dict(executables or {})
        actions = dict(actions or {})
        defaults = FAMILY_DEFAULT_EXECUTABLES[family]

        tools = []
        for role in ToolRole:
            executable = executables.get(role, defaults.get(role))
            if executable is None:
                continue
            role_actions = (actions[role],) if role in actions else ()
            tools.append(ToolInvocation(role, executable, role_actions))

        return cls(target=target, tools=tuple(tools))

    def tool(self, role: ToolRole) -> ToolInvocation:
        """
        Get the invocation for a role.

        Raises:
            KeyError: If the toolchain has no tool for the role
        """
        for tool in self.tools:
            if tool.role is role:
                return tool
        raise KeyError(f"No {role} for {self.target}")

    def to_dict(self) -> Dict[str, Any]:
        return {str(tool.role): tool.to_dict() for tool in self.tools}


@dataclass(frozen=True)
class ToolchainDescriptor:
    """
    A registered toolchain.

    Attributes:
        name: Registration name ('gcc', 'visualCpp', 'osxcross', 'androidNdk')
        family: Compiler family
        platforms: One PlatformToolchain per serviced target
        search_paths: Directories searched for the executables (empty: PATH)
        sdk_path: Pre-resolved macOS SDK for osxcross toolchains
    """

    name: str
    family: ToolchainFamily
    platforms: Tuple[PlatformToolchain, ...] = ()
    search_paths: Tuple[Path, ...] = field(default_factory=tuple)
    sdk_path: Optional[Path] = None

    @property
    def targets(self) -> Tuple[TargetTriple, ...]:
        return tuple(p.target for p in self.platforms)

    def services(self, target: TargetTriple) -> bool:
        return target in self.targets

    def platform(self, target: TargetTriple) -> PlatformToolchain:
        """
        Get the platform toolchain for a target.

        Raises:
            KeyError: If the descriptor does not service the target
        """
        for platform_toolchain in self.platforms:
            if platform_toolchain.target == target:
                return platform_toolchain
        raise KeyError(f"{self.name} does not service {target}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for YAML/JSON output."""
        data: Dict[str, Any] = {
            "name": self.name,
            "family": str(self.family),
            "targets": {str(p.target): p.to_dict() for p in self.platforms},
        }
        if self.search_paths:
            data["search_paths"] = [str(path) for path in self.search_paths]
        if self.sdk_path is not None:
            data["sdk_path"] = str(self.sdk_path)
        return data

    def __str__(self) -> str:
        targets = ", ".join(str(t) for t in self.targets) or "host native"
        return f"{self.name} ({self.family}): {targets}"


def claimed_targets(
    descriptors: Iterable[ToolchainDescriptor],
) -> Dict[TargetTriple, List[str]]:
    """Map every target to the names of the descriptors servicing it."""
    claims: Dict[TargetTriple, List[str]] = {}
    for descriptor in descriptors:
        for target in descriptor.targets:
            claims.setdefault(target, []).append(descriptor.name)
    return claims


__all__ = [
    "ToolRole",
    "ToolchainFamily",
    "FAMILY_DEFAULT_EXECUTABLES",
    "ToolInvocation",
    "PlatformToolchain",
    "ToolchainDescriptor",
    "claimed_targets",
]
