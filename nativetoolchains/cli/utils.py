"""
Shared utilities for CLI commands.

Every command resolves against the same inputs: the configuration file, the
-D property overrides, the working directory and the host platform.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from nativetoolchains.config.parser import (
    NativeToolchainsConfig,
    load_config,
    parse_property_overrides,
)
from nativetoolchains.core.platform import HostPlatform, detect_host_platform
from nativetoolchains.core.probe import PathProbe
from nativetoolchains.cross.arguments import ArgumentBuilder
from nativetoolchains.toolchain.registry import ToolchainRegistry

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Inputs of a resolution run, built from the command line."""

    config: NativeToolchainsConfig
    host: HostPlatform
    working_directory: Path
    registry: ToolchainRegistry


def build_context(args) -> ResolutionContext:
    """
    Build the resolution context from parsed arguments.

    Args:
        args: Parsed arguments with config, working_dir, properties and host

    Returns:
        ResolutionContext ready for registration

    Raises:
        ConfigError: If the configuration or a -D override is invalid
    """
    working_directory = Path(args.working_dir).resolve()
    config = load_config(working_directory, args.config)
    config = config.with_properties(parse_property_overrides(args.properties))

    host = HostPlatform.from_name(args.host) if args.host else detect_host_platform()
    logger.debug(f"Resolving for {host} host in {working_directory}")

    probe = PathProbe(properties=config.properties)
    registry = ToolchainRegistry(
        probe, ArgumentBuilder(api_level=config.android.api_level)
    )
    return ResolutionContext(config, host, working_directory, registry)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        print(message.encode("ascii", "replace").decode("ascii"), file=file)
