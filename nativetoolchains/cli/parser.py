"""
NativeToolchains CLI argument parser.

This module implements the command-line interface for NativeToolchains using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from nativetoolchains.core.exceptions import NativeToolchainsError
from nativetoolchains.core.platform import HostPlatform

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("nativetoolchains")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """NativeToolchains command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="ntc",
            description="NativeToolchains - per-target native toolchain resolution",
            epilog='Use "ntc COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"NativeToolchains {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./nativetoolchains.yaml)",
        )
        parser.add_argument(
            "--working-dir",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Directory scanned for android-ndk*/osxcross* installs (default: current directory)",
        )
        parser.add_argument(
            "-D",
            "--property",
            action="append",
            dest="properties",
            metavar="KEY=VALUE",
            help="Build property override, e.g. -DandroidNdk=/opt/ndk (can be used multiple times)",
        )
        parser.add_argument(
            "--host",
            choices=[host.value for host in HostPlatform],
            metavar="HOST",
            help="Resolve as if running on HOST (linux|windows|macos|other) [default: detected]",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_locate_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_targets_command(subparsers)

        return parser

    def _add_locate_command(self, subparsers):
        """Add 'locate' subcommand."""
        subparsers.add_parser(
            "locate",
            help="Show located cross-compilation toolkits",
            description="Locate the Android NDK and osxcross installs",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Show registered toolchains",
            description="Register every toolchain available on the host and print them",
        )
        parser.add_argument(
            "--format",
            choices=["text", "yaml", "json"],
            default="text",
            metavar="FORMAT",
            help="Output format (text|yaml|json) [default: text]",
        )

    def _add_targets_command(self, subparsers):
        """Add 'targets' subcommand."""
        subparsers.add_parser(
            "targets",
            help="Show which toolchain services each declared target",
            description="Assign each declared target machine to a toolchain",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except NativeToolchainsError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "locate": "nativetoolchains.cli.commands.locate",
            "resolve": "nativetoolchains.cli.commands.resolve",
            "targets": "nativetoolchains.cli.commands.targets",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
