"""
Locate command implementation.

Shows where the Android NDK and osxcross were found.
"""

import logging

from nativetoolchains.cli.utils import build_context, safe_print
from nativetoolchains.cross.locator import ToolkitKind

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the locate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    context = build_context(args)
    locator = context.registry.locator(context.working_directory)

    for kind in ToolkitKind:
        location = locator.locate(kind)
        if location is None:
            safe_print(f"{kind}: not found")
            continue

        safe_print(f"{kind}: {location.bin_dir}")
        safe_print(f"  source: {location.source}")
        if location.extra_includes is not None:
            safe_print(f"  extra includes: {location.extra_includes}")
        if location.sdk_path is not None:
            safe_print(f"  sdk: {location.sdk_path}")

    return 0
