"""
Targets command implementation.

Shows which toolchain services each declared target machine.
"""

import logging

from nativetoolchains.cli.utils import build_context, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the targets command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    context = build_context(args)
    context.registry.register_all(context.host, context.working_directory)
    resolved = context.registry.resolve_targets(context.config.targets)

    width = max((len(str(t)) for t in context.config.targets), default=0)
    for target in context.config.targets:
        descriptor = resolved.get(target)
        toolchain = descriptor.name if descriptor else "dropped"
        safe_print(f"{str(target):<{width}}  {toolchain}")

    return 0
