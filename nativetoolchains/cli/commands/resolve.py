"""
Resolve command implementation.

Registers every toolchain available on the host and prints the descriptors.
"""

import json
import logging

import yaml

from nativetoolchains.cli.utils import build_context, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    context = build_context(args)
    descriptors = context.registry.register_all(
        context.host, context.working_directory
    )

    data = [descriptor.to_dict() for descriptor in descriptors]

    if args.format == "json":
        safe_print(json.dumps(data, indent=2))
    elif args.format == "yaml":
        safe_print(yaml.safe_dump(data, sort_keys=False).rstrip())
    else:
        for descriptor in descriptors:
            _print_descriptor(descriptor)

    return 0


def _print_descriptor(descriptor):
    safe_print(str(descriptor))
    for path in descriptor.search_paths:
        safe_print(f"  search path: {path}")
    if descriptor.sdk_path is not None:
        safe_print(f"  sdk: {descriptor.sdk_path}")

    for platform_toolchain in descriptor.platforms:
        safe_print(f"  {platform_toolchain.target}:")
        for tool in platform_toolchain.tools:
            line = f"    {tool.role}: {tool.executable}"
            if tool.arguments:
                line += " " + " ".join(tool.arguments)
            safe_print(line)
