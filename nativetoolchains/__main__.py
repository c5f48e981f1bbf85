"""
Entry point for running NativeToolchains CLI as a module.

Usage: python -m nativetoolchains [command] [options]
"""

from nativetoolchains.cli.parser import main

if __name__ == "__main__":
    main()
