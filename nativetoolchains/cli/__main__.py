"""
Entry point for running NativeToolchains CLI as a module.

Usage: python -m nativetoolchains.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
