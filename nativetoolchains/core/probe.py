"""
Read-only filesystem and environment queries.

Every toolkit discovery step goes through a PathProbe so tests can point it
at a fake environment, property set and search path.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Mapping, Optional

from .exceptions import ProbeNotFoundError

logger = logging.getLogger(__name__)


class PathProbe:
    """
    Environment, property and filesystem lookups.

    Attributes:
        environ: Environment variables to read (default: os.environ)
        properties: Build properties, e.g. -DandroidNdk=... overrides
        search_path: PATH-style string used for executable lookups
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        properties: Optional[Mapping[str, str]] = None,
        search_path: Optional[str] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.properties = dict(properties or {})
        self.search_path = search_path

    def read_env(self, name: str) -> Optional[str]:
        """Return an environment variable, or None if unset or empty."""
        value = self.environ.get(name)
        return value if value else None

    def read_property(self, name: str) -> Optional[str]:
        """Return a build property, or None if unset or empty."""
        value = self.properties.get(name)
        return value if value else None

    def is_directory(self, path: Path) -> bool:
        """Return True if path exists and is a directory."""
        return Path(path).is_dir()

    def list_children(self, directory: Path) -> List[Path]:
        """
        List the entries of a directory in sorted order.

        Args:
            directory: Directory to list

        Returns:
            Sorted child paths (empty if the directory is empty)

        Raises:
            ProbeNotFoundError: If the directory is absent or not a directory
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise ProbeNotFoundError(directory)

        try:
            return sorted(directory.iterdir())
        except OSError as e:
            logger.debug(f"Could not list {directory}: {e}")
            raise ProbeNotFoundError(directory) from e

    def find_on_search_path(self, executable: str) -> Optional[Path]:
        """
        Find an executable on the search path.

        Args:
            executable: Executable name (e.g. 'xcrun')

        Returns:
            Path to the first match, or None
        """
        path_str = shutil.which(executable, path=self.search_path)
        return Path(path_str) if path_str else None


__all__ = ["PathProbe"]
