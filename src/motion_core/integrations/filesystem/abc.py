"""Workspace filesystem abstraction.

All writes the installer and init flow perform on the consumer project go
through this interface, which lets dry-run mode swap in a wrapper that can
read but never write.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Filesystem(ABC):
    """Abstract filesystem operations for dependency injection."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if a file or directory exists at path."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Check if path is a regular file."""
        ...

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """Read file contents.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        ...

    @abstractmethod
    def write_atomic(self, path: Path, data: bytes) -> None:
        """Write data so readers see either the old or the new file, never a partial one.

        Parent directories are created as needed.

        Raises:
            OSError: If the write or rename fails (the target is left unchanged)
        """
        ...

    @abstractmethod
    def mkdir(self, path: Path) -> None:
        """Create directory and parents; no-op if it already exists."""
        ...
