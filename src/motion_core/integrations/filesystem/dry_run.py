"""No-op wrapper for filesystem writes."""

from pathlib import Path

from motion_core.integrations.filesystem.abc import Filesystem


class DryRunFilesystem(Filesystem):
    """No-op wrapper for filesystem operations.

    Read operations are delegated to the wrapped implementation.
    Write operations are recorded and return without executing.
    """

    def __init__(self, wrapped: Filesystem) -> None:
        """Initialize dry-run wrapper.

        Args:
            wrapped: The real filesystem implementation to wrap
        """
        self._wrapped = wrapped
        self._skipped_writes: list[Path] = []
        self._skipped_dirs: list[Path] = []

    @property
    def skipped_writes(self) -> list[Path]:
        """Files that would have been written, in call order."""
        return self._skipped_writes

    @property
    def skipped_dirs(self) -> list[Path]:
        """Directories that would have been created, in call order."""
        return self._skipped_dirs

    def exists(self, path: Path) -> bool:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.exists(path)

    def is_file(self, path: Path) -> bool:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.is_file(path)

    def read_bytes(self, path: Path) -> bytes:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.read_bytes(path)

    def write_atomic(self, path: Path, data: bytes) -> None:
        """Record the write without touching disk."""
        self._skipped_writes.append(path)

    def mkdir(self, path: Path) -> None:
        """Record the directory without creating it."""
        self._skipped_dirs.append(path)
