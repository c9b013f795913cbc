"""Filesystem operations on the real disk."""

import os
import tempfile
from pathlib import Path

from motion_core.integrations.filesystem.abc import Filesystem


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write bytes to path via a sibling temp file and ``os.replace``.

    The temp file lives in the target directory so the rename never crosses
    filesystems. On failure the temp file is removed and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class RealFilesystem(Filesystem):
    """Production implementation backed by pathlib."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_atomic(self, path: Path, data: bytes) -> None:
        atomic_write_bytes(path, data)

    def mkdir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
