from motion_core.integrations.filesystem.abc import Filesystem
from motion_core.integrations.filesystem.dry_run import DryRunFilesystem
from motion_core.integrations.filesystem.real import RealFilesystem, atomic_write_bytes

__all__ = [
    "DryRunFilesystem",
    "Filesystem",
    "RealFilesystem",
    "atomic_write_bytes",
]
