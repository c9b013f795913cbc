from motion_core.models.config import AliasEntry, AliasTable, LocalConfig
from motion_core.models.plan import BarrelUpdate, FileDisposition, InstallPlan, PlannedFile
from motion_core.models.registry import (
    AssetBundle,
    FileEntry,
    RegistryComponent,
    RegistryIndex,
)

__all__ = [
    "AliasEntry",
    "AliasTable",
    "AssetBundle",
    "BarrelUpdate",
    "FileDisposition",
    "FileEntry",
    "InstallPlan",
    "LocalConfig",
    "PlannedFile",
    "RegistryComponent",
    "RegistryIndex",
]
