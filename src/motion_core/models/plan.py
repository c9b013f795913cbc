"""In-memory install plan produced by the planner and consumed by the installer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from motion_core.models.registry import RegistryComponent

FileDisposition = Literal["create", "identical", "conflict"]


@dataclass(frozen=True)
class PlannedFile:
    """One destination file and how it compares to what is on disk.

    ``existing`` is populated for identical and conflicting files so callers can
    render a diff without re-reading the workspace.
    """

    component_slug: str
    source_path: str
    destination: Path
    disposition: FileDisposition
    incoming: bytes
    existing: bytes | None


@dataclass(frozen=True)
class BarrelUpdate:
    """New contents for the export barrel, merged with any existing exports."""

    path: Path
    content: bytes
    existing: bytes | None


@dataclass(frozen=True)
class InstallPlan:
    """Everything an install would do, computed without touching disk.

    Attributes:
        workspace_root: Project root all destinations live under
        components: Resolved components, dependencies before dependents
        files: Component files in install order (one entry per destination)
        directories: Missing directories to create, outermost first
        barrel: Updated export barrel, or None when it needs no change
        dependencies: Union of component runtime dependencies
        dev_dependencies: Union of component dev dependencies
        unexported: Slugs with no entry file, left out of the barrel
    """

    workspace_root: Path
    components: tuple[RegistryComponent, ...]
    files: tuple[PlannedFile, ...]
    directories: tuple[Path, ...]
    barrel: BarrelUpdate | None
    dependencies: dict[str, str]
    dev_dependencies: dict[str, str]
    unexported: tuple[str, ...] = ()

    @property
    def install_order(self) -> list[str]:
        return [component.slug for component in self.components]

    @property
    def conflicts(self) -> list[PlannedFile]:
        return [f for f in self.files if f.disposition == "conflict"]

    @property
    def creates(self) -> list[PlannedFile]:
        return [f for f in self.files if f.disposition == "create"]

    @property
    def identical(self) -> list[PlannedFile]:
        return [f for f in self.files if f.disposition == "identical"]

    @property
    def is_noop(self) -> bool:
        """True when every file is identical and nothing else would change."""
        return (
            all(f.disposition == "identical" for f in self.files)
            and not self.directories
            and self.barrel is None
        )
