"""Install planning: classify every destination file against the workspace.

The planner reads the workspace through a Filesystem but never writes to it
and never prompts. Resolution of conflicts belongs to the installer.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from motion_core.core.barrel import ComponentExport, TypeExport, render_barrel
from motion_core.core.paths import destination_for, workspace_path
from motion_core.integrations.filesystem import Filesystem
from motion_core.models.config import LocalConfig
from motion_core.models.plan import BarrelUpdate, FileDisposition, InstallPlan, PlannedFile
from motion_core.models.registry import AssetBundle, RegistryComponent

logger = logging.getLogger(__name__)


def plan(
    components: Sequence[RegistryComponent],
    assets: AssetBundle,
    config: LocalConfig,
    workspace_root: Path,
    filesystem: Filesystem,
) -> InstallPlan:
    """Build the install plan for resolved components.

    Args:
        components: Components in install order (output of ``resolve``)
        assets: Decoded asset bundle
        config: Local configuration providing the alias table
        workspace_root: Project root
        filesystem: Read access to the workspace

    Returns:
        Plan with one entry per destination file. When two components ship
        the same destination, the first one in install order owns it.

    Raises:
        AssetNotFound: If a file entry is missing from the asset bundle
    """
    files: list[PlannedFile] = []
    seen: set[Path] = set()
    component_exports: list[ComponentExport] = []
    type_exports: list[TypeExport] = []
    unexported: list[str] = []
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}

    for component in components:
        for name, version in component.dependencies.items():
            dependencies.setdefault(name, version)
        for name, version in component.dev_dependencies.items():
            dev_dependencies.setdefault(name, version)

        for entry in component.files:
            incoming = assets.require(entry.path)
            destination = destination_for(workspace_root, config, entry)
            if entry.type_exports:
                type_exports.append(TypeExport(tuple(entry.type_exports), destination))
            if destination in seen:
                logger.debug(
                    "%s already planned; skipping duplicate from %s", destination, component.slug
                )
                continue
            seen.add(destination)
            files.append(_classify(component.slug, entry.path, destination, incoming, filesystem))

        entry_file = component.entry_file()
        if entry_file is None:
            unexported.append(component.slug)
        else:
            component_exports.append(
                ComponentExport(
                    component.export_name, destination_for(workspace_root, config, entry_file)
                )
            )

    barrel = _plan_barrel(workspace_root, config, component_exports, type_exports, filesystem)

    targets = [f.destination for f in files if f.disposition == "create"]
    if barrel is not None:
        targets.append(barrel.path)
    directories = _missing_directories(workspace_root, targets, filesystem)

    return InstallPlan(
        workspace_root=workspace_root,
        components=tuple(components),
        files=tuple(files),
        directories=tuple(directories),
        barrel=barrel,
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        unexported=tuple(unexported),
    )


def _classify(
    slug: str, source_path: str, destination: Path, incoming: bytes, filesystem: Filesystem
) -> PlannedFile:
    disposition: FileDisposition
    existing: bytes | None = None

    if not filesystem.exists(destination):
        disposition = "create"
    elif filesystem.is_file(destination):
        existing = filesystem.read_bytes(destination)
        disposition = "identical" if existing == incoming else "conflict"
    else:
        disposition = "conflict"

    logger.debug("plan %s -> %s (%s)", source_path, destination, disposition)
    return PlannedFile(
        component_slug=slug,
        source_path=source_path,
        destination=destination,
        disposition=disposition,
        incoming=incoming,
        existing=existing,
    )


def _plan_barrel(
    workspace_root: Path,
    config: LocalConfig,
    component_exports: list[ComponentExport],
    type_exports: list[TypeExport],
    filesystem: Filesystem,
) -> BarrelUpdate | None:
    if not component_exports and not type_exports:
        return None

    barrel_path = workspace_path(workspace_root, config.exports.components.barrel)
    existing = filesystem.read_bytes(barrel_path) if filesystem.is_file(barrel_path) else None
    rendered = render_barrel(
        existing.decode("utf-8") if existing is not None else "",
        barrel_path,
        component_exports,
        type_exports,
    )
    if rendered is None:
        return None
    return BarrelUpdate(path=barrel_path, content=rendered.encode("utf-8"), existing=existing)


def _missing_directories(
    workspace_root: Path, targets: list[Path], filesystem: Filesystem
) -> list[Path]:
    missing: set[Path] = set()
    for target in targets:
        parent = target.parent
        while parent != workspace_root and parent.is_relative_to(workspace_root):
            if parent in missing:
                break
            if filesystem.exists(parent):
                break
            missing.add(parent)
            parent = parent.parent
    return sorted(missing, key=lambda p: (len(p.parts), p.as_posix()))
