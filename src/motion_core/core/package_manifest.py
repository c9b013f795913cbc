"""Consumer package.json access: additive dependency merge and project detection."""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from motion_core.core.errors import ConfigInvalid
from motion_core.integrations.filesystem import Filesystem

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"

PackageManager = Literal["pnpm", "yarn", "bun", "npm"]

_LOCKFILES: tuple[tuple[str, PackageManager], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("package-lock.json", "npm"),
)


@dataclass(frozen=True)
class DependencyMerge:
    """Outcome of merging component dependencies into package.json.

    Attributes:
        manifest_path: package.json that was (or would be) edited, None if absent
        added: Runtime dependencies added
        added_dev: Dev dependencies added
        kept: Dependencies already declared with a different version, left as-is
            (name -> (declared, requested))
    """

    manifest_path: Path | None
    added: dict[str, str] = field(default_factory=dict)
    added_dev: dict[str, str] = field(default_factory=dict)
    kept: dict[str, tuple[str, str]] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.added_dev)


@dataclass(frozen=True)
class FrameworkDetection:
    svelte_version: str | None
    tailwind_version: str | None

    @property
    def svelte_supported(self) -> bool:
        major = _major(self.svelte_version)
        return major is not None and major >= 5

    @property
    def tailwind_supported(self) -> bool:
        major = _major(self.tailwind_version)
        return major is not None and major >= 4


def read_manifest(filesystem: Filesystem, workspace_root: Path) -> dict[str, Any] | None:
    """Parse package.json, or return None when the workspace has none.

    Raises:
        ConfigInvalid: If package.json is not a JSON object
    """
    path = workspace_root / PACKAGE_JSON
    if not filesystem.is_file(path):
        return None
    try:
        data = json.loads(filesystem.read_bytes(path))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigInvalid(str(path), "<root>", f"is not valid JSON ({e})") from None
    if not isinstance(data, dict):
        raise ConfigInvalid(str(path), "<root>", "must be a JSON object")
    return data


def check_manifest(filesystem: Filesystem, workspace_root: Path) -> None:
    """Validate package.json so a later merge cannot fail after files are written.

    Raises:
        ConfigInvalid: If package.json is not an object or a dependency section is
            not an object
    """
    manifest = read_manifest(filesystem, workspace_root)
    if manifest is None:
        return
    path = workspace_root / PACKAGE_JSON
    _section(manifest, "dependencies", path)
    _section(manifest, "devDependencies", path)


def merge_dependencies(
    filesystem: Filesystem,
    workspace_root: Path,
    dependencies: Mapping[str, str],
    dev_dependencies: Mapping[str, str],
) -> DependencyMerge:
    """Add missing dependencies to package.json without touching existing entries.

    A package counts as present if it appears in either ``dependencies`` or
    ``devDependencies``; its declared version is never changed. Key order of
    the existing manifest is preserved and new keys are appended.

    Returns:
        What was added; ``manifest_path`` is None when there is no package.json,
        in which case nothing is written.
    """
    manifest = read_manifest(filesystem, workspace_root)
    if manifest is None:
        return DependencyMerge(
            manifest_path=None, added=dict(dependencies), added_dev=dict(dev_dependencies)
        )

    path = workspace_root / PACKAGE_JSON
    runtime = _section(manifest, "dependencies", path)
    dev = _section(manifest, "devDependencies", path)
    declared = {**dev, **runtime}

    added: dict[str, str] = {}
    added_dev: dict[str, str] = {}
    kept: dict[str, tuple[str, str]] = {}
    for requested, target in ((dependencies, added), (dev_dependencies, added_dev)):
        for name, version in requested.items():
            if name in declared:
                if declared[name] != version:
                    kept[name] = (declared[name], version)
                continue
            if name in added or name in added_dev:
                continue
            target[name] = version

    result = DependencyMerge(manifest_path=path, added=added, added_dev=added_dev, kept=kept)
    if not result.changed:
        return result

    if added:
        manifest["dependencies"] = {**runtime, **added}
    if added_dev:
        manifest["devDependencies"] = {**dev, **added_dev}
    logger.debug("adding to %s: %s / dev %s", path, added, added_dev)
    filesystem.write_atomic(path, (json.dumps(manifest, indent=2) + "\n").encode("utf-8"))
    return result


def detect_package_manager(filesystem: Filesystem, start: Path) -> PackageManager | None:
    """Find the package manager from the nearest lockfile, walking up from start."""
    for directory in (start, *start.parents):
        for lockfile, manager in _LOCKFILES:
            if filesystem.exists(directory / lockfile):
                return manager
    return None


def install_command(manager: PackageManager | None, packages: list[str], *, dev: bool) -> str:
    """Shell command a user can run to install packages manually."""
    if manager == "npm" or manager is None:
        verb = "npm install --save-dev" if dev else "npm install"
    elif manager == "bun":
        verb = "bun add -d" if dev else "bun add"
    else:
        verb = f"{manager} add -D" if dev else f"{manager} add"
    return f"{verb} {' '.join(packages)}"


def sync_command(manager: PackageManager | None) -> str:
    """Command that installs everything declared in package.json."""
    return f"{manager or 'npm'} install"


def detect_framework(manifest: Mapping[str, Any]) -> FrameworkDetection:
    declared: dict[str, Any] = {}
    for section in ("devDependencies", "dependencies"):
        value = manifest.get(section)
        if isinstance(value, dict):
            declared.update(value)
    svelte = declared.get("svelte")
    tailwind = declared.get("tailwindcss")
    return FrameworkDetection(
        svelte_version=svelte if isinstance(svelte, str) else None,
        tailwind_version=tailwind if isinstance(tailwind, str) else None,
    )


def _section(manifest: dict[str, Any], name: str, path: Path) -> dict[str, str]:
    value = manifest.get(name, {})
    if not isinstance(value, dict):
        raise ConfigInvalid(str(path), name, "must be an object")
    return value


def _major(version: str | None) -> int | None:
    if version is None:
        return None
    match = re.search(r"\d+", version.removeprefix("workspace:").removeprefix("file:"))
    if match is None:
        return None
    return int(match.group())
