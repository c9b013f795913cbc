"""Workspace initialization: config file, alias directories, base helper and dependencies."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from motion_core.core.config_store import ConfigStore
from motion_core.core.errors import ConfigInvalid, MalformedRegistry, RegistryUnreachable
from motion_core.core.package_manifest import (
    PACKAGE_JSON,
    DependencyMerge,
    detect_framework,
    merge_dependencies,
    read_manifest,
)
from motion_core.core.paths import workspace_path
from motion_core.core.registry_client import RegistryClient
from motion_core.integrations.filesystem import Filesystem
from motion_core.models.config import AliasName, LocalConfig

logger = logging.getLogger(__name__)

CN_HELPER_PATH = "utils/cn.ts"

ConfigState = Literal["exists", "created", "would_create"]

_SCAFFOLDED_ALIASES: tuple[AliasName, ...] = ("components", "helpers", "utils", "assets")


@dataclass(frozen=True)
class InitResult:
    """Outcome of ``initialize_workspace``.

    Under dry-run, ``directories`` and ``files`` list what would be created.
    ``dependencies`` is None when registry metadata was unavailable.
    """

    workspace_root: Path
    config_path: Path
    config_state: ConfigState
    directories: tuple[Path, ...]
    files: tuple[Path, ...]
    dependencies: DependencyMerge | None
    warnings: tuple[str, ...]


def find_workspace_root(cwd: Path, config_store: ConfigStore, filesystem: Filesystem) -> Path:
    """Directory init should target.

    The nearest directory holding motion-core.json, else the nearest holding
    package.json, else cwd.
    """
    configured = config_store.find_root(cwd)
    if configured is not None:
        return configured
    for directory in (cwd, *cwd.parents):
        if filesystem.is_file(directory / PACKAGE_JSON):
            return directory
    return cwd


def initialize_workspace(
    *,
    workspace_root: Path,
    config_store: ConfigStore,
    filesystem: Filesystem,
    registry: RegistryClient,
    dry_run: bool,
) -> InitResult:
    """Bring a workspace to the configured state.

    Idempotent: an existing valid config is kept as-is, existing directories
    and helper files are left alone, and dependencies already declared in
    package.json are never changed. Registry failures degrade to warnings so
    the config and directories are still created offline.

    Raises:
        ConfigInvalid: If an existing config (or package.json) is invalid
    """
    warnings: list[str] = []
    config_path = config_store.path(workspace_root)

    existing = config_store.read(workspace_root)
    config_state: ConfigState
    if existing is not None:
        issues = config_store.validate(existing)
        if issues:
            raise ConfigInvalid(str(config_path), issues[0].field, issues[0].problem)
        config = existing
        config_state = "exists"
    else:
        config = LocalConfig.default()
        config_store.write(workspace_root, config)
        config_state = "would_create" if dry_run else "created"

    manifest = read_manifest(filesystem, workspace_root)
    if manifest is None:
        warnings.append(f"No {PACKAGE_JSON} found in {workspace_root}; base dependencies skipped.")
    else:
        framework = detect_framework(manifest)
        if not framework.svelte_supported:
            found = framework.svelte_version or "none"
            warnings.append(f"Svelte >= 5 is required (found: {found}).")
        if not framework.tailwind_supported:
            found = framework.tailwind_version or "none"
            warnings.append(f"Tailwind CSS >= 4 is recommended (found: {found}).")

    directories: list[Path] = []
    for name in _SCAFFOLDED_ALIASES:
        directory = workspace_path(workspace_root, config.aliases.get(name).filesystem)
        if not filesystem.exists(directory):
            filesystem.mkdir(directory)
            directories.append(directory)

    files: list[Path] = []
    dependencies: DependencyMerge | None = None
    try:
        catalog = registry.fetch_catalog()
    except (RegistryUnreachable, MalformedRegistry) as e:
        logger.debug("registry unavailable during init: %s", e)
        warnings.append(
            f"Registry metadata unavailable ({e.message}); skipped helper and dependencies."
        )
        catalog = None

    if catalog is not None:
        utils_dir = workspace_path(workspace_root, config.aliases.utils.filesystem)
        cn_path = utils_dir / "cn.ts"
        if not filesystem.exists(cn_path):
            helper = catalog.assets.get(CN_HELPER_PATH)
            if helper is None:
                warnings.append(f"Registry does not ship {CN_HELPER_PATH}; create it manually.")
            else:
                filesystem.write_atomic(cn_path, helper)
                files.append(cn_path)

        if manifest is not None:
            dependencies = merge_dependencies(
                filesystem,
                workspace_root,
                catalog.index.base_dependencies,
                catalog.index.base_dev_dependencies,
            )

    return InitResult(
        workspace_root=workspace_root,
        config_path=config_path,
        config_state=config_state,
        directories=tuple(directories),
        files=tuple(files),
        dependencies=dependencies,
        warnings=tuple(warnings),
    )
