"""Mapping registry file paths onto the consumer workspace."""

from pathlib import Path, PurePosixPath, PureWindowsPath

from motion_core.models.config import AliasName, LocalConfig
from motion_core.models.registry import FileEntry

CATEGORY_PREFIXES = ("components", "helpers", "utils", "assets")

_TARGET_ALIASES: dict[str, AliasName] = {
    "helper": "helpers",
    "helpers": "helpers",
    "util": "utils",
    "utils": "utils",
    "asset": "assets",
    "assets": "assets",
}


def sanitize_relative_path(path: str) -> PurePosixPath:
    """Drop empty, ".", ".." and drive/root segments so the result stays relative.

    Backslashes are treated as separators so Windows-style input cannot smuggle
    an absolute path through.
    """
    segments: list[str] = []
    for raw in path.replace("\\", "/").split("/"):
        if raw in ("", ".", ".."):
            continue
        if PureWindowsPath(raw).drive:
            continue
        segments.append(raw)
    return PurePosixPath(*segments)


def workspace_path(workspace_root: Path, configured: str) -> Path:
    """Resolve a configured relative path under the workspace root, clamped to it."""
    relative = sanitize_relative_path(configured)
    if not relative.parts:
        return workspace_root
    return workspace_root.joinpath(*relative.parts)


def strip_category(path: str) -> str:
    """Remove a leading components/, helpers/, utils/ or assets/ segment."""
    first, sep, rest = path.partition("/")
    if sep and first in CATEGORY_PREFIXES:
        return rest
    return path


def destination_for(workspace_root: Path, config: LocalConfig, entry: FileEntry) -> Path:
    """Absolute destination of a registry file.

    The base directory comes from ``entry.target`` when set, otherwise from
    ``entry.kind``: helper files go to the helpers alias, utils to utils,
    assets to assets, "root" to the workspace root and everything else to the
    components alias.
    """
    selector = entry.target or entry.kind or ""
    relative = sanitize_relative_path(strip_category(entry.path))

    if selector == "root":
        base = workspace_root
    else:
        alias_name = _TARGET_ALIASES.get(selector, "components")
        base = workspace_path(workspace_root, config.aliases.get(alias_name).filesystem)
    return base.joinpath(*relative.parts)


def relative_display(workspace_root: Path, path: Path) -> str:
    """Path relative to the workspace root for messages, with forward slashes."""
    if path.is_relative_to(workspace_root):
        return path.relative_to(workspace_root).as_posix() or "."
    return str(path)
