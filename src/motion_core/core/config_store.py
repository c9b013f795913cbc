"""Local configuration persistence (motion-core.json).

Provides ConfigStore ABC with filesystem, in-memory and dry-run
implementations. Commands locate the workspace root with ``find_root`` and
load through ``require_config``, which turns a missing or invalid file into
the matching user-facing error.
"""

import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath

from pydantic import ValidationError

from motion_core.core.errors import ConfigInvalid, ConfigMissing
from motion_core.integrations.filesystem import atomic_write_bytes
from motion_core.models.config import CONFIG_FILENAME, AliasName, LocalConfig

_ALIAS_NAMES: tuple[AliasName, ...] = ("components", "helpers", "utils", "assets")


@dataclass(frozen=True)
class ConfigIssue:
    """A single validation problem, keyed by the JSON field path."""

    field: str
    problem: str


def validate_config(config: LocalConfig) -> list[ConfigIssue]:
    """Check path well-formedness of a parsed configuration.

    Required keys are enforced when parsing; this covers values that parse but
    cannot be used safely (absolute paths, parent traversal, empty aliases).

    Returns:
        Issues in a stable order; empty when the config is usable
    """
    issues: list[ConfigIssue] = []
    for name in _ALIAS_NAMES:
        alias = config.aliases.get(name)
        _check_relative(issues, f"aliases.{name}.filesystem", alias.filesystem, required=True)
        if not alias.import_path.strip():
            issues.append(ConfigIssue(f"aliases.{name}.import", "must not be empty"))

    barrel = config.exports.components.barrel
    _check_relative(issues, "exports.components.barrel", barrel, required=True)
    if barrel.strip() and not barrel.endswith((".ts", ".js")):
        issues.append(ConfigIssue("exports.components.barrel", "must be a .ts or .js file"))

    _check_relative(issues, "tailwind.css", config.tailwind.css, required=False)
    return issues


def _check_relative(issues: list[ConfigIssue], field: str, value: str, *, required: bool) -> None:
    stripped = value.strip()
    if not stripped:
        if required:
            issues.append(ConfigIssue(field, "must not be empty"))
        return
    if stripped.startswith(("/", "\\")) or PureWindowsPath(stripped).drive:
        issues.append(ConfigIssue(field, "must be relative to the project root"))
        return
    if ".." in stripped.replace("\\", "/").split("/"):
        issues.append(ConfigIssue(field, "must not contain '..'"))


class ConfigStore(ABC):
    """Abstract interface for local config operations."""

    def path(self, workspace_root: Path) -> Path:
        """Location of motion-core.json for a workspace."""
        return workspace_root / CONFIG_FILENAME

    @abstractmethod
    def find_root(self, start: Path) -> Path | None:
        """Nearest directory at or above start containing motion-core.json."""
        ...

    @abstractmethod
    def read(self, workspace_root: Path) -> LocalConfig | None:
        """Load configuration.

        Returns:
            Parsed config, or None if the workspace has no config file

        Raises:
            ConfigInvalid: If the file is not valid JSON or misses required fields
        """
        ...

    @abstractmethod
    def write(self, workspace_root: Path, config: LocalConfig) -> None:
        """Persist configuration atomically."""
        ...

    def validate(self, config: LocalConfig) -> list[ConfigIssue]:
        return validate_config(config)


class FilesystemConfigStore(ConfigStore):
    """Production implementation reading/writing motion-core.json on disk."""

    def find_root(self, start: Path) -> Path | None:
        for directory in (start, *start.parents):
            if (directory / CONFIG_FILENAME).is_file():
                return directory
        return None

    def read(self, workspace_root: Path) -> LocalConfig | None:
        config_path = self.path(workspace_root)
        if not config_path.exists():
            return None
        return parse_config(config_path.read_bytes(), str(config_path))

    def write(self, workspace_root: Path, config: LocalConfig) -> None:
        config_path = self.path(workspace_root)
        if config_path.exists() and not os.access(config_path, os.W_OK):
            raise PermissionError(
                f"Cannot write to file: {config_path}\n"
                f"The file exists but is not writable. Make it writable: chmod 644 {config_path}"
            )
        atomic_write_bytes(config_path, serialize_config(config))


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores configs in memory without touching filesystem."""

    def __init__(self, configs: dict[Path, LocalConfig] | None = None) -> None:
        """Initialize in-memory store.

        Args:
            configs: Initial configs keyed by workspace root (empty = uninitialized)
        """
        self._configs = dict(configs or {})
        self._writes: list[tuple[Path, LocalConfig]] = []

    @property
    def writes(self) -> list[tuple[Path, LocalConfig]]:
        """Read-only access to (workspace_root, config) pairs passed to write()."""
        return self._writes

    def find_root(self, start: Path) -> Path | None:
        for directory in (start, *start.parents):
            if directory in self._configs:
                return directory
        return None

    def read(self, workspace_root: Path) -> LocalConfig | None:
        return self._configs.get(workspace_root)

    def write(self, workspace_root: Path, config: LocalConfig) -> None:
        self._configs[workspace_root] = config
        self._writes.append((workspace_root, config))


class DryRunConfigStore(ConfigStore):
    """No-op wrapper: reads are delegated, writes are skipped."""

    def __init__(self, wrapped: ConfigStore) -> None:
        self._wrapped = wrapped

    def find_root(self, start: Path) -> Path | None:
        return self._wrapped.find_root(start)

    def read(self, workspace_root: Path) -> LocalConfig | None:
        return self._wrapped.read(workspace_root)

    def write(self, workspace_root: Path, config: LocalConfig) -> None:
        """No-op for writing config in dry-run mode."""
        pass


def parse_config(payload: bytes, source: str) -> LocalConfig:
    """Parse motion-core.json contents.

    Raises:
        ConfigInvalid: Naming the first offending field
    """
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        problem = f"is not valid JSON ({e.__class__.__name__})"
        raise ConfigInvalid(source, "<root>", problem) from None
    try:
        return LocalConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ConfigInvalid(source, field, first["msg"].lower()) from None


def serialize_config(config: LocalConfig) -> bytes:
    return (json.dumps(config.to_json_dict(), indent=2) + "\n").encode("utf-8")


def require_config(store: ConfigStore, start: Path) -> tuple[Path, LocalConfig]:
    """Locate and load a valid configuration for commands that need one.

    Returns:
        (workspace_root, config)

    Raises:
        ConfigMissing: If no motion-core.json exists at or above start
        ConfigInvalid: If the file fails parsing or validation
    """
    root = store.find_root(start)
    if root is None:
        raise ConfigMissing(start)
    config = store.read(root)
    if config is None:
        raise ConfigMissing(start)
    issues = store.validate(config)
    if issues:
        raise ConfigInvalid(str(store.path(root)), issues[0].field, issues[0].problem)
    return root, config
