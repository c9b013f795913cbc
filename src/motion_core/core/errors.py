"""Error kinds raised by the registry resolution and installation engine.

Every error carries a one-line cause (``message``) and a single actionable
next step (``hint``). The CLI error boundary prints both and exits non-zero.
"""

from pathlib import Path


class MotionCoreError(Exception):
    """Base class for all expected, user-facing failures."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class RegistryUnreachable(MotionCoreError):
    """The registry could not be fetched and no cached copy exists."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            f"Registry unreachable at {url} ({reason})",
            hint="Check your connection or point to another registry with --registry-url",
        )
        self.url = url
        self.reason = reason


class MalformedRegistry(MotionCoreError):
    """A registry document failed schema validation."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(
            f"Registry document at {url} is malformed: {detail}",
            hint="Report this to the registry maintainer or use --registry-url to pick another",
        )
        self.url = url
        self.detail = detail


class UnknownComponent(MotionCoreError):
    """A requested slug does not exist in the registry."""

    def __init__(self, slug: str, suggestions: list[str]) -> None:
        if suggestions:
            hint = "Did you mean: " + ", ".join(suggestions) + "?"
        else:
            hint = "Run `motion-core list` to see available components"
        super().__init__(f"Component '{slug}' not found in registry", hint=hint)
        self.slug = slug
        self.suggestions = suggestions


class BrokenInternalDependency(MotionCoreError):
    """A component references an internal dependency missing from the registry."""

    def __init__(self, slug: str, missing: str) -> None:
        super().__init__(
            f"Component '{slug}' depends on '{missing}', which is not in the registry",
            hint="Report this to the registry maintainer or use --registry-url to pick another",
        )
        self.slug = slug
        self.missing = missing


class CyclicDependency(MotionCoreError):
    """Internal dependencies form a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(
            "Cyclic internal dependency: " + " -> ".join(cycle),
            hint="Report this to the registry maintainer; the component graph must be acyclic",
        )
        self.cycle = cycle


class AssetNotFound(MotionCoreError):
    """A file entry references a path absent from the asset bundle."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Asset '{path}' is missing from the registry asset bundle",
            hint="Clear the cache with `motion-core cache --clear --force` and retry",
        )
        self.path = path


class FileConflict(MotionCoreError):
    """A target file exists with different content and was not overwritten."""

    def __init__(self, paths: list[Path]) -> None:
        joined = ", ".join(str(p) for p in paths)
        super().__init__(
            f"{len(paths)} conflicting file(s) left untouched: {joined}",
            hint="Re-run with --yes to overwrite conflicting files",
        )
        self.paths = paths


class PartialInstallFailure(MotionCoreError):
    """Installation stopped partway; ``written`` lists files completed before the fault."""

    def __init__(self, failed_path: Path, reason: str, written: list[Path]) -> None:
        if written:
            done = "already written: " + ", ".join(str(p) for p in written)
        else:
            done = "no files were written"
        super().__init__(
            f"Failed to write {failed_path} ({reason}); {done}",
            hint="Fix the cause and re-run the same command; completed files are kept",
        )
        self.failed_path = failed_path
        self.reason = reason
        self.written = written


class ConfigMissing(MotionCoreError):
    """No motion-core.json was found for the workspace."""

    def __init__(self, searched_from: Path) -> None:
        super().__init__(
            f"No motion-core.json found in {searched_from} or any parent directory",
            hint="Run `motion-core init` in your project root first",
        )
        self.searched_from = searched_from


class ConfigInvalid(MotionCoreError):
    """Configuration is present but fails validation."""

    def __init__(self, source: str, field: str, problem: str) -> None:
        super().__init__(
            f"Invalid configuration in {source}: '{field}' {problem}",
            hint=f"Fix '{field}' in {source}",
        )
        self.source = source
        self.field = field
        self.problem = problem
