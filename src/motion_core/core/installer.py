"""Plan execution: conflict resolution, atomic writes and dependency merge."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import click

from motion_core.core.diff import unified_diff_lines
from motion_core.core.errors import PartialInstallFailure
from motion_core.core.package_manifest import (
    DependencyMerge,
    check_manifest,
    merge_dependencies,
)
from motion_core.core.paths import relative_display
from motion_core.core.user_feedback import UserFeedback
from motion_core.integrations.filesystem import DryRunFilesystem, Filesystem
from motion_core.integrations.prompt import Prompter
from motion_core.models.plan import InstallPlan, PlannedFile

logger = logging.getLogger(__name__)

FileStatus = Literal["created", "updated", "unchanged", "skipped", "conflict"]


@dataclass(frozen=True)
class FileOutcome:
    planned: PlannedFile
    status: FileStatus


@dataclass(frozen=True)
class InstallResult:
    """What ``Installer.apply`` did (or, under dry-run, would do).

    Attributes:
        dry_run: True if nothing was written
        outcomes: Per-file status in plan order
        directories: Directories created (or that would be created)
        barrel_updated: Whether the export barrel was (or would be) rewritten
        dependencies: Result of the package.json merge
    """

    dry_run: bool
    outcomes: tuple[FileOutcome, ...]
    directories: tuple[Path, ...]
    barrel_updated: bool
    dependencies: DependencyMerge

    def with_status(self, status: FileStatus) -> list[PlannedFile]:
        return [o.planned for o in self.outcomes if o.status == status]

    @property
    def unresolved_conflicts(self) -> list[PlannedFile]:
        """Conflicts nobody decided on: non-interactive runs without --yes, or dry-run."""
        return self.with_status("conflict")


class Installer:
    """Applies an InstallPlan to the workspace.

    Conflict policy:
        - ``assume_yes``: every conflict is overwritten without prompting.
        - Interactive terminal: a diff is shown and the user is asked per file;
          declining keeps the local file.
        - Non-interactive without ``assume_yes``: conflicts are kept and reported.

    Prompts happen before the first write, so answering them never leaves a
    half-applied plan behind.
    """

    def __init__(
        self, *, filesystem: Filesystem, prompter: Prompter, feedback: UserFeedback
    ) -> None:
        self._filesystem = filesystem
        self._prompter = prompter
        self._feedback = feedback

    def apply(self, plan: InstallPlan, *, dry_run: bool, assume_yes: bool) -> InstallResult:
        """Execute plan.

        Args:
            plan: Plan from ``planner.plan``
            dry_run: Report only; no write primitive is called
            assume_yes: Overwrite conflicts without prompting

        Returns:
            Per-file outcomes and the dependency merge result

        Raises:
            PartialInstallFailure: If a write fails; lists files completed before it
            ConfigInvalid: If package.json cannot be merged; raised before any write
        """
        if dry_run:
            return self._preview(plan, assume_yes=assume_yes)

        # A malformed package.json must abort before the first write.
        check_manifest(self._filesystem, plan.workspace_root)
        overwrite, declined = self._resolve_conflicts(plan, assume_yes=assume_yes)
        written: list[Path] = []
        outcomes: list[FileOutcome] = []
        current = plan.workspace_root

        try:
            for directory in plan.directories:
                current = directory
                self._filesystem.mkdir(directory)

            for planned in plan.files:
                if planned.disposition == "identical":
                    outcomes.append(FileOutcome(planned, "unchanged"))
                    continue
                if planned.disposition == "conflict" and planned.destination not in overwrite:
                    kept: FileStatus = "skipped" if planned.destination in declined else "conflict"
                    outcomes.append(FileOutcome(planned, kept))
                    continue
                current = planned.destination
                self._filesystem.write_atomic(planned.destination, planned.incoming)
                written.append(planned.destination)
                status: FileStatus = "created" if planned.disposition == "create" else "updated"
                outcomes.append(FileOutcome(planned, status))
                logger.debug("%s %s", status, planned.destination)

            if plan.barrel is not None:
                current = plan.barrel.path
                self._filesystem.write_atomic(plan.barrel.path, plan.barrel.content)
                written.append(plan.barrel.path)

            current = plan.workspace_root / "package.json"
            merge = merge_dependencies(
                self._filesystem, plan.workspace_root, plan.dependencies, plan.dev_dependencies
            )
        except OSError as e:
            raise PartialInstallFailure(current, e.strerror or str(e), written) from e

        return InstallResult(
            dry_run=False,
            outcomes=tuple(outcomes),
            directories=plan.directories,
            barrel_updated=plan.barrel is not None,
            dependencies=merge,
        )

    def _preview(self, plan: InstallPlan, *, assume_yes: bool) -> InstallResult:
        outcomes: list[FileOutcome] = []
        for planned in plan.files:
            if planned.disposition == "create":
                outcomes.append(FileOutcome(planned, "created"))
            elif planned.disposition == "identical":
                outcomes.append(FileOutcome(planned, "unchanged"))
            elif assume_yes:
                outcomes.append(FileOutcome(planned, "updated"))
            else:
                outcomes.append(FileOutcome(planned, "conflict"))

        # Write-recording wrapper: reports additions, writes nothing.
        merge = merge_dependencies(
            DryRunFilesystem(self._filesystem),
            plan.workspace_root,
            plan.dependencies,
            plan.dev_dependencies,
        )
        return InstallResult(
            dry_run=True,
            outcomes=tuple(outcomes),
            directories=plan.directories,
            barrel_updated=plan.barrel is not None,
            dependencies=merge,
        )

    def _resolve_conflicts(
        self, plan: InstallPlan, *, assume_yes: bool
    ) -> tuple[set[Path], set[Path]]:
        """Decide each conflict before any write. Returns (overwrite, declined)."""
        conflicts = plan.conflicts
        if not conflicts:
            return set(), set()

        if assume_yes:
            self._feedback.info(f"Overwriting {len(conflicts)} conflicting file(s) (--yes).")
            return {c.destination for c in conflicts}, set()

        if not self._prompter.is_interactive():
            self._feedback.warning(
                f"Non-interactive shell; leaving {len(conflicts)} conflicting file(s) untouched."
            )
            return set(), set()

        overwrite: set[Path] = set()
        declined: set[Path] = set()
        for conflict in conflicts:
            label = relative_display(plan.workspace_root, conflict.destination)
            self._show_diff(conflict, label)
            if self._prompter.confirm(f"Overwrite {label}?", default=False):
                overwrite.add(conflict.destination)
            else:
                declined.add(conflict.destination)
                self._feedback.info(f"Keeping local {label}")
        return overwrite, declined

    def _show_diff(self, conflict: PlannedFile, label: str) -> None:
        self._feedback.info(
            click.style(f"\n{label}", bold=True) + f"  (component: {conflict.component_slug})"
        )
        for line in unified_diff_lines(conflict.existing or b"", conflict.incoming, label):
            if line.startswith("+") and not line.startswith("+++"):
                self._feedback.info(click.style(line, fg="green"))
            elif line.startswith("-") and not line.startswith("---"):
                self._feedback.info(click.style(line, fg="red"))
            else:
                self._feedback.info(line)
