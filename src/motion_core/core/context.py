"""Application context with dependency injection."""

from dataclasses import dataclass, replace
from pathlib import Path

import click

from motion_core.cli.output import user_output
from motion_core.core.cache_store import CacheStore
from motion_core.core.config_store import ConfigStore, DryRunConfigStore, FilesystemConfigStore
from motion_core.core.installer import Installer
from motion_core.core.registry_client import RegistryClient
from motion_core.core.settings import MotionCoreSettings, load_settings
from motion_core.core.user_feedback import InteractiveFeedback, UserFeedback
from motion_core.integrations.filesystem import DryRunFilesystem, Filesystem, RealFilesystem
from motion_core.integrations.http import HttpFetcher, RealHttpFetcher
from motion_core.integrations.prompt import Prompter, RealPrompter
from motion_core.integrations.time import RealTime, Time


@dataclass(frozen=True)
class MotionCoreContext:
    """Immutable context holding all dependencies for motion-core operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    settings: MotionCoreSettings
    http: HttpFetcher
    filesystem: Filesystem
    config_store: ConfigStore
    prompter: Prompter
    time: Time
    feedback: UserFeedback
    cwd: Path  # Current working directory at CLI invocation
    dry_run: bool

    def with_dry_run(self) -> "MotionCoreContext":
        """Context whose workspace writes are no-ops.

        Wraps the filesystem and config store; reads still hit the real
        workspace so the reported plan matches what a real run would do.
        """
        if self.dry_run:
            return self
        return replace(
            self,
            filesystem=DryRunFilesystem(self.filesystem),
            config_store=DryRunConfigStore(self.config_store),
            dry_run=True,
        )

    def cache_store(self) -> CacheStore:
        return CacheStore.from_settings(self.settings, self.time)

    def registry_client(self, registry_url: str | None = None) -> RegistryClient:
        """Client for the configured registry, or ``registry_url`` when given."""
        settings = self.settings.with_registry_url(registry_url)
        return RegistryClient(
            base_url=settings.registry_url,
            http=self.http,
            cache=self.cache_store(),
            time=self.time,
            feedback=self.feedback,
        )

    def installer(self) -> Installer:
        return Installer(filesystem=self.filesystem, prompter=self.prompter, feedback=self.feedback)

    @staticmethod
    def for_test(
        settings: MotionCoreSettings | None = None,
        http: HttpFetcher | None = None,
        filesystem: Filesystem | None = None,
        config_store: ConfigStore | None = None,
        prompter: Prompter | None = None,
        time: Time | None = None,
        feedback: UserFeedback | None = None,
        cwd: Path | None = None,
        dry_run: bool = False,
    ) -> "MotionCoreContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            settings: Optional settings. If None, defaults with the cache under
                ``cwd / ".motion-core-cache"``.
            http: Optional HttpFetcher. If None, creates FakeHttpFetcher with no routes.
            filesystem: Optional Filesystem. If None, uses RealFilesystem (pair with tmp_path).
            config_store: Optional ConfigStore. If None, uses FilesystemConfigStore.
            prompter: Optional Prompter. If None, creates non-interactive FakePrompter.
            time: Optional Time. If None, creates FakeTime.
            feedback: Optional UserFeedback. If None, creates FakeUserFeedback.
            cwd: Optional current working directory. If None, uses Path("/test/default/cwd").
            dry_run: Whether to apply dry-run wrappers (default False).

        Returns:
            MotionCoreContext configured with provided values and test defaults

        Example:
            >>> http = FakeHttpFetcher(responses={INDEX_URL: registry_bytes})
            >>> ctx = MotionCoreContext.for_test(http=http, cwd=tmp_path)
            >>> result = runner.invoke(cli, ["list"], obj=ctx)
        """
        from tests.fakes.http import FakeHttpFetcher
        from tests.fakes.prompter import FakePrompter
        from tests.fakes.time import FakeTime
        from tests.fakes.user_feedback import FakeUserFeedback

        if cwd is None:
            cwd = Path("/test/default/cwd")

        if settings is None:
            settings = replace(
                MotionCoreSettings.from_env({}), cache_dir=cwd / ".motion-core-cache"
            )

        ctx = MotionCoreContext(
            settings=settings,
            http=http if http is not None else FakeHttpFetcher(),
            filesystem=filesystem if filesystem is not None else RealFilesystem(),
            config_store=config_store if config_store is not None else FilesystemConfigStore(),
            prompter=prompter if prompter is not None else FakePrompter(),
            time=time if time is not None else FakeTime(),
            feedback=feedback if feedback is not None else FakeUserFeedback(),
            cwd=cwd,
            dry_run=False,
        )
        # Apply dry-run wrappers if needed (matching production behavior)
        if dry_run:
            return ctx.with_dry_run()
        return ctx


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context(*, dry_run: bool = False) -> MotionCoreContext:
    """Create production context with real implementations.

    Called at CLI entry point. Environment variables are read here and
    nowhere else.

    Args:
        dry_run: If True, wrap workspace writers with dry-run wrappers

    Returns:
        MotionCoreContext with real implementations
    """
    cwd, error_msg = safe_cwd()
    if cwd is None:
        user_output(click.style("Error: ", fg="red") + str(error_msg))
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    settings = load_settings()
    ctx = MotionCoreContext(
        settings=settings,
        http=RealHttpFetcher(timeout=settings.http_timeout_seconds),
        filesystem=RealFilesystem(),
        config_store=FilesystemConfigStore(),
        prompter=RealPrompter(),
        time=RealTime(),
        feedback=InteractiveFeedback(),
        cwd=cwd,
        dry_run=False,
    )
    if dry_run:
        return ctx.with_dry_run()
    return ctx
