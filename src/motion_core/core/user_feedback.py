"""User-facing diagnostic output."""

from abc import ABC, abstractmethod

import click

from motion_core.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing diagnostic output.

    Engine code (registry client, installer) reports progress and soft
    failures through this interface instead of printing directly, so tests
    can capture messages with a fake and commands stay free of output plumbing.

    Usage:
        ctx.feedback.info("Loading registry catalog...")
        ctx.feedback.warning("Using cached registry data")
        ctx.feedback.success("Components ready")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Show a non-fatal warning."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message."""


class InteractiveFeedback(UserFeedback):
    """Feedback written to stderr with click styling."""

    def info(self, message: str) -> None:
        user_output(message)

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def warning(self, message: str) -> None:
        user_output(click.style("Warning: ", fg="yellow") + message)

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))
