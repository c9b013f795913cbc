"""Output helpers separating user messages from machine-readable output."""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write machine-readable output (JSON, paths) to stdout."""
    click.echo(message, nl=nl)
