"""Terminal prompter using click."""

import sys

import click

from motion_core.integrations.prompt.abc import Prompter


class RealPrompter(Prompter):
    """Production implementation prompting on the controlling terminal."""

    def is_interactive(self) -> bool:
        return sys.stdin.isatty()

    def confirm(self, message: str, *, default: bool) -> bool:
        # Prompt on stderr so stdout stays machine-readable.
        try:
            return click.confirm(message, default=default, err=True)
        except click.Abort:
            # A cancelled prompt (EOF or Ctrl-C) counts as "no".
            click.echo(err=True)
            return False
