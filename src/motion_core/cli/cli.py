import logging
import os

import click

from motion_core import __version__
from motion_core.cli.commands.add import add_cmd
from motion_core.cli.commands.cache import cache_cmd
from motion_core.cli.commands.init import init_cmd
from motion_core.cli.commands.list import list_cmd
from motion_core.cli.error_boundary import cli_error_boundary
from motion_core.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="motion-core")
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context) -> None:
    """Install Motion Core components into your project."""
    if os.getenv("MOTION_CORE_DEBUG"):
        logging.basicConfig(
            level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s"
        )

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(list_cmd)
cli.add_command(cache_cmd)


def main() -> None:
    """CLI entry point used by the `motion-core` console script."""
    cli()
