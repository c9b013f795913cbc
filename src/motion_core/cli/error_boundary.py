"""Error boundary handling for CLI commands.

This module provides a decorator to catch well-known exceptions at CLI entry
points and display a one-line cause plus one next step, without stack traces.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import click

from motion_core.cli.output import user_output
from motion_core.core.errors import MotionCoreError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - MotionCoreError: Engine failures; prints cause and hint
        - PermissionError: Unwritable files or directories

    All other exceptions bubble up normally with full stack traces.

    Example:
        @click.command()
        @click.pass_obj
        @cli_error_boundary
        def my_command(ctx):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except MotionCoreError as e:
            logger.debug("command failed", exc_info=True)
            user_output(click.style("Error: ", fg="red") + e.message)
            if e.hint:
                user_output(e.hint)
            raise SystemExit(1) from None
        except PermissionError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
