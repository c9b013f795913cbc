"""CLI invariant helpers with styled output.

All errors use the red "Error:" prefix for consistency with the error boundary.
"""

import click

from motion_core.cli.output import user_output


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str, hint: str | None = None) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.
            hint: Optional next step printed on the following line

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            if hint:
                user_output(hint)
            raise SystemExit(1)
