"""Cache command: inspect or clear the local registry cache."""

import click

from motion_core.cli.ensure import Ensure
from motion_core.cli.error_boundary import cli_error_boundary
from motion_core.cli.output import user_output
from motion_core.core.context import MotionCoreContext


@click.command("cache")
@click.option("--clear", is_flag=True, help="Delete cached registry data.")
@click.option("--force", is_flag=True, help="Confirm deletion (required with --clear).")
@click.pass_obj
@cli_error_boundary
def cache_cmd(ctx: MotionCoreContext, clear: bool, force: bool) -> None:
    """Show cache location and TTLs, or clear cached registry data.

    Clearing is destructive and requires both --clear and --force.
    """
    Ensure.invariant(not force or clear, "--force can only be used together with --clear")

    store = ctx.cache_store()
    info = store.info()
    user_output(f"Cache directory: {info.root}")
    user_output(f"Registry TTL:    {_format_ttl(info.registry_ttl_ms)}")
    user_output(f"Asset TTL:       {_format_ttl(info.asset_ttl_ms)}")

    namespaces = store.namespaces()
    user_output(f"Cached registries: {len(namespaces)}")

    if not clear:
        return

    if not force:
        ctx.feedback.warning(
            "Use --force to confirm cache clearing (files will be deleted from disk)."
        )
        return

    removed = store.clear(confirm=True)
    user_output(click.style("✓", fg="green") + f" Cleared {len(removed)} cached registr(y/ies)")


def _format_ttl(ms: int) -> str:
    if ms % 3_600_000 == 0 and ms >= 3_600_000:
        return f"{ms // 3_600_000}h ({ms} ms)"
    if ms % 60_000 == 0 and ms >= 60_000:
        return f"{ms // 60_000}m ({ms} ms)"
    return f"{ms} ms"
