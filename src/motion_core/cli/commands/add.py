"""Add command: resolve, plan and install registry components."""

import click

from motion_core.cli.error_boundary import cli_error_boundary
from motion_core.cli.output import user_output
from motion_core.core.config_store import require_config
from motion_core.core.context import MotionCoreContext
from motion_core.core.errors import FileConflict
from motion_core.core.installer import FileStatus, InstallResult
from motion_core.core.package_manifest import (
    detect_package_manager,
    install_command,
    sync_command,
)
from motion_core.core.paths import relative_display
from motion_core.core.planner import plan
from motion_core.core.resolver import resolve
from motion_core.models.plan import InstallPlan

_STATUS_STYLE: dict[FileStatus, tuple[str, str, str]] = {
    # status -> (label, dry-run label, color)
    "created": ("created", "would create", "green"),
    "updated": ("updated", "would update", "yellow"),
    "unchanged": ("unchanged", "unchanged", "white"),
    "skipped": ("skipped", "would skip", "white"),
    "conflict": ("conflict", "conflict", "red"),
}


@click.command("add")
@click.argument("slugs", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Show the install plan without writing anything.")
@click.option(
    "-y",
    "--yes",
    "assume_yes",
    is_flag=True,
    help="Overwrite conflicting files without prompting.",
)
@click.option("--registry-url", default=None, help="Registry base URL to install from.")
@click.pass_obj
@cli_error_boundary
def add_cmd(
    ctx: MotionCoreContext,
    slugs: tuple[str, ...],
    dry_run: bool,
    assume_yes: bool,
    registry_url: str | None,
) -> None:
    """Add one or more components (and their internal dependencies).

    Files that already exist with different content are shown as a diff and
    you are asked before overwriting. Use --yes (or set
    MOTION_CORE_CLI_ASSUME_YES to any non-empty value, including "0") to
    overwrite without asking.

    Example:

        motion-core add glass-pane magnetic-button
    """
    if dry_run:
        ctx = ctx.with_dry_run()

    workspace_root, config = require_config(ctx.config_store, ctx.cwd)

    ctx.feedback.info("Loading registry catalog...")
    catalog = ctx.registry_client(registry_url).fetch_catalog()

    components = resolve(list(slugs), catalog.index)
    install_plan = plan(components, catalog.assets, config, workspace_root, ctx.filesystem)
    _report_plan(install_plan)

    if ctx.dry_run:
        user_output(click.style("Dry run: no files or dependencies will be modified.", dim=True))
    elif install_plan.is_noop:
        user_output("Everything is up to date.")

    result = ctx.installer().apply(
        install_plan,
        dry_run=ctx.dry_run,
        assume_yes=assume_yes or ctx.settings.assume_yes,
    )
    _report_result(ctx, install_plan, result)

    unresolved = result.unresolved_conflicts
    if ctx.dry_run:
        if unresolved:
            user_output(
                f"{len(unresolved)} conflict(s) would need confirmation; "
                "re-run with --yes to overwrite."
            )
        user_output(click.style("\nDry run complete.", bold=True))
        return

    if unresolved:
        raise FileConflict([f.destination.relative_to(workspace_root) for f in unresolved])

    declined = result.with_status("skipped")
    if declined:
        user_output(f"{len(declined)} conflict(s) left untouched at your request.")
    user_output(click.style("\nComponents ready.", fg="green", bold=True))
    user_output("Import components from your barrel file to start animating.")


def _report_plan(install_plan: InstallPlan) -> None:
    user_output(click.style("Planned components", bold=True))
    for component in install_plan.components:
        user_output(f"  {component.name} ({component.slug})")
    if len(install_plan.components) > 1:
        order = ", ".join(install_plan.install_order)
        user_output(click.style(f"Install order: {order}", dim=True))
    for slug in install_plan.unexported:
        user_output(
            click.style("Warning: ", fg="yellow")
            + f"component '{slug}' has no entry file; skipping barrel export"
        )


def _report_result(
    ctx: MotionCoreContext, install_plan: InstallPlan, result: InstallResult
) -> None:
    root = install_plan.workspace_root
    user_output("")
    for outcome in result.outcomes:
        label, dry_label, color = _STATUS_STYLE[outcome.status]
        shown = dry_label if result.dry_run else label
        path = relative_display(root, outcome.planned.destination)
        user_output(click.style(f"  {shown:<12}", fg=color) + path)

    if install_plan.barrel is not None:
        barrel = relative_display(root, install_plan.barrel.path)
        verb = "would update exports at" if result.dry_run else "updated exports at"
        user_output(f"  {verb} {barrel}")

    merge = result.dependencies
    for section, added, dev in (
        ("dependencies", merge.added, False),
        ("devDependencies", merge.added_dev, True),
    ):
        if not added:
            continue
        listed = ", ".join(f"{name}@{version}" for name, version in added.items())
        if merge.manifest_path is None:
            manager = detect_package_manager(ctx.filesystem, root)
            ctx.feedback.warning(
                f"No package.json found. Install {section} manually: "
                + install_command(manager, [f"{n}@{v}" for n, v in added.items()], dev=dev)
            )
        elif result.dry_run:
            user_output(f"  would add {section}: {listed}")
        else:
            user_output(f"  added {section}: {listed}")

    for name, (declared, requested) in merge.kept.items():
        user_output(
            click.style(f"  kept {name}@{declared}", dim=True) + f" (registry suggests {requested})"
        )

    if merge.changed and merge.manifest_path is not None and not result.dry_run:
        manager = detect_package_manager(ctx.filesystem, root)
        user_output(f"Run `{sync_command(manager)}` to install the new dependencies.")
