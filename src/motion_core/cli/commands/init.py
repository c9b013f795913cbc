"""Init command: create motion-core.json and scaffold the workspace."""

import click

from motion_core.cli.error_boundary import cli_error_boundary
from motion_core.cli.output import user_output
from motion_core.core.context import MotionCoreContext
from motion_core.core.package_manifest import detect_package_manager, sync_command
from motion_core.core.paths import relative_display
from motion_core.core.workspace_init import find_workspace_root, initialize_workspace


@click.command("init")
@click.option("--dry-run", is_flag=True, help="Report what would be created without writing.")
@click.option("--registry-url", default=None, help="Registry base URL to fetch helpers from.")
@click.pass_obj
@cli_error_boundary
def init_cmd(ctx: MotionCoreContext, dry_run: bool, registry_url: str | None) -> None:
    """Initialize Motion Core in the current project.

    Creates motion-core.json (unless one already exists), the component,
    helper, utils and asset directories, the utils/cn.ts helper, and adds
    the registry's base dependencies to package.json.

    Safe to re-run: existing files and pinned dependency versions are kept.
    """
    if dry_run:
        ctx = ctx.with_dry_run()
        user_output(click.style("Dry run: no files will be modified.", dim=True))

    root = find_workspace_root(ctx.cwd, ctx.config_store, ctx.filesystem)
    result = initialize_workspace(
        workspace_root=root,
        config_store=ctx.config_store,
        filesystem=ctx.filesystem,
        registry=ctx.registry_client(registry_url),
        dry_run=ctx.dry_run,
    )

    config_display = relative_display(root, result.config_path)
    if result.config_state == "exists":
        user_output(f"Config already exists: {config_display}")
    elif result.config_state == "would_create":
        user_output(f"Would create {config_display}")
    else:
        user_output(click.style("✓", fg="green") + f" Created {config_display}")

    verb = "Would create" if ctx.dry_run else "Created"
    for directory in result.directories:
        user_output(f"{verb} {relative_display(root, directory)}/")
    for path in result.files:
        user_output(f"{verb} {relative_display(root, path)}")

    merge = result.dependencies
    if merge is not None and merge.changed:
        verb = "Would add" if ctx.dry_run else "Added"
        for section, added in (("dependencies", merge.added), ("devDependencies", merge.added_dev)):
            if added:
                listed = ", ".join(f"{name}@{version}" for name, version in added.items())
                user_output(f"{verb} {section}: {listed}")
        if not ctx.dry_run:
            manager = detect_package_manager(ctx.filesystem, root)
            user_output(f"Run `{sync_command(manager)}` to install them.")

    for warning in result.warnings:
        ctx.feedback.warning(warning)

    if ctx.dry_run:
        user_output("\nDry run complete.")
    else:
        user_output("\nYou can now add components using:")
        user_output("  motion-core add <component>")
