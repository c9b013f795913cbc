"""List command: show registry components grouped by category."""

import click
from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.table import Table

from motion_core.cli.error_boundary import cli_error_boundary
from motion_core.cli.output import machine_output, user_output
from motion_core.core.context import MotionCoreContext
from motion_core.models.registry import RegistryComponent, RegistryIndex

UNCATEGORIZED = "Uncategorized"


class RegistrySummary(BaseModel):
    """Registry metadata in `motion-core list --json`."""

    model_config = ConfigDict(strict=True)

    name: str
    version: str
    description: str | None


class ComponentSummary(BaseModel):
    """One component in `motion-core list --json`."""

    model_config = ConfigDict(strict=True)

    slug: str
    name: str
    description: str | None
    category: str | None


class ListResponse(BaseModel):
    """JSON response schema for the `motion-core list --json` command."""

    model_config = ConfigDict(strict=True)

    registry: RegistrySummary
    components: list[ComponentSummary]


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the catalog as JSON to stdout.")
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: MotionCoreContext, as_json: bool) -> None:
    """List components available in the registry."""
    index = ctx.registry_client().fetch_index()
    components = sorted(index.components.values(), key=lambda c: c.slug)

    if as_json:
        machine_output(build_list_response(index, components).model_dump_json(indent=2))
        return

    if not components:
        user_output("No components available in this registry.")
        return

    title = f"{index.name} {index.version}"
    user_output(click.style(title, bold=True))
    if index.description:
        user_output(click.style(index.description, dim=True))

    console = Console(stderr=True, width=200)
    for category, entries in group_by_category(components):
        table = Table(title=category, title_justify="left", show_header=True, header_style="bold")
        table.add_column("slug", style="cyan", no_wrap=True)
        table.add_column("name", no_wrap=True)
        table.add_column("description")
        for component in entries:
            table.add_row(component.slug, component.name, component.description or "")
        console.print(table)

    user_output(f"\n{len(components)} component(s). Install with: motion-core add <slug>")


def build_list_response(
    index: RegistryIndex, components: list[RegistryComponent]
) -> ListResponse:
    return ListResponse(
        registry=RegistrySummary(
            name=index.name, version=index.version, description=index.description
        ),
        components=[
            ComponentSummary(
                slug=c.slug, name=c.name, description=c.description, category=c.category
            )
            for c in components
        ],
    )


def group_by_category(
    components: list[RegistryComponent],
) -> list[tuple[str, list[RegistryComponent]]]:
    """Components grouped by category, categories sorted with uncategorized last."""
    groups: dict[str, list[RegistryComponent]] = {}
    for component in components:
        groups.setdefault(component.category or UNCATEGORIZED, []).append(component)
    ordered = sorted(
        groups.items(), key=lambda item: (item[0] == UNCATEGORIZED, item[0].lower())
    )
    return [
        (category, sorted(entries, key=lambda c: c.name.lower())) for category, entries in ordered
    ]
