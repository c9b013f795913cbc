"""Export barrel rendering.

The barrel (``index.ts`` by default) re-exports every installed component::

    export { default as GlassPane } from "./glass-pane/GlassPane.svelte";
    export type { GlassPaneProps } from "./glass-pane/types";

Existing export lines are parsed and merged by export name; any other lines
are kept verbatim at the top of the file.
"""

import os
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

_COMPONENT_EXPORT = re.compile(
    r'^export \{\s*default as (?P<name>[A-Za-z_$][\w$]*)\s*\} from "(?P<source>[^"]+)";?$'
)
_TYPE_EXPORT = re.compile(r'^export type \{(?P<names>[^}]*)\} from "(?P<source>[^"]+)";?$')


@dataclass(frozen=True)
class ComponentExport:
    name: str
    entry: Path


@dataclass(frozen=True)
class TypeExport:
    names: tuple[str, ...]
    entry: Path


def import_specifier(barrel_dir: Path, target: Path) -> str:
    """Relative import path from the barrel directory to target, always dot-prefixed."""
    relative = Path(os.path.relpath(target, barrel_dir)).as_posix()
    if relative.startswith("."):
        return relative
    return f"./{relative}"


def component_line(name: str, source: str) -> str:
    return f'export {{ default as {name} }} from "{source}";'


def type_line(name: str, source: str) -> str:
    return f'export type {{ {name} }} from "{source}";'


def render_barrel(
    existing: str,
    barrel_path: Path,
    components: Sequence[ComponentExport],
    types: Sequence[TypeExport],
) -> str | None:
    """Merge new exports into existing barrel text.

    Args:
        existing: Current barrel contents ("" when the file does not exist)
        barrel_path: Absolute barrel path, used to compute relative imports
        components: Default exports to add or repoint
        types: Type re-exports to add or repoint

    Returns:
        New barrel text, or None when every export is already present unchanged
    """
    preamble, component_lines, type_lines = _parse(existing)
    barrel_dir = barrel_path.parent
    modified = False

    for export in components:
        line = component_line(export.name, import_specifier(barrel_dir, export.entry))
        if component_lines.get(export.name) != line:
            component_lines[export.name] = line
            modified = True

    for export in types:
        source = import_specifier(barrel_dir, export.entry)
        for name in export.names:
            line = type_line(name, source)
            if type_lines.get(name) != line:
                type_lines[name] = line
                modified = True

    if not modified:
        return None

    body = [line for _, line in sorted(component_lines.items())]
    body += [line for _, line in sorted(type_lines.items())]
    if preamble:
        return "\n".join([*preamble, "", *body]) + "\n"
    return "\n".join(body) + "\n"


def _parse(existing: str) -> tuple[list[str], dict[str, str], dict[str, str]]:
    preamble: list[str] = []
    component_lines: dict[str, str] = {}
    type_lines: dict[str, str] = {}

    for raw in existing.splitlines():
        stripped = raw.strip()
        component = _COMPONENT_EXPORT.match(stripped)
        if component:
            name = component["name"]
            component_lines[name] = component_line(name, component["source"])
            continue
        exported_types = _TYPE_EXPORT.match(stripped)
        if exported_types:
            for name in (n.strip() for n in exported_types["names"].split(",")):
                if name:
                    type_lines[name] = type_line(name, exported_types["source"])
            continue
        preamble.append(raw)

    while preamble and not preamble[-1].strip():
        preamble.pop()
    return preamble, component_lines, type_lines
