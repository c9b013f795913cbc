"""Dependency resolution over a registry's internal component graph.

Pure functions: no I/O, no output.
"""

import difflib
from collections.abc import Iterator, Sequence

from motion_core.core.errors import BrokenInternalDependency, CyclicDependency, UnknownComponent
from motion_core.models.registry import RegistryComponent, RegistryIndex


def resolve(requested_slugs: Sequence[str], index: RegistryIndex) -> list[RegistryComponent]:
    """Expand requested slugs into an install order.

    Every component appears exactly once and after all of its internal
    dependencies. Among independent components, request order and declared
    dependency order are preserved.

    The traversal keeps an explicit stack instead of recursing, so deep
    dependency chains cannot exhaust the interpreter stack.

    Args:
        requested_slugs: Slugs named by the user (duplicates are ignored)
        index: Registry index to resolve against

    Returns:
        Components in topological order

    Raises:
        UnknownComponent: If a requested slug is not in the index
        BrokenInternalDependency: If a component references a missing slug
        CyclicDependency: If internal dependencies form a cycle

    Example:
        >>> # "a" depends on "b"
        >>> [c.slug for c in resolve(["a"], index)]
        ['b', 'a']
    """
    components = index.components
    for slug in requested_slugs:
        if slug not in components:
            raise UnknownComponent(slug, suggest_slugs(slug, list(components)))

    ordered: list[RegistryComponent] = []
    done: set[str] = set()

    for root in dict.fromkeys(requested_slugs):
        if root in done:
            continue

        path = [root]
        on_path = {root}
        stack: list[tuple[str, Iterator[str]]] = [(root, _dependencies(components[root]))]

        while stack:
            slug, pending = stack[-1]
            child = next(pending, None)

            if child is None:
                stack.pop()
                path.pop()
                on_path.discard(slug)
                if slug not in done:
                    done.add(slug)
                    ordered.append(components[slug])
                continue

            if child not in components:
                raise BrokenInternalDependency(slug, child)
            if child in done:
                continue
            if child in on_path:
                raise CyclicDependency([*path[path.index(child) :], child])

            path.append(child)
            on_path.add(child)
            stack.append((child, _dependencies(components[child])))

    return ordered


def suggest_slugs(slug: str, known: list[str], limit: int = 3) -> list[str]:
    """Closest known slugs by string similarity, best first."""
    matches = difflib.get_close_matches(slug, known, n=limit, cutoff=0.6)
    if len(matches) < limit:
        for candidate in sorted(known):
            if candidate in matches:
                continue
            if slug in candidate or candidate in slug:
                matches.append(candidate)
            if len(matches) == limit:
                break
    return matches


def _dependencies(component: RegistryComponent) -> Iterator[str]:
    return iter(dict.fromkeys(component.internal_dependencies))
