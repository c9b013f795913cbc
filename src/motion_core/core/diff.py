"""Unified diffs for conflicting files."""

import difflib


def unified_diff_lines(existing: bytes, incoming: bytes, label: str) -> list[str]:
    """Line diff from the on-disk file to the incoming one.

    Non-UTF-8 content is reported as a single summary line instead of a diff.
    """
    try:
        before = existing.decode("utf-8").splitlines()
        after = incoming.decode("utf-8").splitlines()
    except UnicodeDecodeError:
        return [f"Binary files differ: {label}"]

    return list(
        difflib.unified_diff(
            before,
            after,
            fromfile=f"{label} (local)",
            tofile=f"{label} (registry)",
            lineterm="",
        )
    )
