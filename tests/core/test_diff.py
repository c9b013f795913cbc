"""Tests for conflict diffs."""

from motion_core.core.diff import unified_diff_lines


def test_text_diff_marks_local_and_registry_sides() -> None:
    lines = unified_diff_lines(b"a\nb\n", b"a\nc\n", "src/x.ts")

    assert lines[0] == "--- src/x.ts (local)"
    assert lines[1] == "+++ src/x.ts (registry)"
    assert "-b" in lines
    assert "+c" in lines


def test_binary_content_is_summarized() -> None:
    assert unified_diff_lines(b"\xff\xfe", b"\x00\xff", "noise.png") == [
        "Binary files differ: noise.png"
    ]
