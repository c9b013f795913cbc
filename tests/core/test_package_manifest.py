"""Tests for package.json merging and project detection."""

from pathlib import Path

import pytest

from motion_core.core.errors import ConfigInvalid
from motion_core.core.package_manifest import (
    FrameworkDetection,
    check_manifest,
    detect_framework,
    detect_package_manager,
    install_command,
    merge_dependencies,
    sync_command,
)
from motion_core.integrations.filesystem import DryRunFilesystem, RealFilesystem
from tests.test_utils.workspace import read_package_json, write_package_json


def test_merge_only_adds_missing_packages(tmp_path: Path) -> None:
    write_package_json(
        tmp_path,
        {
            "name": "app",
            "dependencies": {"three": "^0.160.0"},
            "devDependencies": {"clsx": "^2.0.0"},
        },
    )

    merge = merge_dependencies(
        RealFilesystem(),
        tmp_path,
        {"three": "^0.170.0", "gsap": "^3.12.0", "clsx": "^2.1.1"},
        {"@types/three": "^0.170.0"},
    )

    assert merge.added == {"gsap": "^3.12.0"}
    assert merge.added_dev == {"@types/three": "^0.170.0"}
    assert merge.kept == {
        "three": ("^0.160.0", "^0.170.0"),
        "clsx": ("^2.0.0", "^2.1.1"),
    }
    package = read_package_json(tmp_path)
    assert package["dependencies"] == {"three": "^0.160.0", "gsap": "^3.12.0"}
    assert package["devDependencies"] == {"clsx": "^2.0.0", "@types/three": "^0.170.0"}
    assert list(package) == ["name", "dependencies", "devDependencies"]


def test_merge_with_nothing_new_does_not_rewrite(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"dependencies": {"gsap": "^3"}}', encoding="utf-8")
    filesystem = DryRunFilesystem(RealFilesystem())

    merge = merge_dependencies(filesystem, tmp_path, {"gsap": "^3"}, {})

    assert not merge.changed
    assert merge.kept == {}
    assert filesystem.skipped_writes == []


def test_merge_without_package_json_reports_everything_and_writes_nothing(
    tmp_path: Path,
) -> None:
    merge = merge_dependencies(RealFilesystem(), tmp_path, {"gsap": "^3"}, {"vite": "^6"})

    assert merge.manifest_path is None
    assert merge.added == {"gsap": "^3"}
    assert merge.added_dev == {"vite": "^6"}
    assert not (tmp_path / "package.json").exists()


def test_package_requested_as_both_runtime_and_dev_is_added_once(tmp_path: Path) -> None:
    write_package_json(tmp_path, {"name": "app"})

    merge = merge_dependencies(RealFilesystem(), tmp_path, {"gsap": "^3"}, {"gsap": "^3"})

    assert merge.added == {"gsap": "^3"}
    assert merge.added_dev == {}


def test_non_object_section_is_invalid(tmp_path: Path) -> None:
    write_package_json(tmp_path, {"dependencies": ["gsap"]})

    with pytest.raises(ConfigInvalid) as exc_info:
        merge_dependencies(RealFilesystem(), tmp_path, {"three": "1"}, {})

    assert exc_info.value.field == "dependencies"


def test_check_manifest_rejects_non_object_dev_section(tmp_path: Path) -> None:
    write_package_json(tmp_path, {"devDependencies": "svelte"})

    with pytest.raises(ConfigInvalid) as exc_info:
        check_manifest(RealFilesystem(), tmp_path)

    assert exc_info.value.field == "devDependencies"


def test_check_manifest_accepts_missing_package_json(tmp_path: Path) -> None:
    check_manifest(RealFilesystem(), tmp_path)


def test_package_manager_detected_from_nearest_lockfile(tmp_path: Path) -> None:
    nested = tmp_path / "apps" / "web"
    nested.mkdir(parents=True)
    (tmp_path / "pnpm-lock.yaml").write_text("", encoding="utf-8")

    assert detect_package_manager(RealFilesystem(), nested) == "pnpm"

    (nested / "bun.lock").write_text("", encoding="utf-8")
    assert detect_package_manager(RealFilesystem(), nested) == "bun"


@pytest.mark.parametrize(
    ("manager", "dev", "expected"),
    [
        ("pnpm", False, "pnpm add gsap@^3"),
        ("pnpm", True, "pnpm add -D gsap@^3"),
        ("yarn", True, "yarn add -D gsap@^3"),
        ("bun", True, "bun add -d gsap@^3"),
        ("npm", True, "npm install --save-dev gsap@^3"),
        (None, False, "npm install gsap@^3"),
    ],
)
def test_install_command(manager, dev: bool, expected: str) -> None:
    assert install_command(manager, ["gsap@^3"], dev=dev) == expected


def test_sync_command_defaults_to_npm() -> None:
    assert sync_command(None) == "npm install"
    assert sync_command("pnpm") == "pnpm install"


@pytest.mark.parametrize(
    ("svelte", "tailwind", "svelte_ok", "tailwind_ok"),
    [
        ("^5.1.0", "^4.0.0", True, True),
        ("~4.2.0", "3.4.1", False, False),
        ("workspace:5", None, True, False),
        (None, "latest", False, False),
    ],
)
def test_framework_support(
    svelte: str | None, tailwind: str | None, svelte_ok: bool, tailwind_ok: bool
) -> None:
    detection = FrameworkDetection(svelte_version=svelte, tailwind_version=tailwind)

    assert detection.svelte_supported is svelte_ok
    assert detection.tailwind_supported is tailwind_ok


def test_detect_framework_reads_both_sections() -> None:
    detection = detect_framework(
        {"dependencies": {"svelte": "^5.0.0"}, "devDependencies": {"tailwindcss": "^4.0.0"}}
    )

    assert detection == FrameworkDetection(svelte_version="^5.0.0", tailwind_version="^4.0.0")
