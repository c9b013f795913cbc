"""Tests for install planning against a real workspace directory."""

from pathlib import Path

import pytest

from motion_core.core.errors import AssetNotFound
from motion_core.core.planner import plan
from motion_core.core.resolver import resolve
from motion_core.integrations.filesystem import RealFilesystem
from motion_core.models.config import LocalConfig
from motion_core.models.plan import InstallPlan
from motion_core.models.registry import AssetBundle, RegistryIndex
from tests.test_utils.registry_builders import (
    component,
    file_entry,
    glass_pane_registry,
    registry_index,
)
from tests.test_utils.workspace import snapshot

LIB = Path("src/lib/motion-core")


def _plan(root: Path, requested: list[str]) -> InstallPlan:
    document, files = glass_pane_registry()
    index = RegistryIndex.model_validate(document)
    return plan(
        resolve(requested, index),
        AssetBundle(files=files),
        LocalConfig.default(),
        root,
        RealFilesystem(),
    )


def test_fresh_workspace_plans_creates_directories_and_barrel(tmp_path: Path) -> None:
    install_plan = _plan(tmp_path, ["glass-pane"])

    assert install_plan.install_order == ["motion-helper", "glass-pane"]
    assert [f.destination for f in install_plan.files] == [
        tmp_path / LIB / "helpers/motion.ts",
        tmp_path / LIB / "glass-pane/GlassPane.svelte",
        tmp_path / LIB / "glass-pane/types.ts",
    ]
    assert all(f.disposition == "create" for f in install_plan.files)
    assert install_plan.directories[0] == tmp_path / "src"
    assert tmp_path / LIB / "glass-pane" in install_plan.directories
    assert install_plan.barrel is not None
    assert install_plan.barrel.path == tmp_path / LIB / "index.ts"
    assert install_plan.unexported == ("motion-helper",)
    assert install_plan.dependencies == {"three": "^0.170.0"}
    assert install_plan.dev_dependencies == {"@types/three": "^0.170.0"}


def test_planning_never_writes(tmp_path: Path) -> None:
    (tmp_path / "keep.txt").write_text("x", encoding="utf-8")
    before = snapshot(tmp_path)

    _plan(tmp_path, ["glass-pane"])

    assert snapshot(tmp_path) == before
    assert not (tmp_path / "src").exists()


def test_existing_files_are_classified(tmp_path: Path) -> None:
    _, files = glass_pane_registry()
    helper = tmp_path / LIB / "helpers/motion.ts"
    entry = tmp_path / LIB / "glass-pane/GlassPane.svelte"
    helper.parent.mkdir(parents=True)
    entry.parent.mkdir(parents=True)
    helper.write_bytes(files["helpers/motion.ts"])
    entry.write_bytes(b"<div>local edit</div>\n")

    install_plan = _plan(tmp_path, ["glass-pane"])

    by_path = {f.destination: f for f in install_plan.files}
    assert by_path[helper].disposition == "identical"
    assert by_path[entry].disposition == "conflict"
    assert by_path[entry].existing == b"<div>local edit</div>\n"
    assert install_plan.conflicts == [by_path[entry]]
    assert install_plan.directories == ()


def test_directory_in_place_of_file_is_a_conflict(tmp_path: Path) -> None:
    (tmp_path / LIB / "helpers/motion.ts").mkdir(parents=True)

    install_plan = _plan(tmp_path, ["motion-helper"])

    assert install_plan.files[0].disposition == "conflict"
    assert install_plan.files[0].existing is None


def test_missing_asset_aborts_planning(tmp_path: Path) -> None:
    index = RegistryIndex.model_validate(
        registry_index({"orb": component("Orb", files=[file_entry("components/orb/Orb.svelte")])})
    )

    with pytest.raises(AssetNotFound) as exc_info:
        plan(
            resolve(["orb"], index),
            AssetBundle(files={}),
            LocalConfig.default(),
            tmp_path,
            RealFilesystem(),
        )

    assert exc_info.value.path == "components/orb/Orb.svelte"


def test_first_component_owns_shared_destination(tmp_path: Path) -> None:
    index = RegistryIndex.model_validate(
        registry_index(
            {
                "a": component("A", files=[file_entry("helpers/shared.ts", kind="helper")]),
                "b": component("B", files=[file_entry("helpers/shared.ts", kind="helper")]),
            }
        )
    )

    install_plan = plan(
        resolve(["a", "b"], index),
        AssetBundle(files={"helpers/shared.ts": b"shared"}),
        LocalConfig.default(),
        tmp_path,
        RealFilesystem(),
    )

    assert len(install_plan.files) == 1
    assert install_plan.files[0].component_slug == "a"


def test_reinstall_over_identical_workspace_is_noop(tmp_path: Path) -> None:
    for planned in _plan(tmp_path, ["glass-pane"]).files:
        planned.destination.parent.mkdir(parents=True, exist_ok=True)
        planned.destination.write_bytes(planned.incoming)
    barrel = _plan(tmp_path, ["glass-pane"]).barrel
    assert barrel is not None
    barrel.path.write_bytes(barrel.content)

    assert _plan(tmp_path, ["glass-pane"]).is_noop
