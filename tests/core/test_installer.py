"""Tests for plan execution: dry-run, conflicts, idempotency and failures."""

from pathlib import Path

import pytest

from motion_core.core.errors import ConfigInvalid, PartialInstallFailure
from motion_core.core.installer import Installer
from motion_core.core.planner import plan
from motion_core.core.resolver import resolve
from motion_core.integrations.filesystem import Filesystem, RealFilesystem
from motion_core.models.config import LocalConfig
from motion_core.models.plan import InstallPlan
from motion_core.models.registry import AssetBundle, RegistryIndex
from tests.fakes.filesystem import FailingFilesystem
from tests.fakes.prompter import FakePrompter
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.registry_builders import glass_pane_registry
from tests.test_utils.workspace import read_package_json, snapshot, write_package_json

LIB = Path("src/lib/motion-core")
PACKAGE = {"name": "app", "devDependencies": {"svelte": "^5.0.0"}}


def _plan(root: Path, filesystem: Filesystem | None = None) -> InstallPlan:
    document, files = glass_pane_registry()
    index = RegistryIndex.model_validate(document)
    return plan(
        resolve(["glass-pane"], index),
        AssetBundle(files=files),
        LocalConfig.default(),
        root,
        filesystem or RealFilesystem(),
    )


def _installer(
    filesystem: Filesystem | None = None,
    prompter: FakePrompter | None = None,
    feedback: FakeUserFeedback | None = None,
) -> Installer:
    return Installer(
        filesystem=filesystem or RealFilesystem(),
        prompter=prompter or FakePrompter(),
        feedback=feedback or FakeUserFeedback(),
    )


def _edit_entry(root: Path) -> Path:
    entry = root / LIB / "glass-pane/GlassPane.svelte"
    entry.write_bytes(b"<div>local edit</div>\n")
    return entry


def test_dry_run_writes_nothing_but_reports_everything(tmp_path: Path) -> None:
    write_package_json(tmp_path, PACKAGE)
    before = snapshot(tmp_path)

    result = _installer().apply(_plan(tmp_path), dry_run=True, assume_yes=False)

    assert snapshot(tmp_path) == before
    assert result.dry_run
    assert [o.status for o in result.outcomes] == ["created", "created", "created"]
    assert result.barrel_updated
    assert result.dependencies.added == {"three": "^0.170.0"}
    assert result.dependencies.added_dev == {"@types/three": "^0.170.0"}


def test_install_writes_files_barrel_and_dependencies(tmp_path: Path) -> None:
    write_package_json(tmp_path, PACKAGE)
    _, files = glass_pane_registry()

    result = _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)

    assert [o.status for o in result.outcomes] == ["created", "created", "created"]
    assert (tmp_path / LIB / "helpers/motion.ts").read_bytes() == files["helpers/motion.ts"]
    barrel = (tmp_path / LIB / "index.ts").read_text(encoding="utf-8")
    assert 'export { default as GlassPane } from "./glass-pane/GlassPane.svelte";' in barrel
    assert 'export type { GlassPaneProps } from "./glass-pane/types.ts";' in barrel
    package = read_package_json(tmp_path)
    assert package["dependencies"] == {"three": "^0.170.0"}
    assert package["devDependencies"] == {"svelte": "^5.0.0", "@types/three": "^0.170.0"}


def test_second_install_changes_nothing(tmp_path: Path) -> None:
    write_package_json(tmp_path, PACKAGE)
    _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)
    after_first = snapshot(tmp_path)

    second_plan = _plan(tmp_path)
    result = _installer().apply(second_plan, dry_run=False, assume_yes=False)

    assert second_plan.is_noop
    assert [o.status for o in result.outcomes] == ["unchanged", "unchanged", "unchanged"]
    assert not result.dependencies.changed
    assert snapshot(tmp_path) == after_first


def test_assume_yes_overwrites_conflicts_without_prompting(tmp_path: Path) -> None:
    _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)
    entry = _edit_entry(tmp_path)
    prompter = FakePrompter(interactive=True)
    _, files = glass_pane_registry()

    result = _installer(prompter=prompter).apply(_plan(tmp_path), dry_run=False, assume_yes=True)

    assert result.with_status("updated")[0].destination == entry
    assert entry.read_bytes() == files["components/glass-pane/GlassPane.svelte"]
    assert prompter.prompts == []


def test_non_interactive_run_keeps_conflicts_and_warns(tmp_path: Path) -> None:
    _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)
    entry = _edit_entry(tmp_path)
    feedback = FakeUserFeedback()

    result = _installer(feedback=feedback).apply(_plan(tmp_path), dry_run=False, assume_yes=False)

    assert [p.destination for p in result.unresolved_conflicts] == [entry]
    assert entry.read_bytes() == b"<div>local edit</div>\n"
    assert len(feedback.warnings) == 1


def test_interactive_user_decides_per_file(tmp_path: Path) -> None:
    _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)
    entry = _edit_entry(tmp_path)
    types = tmp_path / LIB / "glass-pane/types.ts"
    types.write_bytes(b"export type GlassPaneProps = { local: true };\n")
    prompter = FakePrompter(interactive=True, answers=[False, True])
    _, files = glass_pane_registry()

    result = _installer(prompter=prompter).apply(_plan(tmp_path), dry_run=False, assume_yes=False)

    assert prompter.prompts == [
        "Overwrite src/lib/motion-core/glass-pane/GlassPane.svelte?",
        "Overwrite src/lib/motion-core/glass-pane/types.ts?",
    ]
    assert [p.destination for p in result.with_status("skipped")] == [entry]
    assert [p.destination for p in result.with_status("updated")] == [types]
    assert result.unresolved_conflicts == []
    assert entry.read_bytes() == b"<div>local edit</div>\n"
    assert types.read_bytes() == files["components/glass-pane/types.ts"]


def test_prompt_default_keeps_local_file(tmp_path: Path) -> None:
    _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)
    entry = _edit_entry(tmp_path)

    result = _installer(prompter=FakePrompter(interactive=True)).apply(
        _plan(tmp_path), dry_run=False, assume_yes=False
    )

    assert [p.destination for p in result.with_status("skipped")] == [entry]
    assert entry.read_bytes() == b"<div>local edit</div>\n"


def test_dry_run_reports_conflicts_without_prompting(tmp_path: Path) -> None:
    _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)
    _edit_entry(tmp_path)
    prompter = FakePrompter(interactive=True, answers=[True])

    result = _installer(prompter=prompter).apply(_plan(tmp_path), dry_run=True, assume_yes=False)

    assert len(result.unresolved_conflicts) == 1
    assert prompter.prompts == []


def test_write_failure_reports_files_already_written(tmp_path: Path) -> None:
    write_package_json(tmp_path, PACKAGE)
    barrel = tmp_path / LIB / "index.ts"
    filesystem = FailingFilesystem(fail_on={barrel})

    with pytest.raises(PartialInstallFailure) as exc_info:
        _installer(filesystem=filesystem).apply(
            _plan(tmp_path, filesystem), dry_run=False, assume_yes=False
        )

    error = exc_info.value
    assert error.failed_path == barrel
    assert error.written == filesystem.written
    assert len(error.written) == 3
    assert not barrel.exists()
    assert "dependencies" not in read_package_json(tmp_path)


def test_invalid_package_json_aborts_before_any_write(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("[]", encoding="utf-8")

    with pytest.raises(ConfigInvalid):
        _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)

    assert not (tmp_path / "src").exists()


@pytest.mark.parametrize("section", ["dependencies", "devDependencies"])
def test_non_object_dependency_section_aborts_before_any_write(
    tmp_path: Path, section: str
) -> None:
    write_package_json(tmp_path, {"name": "app", section: ["oops"]})
    before = snapshot(tmp_path)

    with pytest.raises(ConfigInvalid):
        _installer().apply(_plan(tmp_path), dry_run=False, assume_yes=False)

    assert not (tmp_path / "src").exists()
    assert snapshot(tmp_path) == before
