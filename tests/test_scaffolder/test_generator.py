"""Tests for the project initializer (tsinit.scaffolder.generator).

Covers:
- Option normalization (name/scope taken from the root directory)
- Stage planning per layout mode
- Full single- and multi-package generation against a fake toolchain
- Failure handling: empty name, missing seed files
- Idempotent regeneration
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from tsinit.scaffolder import (
    InvalidOptionsError,
    LayoutMode,
    MissingTemplateError,
    ProjectInitializer,
    ProjectOptions,
    Stage,
)
from tsinit.scaffolder.generator import PRETTIER_RULES, normalize_options, plan_stages
from tsinit.utils import list_files

pytestmark = pytest.mark.unit


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def _snapshot(root: Path) -> dict[str, str]:
    return {rel: (root / rel).read_text(encoding="utf-8") for rel in list_files(root)}


# ---------------------------------------------------------------------------
# normalize_options
# ---------------------------------------------------------------------------


class TestNormalizeOptions:
    def test_explicit_values_untouched(self, tmp_path):
        options = ProjectOptions(scope="acme", name="widget")
        result = normalize_options(tmp_path / "whatever", options)
        assert result.scope == "acme"
        assert result.name == "widget"

    def test_explicit_hyphenated_name_is_not_split(self, tmp_path):
        result = normalize_options(tmp_path / "acme-widget", ProjectOptions(name="acme-widget"))
        assert result.scope is None
        assert result.name == "acme-widget"

    def test_omitted_name_from_plain_root(self, tmp_path):
        result = normalize_options(tmp_path / "widget", ProjectOptions())
        assert result.scope is None
        assert result.name == "widget"

    def test_omitted_name_splits_hyphenated_root(self, tmp_path):
        result = normalize_options(tmp_path / "acme-big-widget", ProjectOptions())
        assert result.scope == "acme"
        assert result.name == "big-widget"

    def test_omitted_name_with_scope_uses_whole_root_name(self, tmp_path):
        result = normalize_options(tmp_path / "big-widget", ProjectOptions(scope="acme"))
        assert result.scope == "acme"
        assert result.name == "big-widget"

    def test_idempotent(self, tmp_path):
        root = tmp_path / "acme-widget"
        once = normalize_options(root, ProjectOptions())
        assert normalize_options(root, once) == once

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, tmp_path, name):
        with pytest.raises(InvalidOptionsError):
            normalize_options(tmp_path / "widget", ProjectOptions(name=name))

    def test_does_not_mutate_input(self, tmp_path):
        options = ProjectOptions()
        normalize_options(tmp_path / "acme-widget", options)
        assert options.name is None and options.scope is None


class TestPlanStages:
    def test_single(self):
        assert plan_stages(LayoutMode.SINGLE) == [
            Stage.CLEAR_ROOT,
            Stage.WRITE_MANIFEST,
            Stage.WRITE_AUX_FILES,
            Stage.BUILD_SKELETON,
            Stage.WRITE_COMPILER_CONFIG,
        ]

    def test_multi_expands_manifest_last(self):
        stages = plan_stages(LayoutMode.MULTI)
        assert stages[-1] is Stage.EXPAND_MANIFEST
        assert len(stages) == 6


# ---------------------------------------------------------------------------
# Single-package generation
# ---------------------------------------------------------------------------


class TestSingleMode:
    def test_acme_widget_scenario(self, tmp_path, project_initializer, single_options):
        root = tmp_path / "acme-widget"
        result = project_initializer.init(root, single_options, LayoutMode.SINGLE)

        assert (root / "src").is_dir()
        assert (root / "test").is_dir()
        assert (root / "scripts").is_dir()
        assert result.names.manifest_name == "acme-widget"
        assert result.names.namespace == "AcmeWidget"
        assert _read(root / "package.json")["name"] == "acme-widget"
        assert (root / "src/@types.ts").read_text(encoding="utf-8") == (
            "declare namespace AcmeWidget {}"
        )

    def test_on_disk_contract(self, tmp_path, project_initializer, single_options):
        root = tmp_path / "acme-widget"
        result = project_initializer.init(root, single_options, LayoutMode.SINGLE)
        assert result.files == [
            ".gitignore",
            ".prettierrc",
            "package.json",
            "src/@types.ts",
            "src/index.ts",
            "src/tsconfig.json",
            "test/index.ts",
            "test/tsconfig.json",
            "tsconfig.base.json",
            "tsconfig.json",
        ]
        assert result.stages_completed == plan_stages(LayoutMode.SINGLE)

    def test_manifest_fields(self, tmp_path, project_initializer, single_options):
        root = tmp_path / "acme-widget"
        project_initializer.init(root, single_options, LayoutMode.SINGLE)
        manifest = _read(root / "package.json")
        assert manifest["author"] == "Jane Doe"
        assert manifest["description"] == "A widget library."
        assert "private" not in manifest

    def test_aux_files(self, tmp_path, project_initializer, single_options):
        root = tmp_path / "acme-widget"
        project_initializer.init(root, single_options, LayoutMode.SINGLE)
        assert (root / ".gitignore").read_text(encoding="utf-8") == (
            ".vscode\n.cache\n.idea\n.project\nnode_modules\nsrc/**/.*\nbuild"
        )
        prettier = _read(root / ".prettierrc")
        assert prettier == PRETTIER_RULES
        assert len(prettier) == 7

    def test_without_tests(self, tmp_path, project_initializer):
        root = tmp_path / "widget"
        project_initializer.init(root, ProjectOptions(name="widget", include_tests=False))
        assert not (root / "test").exists()
        assert _read(root / "tsconfig.json")["references"] == [{"path": "./src"}]

    def test_mode_accepts_string(self, tmp_path, project_initializer):
        result = project_initializer.init(tmp_path / "w", ProjectOptions(name="w"), "single")
        assert result.mode is LayoutMode.SINGLE

    def test_name_from_root_directory(self, tmp_path, project_initializer):
        root = tmp_path / "acme-widget"
        result = project_initializer.init(root, ProjectOptions(include_tests=False))
        assert result.options.scope == "acme"
        assert result.options.name == "widget"
        assert _read(root / "package.json")["name"] == "@acme/widget"
        assert result.names.namespace == "ACMEWidget"


# ---------------------------------------------------------------------------
# Multi-package generation
# ---------------------------------------------------------------------------


class TestMultiMode:
    def test_acme_widget_scenario(self, tmp_path, project_initializer, multi_options):
        root = tmp_path / "widget"
        project_initializer.init(root, multi_options, LayoutMode.MULTI)

        packages = root / "packages"
        assert sorted(p.name for p in packages.iterdir()) == ["helpers", "typings", "widget"]

        main = _read(packages / "widget/package.json")
        assert main["name"] == "@acme/widget"
        assert set(main["dependencies"]) == {"@acme/widget-typings", "@acme/widget-helpers"}

    def test_root_manifest_is_private(self, tmp_path, project_initializer, multi_options):
        root = tmp_path / "widget"
        project_initializer.init(root, multi_options, LayoutMode.MULTI)
        root_manifest = _read(root / "package.json")
        assert root_manifest["private"] is True
        assert "scripts" in root_manifest

    def test_on_disk_contract(self, tmp_path, project_initializer):
        root = tmp_path / "widget"
        options = ProjectOptions(scope="acme", name="widget", include_tests=True)
        result = project_initializer.init(root, options, LayoutMode.MULTI)

        expected = {".gitignore", ".prettierrc", "package.json", "tsconfig.base.json", "tsconfig.json"}
        for folder in ("typings", "helpers", "widget", "test"):
            for rel in ("package.json", "tsconfig.json", "src/@types.ts", "src/index.ts"):
                expected.add(f"packages/{folder}/{rel}")
        assert set(result.files) == expected
        assert (root / "scripts").is_dir()
        assert result.stages_completed == plan_stages(LayoutMode.MULTI)

    def test_dependency_chain(self, tmp_path, project_initializer):
        root = tmp_path / "widget"
        options = ProjectOptions(scope="acme", name="widget", include_tests=True)
        project_initializer.init(root, options, LayoutMode.MULTI)

        deps = {
            folder: _read(root / "packages" / folder / "package.json")["dependencies"]
            for folder in ("typings", "helpers", "widget", "test")
        }
        assert deps["typings"] == {}
        assert set(deps["helpers"]) == {"@acme/widget-typings"}
        assert set(deps["widget"]) == {"@acme/widget-helpers", "@acme/widget-typings"}
        assert set(deps["test"]) == {"@acme/widget"}

    def test_config_references_resolve(self, tmp_path, project_initializer):
        root = tmp_path / "widget"
        options = ProjectOptions(scope="acme", name="widget", include_tests=True)
        project_initializer.init(root, options, LayoutMode.MULTI)

        for rel in list_files(root, suffixes=["json"]):
            if not rel.endswith("tsconfig.json"):
                continue
            config_dir = (root / rel).parent
            for ref in _read(root / rel).get("references", []):
                assert (config_dir / ref["path"]).exists(), (rel, ref)

    def test_folder_and_manifest_suffix_can_differ(self, tmp_path, project_initializer):
        # Unscoped hyphenated name in a root of another name: the main package
        # sources live under the root's name, its manifest under the suffix.
        root = tmp_path / "workspace"
        options = ProjectOptions(name="acme-widget", include_tests=False)
        project_initializer.init(root, options, LayoutMode.MULTI)

        assert (root / "packages/workspace/src/index.ts").exists()
        assert (root / "packages/workspace/tsconfig.json").exists()
        assert _read(root / "packages/widget/package.json")["name"] == "acme-widget"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.parametrize("mode", list(LayoutMode))
    def test_empty_name_fails_before_any_directory(self, tmp_path, project_initializer, mode):
        root = tmp_path / "nothing-here"
        with patch("tsinit.scaffolder.generator.create_or_clear") as clear:
            with pytest.raises(InvalidOptionsError):
                project_initializer.init(root, ProjectOptions(name=""), mode)
        clear.assert_not_called()
        assert not root.exists()

    def test_missing_manifest_aborts(self, tmp_path, project_initializer, fake_initializer):
        fake_initializer.produce_manifest = False
        root = tmp_path / "widget"
        with pytest.raises(MissingTemplateError) as exc_info:
            project_initializer.init(root, ProjectOptions(name="widget"))
        assert exc_info.value.stage is Stage.WRITE_MANIFEST
        # no rollback, later stages never ran
        assert root.is_dir()
        assert not (root / ".gitignore").exists()

    def test_missing_tsconfig_leaves_partial_tree(
        self, tmp_path, project_initializer, fake_initializer
    ):
        fake_initializer.produce_tsconfig = False
        root = tmp_path / "widget"
        with pytest.raises(MissingTemplateError):
            project_initializer.init(root, ProjectOptions(name="widget"), LayoutMode.MULTI)
        assert (root / "package.json").exists()
        assert (root / "packages/typings/src/index.ts").exists()
        assert not (root / "packages/typings/package.json").exists()

    def test_filesystem_errors_propagate(self, tmp_path, project_initializer):
        with patch(
            "tsinit.scaffolder.generator.create_or_clear", side_effect=PermissionError("denied")
        ):
            with pytest.raises(PermissionError):
                project_initializer.init(tmp_path / "widget", ProjectOptions(name="widget"))


# ---------------------------------------------------------------------------
# Regeneration
# ---------------------------------------------------------------------------


class TestRegeneration:
    @pytest.mark.parametrize("mode", list(LayoutMode))
    def test_rerun_is_byte_identical(self, tmp_path, project_initializer, mode):
        root = tmp_path / "widget"
        options = ProjectOptions(scope="acme", name="widget", include_tests=True)
        project_initializer.init(root, options, mode)
        first = _snapshot(root)

        (root / "src-extra.txt").write_text("user file", encoding="utf-8")
        project_initializer.init(root, options, mode)
        assert _snapshot(root) == first

    def test_switching_mode_leaves_no_stale_files(self, tmp_path, project_initializer):
        root = tmp_path / "widget"
        options = ProjectOptions(scope="acme", name="widget")
        project_initializer.init(root, options, LayoutMode.MULTI)
        project_initializer.init(root, options, LayoutMode.SINGLE)
        assert not (root / "packages").exists()


class TestReporting:
    def test_summary_printed_when_not_quiet(self, tmp_path, fake_initializer, capsys):
        initializer = ProjectInitializer(initializer=fake_initializer)
        initializer.init(tmp_path / "widget", ProjectOptions(name="widget"))
        out = capsys.readouterr().out
        assert "Project Initialized" in out
        assert "WRITE MANIFEST" in out

    def test_quiet_run_prints_nothing(self, tmp_path, project_initializer, capsys):
        root = tmp_path / "widget"
        project_initializer.init(root, ProjectOptions(name="widget"))
        project_initializer.init(root, ProjectOptions(name="widget"), LayoutMode.MULTI)
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# Multi-mode folder collisions
# ---------------------------------------------------------------------------


class TestPackageFolderCollisions:
    @pytest.mark.parametrize("root_name", ["typings", "helpers", "test"])
    def test_root_named_like_fixed_package(self, tmp_path, project_initializer, root_name):
        root = tmp_path / root_name
        options = ProjectOptions(scope="acme", name="widget", include_tests=True)
        with pytest.raises(InvalidOptionsError):
            project_initializer.init(root, options, LayoutMode.MULTI)
        assert not root.exists()

    def test_manifest_suffix_collides(self, tmp_path, project_initializer, fake_initializer):
        # unscoped "acme-helpers" puts the main manifest under packages/helpers
        root = tmp_path / "workspace"
        options = ProjectOptions(name="acme-helpers", include_tests=False)
        with pytest.raises(InvalidOptionsError):
            project_initializer.init(root, options, LayoutMode.MULTI)
        assert fake_initializer.calls == []

    def test_test_folder_allowed_without_tests(self, tmp_path, project_initializer):
        root = tmp_path / "test"
        options = ProjectOptions(scope="acme", name="test", include_tests=False)
        project_initializer.init(root, options, LayoutMode.MULTI)
        assert _read(root / "packages/test/package.json")["name"] == "@acme/test"

    def test_single_mode_is_not_restricted(self, tmp_path, project_initializer):
        result = project_initializer.init(tmp_path / "helpers", ProjectOptions(name="helpers"))
        assert result.names.manifest_name == "helpers"


class TestOptionalFields:
    def test_none_author_and_description(self, tmp_path, project_initializer):
        root = tmp_path / "widget"
        options = ProjectOptions(name="widget", author=None, description=None)
        project_initializer.init(root, options)
        manifest = _read(root / "package.json")
        assert manifest["author"] == ""
        assert manifest["description"] == ""
