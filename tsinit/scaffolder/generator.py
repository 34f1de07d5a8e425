"""Main scaffolding orchestrator.

Takes a ``ProjectOptions`` record and a ``LayoutMode`` and generates a
TypeScript project in a target directory: ``package.json``, ``.gitignore``,
``.prettierrc``, ``tsconfig`` files and the source skeleton.  Generation runs
as a fixed sequence of stages; each stage relies on what the previous ones
wrote, and a failing stage aborts the run without rolling anything back.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.markup import escape

from tsinit.config import Config
from tsinit.utils import (
    console,
    create_or_clear,
    list_files,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    save_json,
)

from .errors import InvalidOptionsError
from .initializers import Initializer, ToolchainInitializer
from .manifest_gen import ManifestGenerator
from .models import DerivedNames, InitResult, LayoutMode, ProjectOptions, Stage
from .naming import HELPERS, TEST, TYPINGS, derive_names, main_folder_name, split_base_name
from .skeleton_gen import SkeletonGenerator
from .templates import TemplateRenderer
from .tsconfig_gen import TsconfigGenerator


# ---------------------------------------------------------------------------
# Fixed auxiliary files
# ---------------------------------------------------------------------------

PRETTIER_RULES: dict[str, Any] = {
    "singleQuote": False,
    "trailingComma": "all",
    "printWidth": 100,
    "useTabs": False,
    "tabWidth": 4,
    "semi": True,
    "bracketSpacing": True,
}


def plan_stages(mode: LayoutMode) -> list[Stage]:
    """Stages to run for *mode*, in order."""
    stages = [
        Stage.CLEAR_ROOT,
        Stage.WRITE_MANIFEST,
        Stage.WRITE_AUX_FILES,
        Stage.BUILD_SKELETON,
        Stage.WRITE_COMPILER_CONFIG,
    ]
    if mode is LayoutMode.MULTI:
        stages.append(Stage.EXPAND_MANIFEST)
    return stages


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ProjectInitializer:
    """Generates a complete project for one options record and layout mode.

    Attributes:
        config: Toolchain and output settings.
        initializer: Produces the seed ``package.json`` / ``tsconfig.json``.
        quiet: Suppress progress output (stage headers, directory
            init/clear lines and the final summary).  Stage failures are
            still reported.
    """

    _STAGE_METHODS: dict[Stage, str] = {
        Stage.CLEAR_ROOT: "_clear_root",
        Stage.WRITE_MANIFEST: "_write_manifest",
        Stage.WRITE_AUX_FILES: "_write_aux_files",
        Stage.BUILD_SKELETON: "_build_skeleton",
        Stage.WRITE_COMPILER_CONFIG: "_write_compiler_config",
        Stage.EXPAND_MANIFEST: "_expand_manifest",
    }

    def __init__(
        self,
        config: Config | None = None,
        initializer: Initializer | None = None,
        renderer: TemplateRenderer | None = None,
        quiet: bool = False,
    ) -> None:
        self.config = config or Config()
        self.initializer = initializer or ToolchainInitializer(self.config)
        self.renderer = renderer or TemplateRenderer()
        self.quiet = quiet
        self.manifest_gen = ManifestGenerator(self.initializer, self.config.json_indent)
        self.tsconfig_gen = TsconfigGenerator(self.initializer, self.config.json_indent)
        self.skeleton_gen = SkeletonGenerator(self.renderer, self.quiet)

    # -- Public API --------------------------------------------------------

    def init(
        self,
        root: str | Path,
        options: ProjectOptions,
        mode: LayoutMode | str = LayoutMode.SINGLE,
    ) -> InitResult:
        """Generate the project into *root*.

        Anything already inside *root* is deleted first.

        Args:
            root: Target project directory; created if missing.
            options: The user's answers.  ``name=None`` takes the root
                directory name.
            mode: Single- or multi-package layout.

        Returns:
            An ``InitResult`` describing what was generated.

        Raises:
            InvalidOptionsError: Before touching the filesystem, if no usable
                project name can be determined or, in multi mode, the main
                package would share a folder with a fixed sub-package.
            MissingTemplateError: If ``npm``/``tsc`` did not produce a seed file.
        """
        root_path = Path(root).resolve()
        layout = LayoutMode(mode)
        opts = normalize_options(root_path, options)
        names = derive_names(opts)
        if layout is LayoutMode.MULTI:
            check_package_folders(root_path, opts, names)

        completed: list[Stage] = []
        for index, stage in enumerate(plan_stages(layout), start=1):
            if not self.quiet:
                print_stage_header(index, stage.value)
            method = getattr(self, self._STAGE_METHODS[stage])
            try:
                method(root_path, opts, names, layout)
            except Exception as exc:
                print_error(f"Stage {index} ({stage.value}) FAILED: {escape(str(exc))}")
                raise
            completed.append(stage)

        result = InitResult(
            root=root_path,
            mode=layout,
            options=opts,
            names=names,
            stages_completed=completed,
            files=list_files(root_path),
        )
        if not self.quiet:
            self._print_summary(result)
        return result

    # -- Stages ------------------------------------------------------------

    def _clear_root(
        self, root: Path, opts: ProjectOptions, names: DerivedNames, mode: LayoutMode
    ) -> None:
        create_or_clear(root, self.quiet)

    def _write_manifest(
        self, root: Path, opts: ProjectOptions, names: DerivedNames, mode: LayoutMode
    ) -> None:
        self.manifest_gen.create_base_manifest(root, opts, names, mode)

    def _write_aux_files(
        self, root: Path, opts: ProjectOptions, names: DerivedNames, mode: LayoutMode
    ) -> None:
        self.renderer.render_to_file("gitignore.j2", root / ".gitignore", {})
        save_json(PRETTIER_RULES, root / ".prettierrc", self.config.json_indent)

    def _build_skeleton(
        self, root: Path, opts: ProjectOptions, names: DerivedNames, mode: LayoutMode
    ) -> None:
        self.skeleton_gen.build_scripts_dir(root)
        if mode is LayoutMode.SINGLE:
            self.skeleton_gen.build_single_layout(root, names.namespace, opts.include_tests)
        else:
            self.skeleton_gen.build_multi_layout(root, opts, names, main_folder_name(root))

    def _write_compiler_config(
        self, root: Path, opts: ProjectOptions, names: DerivedNames, mode: LayoutMode
    ) -> None:
        self.tsconfig_gen.write_base_config(root)
        self.tsconfig_gen.write_topology_configs(
            root, opts.include_tests, mode, main_folder_name(root)
        )

    def _expand_manifest(
        self, root: Path, opts: ProjectOptions, names: DerivedNames, mode: LayoutMode
    ) -> None:
        self.manifest_gen.expand_manifest_for_multi_mode(root, opts, names, mode)

    # -- Reporting ---------------------------------------------------------

    def _print_summary(self, result: InitResult) -> None:
        console.print()
        print_summary_table(
            {
                "Root": str(result.root),
                "Layout": result.mode.value,
                "Package": result.names.manifest_name,
                "Namespace": result.names.namespace,
                "Tests": "yes" if result.options.include_tests else "no",
                "Files": str(len(result.files)),
            },
            title="Project Initialized",
        )
        print_success(f"Project {result.names.manifest_name} created in {result.root}")


# ---------------------------------------------------------------------------
# Option normalization
# ---------------------------------------------------------------------------


def normalize_options(root: str | Path, options: ProjectOptions) -> ProjectOptions:
    """Fill the project name (and scope) from the root directory name.

    When no name was given the root's base name is used; if in addition no
    scope was given and the base name is hyphenated, it is split at the first
    ``-`` into scope and name.

    Raises:
        InvalidOptionsError: If the resulting name is empty.
    """
    scope = options.scope
    name = options.name
    if name is None:
        base_name = Path(root).name
        if scope:
            name = base_name
        else:
            scope, name = split_base_name(base_name)

    if not name or not name.strip():
        raise InvalidOptionsError("a project name is required")
    return options.model_copy(update={"scope": scope or None, "name": name})


def check_package_folders(
    root: str | Path, options: ProjectOptions, names: DerivedNames
) -> None:
    """Reject multi-package layouts whose main package collides with a fixed one.

    The main package's sources live under the root directory's name and its
    manifest under ``names.main_suffix``; neither may be ``typings``,
    ``helpers`` or (when tests are generated) ``test``.

    Raises:
        InvalidOptionsError: On a collision.
    """
    reserved = {TYPINGS, HELPERS}
    if options.include_tests:
        reserved.add(TEST)
    for folder in (main_folder_name(root), names.main_suffix):
        if folder in reserved:
            raise InvalidOptionsError(
                f"main package folder '{folder}' clashes with the '{folder}' package"
            )
