"""Directory skeleton generation.

Creates (or empties) every source directory of the chosen layout and seeds
it with a global namespace declaration (``@types.ts``) and an entry file
(``index.ts``) importing it.
"""

from __future__ import annotations

from pathlib import Path

from tsinit.utils import create_or_clear

from .manifest_gen import PACKAGES_DIR
from .models import DerivedNames, ProjectOptions
from .naming import HELPERS, TEST, TYPINGS
from .templates import TemplateRenderer

SCRIPTS_DIR = "scripts"
TYPES_FILE = "@types.ts"
INDEX_FILE = "index.ts"


class SkeletonGenerator:
    """Builds the ``src``/``test`` or ``packages/*`` directory tree."""

    def __init__(self, renderer: TemplateRenderer, quiet: bool = False) -> None:
        self.renderer = renderer
        self.quiet = quiet

    def build_scripts_dir(self, root: Path) -> Path:
        """Create the empty top-level ``scripts`` directory."""
        return create_or_clear(root / SCRIPTS_DIR, self.quiet)

    def build_single_layout(self, root: Path, namespace: str, include_tests: bool) -> list[Path]:
        """Create ``src`` (and ``test``) for a single-package project.

        Returns:
            The placeholder files that were written.
        """
        src = create_or_clear(root / "src", self.quiet)
        written = self._seed_sources(src, namespace, typings_import=None)

        if include_tests:
            test = create_or_clear(root / TEST, self.quiet)
            written.append(
                self.renderer.render_to_file("test_index.ts.j2", test / INDEX_FILE, {})
            )
        return written

    def build_multi_layout(
        self,
        root: Path,
        options: ProjectOptions,
        names: DerivedNames,
        main_folder: str,
    ) -> list[Path]:
        """Create ``packages/{typings,helpers,<main_folder>,test?}/src``.

        The typings package imports only its own declarations; every other
        package first imports the typings package by its public specifier.
        """
        packages = create_or_clear(root / PACKAGES_DIR, self.quiet)

        folders: list[tuple[str, str | None]] = [
            (TYPINGS, None),
            (HELPERS, names.typings_import),
            (main_folder, names.typings_import),
        ]
        if options.include_tests:
            folders.append((TEST, names.typings_import))

        written: list[Path] = []
        for folder, typings_import in folders:
            src = create_or_clear(packages / folder / "src", self.quiet)
            written.extend(self._seed_sources(src, names.namespace, typings_import))
        return written

    def _seed_sources(
        self, src: Path, namespace: str, typings_import: str | None
    ) -> list[Path]:
        return [
            self.renderer.render_to_file(
                "types.ts.j2", src / TYPES_FILE, {"namespace_id": namespace}
            ),
            self.renderer.render_to_file(
                "index.ts.j2", src / INDEX_FILE, {"typings_import": typings_import}
            ),
        ]
