"""``package.json`` generation.

The seed manifest comes from ``npm init -y``; this module rewrites its
identity fields and, for multi-package projects, fans it out into one
manifest per sub-package with the dependency chain
``typings <- helpers <- main <- test``.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from tsinit.utils import load_json, save_json

from .initializers import MANIFEST_FILE, Initializer, expect_file
from .models import DerivedNames, LayoutMode, ProjectOptions, Stage
from .naming import HELPERS, TEST, TYPINGS

PACKAGES_DIR = "packages"

# Entry points of a built sub-package, relative to the package folder.
BUILD_MAIN = "build/cjs/index.js"
BUILD_TYPES = "build/cjs/index.d.ts"

DEFAULT_VERSION = "1.0.0"


class ManifestGenerator:
    """Writes the root manifest and the per-package manifests."""

    def __init__(self, initializer: Initializer, indent: int = 4) -> None:
        self.initializer = initializer
        self.indent = indent

    def create_base_manifest(
        self,
        root: Path,
        options: ProjectOptions,
        names: DerivedNames,
        mode: LayoutMode,
    ) -> Path:
        """Seed ``package.json`` in *root* and stamp the project identity on it.

        Raises:
            MissingTemplateError: If the initializer left no ``package.json``.
        """
        self.initializer.init_manifest(root)
        path = expect_file(root / MANIFEST_FILE, Stage.WRITE_MANIFEST)
        manifest = apply_base_fields(load_json(path), options, names, mode)
        return save_json(manifest, path, self.indent)

    def expand_manifest_for_multi_mode(
        self,
        root: Path,
        options: ProjectOptions,
        names: DerivedNames,
        mode: LayoutMode,
    ) -> list[Path]:
        """Write one manifest per sub-package.  Does nothing in single mode."""
        if mode is not LayoutMode.MULTI:
            return []
        base = load_json(expect_file(root / MANIFEST_FILE, Stage.EXPAND_MANIFEST))
        written: list[Path] = []
        for folder, manifest in derive_package_manifests(base, options, names):
            target = root / PACKAGES_DIR / folder / MANIFEST_FILE
            written.append(save_json(manifest, target, self.indent))
        return written


# ---------------------------------------------------------------------------
# Pure transforms
# ---------------------------------------------------------------------------


def apply_base_fields(
    template: dict[str, Any],
    options: ProjectOptions,
    names: DerivedNames,
    mode: LayoutMode,
) -> dict[str, Any]:
    """Return a copy of *template* carrying the project's name, author and description."""
    manifest = copy.deepcopy(template)
    manifest["name"] = names.manifest_name
    if options.author:
        manifest["author"] = options.author
    if options.description:
        manifest["description"] = options.description
    if mode is LayoutMode.MULTI:
        manifest["private"] = True
    return manifest


def derive_package_manifests(
    base: dict[str, Any],
    options: ProjectOptions,
    names: DerivedNames,
) -> list[tuple[str, dict[str, Any]]]:
    """Build the sub-package manifests of a multi-package project.

    Returns ``(folder, manifest)`` pairs in dependency order.  The main
    package is filed under ``names.main_suffix``.
    """
    version = base.get("version") or DEFAULT_VERSION
    pin = f"^{version}"

    plan: list[tuple[str, str, dict[str, str]]] = [
        (TYPINGS, names.typings_name, {}),
        (HELPERS, names.helpers_name, {names.typings_name: pin}),
        (
            names.main_suffix,
            names.main_name,
            {names.helpers_name: pin, names.typings_name: pin},
        ),
    ]
    if options.include_tests:
        plan.append((TEST, names.test_name, {names.main_name: pin}))

    return [
        (folder, _package_manifest(base, name, dependencies))
        for folder, name, dependencies in plan
    ]


def _package_manifest(
    base: dict[str, Any], name: str, dependencies: dict[str, str]
) -> dict[str, Any]:
    manifest = copy.deepcopy(base)
    manifest.pop("scripts", None)
    manifest.pop("private", None)
    manifest["type"] = "commonjs"
    manifest["main"] = BUILD_MAIN
    manifest["types"] = BUILD_TYPES
    manifest["dependencies"] = dict(dependencies)
    manifest["files"] = ["build"]
    manifest["name"] = name
    return manifest
