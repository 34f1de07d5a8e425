"""Derived identifiers for a project.

Every name the generators need (manifest names, the declaration namespace,
sub-package names, the typings import specifier) is computed here once from
``(scope, name)`` and passed around as a ``DerivedNames`` value.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .models import DerivedNames, ProjectOptions

# Sub-package folders of a multi-package project, in dependency order.
TYPINGS = "typings"
HELPERS = "helpers"
TEST = "test"


def manifest_name(scope: Optional[str], name: str) -> str:
    """``'@scope/name'`` when scoped, otherwise ``'name'``; always lowercased."""
    if scope:
        return f"@{scope}/{name.lower()}"
    return name.lower()


def namespace_identifier(scope: Optional[str], name: str) -> str:
    """PascalCase the hyphenated name, prefixed by the uppercased scope.

    ``('acme', 'my-lib')`` -> ``'ACMEMyLib'``.
    """
    pascal = "".join(segment[:1].upper() + segment[1:] for segment in name.split("-"))
    if scope:
        return scope.upper() + pascal
    return pascal


def main_package_suffix(scope: Optional[str], name: str) -> str:
    """Folder name used for the main package manifest in multi mode."""
    if scope:
        return name
    if "-" in name:
        return "-".join(name.split("-")[1:])
    return name


def derive_names(options: ProjectOptions) -> DerivedNames:
    """Compute every derived identifier for a normalized options record."""
    if not options.name:
        raise ValueError("derive_names requires a non-empty project name")
    base = manifest_name(options.scope, options.name)
    return DerivedNames(
        manifest_name=base,
        namespace=namespace_identifier(options.scope, options.name),
        typings_name=f"{base}-{TYPINGS}",
        helpers_name=f"{base}-{HELPERS}",
        main_name=base,
        test_name=f"{base}-{TEST}",
        main_suffix=main_package_suffix(options.scope, options.name),
        typings_import=f"{base}-{TYPINGS}",
    )


def split_base_name(base_name: str) -> tuple[Optional[str], str]:
    """Split ``'scope-rest-of-name'`` at the first hyphen.

    Returns ``(None, base_name)`` when there is nothing to split.
    """
    if "-" not in base_name:
        return None, base_name
    scope, _, rest = base_name.partition("-")
    return scope, rest


def main_folder_name(root: str | Path) -> str:
    """On-disk folder of the main package: the root directory's base name."""
    return Path(root).name
