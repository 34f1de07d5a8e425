"""tsinit scaffolder -- generates TypeScript project structures.

This module takes a ``ProjectOptions`` record and a ``LayoutMode`` and
renders a ready-to-build project directory: ``package.json``, ``tsconfig``
project references, ``.gitignore``, ``.prettierrc`` and a source skeleton,
either as a single package or as a ``packages/`` workspace.

Quick usage::

    from tsinit.scaffolder import LayoutMode, ProjectInitializer, ProjectOptions

    options = ProjectOptions(scope="acme", name="widget", include_tests=True)
    result = ProjectInitializer().init("/tmp/widget", options, LayoutMode.MULTI)
"""

from tsinit.scaffolder.errors import InvalidOptionsError, MissingTemplateError, ScaffoldError
from tsinit.scaffolder.generator import ProjectInitializer, normalize_options
from tsinit.scaffolder.initializers import ToolchainInitializer
from tsinit.scaffolder.models import DerivedNames, InitResult, LayoutMode, ProjectOptions, Stage
from tsinit.scaffolder.naming import derive_names
from tsinit.scaffolder.templates import TemplateRenderer

__all__ = [
    "DerivedNames",
    "InitResult",
    "InvalidOptionsError",
    "LayoutMode",
    "MissingTemplateError",
    "ProjectInitializer",
    "ProjectOptions",
    "ScaffoldError",
    "Stage",
    "TemplateRenderer",
    "ToolchainInitializer",
    "derive_names",
    "normalize_options",
]
