"""Pydantic v2 models shared by the scaffolding generators.

``ProjectOptions`` is the user's answers, ``LayoutMode`` picks the directory
topology and ``DerivedNames`` holds every identifier computed from the
project scope and name.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LayoutMode(str, Enum):
    """Directory topology of the generated project."""
    SINGLE = "single"
    MULTI = "multi"


class Stage(str, Enum):
    """Generation stages, in the order the orchestrator runs them."""
    CLEAR_ROOT = "clear root"
    WRITE_MANIFEST = "write manifest"
    WRITE_AUX_FILES = "write aux files"
    BUILD_SKELETON = "build skeleton"
    WRITE_COMPILER_CONFIG = "write compiler config"
    EXPAND_MANIFEST = "expand manifest"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class ProjectOptions(BaseModel):
    """Answers describing the project to generate.

    ``name=None`` means "not supplied" and is filled in by the orchestrator
    from the root directory name.  An explicitly empty name is kept as-is so
    the orchestrator can reject it.
    """
    model_config = ConfigDict(frozen=True)

    scope: Optional[str] = Field(default=None, description="Organisation scope, e.g. 'acme'")
    name: Optional[str] = Field(default=None, description="Project name")
    description: Optional[str] = Field(default=None, description="Manifest description")
    author: Optional[str] = Field(default=None, description="Manifest author")
    include_tests: bool = Field(default=True, description="Generate a test folder/package")

    @field_validator("scope")
    @classmethod
    def _blank_scope_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class DerivedNames(BaseModel):
    """Identifiers derived from ``(scope, name)``.  Never persisted."""
    model_config = ConfigDict(frozen=True)

    manifest_name: str = Field(..., description="'@scope/name' or 'name', lowercased")
    namespace: str = Field(..., description="PascalCase global declaration namespace")
    typings_name: str = Field(..., description="Manifest name of the typings package")
    helpers_name: str = Field(..., description="Manifest name of the helpers package")
    main_name: str = Field(..., description="Manifest name of the main package")
    test_name: str = Field(..., description="Manifest name of the test package")
    main_suffix: str = Field(..., description="Folder the main package manifest is written to")
    typings_import: str = Field(..., description="Import specifier of the typings package")


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------

class InitResult(BaseModel):
    """Outcome of a successful ``ProjectInitializer.init`` run."""
    root: Path
    mode: LayoutMode
    options: ProjectOptions
    names: DerivedNames
    stages_completed: list[Stage] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list, description="Generated files, relative to root")
