"""Shared pytest fixtures for the tsinit test suite.

Provides reusable fixtures for:
- A fake toolchain initializer standing in for ``npm init -y`` / ``tsc --init``
- A ``ProjectInitializer`` wired to the fake
- Sample option records for both layout modes
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest

from tsinit.config import Config
from tsinit.scaffolder import ProjectInitializer, ProjectOptions


# ---------------------------------------------------------------------------
# Seed documents
# ---------------------------------------------------------------------------

def npm_init_manifest(folder_name: str) -> dict[str, Any]:
    """What ``npm init -y`` writes for a folder called *folder_name*."""
    return {
        "name": folder_name,
        "version": "1.0.0",
        "description": "",
        "main": "index.js",
        "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
        "keywords": [],
        "author": "",
        "license": "ISC",
    }


TSC_INIT_TSCONFIG = textwrap.dedent(
    """\
    {
      // Visit https://aka.ms/tsconfig to read more about this file
      "compilerOptions": {
        /* Language and Environment */
        "target": "es2016",                                  /* Set the JavaScript language version. */
        // "lib": [],                                        /* Specify a set of bundled library declaration files. */

        /* Modules */
        "module": "commonjs",                                /* Specify what module code is generated. */
        "verbatimModuleSyntax": true,
        "esModuleInterop": true,
        "forceConsistentCasingInFileNames": true,

        /* Type Checking */
        "strict": true,
        "skipLibCheck": true,
      }
    }
    """
)


# ---------------------------------------------------------------------------
# Fake toolchain
# ---------------------------------------------------------------------------

class FakeInitializer:
    """Writes the same seed files ``npm``/``tsc`` would, without running them.

    Set ``produce_manifest`` / ``produce_tsconfig`` to ``False`` to simulate a
    tool that exits without writing its file.
    """

    def __init__(self) -> None:
        self.produce_manifest = True
        self.produce_tsconfig = True
        self.calls: list[tuple[str, Path]] = []

    def init_manifest(self, root: Path) -> None:
        self.calls.append(("manifest", root))
        if self.produce_manifest:
            (root / "package.json").write_text(
                json.dumps(npm_init_manifest(root.name), indent=2), encoding="utf-8"
            )

    def init_compiler_config(self, root: Path) -> None:
        self.calls.append(("tsconfig", root))
        if self.produce_tsconfig:
            (root / "tsconfig.json").write_text(TSC_INIT_TSCONFIG, encoding="utf-8")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_initializer() -> FakeInitializer:
    return FakeInitializer()


@pytest.fixture
def project_initializer(fake_initializer: FakeInitializer) -> ProjectInitializer:
    """A ``ProjectInitializer`` that never shells out."""
    return ProjectInitializer(Config(), initializer=fake_initializer, quiet=True)


@pytest.fixture
def single_options() -> ProjectOptions:
    return ProjectOptions(
        name="acme-widget",
        author="Jane Doe",
        description="A widget library.",
        include_tests=True,
    )


@pytest.fixture
def multi_options() -> ProjectOptions:
    return ProjectOptions(scope="acme", name="widget", include_tests=False)
