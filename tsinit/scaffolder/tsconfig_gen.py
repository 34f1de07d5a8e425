"""TypeScript compiler configuration generation.

``tsc --init`` provides the seed ``tsconfig.json`` (JSON with comments).  Its
compiler options are normalised into the shared ``tsconfig.base.json`` and
then every build directory gets a small ``tsconfig.json`` that extends the
base and points at the configs it depends on, so ``tsc --build`` follows the
same graph as the package dependencies.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import json5

from tsinit.utils import save_json

from .initializers import TSCONFIG_FILE, Initializer, expect_file
from .manifest_gen import PACKAGES_DIR
from .models import LayoutMode, Stage
from .naming import HELPERS, TEST, TYPINGS, main_folder_name

BASE_CONFIG_FILE = "tsconfig.base.json"

# Applied on top of whatever the installed tsc generated.
BASE_COMPILER_OPTIONS: dict[str, Any] = {
    "target": "ESNEXT",
    "module": "commonjs",
    "lib": [
        "ES5",
        "ES2015",
        "ES2016",
        "ES2017",
        "ES2018",
        "ES2019",
        "ES2020",
        "ES2021",
        "ESNEXT",
    ],
    "composite": True,
    "incremental": True,
    "declaration": True,
    "declarationMap": True,
    "sourceMap": True,
    "downlevelIteration": True,
    "removeComments": True,
    "forceConsistentCasingInFileNames": True,
    "strict": True,
    "strictNullChecks": True,
    "strictBindCallApply": True,
    "strictPropertyInitialization": True,
    "moduleResolution": "node",
    "esModuleInterop": True,
    "allowSyntheticDefaultImports": True,
    "experimentalDecorators": True,
    "emitDecoratorMetadata": True,
    "newLine": "lf",
}

# Options newer tsc versions emit that conflict with a CommonJS build.
INCOMPATIBLE_OPTIONS: tuple[str, ...] = (
    "importsNotUsedAsValues",
    "verbatimModuleSyntax",
)

SOURCE_FILES = ["@types.ts", "index.ts"]
PACKAGE_SOURCE_FILES = [f"src/{name}" for name in SOURCE_FILES]


class TsconfigGenerator:
    """Writes ``tsconfig.base.json`` and the per-directory configs."""

    def __init__(self, initializer: Initializer, indent: int = 4) -> None:
        self.initializer = initializer
        self.indent = indent

    def write_base_config(self, root: Path) -> Path:
        """Seed ``tsconfig.json`` via the initializer and derive the base config.

        Raises:
            MissingTemplateError: If the initializer left no ``tsconfig.json``.
        """
        self.initializer.init_compiler_config(root)
        seed = expect_file(root / TSCONFIG_FILE, Stage.WRITE_COMPILER_CONFIG)
        template = json5.loads(seed.read_text(encoding="utf-8"))
        return save_json(normalize_base_config(template), root / BASE_CONFIG_FILE, self.indent)

    def write_topology_configs(
        self,
        root: Path,
        include_tests: bool,
        mode: LayoutMode,
        main_folder: str | None = None,
    ) -> list[Path]:
        """Write the root ``tsconfig.json`` and one per build directory.

        The seed ``tsconfig.json`` at *root* is overwritten by the root
        aggregator config.
        """
        folder = main_folder or main_folder_name(root)
        configs = build_topology_configs(include_tests, mode, folder)
        return [save_json(config, root / rel, self.indent) for rel, config in configs.items()]


# ---------------------------------------------------------------------------
# Pure builders
# ---------------------------------------------------------------------------


def normalize_base_config(template: dict[str, Any]) -> dict[str, Any]:
    """Return *template* with the project's strict compiler options applied."""
    config = copy.deepcopy(template)
    options = config.get("compilerOptions")
    if not isinstance(options, dict):
        options = {}
    for key in INCOMPATIBLE_OPTIONS:
        options.pop(key, None)
    options.update(copy.deepcopy(BASE_COMPILER_OPTIONS))
    config["compilerOptions"] = options
    return config


def build_topology_configs(
    include_tests: bool,
    mode: LayoutMode,
    main_folder: str,
) -> dict[str, dict[str, Any]]:
    """Map relative config paths to their contents for the chosen layout."""
    if mode is LayoutMode.SINGLE:
        return _single_configs(include_tests)
    return _multi_configs(include_tests, main_folder)


def _single_configs(include_tests: bool) -> dict[str, dict[str, Any]]:
    references = [{"path": "./src"}]
    if include_tests:
        references.append({"path": "./test"})

    configs: dict[str, dict[str, Any]] = {
        TSCONFIG_FILE: {
            "files": [],
            "include": [],
            "exclude": ["build"],
            "references": references,
        },
        f"src/{TSCONFIG_FILE}": {
            "extends": "../tsconfig.base",
            "compilerOptions": {"rootDir": "./", "outDir": "../build/src"},
            "files": list(SOURCE_FILES),
        },
    }
    if include_tests:
        configs[f"test/{TSCONFIG_FILE}"] = {
            "extends": "../tsconfig.base",
            "compilerOptions": {"rootDir": "./", "outDir": "../build/test"},
            "files": ["index.ts"],
            "references": [{"path": "../src"}],
        }
    return configs


def _multi_configs(include_tests: bool, main_folder: str) -> dict[str, dict[str, Any]]:
    references = [{"path": f"./{PACKAGES_DIR}/{main_folder}/{TSCONFIG_FILE}"}]
    if include_tests:
        references.append({"path": f"./{PACKAGES_DIR}/{TEST}/{TSCONFIG_FILE}"})

    # Package folder -> folders it references, in dependency order.
    graph: list[tuple[str, list[str]]] = [
        (TYPINGS, []),
        (HELPERS, [TYPINGS]),
        (main_folder, [HELPERS, TYPINGS]),
    ]
    if include_tests:
        graph.append((TEST, [main_folder]))

    configs: dict[str, dict[str, Any]] = {
        TSCONFIG_FILE: {"files": [], "include": [], "references": references},
    }
    for folder, upstream in graph:
        config: dict[str, Any] = {
            "extends": "../../tsconfig.base",
            "compilerOptions": {"rootDir": "./src", "outDir": "./build/cjs"},
        }
        if upstream:
            config["references"] = [
                {"path": f"../{dep}/{TSCONFIG_FILE}"} for dep in upstream
            ]
        config["files"] = list(PACKAGE_SOURCE_FILES)
        configs[f"{PACKAGES_DIR}/{folder}/{TSCONFIG_FILE}"] = config
    return configs
