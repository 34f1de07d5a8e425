"""External initializers that seed ``package.json`` and ``tsconfig.json``.

The generators never write these seed files themselves: they ask an
initializer to run ``npm init -y`` / ``tsc --init`` inside the project root,
check that the expected file appeared (``expect_file``) and then
post-process it.  Tests swap in an object with the same two methods.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from rich.markup import escape

from tsinit.config import Config
from tsinit.utils import print_warning, run_command

from .errors import MissingTemplateError
from .models import Stage

MANIFEST_FILE = "package.json"
TSCONFIG_FILE = "tsconfig.json"


class Initializer(Protocol):
    """Anything able to produce the two seed files inside a root directory."""

    def init_manifest(self, root: Path) -> None: ...

    def init_compiler_config(self, root: Path) -> None: ...


class ToolchainInitializer:
    """Runs the real ``npm`` and ``tsc`` initializers."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    def init_manifest(self, root: Path) -> None:
        """Run ``npm init -y`` in *root*."""
        self._run([self.config.npm_command, "init", "-y"], root)

    def init_compiler_config(self, root: Path) -> None:
        """Run ``tsc --init`` in *root*."""
        self._run([self.config.tsc_command, "--init"], root)

    def _run(self, cmd: list[str], root: Path) -> None:
        try:
            returncode, _, stderr = run_command(
                cmd, cwd=root, timeout=self.config.command_timeout
            )
        except FileNotFoundError:
            # expect_file turns this into a MissingTemplateError
            print_warning(f"  '{cmd[0]}' was not found on PATH")
            return
        if returncode != 0:
            print_warning(f"  {' '.join(cmd)} exited with {returncode}: {escape(stderr)}")


def expect_file(path: Path, stage: Stage) -> Path:
    """Return *path* if it exists, otherwise raise ``MissingTemplateError``."""
    if not path.is_file():
        raise MissingTemplateError(stage, path)
    return path
