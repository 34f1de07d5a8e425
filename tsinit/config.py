"""tsinit configuration.

Typed settings for the external toolchain and the generated output.  Uses a
Pydantic v2 model so values are validated at construction time and can be
round-tripped through JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Global tsinit configuration.

    Created once by the CLI (or by tests) and handed to the
    ``ToolchainInitializer`` and the ``ProjectInitializer``.
    """

    npm_command: str = Field(default="npm", description="Executable used for `npm init -y`")
    tsc_command: str = Field(default="tsc", description="Executable used for `tsc --init`")
    command_timeout: int = Field(
        default=120, ge=1, description="Timeout in seconds for each external initializer"
    )
    json_indent: int = Field(default=4, ge=0, description="Indentation of generated JSON files")
    output_dir: Path = Field(
        default=Path("."), description="Parent directory in which new projects are created"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            TSINIT_NPM_COMMAND, TSINIT_TSC_COMMAND, TSINIT_COMMAND_TIMEOUT,
            TSINIT_JSON_INDENT, TSINIT_OUTPUT_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TSINIT_NPM_COMMAND"):
            kwargs["npm_command"] = os.environ["TSINIT_NPM_COMMAND"]
        if os.environ.get("TSINIT_TSC_COMMAND"):
            kwargs["tsc_command"] = os.environ["TSINIT_TSC_COMMAND"]
        if os.environ.get("TSINIT_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["TSINIT_COMMAND_TIMEOUT"])
        if os.environ.get("TSINIT_JSON_INDENT"):
            kwargs["json_indent"] = int(os.environ["TSINIT_JSON_INDENT"])
        if os.environ.get("TSINIT_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["TSINIT_OUTPUT_DIR"])
        return cls(**kwargs)
