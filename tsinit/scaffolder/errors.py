"""Exceptions raised while scaffolding a project."""

from __future__ import annotations

from .models import Stage


class ScaffoldError(Exception):
    """Raised when a generation stage fails irrecoverably."""

    def __init__(self, stage: Stage, message: str) -> None:
        self.stage = stage
        super().__init__(f"Stage '{stage.value}': {message}")


class InvalidOptionsError(ScaffoldError):
    """The options record cannot be used (e.g. an empty project name)."""

    def __init__(self, message: str) -> None:
        super().__init__(Stage.CLEAR_ROOT, message)


class MissingTemplateError(ScaffoldError):
    """An external initializer ran but its expected output file is absent."""

    def __init__(self, stage: Stage, path: object) -> None:
        self.path = path
        super().__init__(stage, f"expected file was not produced: {path}")
