from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exit_codes import ERR_INTERNAL

if TYPE_CHECKING:
    from .core.process import CommandResult


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class GateStepError(Exception):
    """Failure of one gated step; recorded on the report, never fatal to the run."""

    step = "step"

    def __init__(self, message: str, result: CommandResult | None = None) -> None:
        super().__init__(message)
        self.result = result


class FormatterError(GateStepError):
    step = "format"


class FormatDriftError(GateStepError):
    """The formatter succeeded but changed content that was not already in the change set."""

    step = "format-drift"


class BuildError(GateStepError):
    step = "build"


class DocError(GateStepError):
    step = "doc"


class TestError(GateStepError):
    __test__ = False
    step = "test"
