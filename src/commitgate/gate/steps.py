from __future__ import annotations

from dataclasses import dataclass

from ..config.loader import Command, GateConfig
from ..errors import BuildError, DocError, FormatDriftError, FormatterError, GateStepError, TestError

STEP_ORDER: tuple[str, ...] = (
    FormatterError.step,
    FormatDriftError.step,
    BuildError.step,
    DocError.step,
    TestError.step,
)


@dataclass(frozen=True)
class StepDef:
    name: str
    command: Command
    error: type[GateStepError]
    message: str


def display(command: Command) -> str:
    return " ".join(command)


def formatter_step(config: GateConfig) -> StepDef:
    return StepDef(FormatterError.step, config.formatter, FormatterError, f"{display(config.formatter)} failed")


def drift_message(config: GateConfig) -> str:
    return f"you forgot to run {display(config.formatter)}"


def command_steps(config: GateConfig) -> tuple[StepDef, ...]:
    return (
        StepDef(BuildError.step, config.build, BuildError, display(config.build)),
        StepDef(DocError.step, config.doc, DocError, display(config.doc)),
        StepDef(TestError.step, config.test, TestError, display(config.test)),
    )
