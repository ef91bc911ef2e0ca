from __future__ import annotations

from dataclasses import dataclass, field

from ..config.loader import FailurePolicy
from ..config.schema import validate
from ..core.process import CommandResult
from ..core.result import Failure, Outcome
from ..exit_codes import ERR_GATE, OK

REPORT_SCHEMA = "commitgate.report.v1"
SUMMARY_PREFIX = "Commit hook errors: "
NO_FAILURE = "0"


@dataclass(frozen=True)
class RunResult:
    step_name: str
    outcome: Outcome
    command: CommandResult | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome.ok

    @property
    def reason(self) -> str | None:
        return self.outcome.reason if isinstance(self.outcome, Failure) else None


@dataclass
class GateReport:
    run_id: str
    failure_policy: FailurePolicy = "last"
    results: list[RunResult] = field(default_factory=list)

    def add(self, result: RunResult) -> None:
        self.results.append(result)

    @property
    def failures(self) -> list[RunResult]:
        return [row for row in self.results if not row.succeeded]

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    @property
    def failure_reason(self) -> str | None:
        """Reason of the last failing step, or of the first one under the `first` policy."""
        failures = self.failures
        if not failures:
            return None
        chosen = failures[0] if self.failure_policy == "first" else failures[-1]
        return chosen.reason

    @property
    def exit_code(self) -> int:
        return ERR_GATE if self.failed else OK

    def summary_line(self) -> str:
        return SUMMARY_PREFIX + (self.failure_reason or NO_FAILURE)


def render_text(report: GateReport, verbose: bool = False) -> str:
    lines: list[str] = []
    if verbose:
        for row in report.results:
            if row.succeeded:
                lines.append(f"PASS {row.step_name}")
            else:
                lines.append(f"FAIL {row.step_name}: {row.reason}")
    lines.append(report.summary_line())
    return "\n".join(lines)


def report_payload(report: GateReport) -> dict[str, object]:
    payload: dict[str, object] = {
        "schema_name": REPORT_SCHEMA,
        "schema_version": 1,
        "tool": "commitgate",
        "run_id": report.run_id,
        "status": "fail" if report.failed else "pass",
        "failure_policy": report.failure_policy,
        "failure_reason": report.failure_reason,
        "exit_code": report.exit_code,
        "steps": [
            {
                "name": row.step_name,
                "status": "pass" if row.succeeded else "fail",
                "reason": row.reason,
                "code": row.command.code if row.command else None,
                "duration_ms": row.command.duration_ms if row.command else None,
            }
            for row in report.results
        ],
    }
    validate(REPORT_SCHEMA, payload)
    return payload
