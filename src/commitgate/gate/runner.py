"""Drift-checked command runner.

Runs the formatter between two snapshots of the uncommitted change set, then
build, doc and test. Every step runs even after an earlier failure unless
``fail_fast`` is set; each outcome is recorded on the report in run order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from ..config.loader import GateConfig
from ..core.context import RunContext
from ..core.logging import log_event
from ..core.process import CommandResult, CommandRunner, run_command
from ..core.result import Failure, Success
from ..errors import FormatDriftError, GateStepError
from .report import GateReport, RunResult
from .snapshot import SnapshotPair, capture_snapshot, snapshot_files
from .steps import StepDef, command_steps, drift_message, formatter_step


class DriftCheckedRunner:
    def __init__(self, ctx: RunContext, config: GateConfig, run: CommandRunner | None = None) -> None:
        self.ctx = ctx
        self.config = config
        self._run: CommandRunner = run or self._run_logged

    def _run_logged(self, cmd: list[str], cwd: Path) -> CommandResult:
        return run_command(cmd, cwd, self.ctx)

    @property
    def cwd(self) -> Path:
        return self.ctx.repo_root

    def run(self) -> GateReport:
        report = GateReport(run_id=self.ctx.run_id, failure_policy=self.config.failure_policy)
        log_event(
            self.ctx,
            "info",
            "gate",
            "gate-start",
            config=self.config.source,
            failure_policy=self.config.failure_policy,
            fail_fast=self.config.fail_fast,
        )
        with snapshot_files(self.config.snapshot_dir) as snapshots:
            self._format_drift_check(report, snapshots)
            for step in command_steps(self.config):
                if self._should_stop(report):
                    break
                self._record(report, step.name, lambda step=step: self._invoke(step))
        log_event(
            self.ctx,
            "info" if not report.failed else "error",
            "gate",
            "gate-finish",
            status="fail" if report.failed else "pass",
            steps=len(report.results),
            reason=report.failure_reason,
        )
        return report

    def _should_stop(self, report: GateReport) -> bool:
        return self.config.fail_fast and report.failed

    def _invoke(self, step: StepDef) -> CommandResult:
        result = self._run(list(step.command), self.cwd)
        if not result.ok:
            raise step.error(step.message, result)
        return result

    def _check_drift(self, snapshots: SnapshotPair) -> None:
        capture_snapshot(self._run, self.config.diff, self.cwd, snapshots.after)
        if snapshots.differ():
            raise FormatDriftError(drift_message(self.config))

    def _format_drift_check(self, report: GateReport, snapshots: SnapshotPair) -> None:
        capture_snapshot(self._run, self.config.diff, self.cwd, snapshots.before)
        step = formatter_step(self.config)
        self._record(report, step.name, lambda: self._invoke(step))
        if self._should_stop(report):
            return
        self._record(report, FormatDriftError.step, lambda: self._check_drift(snapshots))

    def _record(self, report: GateReport, name: str, action: Callable[[], CommandResult | None]) -> None:
        log_event(self.ctx, "info", "gate", "step-start", step=name)
        try:
            result = action()
            row = RunResult(name, Success(), result)
        except GateStepError as exc:
            row = RunResult(name, Failure(str(exc)), exc.result)
        report.add(row)
        log_event(
            self.ctx,
            "info" if row.succeeded else "warn",
            "gate",
            "step-finish",
            step=name,
            status="pass" if row.succeeded else "fail",
            reason=row.reason,
        )


def run_gate(ctx: RunContext, config: GateConfig, run: CommandRunner | None = None) -> GateReport:
    return DriftCheckedRunner(ctx, config, run).run()
