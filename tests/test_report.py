from __future__ import annotations

import pytest

from commitgate.config.schema import validate
from commitgate.core.process import CommandResult
from commitgate.core.result import Failure, Success
from commitgate.errors import ScriptError
from commitgate.exit_codes import ERR_VALIDATION
from commitgate.gate.report import GateReport, RunResult, render_text, report_payload


def _report(policy: str = "last") -> GateReport:
    report = GateReport(run_id="r-1", failure_policy=policy)  # type: ignore[arg-type]
    report.add(RunResult("format", Success(), CommandResult(0, "", "", 12)))
    report.add(RunResult("format-drift", Failure("you forgot to run cargo fmt")))
    report.add(RunResult("build", Failure("cargo build"), CommandResult(101, "", "error[E0425]", 340)))
    return report


def test_run_result_exposes_reason_only_on_failure() -> None:
    assert RunResult("doc", Success()).reason is None
    assert RunResult("doc", Failure("cargo doc")).reason == "cargo doc"
    assert RunResult("doc", Failure("cargo doc")).succeeded is False


def test_render_text_verbose_lists_each_step() -> None:
    assert render_text(_report(), verbose=True).splitlines() == [
        "PASS format",
        "FAIL format-drift: you forgot to run cargo fmt",
        "FAIL build: cargo build",
        "Commit hook errors: cargo build",
    ]


def test_render_text_default_is_summary_only() -> None:
    assert render_text(GateReport(run_id="r-2")) == "Commit hook errors: 0"


def test_payload_shape() -> None:
    payload = report_payload(_report("first"))
    assert payload["schema_name"] == "commitgate.report.v1"
    assert payload["status"] == "fail"
    assert payload["failure_reason"] == "you forgot to run cargo fmt"
    assert payload["exit_code"] == 1
    steps = payload["steps"]
    assert isinstance(steps, list)
    assert steps[0] == {"name": "format", "status": "pass", "reason": None, "code": 0, "duration_ms": 12}
    assert steps[1]["code"] is None
    assert steps[2]["code"] == 101


def test_passing_payload_has_null_reason() -> None:
    payload = report_payload(GateReport(run_id="r-3"))
    assert payload["status"] == "pass"
    assert payload["failure_reason"] is None
    assert payload["exit_code"] == 0


def test_report_schema_rejects_unknown_step_names() -> None:
    payload = report_payload(GateReport(run_id="r-4"))
    payload["steps"] = [{"name": "lint", "status": "pass", "reason": None, "code": 0, "duration_ms": 1}]
    with pytest.raises(ScriptError) as err:
        validate("commitgate.report.v1", payload)
    assert err.value.code == ERR_VALIDATION
    assert "steps/0/name" in str(err.value)
