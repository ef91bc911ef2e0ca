"""CLI payload output helpers."""

from __future__ import annotations

import json
import sys

from ..gate.report import GateReport, render_text, report_payload


def dumps_json(payload: dict[str, object], pretty: bool = False) -> str:
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True)
    return json.dumps(payload, sort_keys=True)


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error", run_id: str = "") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "commitgate.error.v1",
                "schema_version": 1,
                "tool": "commitgate",
                "status": "error",
                "run_id": run_id,
                "errors": [{"code": code, "kind": kind, "message": message}],
            }
        )
    return message


def emit_failed_output(report: GateReport) -> None:
    for row in report.failures:
        if row.command is None or not row.command.combined_output:
            continue
        sys.stderr.write(f"--- {row.step_name} output ---\n{row.command.combined_output}\n")


def emit_report(report: GateReport, *, as_json: bool, verbose: bool, quiet: bool) -> None:
    if as_json:
        print(dumps_json(report_payload(report)))
        return
    if not quiet:
        emit_failed_output(report)
    print(render_text(report, verbose=verbose))
