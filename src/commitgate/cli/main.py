from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .. import __version__
from ..config.loader import load_config
from ..core.context import RunContext
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG, ERR_INTERNAL
from ..gate.runner import run_gate
from .output import emit_report, render_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commitgate",
        description="Pre-commit gate: fail when the formatter changes the working tree, then run build, docs and tests.",
    )
    parser.add_argument("--version", action="version", version=f"commitgate {__version__}")
    parser.add_argument("--config", help="config file (.toml or .yaml); defaults to .commitgate.yaml or pyproject.toml")
    parser.add_argument("--cwd", help="run as if started in this directory")
    parser.add_argument("--format", choices=["text", "json"], help="report format (default: text)")
    parser.add_argument("--json", action="store_true", help="shorthand for --format json")
    parser.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    parser.add_argument("--run-id", help="run identifier (default: $RUN_ID or a timestamped id)")
    parser.add_argument("--failure-policy", choices=["last", "first"], help="which failing step names the run")
    parser.add_argument("--fail-fast", action="store_true", help="stop at the first failing step")
    parser.add_argument("--snapshot-dir", help="write before.diff/after.diff here instead of a temp dir")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="print one line per step")
    verbosity.add_argument("--quiet", action="store_true", help="suppress logs and command output")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.format and ns.json and ns.format != "json":
        parser.error("conflicting output flags: use either --format json or --json")
    as_json = bool(ns.json or ns.format == "json")
    ctx: RunContext | None = None
    try:
        if ns.cwd:
            if not Path(ns.cwd).is_dir():
                raise ScriptError(f"--cwd is not a directory: {ns.cwd}", ERR_CONFIG, "usage")
            os.chdir(ns.cwd)
        ctx = RunContext.from_args(
            ns.run_id,
            output_format="json" if as_json else "text",
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
        )
        config = load_config(ctx.repo_root, Path(ns.config) if ns.config else None).with_overrides(
            failure_policy=ns.failure_policy,
            fail_fast=True if ns.fail_fast else None,
            snapshot_dir=(ctx.repo_root / ns.snapshot_dir) if ns.snapshot_dir else None,
        )
        report = run_gate(ctx, config)
        emit_report(report, as_json=as_json, verbose=ctx.verbose, quiet=ctx.quiet)
        return report.exit_code
    except ScriptError as exc:
        print(
            render_error(
                as_json=as_json,
                message=str(exc),
                code=exc.code,
                kind=exc.kind,
                run_id=(ctx.run_id if ctx else ""),
            ),
            file=sys.stderr,
        )
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(
                as_json=as_json,
                message=f"internal error: {exc}",
                code=ERR_INTERNAL,
                kind="internal_error",
                run_id=(ctx.run_id if ctx else ""),
            ),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
