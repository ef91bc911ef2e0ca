from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .clock import utc_now
from .git import find_repo_root, read_git_sha

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    repo_root: Path
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool
    git_sha: str

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        cwd: Path | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        start = (cwd or Path.cwd()).resolve()
        repo_root = find_repo_root(start) or start
        git_sha = read_git_sha(repo_root)
        default_run = f"commitgate-{utc_now().strftime('%Y%m%d-%H%M%S')}-{git_sha}"
        return cls(
            run_id=run_id or os.environ.get("RUN_ID", default_run),
            repo_root=repo_root,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
            git_sha=git_sha,
        )
