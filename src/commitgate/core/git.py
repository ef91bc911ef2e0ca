from __future__ import annotations

from pathlib import Path

from .process import run_command


def read_git_sha(repo_root: Path) -> str:
    res = run_command(["git", "rev-parse", "--short", "HEAD"], repo_root)
    sha = res.stdout.strip() if res.code == 0 else ""
    return sha or "unknown"


def find_repo_root(start: Path) -> Path | None:
    res = run_command(["git", "rev-parse", "--show-toplevel"], start)
    if res.code != 0 or not res.stdout.strip():
        return None
    return Path(res.stdout.strip()).resolve()
