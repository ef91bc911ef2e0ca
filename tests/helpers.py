from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from commitgate.config.loader import DEFAULT_CONFIG, GateConfig
from commitgate.core.context import RunContext
from commitgate.core.process import CommandResult

STEP_BY_COMMAND = {
    DEFAULT_CONFIG.formatter: "format",
    DEFAULT_CONFIG.build: "build",
    DEFAULT_CONFIG.doc: "doc",
    DEFAULT_CONFIG.test: "test",
}

MESSAGES = {
    "format": "cargo fmt failed",
    "format-drift": "you forgot to run cargo fmt",
    "build": "cargo build",
    "doc": "cargo doc",
    "test": "cargo test",
}

GIT = shutil.which("git")


@dataclass
class FakeToolchain:
    """Stands in for git and cargo; the second `git diff` differs when `drift` is set."""

    failing: set[str] = field(default_factory=set)
    drift: bool = False
    diff_code: int = 0
    config: GateConfig = DEFAULT_CONFIG
    calls: list[tuple[str, ...]] = field(default_factory=list)
    diff_calls: int = 0

    def __call__(self, cmd: list[str], cwd: Path) -> CommandResult:
        key = tuple(cmd)
        self.calls.append(key)
        if key == self.config.diff:
            self.diff_calls += 1
            text = "diff --git a/src/lib.rs b/src/lib.rs\n+pub fn edited() {}\n"
            if self.drift and self.diff_calls > 1:
                text += "+    reformatted();\n"
            return CommandResult(self.diff_code, text if self.diff_code == 0 else "", "", 1)
        name = {self.config.formatter: "format", self.config.build: "build", self.config.doc: "doc", self.config.test: "test"}[key]
        code = 101 if name in self.failing else 0
        return CommandResult(code, "", f"error: {name} broke" if code else "", 3)

    def step_calls(self) -> list[str]:
        return [STEP_BY_COMMAND.get(call, "diff") for call in self.calls]


def make_ctx(repo_root: Path, run_id: str = "pytest-run") -> RunContext:
    return RunContext(
        run_id=run_id,
        repo_root=repo_root,
        output_format="text",
        verbose=False,
        quiet=True,
        log_json=False,
        git_sha="unknown",
    )


def git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", "-c", "user.name=pytest", "-c", "user.email=pytest@example.invalid", *args],
        cwd=repo,
        text=True,
        capture_output=True,
        check=True,
    )
    return proc.stdout


def init_repo(repo: Path, files: dict[str, str]) -> Path:
    repo.mkdir(parents=True, exist_ok=True)
    git(repo, "init", "-q")
    for name, text in files.items():
        (repo / name).write_text(text, encoding="utf-8")
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", "initial")
    return repo
