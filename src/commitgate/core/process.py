from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext

ERR_COMMAND_NOT_EXECUTABLE = 126
ERR_COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int
    stdout_bytes: bytes | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def raw_stdout(self) -> bytes:
        """Undecoded stdout; falls back to the UTF-8 encoding of `stdout`."""
        return self.stdout_bytes if self.stdout_bytes is not None else self.stdout.encode("utf-8")

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


CommandRunner = Callable[[list[str], Path], CommandResult]


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def run_command(cmd: list[str], cwd: Path, ctx: RunContext | None = None) -> CommandResult:
    started = time.monotonic()
    try:
        proc = subprocess.run(cmd, cwd=cwd, capture_output=True, check=False)
        result = CommandResult(
            code=proc.returncode,
            stdout=_decode(proc.stdout),
            stderr=_decode(proc.stderr),
            duration_ms=int((time.monotonic() - started) * 1000),
            stdout_bytes=proc.stdout or b"",
        )
    except FileNotFoundError as exc:
        result = CommandResult(
            code=ERR_COMMAND_NOT_FOUND,
            stdout="",
            stderr=f"{cmd[0]}: command not found ({exc.strerror or exc})",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    except OSError as exc:
        result = CommandResult(
            code=ERR_COMMAND_NOT_EXECUTABLE,
            stdout="",
            stderr=f"{cmd[0]}: cannot execute ({exc.strerror or exc})",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    if ctx is not None:
        log_event(
            ctx,
            "info" if result.ok else "warn",
            "process",
            "run-command",
            command=" ".join(cmd),
            cwd=str(cwd),
            code=result.code,
            duration_ms=result.duration_ms,
        )
    return result
