"""Working-tree snapshots taken around the formatter run."""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..config.loader import Command
from ..core.process import CommandRunner
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG

BEFORE_NAME = "before.diff"
AFTER_NAME = "after.diff"


@dataclass(frozen=True)
class SnapshotPair:
    before: Path
    after: Path

    def differ(self) -> bool:
        return self.before.read_bytes() != self.after.read_bytes()


@contextmanager
def snapshot_files(directory: Path | None = None) -> Iterator[SnapshotPair]:
    # private temp dir per run unless a directory is configured
    if directory is None:
        with tempfile.TemporaryDirectory(prefix="commitgate-") as td:
            yield SnapshotPair(Path(td) / BEFORE_NAME, Path(td) / AFTER_NAME)
        return
    directory.mkdir(parents=True, exist_ok=True)
    pair = SnapshotPair(directory / BEFORE_NAME, directory / AFTER_NAME)
    try:
        yield pair
    finally:
        pair.before.unlink(missing_ok=True)
        pair.after.unlink(missing_ok=True)


def capture_snapshot(run: CommandRunner, diff: Command, cwd: Path, target: Path) -> bytes:
    result = run(list(diff), cwd)
    if not result.ok:
        raise ScriptError(
            f"unable to snapshot working tree: `{' '.join(diff)}` exited {result.code}: {result.combined_output}",
            ERR_CONFIG,
            "snapshot_failed",
        )
    target.write_bytes(result.raw_stdout)
    return result.raw_stdout
