"""Step outcomes.

A gated step either succeeds or fails with a human-readable reason; the runner
records one of these per step instead of overwriting a shared failure flag.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    reason: str

    @property
    def ok(self) -> bool:
        return False


Outcome = Success | Failure
