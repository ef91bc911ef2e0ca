from .report import GateReport, RunResult
from .runner import DriftCheckedRunner, run_gate

__all__ = ["DriftCheckedRunner", "GateReport", "RunResult", "run_gate"]
