"""Response analysis over buffered samples."""

from pid_sim.analyzer.metrics import (
    AnalysisResult,
    steady_state_error,
    overshoot,
    settling_index,
    settling_time,
    analyze,
)

__all__ = [
    "AnalysisResult",
    "steady_state_error",
    "overshoot",
    "settling_index",
    "settling_time",
    "analyze",
]
