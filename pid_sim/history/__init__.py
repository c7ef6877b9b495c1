"""Sample records and the bounded history buffer."""

from pid_sim.history.history_buffer import ControllerSample, Sample, HistoryBuffer

__all__ = [
    "ControllerSample",
    "Sample",
    "HistoryBuffer",
]
