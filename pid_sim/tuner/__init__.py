"""Gain tuning from process characterization."""

from pid_sim.tuner.auto_tune import (
    ProcessCharacterization,
    PIDGains,
    DEFAULT_CHARACTERIZATION,
    ultimate_gain_and_period,
    auto_tune,
    apply_tuning,
)

__all__ = [
    "ProcessCharacterization",
    "PIDGains",
    "DEFAULT_CHARACTERIZATION",
    "ultimate_gain_and_period",
    "auto_tune",
    "apply_tuning",
]
