"""
Response metrics computed from one controller's buffered samples.
Uses numpy for vectorized calculations.

Undefined results are reported as None, never as a numeric sentinel.
"""

from typing import Dict, Optional, Sequence
from dataclasses import dataclass, asdict
import numpy as np

from pid_sim.history.history_buffer import ControllerSample
from pid_sim.utils.validators import DomainError, validate_positive, validate_real

STEADY_STATE_TOLERANCE = 0.01
SETTLING_BAND = 0.05
DEFAULT_DT = 0.1


@dataclass(frozen=True)
class AnalysisResult:
    """Metrics for one controller. None means undefined."""
    steady_state_error: Optional[float]
    overshoot: Optional[float]
    settling_time: Optional[float]
    current_value: Optional[float] = None

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


def _process_variables(samples: Sequence[ControllerSample]) -> np.ndarray:
    return np.array([s.process_variable for s in samples], dtype=float)


def steady_state_error(samples: Sequence[ControllerSample]) -> Optional[float]:
    """Error of the latest sample when below tolerance, else None."""
    if not samples:
        return None
    error = samples[-1].error
    if abs(error) < STEADY_STATE_TOLERANCE:
        return float(error)
    return None


def overshoot(samples: Sequence[ControllerSample], setpoint: float) -> Optional[float]:
    """
    Peak process variable minus the setpoint.

    Negative when the response never reaches the setpoint.
    """
    setpoint = validate_real(setpoint, "setpoint")
    if not samples:
        return None
    return float(np.max(_process_variables(samples)) - setpoint)


def settling_index(samples: Sequence[ControllerSample], setpoint: float) -> int:
    """
    First index i > 0 from which every sample stays inside the band.

    The band is |pv - setpoint| < 0.05 * |setpoint| (strict), so a zero
    setpoint never settles. Returns -1 when no such index exists.
    """
    setpoint = validate_real(setpoint, "setpoint")
    pv = _process_variables(samples)
    if len(pv) < 2:
        return -1

    within_band = np.abs(pv - setpoint) < SETTLING_BAND * abs(setpoint)

    # Last index outside the band; everything after it is inside.
    outside = np.where(~within_band)[0]
    if len(outside) == 0:
        return 1
    candidate = int(outside[-1]) + 1
    if candidate >= len(pv):
        return -1
    return candidate


def settling_time(
    samples: Sequence[ControllerSample],
    setpoint: float,
    dt: float = DEFAULT_DT
) -> Optional[float]:
    """Settling index times dt, or None when the response never settles."""
    dt = validate_positive(dt, "dt", DomainError)
    index = settling_index(samples, setpoint)
    if index < 0:
        return None
    return index * dt


def analyze(
    samples: Sequence[ControllerSample],
    setpoint: float,
    dt: float = DEFAULT_DT
) -> AnalysisResult:
    """
    Compute all metrics for one controller.

    Args:
        samples: The controller's samples, oldest first
        setpoint: Current setpoint
        dt: Loop time step

    Returns:
        AnalysisResult
    """
    samples = list(samples)
    return AnalysisResult(
        steady_state_error=steady_state_error(samples),
        overshoot=overshoot(samples, setpoint),
        settling_time=settling_time(samples, setpoint, dt),
        current_value=float(samples[-1].process_variable) if samples else None,
    )
