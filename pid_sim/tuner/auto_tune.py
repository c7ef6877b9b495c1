"""
Closed-form auto-tuning from a process characterization.

Uses a Ziegler-Nichols style heuristic: an ultimate gain and period are
estimated from the process gain, time constant and dead time, then the
classic PID ratios are applied.
"""

from typing import Dict, Tuple
from dataclasses import dataclass, asdict
import logging

from pid_sim.core.pid_controller import PIDController
from pid_sim.utils.validators import DomainError, validate_positive, validate_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessCharacterization:
    """Process gain, time constant and dead time of the controlled process."""
    process_gain: float
    time_constant: float
    dead_time: float


@dataclass(frozen=True)
class PIDGains:
    """Result of a tuning rule."""
    kp: float
    ki: float
    kd: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT_CHARACTERIZATION = ProcessCharacterization(
    process_gain=1.0,
    time_constant=1.0,
    dead_time=0.1,
)


def ultimate_gain_and_period(
    characterization: ProcessCharacterization
) -> Tuple[float, float]:
    """
    Estimate ultimate gain ku and ultimate period tu.

    Raises:
        DomainError: If any characteristic is not positive
    """
    validate_type(characterization, "characterization", ProcessCharacterization)
    gain = validate_positive(characterization.process_gain, "process_gain", DomainError)
    tau = validate_positive(characterization.time_constant, "time_constant", DomainError)
    dead_time = validate_positive(characterization.dead_time, "dead_time", DomainError)

    ku = 0.6 * gain * (tau / dead_time)
    tu = 2 * dead_time
    return ku, tu


def auto_tune(characterization: ProcessCharacterization) -> PIDGains:
    """
    Derive PID gains from a process characterization.

    Args:
        characterization: Process gain, time constant and dead time

    Returns:
        PIDGains with kp, ki and kd

    Raises:
        DomainError: If dead time (or any other characteristic) is not positive
    """
    ku, tu = ultimate_gain_and_period(characterization)

    gains = PIDGains(
        kp=0.6 * ku,
        ki=1.2 * ku / tu,
        kd=0.075 * ku * tu,
    )
    logger.debug("Auto-tune %s -> ku=%.4f tu=%.4f %s", characterization, ku, tu, gains)
    return gains


def apply_tuning(controller: PIDController, gains: PIDGains) -> None:
    """Replace the controller's gains. Mode and accumulated state are kept."""
    controller.set_gains(kp=gains.kp, ki=gains.ki, kd=gains.kd)
    logger.info(
        "Applied tuned gains to %s: Kp=%.4f Ki=%.4f Kd=%.4f",
        controller.name, gains.kp, gains.ki, gains.kd
    )
