"""Core PID controller components."""

from pid_sim.core.pid_controller import PIDController, create_controller, with_gains
from pid_sim.core.pid_params import PIDParams, PIDPresets, ControllerType

__all__ = [
    "PIDController",
    "create_controller",
    "with_gains",
    "PIDParams",
    "PIDPresets",
    "ControllerType",
]
