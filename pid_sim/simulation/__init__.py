"""Simulation loop for side-by-side PID comparison."""

from pid_sim.simulation.simulator import Simulator, SimulationState, tick
from pid_sim.simulation.config import SimulationConfig, DisturbancePolicy
from pid_sim.simulation.scenarios import random_setpoint, random_disturbance, parse_setpoint

__all__ = [
    "Simulator",
    "SimulationState",
    "tick",
    "SimulationConfig",
    "DisturbancePolicy",
    "random_setpoint",
    "random_disturbance",
    "parse_setpoint",
]
