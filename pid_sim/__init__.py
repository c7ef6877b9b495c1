"""
PID Loop Simulation Library
===========================

Simulates P, PI, PD and PID controllers acting on an integrator process:
- Controller update with mode-selected gain terms
- Fixed-step simulation loop driving several controllers side by side
- Bounded sample history with FIFO eviction
- Ziegler-Nichols style auto-tuning from a process characterization
- Steady-state error, overshoot and settling time analysis
"""

from pid_sim.core.pid_controller import PIDController, create_controller, with_gains
from pid_sim.core.pid_params import PIDParams, ControllerType
from pid_sim.history.history_buffer import HistoryBuffer, Sample, ControllerSample
from pid_sim.simulation.simulator import Simulator, SimulationState
from pid_sim.simulation.config import SimulationConfig, DisturbancePolicy
from pid_sim.tuner.auto_tune import ProcessCharacterization, PIDGains, auto_tune
from pid_sim.analyzer.metrics import AnalysisResult, analyze
from pid_sim.utils.validators import ValidationError, DomainError, ConfigurationError

__version__ = "1.0.0"
__all__ = [
    "PIDController",
    "create_controller",
    "with_gains",
    "PIDParams",
    "ControllerType",
    "HistoryBuffer",
    "Sample",
    "ControllerSample",
    "Simulator",
    "SimulationState",
    "SimulationConfig",
    "DisturbancePolicy",
    "ProcessCharacterization",
    "PIDGains",
    "auto_tune",
    "AnalysisResult",
    "analyze",
    "ValidationError",
    "DomainError",
    "ConfigurationError",
]
