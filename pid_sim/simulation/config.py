"""
Simulation loop configuration.
"""

from dataclasses import dataclass
from typing import Dict, Any, Union
from enum import Enum
import json

from pid_sim.utils.validators import (
    ConfigurationError,
    DomainError,
    validate_positive,
    validate_real,
)


class DisturbancePolicy(Enum):
    """Where the disturbance enters the loop."""
    PLANT = "plant"  # Added to the process update only
    ERROR = "error"  # Folded into the error signal seen by the controller

    @classmethod
    def coerce(cls, value: Union["DisturbancePolicy", str]) -> "DisturbancePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"disturbance_policy must be 'plant' or 'error', got {value!r}"
            ) from None


@dataclass
class SimulationConfig:
    """
    Simulation loop settings.

    ``dt`` is loop-wide: every controller is advanced with the same step.
    """

    dt: float = 0.1
    history_length: int = 100
    disturbance_policy: DisturbancePolicy = DisturbancePolicy.PLANT
    initial_setpoint: float = 0.0
    initial_disturbance: float = 0.0

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        self.dt = validate_positive(self.dt, "dt", DomainError)

        if isinstance(self.history_length, bool) or not isinstance(self.history_length, int):
            raise ConfigurationError("history_length must be an integer")
        if self.history_length < 1:
            raise ConfigurationError("history_length must be at least 1")

        self.disturbance_policy = DisturbancePolicy.coerce(self.disturbance_policy)
        self.initial_setpoint = validate_real(self.initial_setpoint, "initial_setpoint")
        self.initial_disturbance = validate_real(
            self.initial_disturbance, "initial_disturbance"
        )

    def copy(self, **changes) -> 'SimulationConfig':
        """Create a copy with optional changes."""
        params = {
            'dt': self.dt,
            'history_length': self.history_length,
            'disturbance_policy': self.disturbance_policy,
            'initial_setpoint': self.initial_setpoint,
            'initial_disturbance': self.initial_disturbance,
        }
        unknown = set(changes) - set(params)
        if unknown:
            raise ConfigurationError(
                f"Unknown setting(s): {', '.join(sorted(unknown))}"
            )
        params.update(changes)
        return SimulationConfig(**params)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dt': self.dt,
            'history_length': self.history_length,
            'disturbance_policy': self.disturbance_policy.value,
            'initial_setpoint': self.initial_setpoint,
            'initial_disturbance': self.initial_disturbance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        return cls().copy(**data)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'SimulationConfig':
        return cls.from_dict(json.loads(json_str))
