"""
PID Controller Parameters Configuration.
Encapsulates gains and controller type in a validated, copyable structure.
"""

from dataclasses import dataclass
from typing import Dict, Any, Union
from enum import Enum
import json

from pid_sim.utils.validators import ConfigurationError, validate_real


class ControllerType(Enum):
    """Controller type selection. Determines which gain terms are summed."""
    P = "P"
    PI = "PI"
    PD = "PD"
    PID = "PID"

    @classmethod
    def coerce(cls, value: Union["ControllerType", str]) -> "ControllerType":
        """Accept either the enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"controller_type must be one of {valid}, got {value!r}"
            ) from None


GAIN_FIELDS = ("kp", "ki", "kd")


@dataclass
class PIDParams:
    """
    PID Controller Parameters.

    Gains may be any finite real number, including negative values.
    Gains for terms excluded by ``controller_type`` are kept but ignored.
    """

    kp: float = 1.0  # Proportional gain
    ki: float = 0.0  # Integral gain
    kd: float = 0.0  # Derivative gain

    controller_type: ControllerType = ControllerType.PID

    def __post_init__(self):
        """Validate parameters after initialization."""
        self._validate()

    def _validate(self) -> None:
        for name in GAIN_FIELDS:
            setattr(self, name, validate_real(getattr(self, name), name))
        self.controller_type = ControllerType.coerce(self.controller_type)

    def copy(self, **changes) -> 'PIDParams':
        """
        Create a copy with optional parameter changes.

        Args:
            **changes: Parameters to override

        Returns:
            New PIDParams instance
        """
        unknown = set(changes) - set(GAIN_FIELDS) - {'controller_type'}
        if unknown:
            raise ConfigurationError(
                f"Unknown parameter(s): {', '.join(sorted(unknown))}"
            )
        params = {
            'kp': self.kp,
            'ki': self.ki,
            'kd': self.kd,
            'controller_type': self.controller_type,
        }
        params.update(changes)
        return PIDParams(**params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'kp': self.kp,
            'ki': self.ki,
            'kd': self.kd,
            'controller_type': self.controller_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PIDParams':
        """Create from dictionary. Enum values may be given as strings."""
        return cls().copy(**data)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'PIDParams':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        return (
            f"PIDParams(Kp={self.kp:.4f}, Ki={self.ki:.4f}, Kd={self.kd:.4f}, "
            f"type={self.controller_type.value})"
        )


class PIDPresets:
    """Common PID parameter presets."""

    @staticmethod
    def default() -> PIDParams:
        """Starting gains for a newly added controller."""
        return PIDParams(kp=1.0, ki=0.0, kd=0.0, controller_type=ControllerType.PID)

    @staticmethod
    def p_only() -> PIDParams:
        return PIDParams(kp=1.0, controller_type=ControllerType.P)

    @staticmethod
    def pi_only() -> PIDParams:
        """PI controller (no derivative)."""
        return PIDParams(kp=1.0, ki=0.5, controller_type=ControllerType.PI)

    @staticmethod
    def pd_only() -> PIDParams:
        """PD controller (no integral)."""
        return PIDParams(kp=1.0, kd=0.1, controller_type=ControllerType.PD)
