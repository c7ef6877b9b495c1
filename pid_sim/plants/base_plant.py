"""
Base plant model abstract class.
Defines the interface for process models driven by the simulation loop.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

from pid_sim.utils.validators import DomainError, validate_positive, validate_real


class BasePlant(ABC):
    """
    Abstract base class for plant/process models.

    All plant implementations must inherit from this class
    and implement the required methods.
    """

    def __init__(self, sample_time: float = 0.1):
        """
        Initialize base plant.

        Args:
            sample_time: Sample time, must be positive
        """
        self._dt = validate_positive(sample_time, "sample_time", DomainError)
        self._output: float = 0.0
        self._time: float = 0.0
        self._disturbance: float = 0.0

    @abstractmethod
    def update(self, control_input: float) -> float:
        """
        Advance the plant by one sample with the given control input.

        Args:
            control_input: Control signal from controller

        Returns:
            New process variable
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset plant to initial state."""
        pass

    @abstractmethod
    def set_output(self, value: float) -> None:
        """Force the process variable to a given value."""
        pass

    @property
    def output(self) -> float:
        """Current process variable."""
        return self._output

    @property
    def sample_time(self) -> float:
        return self._dt

    @property
    def time(self) -> float:
        """Current simulation time."""
        return self._time

    @property
    def disturbance(self) -> float:
        return self._disturbance

    def set_disturbance(self, value: float) -> None:
        """
        Set the disturbance applied on the next update.

        Args:
            value: Disturbance added to the process variable each step
        """
        self._disturbance = validate_real(value, "disturbance")

    def get_state(self) -> Dict[str, Any]:
        """Get current plant state as dictionary."""
        return {
            'output': self._output,
            'time': self._time,
            'disturbance': self._disturbance,
        }

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """Get plant information/parameters."""
        pass
