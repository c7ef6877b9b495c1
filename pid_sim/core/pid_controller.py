"""
PID Controller Implementation.

The controller works on an error signal supplied by the simulation loop
and keeps two pieces of history between calls: the accumulated integral
and the previous error. Both are updated on every call whatever the
controller type, so switching type mid-run keeps the accumulated state.
"""

from typing import Optional, Union

from pid_sim.core.pid_params import PIDParams, PIDPresets, ControllerType
from pid_sim.utils.validators import (
    ConfigurationError,
    DomainError,
    validate_positive,
    validate_real,
    validate_type,
)


def compute_output(
    controller_type: ControllerType,
    kp: float,
    ki: float,
    kd: float,
    error: float,
    integral: float,
    derivative: float
) -> float:
    """Sum the gain terms selected by the controller type."""
    if controller_type == ControllerType.P:
        return kp * error
    if controller_type == ControllerType.PI:
        return kp * error + ki * integral
    if controller_type == ControllerType.PD:
        return kp * error + kd * derivative
    return kp * error + ki * integral + kd * derivative


class PIDController:
    """
    Named PID controller with P, PI, PD and PID modes.

    Example:
        >>> pid = PIDController("PID 1", PIDParams(kp=2.0, ki=0.5))
        >>> output = pid.update(error=1.0, dt=0.1)
    """

    def __init__(self, name: str, params: Optional[PIDParams] = None):
        """
        Initialize PID controller.

        Args:
            name: Identifier, unique within a simulation session
            params: PID parameters (uses defaults if None)
        """
        validate_type(name, "name", str)
        if not name:
            raise ConfigurationError("name must be a non-empty string")

        self._name = name
        self._params = params if params is not None else PIDPresets.default()

        self._integral: float = 0.0
        self._prev_error: float = 0.0
        self._output: float = 0.0

    @property
    def name(self) -> str:
        return self._name

    @property
    def params(self) -> PIDParams:
        """Get current parameters."""
        return self._params

    @property
    def kp(self) -> float:
        return self._params.kp

    @property
    def ki(self) -> float:
        return self._params.ki

    @property
    def kd(self) -> float:
        return self._params.kd

    @property
    def controller_type(self) -> ControllerType:
        return self._params.controller_type

    @controller_type.setter
    def controller_type(self, value: Union[ControllerType, str]) -> None:
        self.set_mode(value)

    @property
    def integral(self) -> float:
        """Accumulated error * dt."""
        return self._integral

    @property
    def previous_error(self) -> float:
        return self._prev_error

    @property
    def output(self) -> float:
        """Output of the most recent update."""
        return self._output

    def update(self, error: float, dt: float) -> float:
        """
        Compute the control output for one step.

        Args:
            error: Current error signal
            dt: Time step, must be positive

        Returns:
            Control output

        Raises:
            DomainError: If dt is not positive. State is left untouched.
        """
        # An unstable loop may legitimately diverge to inf.
        error = validate_real(error, "error", finite=False)
        dt = validate_positive(dt, "dt", DomainError)

        self._integral += error * dt
        derivative = (error - self._prev_error) / dt
        self._prev_error = error

        p = self._params
        self._output = compute_output(
            p.controller_type, p.kp, p.ki, p.kd,
            error, self._integral, derivative
        )
        return self._output

    def set_params(self, params: PIDParams) -> None:
        """Replace parameters. Integral and previous error are kept."""
        self._params = validate_type(params, "params", PIDParams)

    def set_gains(
        self,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None
    ) -> None:
        """
        Update individual gains.

        Args:
            kp: New proportional gain (None to keep current)
            ki: New integral gain (None to keep current)
            kd: New derivative gain (None to keep current)
        """
        self._params = self._params.copy(
            kp=kp if kp is not None else self._params.kp,
            ki=ki if ki is not None else self._params.ki,
            kd=kd if kd is not None else self._params.kd
        )

    def set_mode(self, controller_type: Union[ControllerType, str]) -> None:
        """Switch controller type without touching accumulated state."""
        self._params = self._params.copy(controller_type=controller_type)

    def reset(self) -> None:
        """Reset controller state."""
        self._integral = 0.0
        self._prev_error = 0.0
        self._output = 0.0

    def __repr__(self) -> str:
        return f"PIDController({self._name!r}, {self._params})"


def create_controller(
    name: str,
    kp: float = 1.0,
    ki: float = 0.0,
    kd: float = 0.0,
    mode: Union[ControllerType, str] = ControllerType.PID
) -> PIDController:
    """Create a controller with zeroed integral and previous error."""
    return PIDController(name, PIDParams(kp=kp, ki=ki, kd=kd, controller_type=mode))


def with_gains(controller: PIDController, **updates) -> PIDController:
    """
    Return a copy of ``controller`` with patched parameters.

    Accepted fields are kp, ki, kd and controller_type. The copy carries
    the same integral and previous error; the original is not modified.
    """
    patched = PIDController(controller.name, controller.params.copy(**updates))
    patched._integral = controller.integral
    patched._prev_error = controller.previous_error
    patched._output = controller.output
    return patched
