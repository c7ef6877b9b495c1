"""
Integrator plant model using python-control library.
Transfer function: G(s) = 1 / s
"""

from typing import Dict, Any
import numpy as np
import control as ct

from pid_sim.plants.base_plant import BasePlant
from pid_sim.utils.validators import validate_real


class IntegratorPlant(BasePlant):
    """
    Single-integrator plant, discretised with a zero-order hold.

    With state-space form dx/dt = u, y = x the discrete update is
    x[k+1] = x[k] + dt * u[k]. The disturbance is added to the state
    after the input step, so one update gives

        pv_new = pv + u * dt + disturbance
    """

    def __init__(self, sample_time: float = 0.1, initial_output: float = 0.0):
        super().__init__(sample_time)

        self._initial_output = validate_real(initial_output, "initial_output")

        self._sys_c = ct.ss([[0.0]], [[1.0]], [[1.0]], [[0.0]])
        self._sys_d = ct.sample_system(self._sys_c, self._dt, method='zoh')

        self._state = np.zeros((self._sys_d.nstates, 1))
        self.set_output(initial_output)

    def update(self, control_input: float) -> float:
        """Advance one sample and return the new process variable."""
        u = np.array([[validate_real(control_input, "control_input", finite=False)]])

        self._state = self._sys_d.A @ self._state + self._sys_d.B @ u
        self._state[0, 0] += self._disturbance

        self._output = float((self._sys_d.C @ self._state)[0, 0])
        self._time += self._dt
        return self._output

    def set_output(self, value: float) -> None:
        # C is the identity for this realisation, so the state is the output.
        self._state[0, 0] = validate_real(value, "output")
        self._output = float(self._state[0, 0])

    def reset(self) -> None:
        self._state = np.zeros((self._sys_d.nstates, 1))
        self.set_output(self._initial_output)
        self._disturbance = 0.0
        self._time = 0.0

    def get_info(self) -> Dict[str, Any]:
        return {
            'type': 'IntegratorPlant',
            'sample_time': self._dt,
            'initial_output': self._initial_output,
        }

    @property
    def continuous_system(self) -> ct.StateSpace:
        """Get the continuous state-space model."""
        return self._sys_c

    @property
    def discrete_system(self) -> ct.StateSpace:
        """Get the sampled state-space model."""
        return self._sys_d
