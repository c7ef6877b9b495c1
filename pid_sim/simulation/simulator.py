"""
PID Control Simulation Loop.

Advances one or more independent controller/plant pairs with a fixed
time step against a shared setpoint and disturbance, recording one
sample per tick into a bounded history.

The loop does not schedule itself. A driver (a UI frame callback, a
test, a batch script) calls ``on_frame`` once per frame, or ``tick``
directly; pausing simply makes ``on_frame`` a no-op.
"""

from typing import Dict, Iterable, List, Optional, Union
from enum import Enum
import logging

from pid_sim.core.pid_controller import PIDController
from pid_sim.core.pid_params import PIDPresets, ControllerType
from pid_sim.plants.base_plant import BasePlant
from pid_sim.plants.integrator import IntegratorPlant
from pid_sim.history.history_buffer import ControllerSample, Sample, HistoryBuffer
from pid_sim.simulation.config import SimulationConfig, DisturbancePolicy
from pid_sim.tuner.auto_tune import (
    ProcessCharacterization,
    PIDGains,
    DEFAULT_CHARACTERIZATION,
    auto_tune,
    apply_tuning,
)
from pid_sim.analyzer.metrics import AnalysisResult, analyze
from pid_sim.utils.validators import (
    ConfigurationError,
    DomainError,
    validate_positive,
    validate_real,
    validate_type,
)

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


def tick(
    controllers: Iterable[PIDController],
    setpoint: float,
    disturbance: float,
    dt: float,
    plants: Optional[Dict[str, BasePlant]] = None,
    policy: Union[DisturbancePolicy, str] = DisturbancePolicy.PLANT,
    history: Optional[HistoryBuffer] = None,
    time: float = 0.0
) -> Dict[str, ControllerSample]:
    """
    Advance each controller and its plant by one time step.

    Pass the same ``plants`` mapping on every call to carry process
    variables across ticks. A controller with no entry gets a fresh
    integrator plant starting at 0, which is stored in ``plants``.

    Args:
        controllers: Controllers to advance, each with a unique name
        setpoint: Shared setpoint for this tick
        disturbance: Shared disturbance for this tick
        dt: Time step, must be positive
        plants: Controller name to plant mapping, updated in place
        policy: Where the disturbance enters the loop
        history: If given, a Sample stamped with ``time`` is appended to it
        time: Post-advance time recorded in the Sample

    Returns:
        Mapping of controller name to its values for this tick

    Raises:
        DomainError: If dt is not positive
        ConfigurationError: If an input is not a finite number, a name is
            repeated, or a plant's sample time differs from dt
    """
    setpoint = validate_real(setpoint, "setpoint")
    disturbance = validate_real(disturbance, "disturbance")
    dt = validate_positive(dt, "dt", DomainError)
    policy = DisturbancePolicy.coerce(policy)
    time = validate_real(time, "time")
    if plants is None:
        plants = {}

    controllers = list(controllers)
    names = set()
    for controller in controllers:
        validate_type(controller, "controller", PIDController)
        if controller.name in names:
            raise ConfigurationError(f"Duplicate controller name: {controller.name!r}")
        names.add(controller.name)
        plant = plants.get(controller.name)
        if plant is not None and plant.sample_time != dt:
            raise ConfigurationError(
                f"Plant for {controller.name!r} has sample time "
                f"{plant.sample_time}, expected {dt}"
            )

    fold_into_error = policy == DisturbancePolicy.ERROR
    values: Dict[str, ControllerSample] = {}
    for controller in controllers:
        plant = plants.get(controller.name)
        if plant is None:
            plant = plants[controller.name] = IntegratorPlant(sample_time=dt)

        error = setpoint - plant.output
        if fold_into_error:
            error += disturbance
            plant.set_disturbance(0.0)
        else:
            plant.set_disturbance(disturbance)

        output = controller.update(error, dt)
        values[controller.name] = ControllerSample(
            process_variable=plant.update(output),
            error=error,
            output=output,
            integral=controller.integral,
        )

    if history is not None:
        history.append(Sample(
            time=time,
            setpoint=setpoint,
            disturbance=disturbance,
            controllers=values,
        ))
    return values


class Simulator:
    """
    Multi-controller simulation session.

    Each controller drives its own integrator plant; controllers never
    see each other's outputs.

    Example:
        >>> sim = Simulator([create_controller("PID 1"), create_controller("PID 2")])
        >>> sim.setpoint = 1.0
        >>> sim.run(50)
        >>> sim.analyze("PID 1")
    """

    def __init__(
        self,
        controllers: Optional[List[PIDController]] = None,
        config: Optional[SimulationConfig] = None
    ):
        """
        Initialize simulator.

        Args:
            controllers: Controllers to simulate side by side
            config: Loop settings (uses defaults if None)
        """
        self._config = config if config is not None else SimulationConfig()

        self._controllers: Dict[str, PIDController] = {}
        self._plants: Dict[str, IntegratorPlant] = {}
        self._history = HistoryBuffer(max_size=self._config.history_length)

        self._setpoint = self._config.initial_setpoint
        self._disturbance = self._config.initial_disturbance
        self._state = SimulationState.PAUSED
        self._tick_count = 0

        for controller in controllers or []:
            self.add_controller(controller)

    # -- state machine ---------------------------------------------------

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SimulationState.RUNNING

    def start(self) -> None:
        """Enter RUNNING."""
        if self._state != SimulationState.RUNNING:
            logger.info("Simulation running at t=%.2f", self.time)
        self._state = SimulationState.RUNNING

    def resume(self) -> None:
        self.start()

    def pause(self) -> None:
        """Enter PAUSED. An in-flight tick always completes."""
        if self._state != SimulationState.PAUSED:
            logger.info("Simulation paused at t=%.2f", self.time)
        self._state = SimulationState.PAUSED

    def toggle(self) -> SimulationState:
        """Switch between RUNNING and PAUSED, returning the new state."""
        if self.is_running:
            self.pause()
        else:
            self.start()
        return self._state

    # -- inputs ----------------------------------------------------------

    @property
    def setpoint(self) -> float:
        return self._setpoint

    @setpoint.setter
    def setpoint(self, value: float) -> None:
        self._setpoint = validate_real(value, "setpoint")

    @property
    def disturbance(self) -> float:
        return self._disturbance

    @disturbance.setter
    def disturbance(self, value: float) -> None:
        self._disturbance = validate_real(value, "disturbance")

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def dt(self) -> float:
        return self._config.dt

    @property
    def time(self) -> float:
        """Time of the most recent tick."""
        return self._tick_count * self._config.dt

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    # -- controllers -----------------------------------------------------

    @property
    def controllers(self) -> List[PIDController]:
        return list(self._controllers.values())

    def get_controller(self, name: str) -> PIDController:
        try:
            return self._controllers[name]
        except KeyError:
            raise ConfigurationError(f"No controller named {name!r}") from None

    def add_controller(self, controller: Optional[PIDController] = None) -> PIDController:
        """
        Add a controller to the session.

        The controller starts with zero integral and previous error, and
        its process variable starts at 0 from the next tick.

        Args:
            controller: Controller to add; a default "PID <n>" is created if None

        Returns:
            The added controller
        """
        if controller is None:
            controller = PIDController(self._next_name(), PIDPresets.default())
        validate_type(controller, "controller", PIDController)
        if controller.name in self._controllers:
            raise ConfigurationError(f"Duplicate controller name: {controller.name!r}")
        if self._history.has_series(controller.name):
            raise ConfigurationError(
                f"History still holds samples for {controller.name!r}; reset first"
            )

        controller.reset()
        self._controllers[controller.name] = controller
        self._plants[controller.name] = IntegratorPlant(sample_time=self._config.dt)
        logger.info("Added controller %r at t=%.2f", controller.name, self.time)
        return controller

    def remove_controller(self, name: str) -> PIDController:
        """
        Stop simulating a controller.

        Its past samples stay in the history, so the name cannot be reused
        until the session is reset.
        """
        controller = self.get_controller(name)
        del self._controllers[name]
        del self._plants[name]
        logger.info("Removed controller %r", name)
        return controller

    def update_controller(self, name: str, **changes) -> PIDController:
        """
        Patch a controller's gains and/or type in place.

        Accepted fields are kp, ki, kd and controller_type. Integral and
        previous error are preserved.
        """
        controller = self.get_controller(name)
        controller.set_params(controller.params.copy(**changes))
        return controller

    def set_mode(self, name: str, mode: Union[ControllerType, str]) -> None:
        self.get_controller(name).set_mode(mode)

    def auto_tune(
        self,
        name: str,
        characterization: Optional[ProcessCharacterization] = None
    ) -> PIDGains:
        """Tune one controller from a process characterization."""
        controller = self.get_controller(name)
        gains = auto_tune(characterization or DEFAULT_CHARACTERIZATION)
        apply_tuning(controller, gains)
        return gains

    def _next_name(self) -> str:
        index = len(self._controllers) + 1
        while (
            f"PID {index}" in self._controllers
            or self._history.has_series(f"PID {index}")
        ):
            index += 1
        return f"PID {index}"

    # -- loop ------------------------------------------------------------

    def tick(self) -> Dict[str, ControllerSample]:
        """
        Advance the simulation by one time step.

        Returns:
            Mapping of controller name to its values for this tick. The
            full Sample is appended to the history.
        """
        dt = self._config.dt
        setpoint = self._setpoint
        disturbance = self._disturbance
        now = (self._tick_count + 1) * dt

        values = tick(
            self._controllers.values(), setpoint, disturbance, dt,
            plants=self._plants,
            policy=self._config.disturbance_policy,
            history=self._history,
            time=now,
        )
        self._tick_count += 1
        logger.debug("Tick %d t=%.2f sp=%.4f d=%.4f", self._tick_count, now, setpoint, disturbance)

        return dict(values)

    def on_frame(self) -> bool:
        """
        Frame callback for a cooperative driver.

        Ticks once when RUNNING. Returns True if the driver should
        schedule another frame.
        """
        if not self.is_running:
            return False
        self.tick()
        return self.is_running

    def run(self, n_ticks: int) -> List[Sample]:
        """Tick ``n_ticks`` times regardless of state and return the new samples."""
        if isinstance(n_ticks, bool) or not isinstance(n_ticks, int) or n_ticks < 0:
            raise ConfigurationError("n_ticks must be a non-negative integer")
        samples = []
        for _ in range(n_ticks):
            self.tick()
            samples.append(self._history.last)
        return samples

    def reset(self) -> None:
        """
        Clear history, time and all controller and plant state.

        Controllers, setpoint, disturbance and run state are kept.
        """
        self._history.clear()
        self._tick_count = 0
        for name, controller in self._controllers.items():
            controller.reset()
            self._plants[name].reset()
        logger.info("Simulation reset")

    # -- analysis --------------------------------------------------------

    def analyze(self, name: str) -> AnalysisResult:
        """Analyze one controller's buffered samples against the current setpoint."""
        self.get_controller(name)
        return analyze(self._history.series(name), self._setpoint, self._config.dt)

    def analyze_all(self) -> Dict[str, AnalysisResult]:
        return {name: self.analyze(name) for name in self._controllers}
