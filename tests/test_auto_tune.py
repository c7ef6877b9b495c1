"""
Unit tests for closed-form auto-tuning.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_sim.core.pid_controller import create_controller
from pid_sim.core.pid_params import ControllerType
from pid_sim.tuner.auto_tune import (
    ProcessCharacterization,
    PIDGains,
    DEFAULT_CHARACTERIZATION,
    ultimate_gain_and_period,
    auto_tune,
    apply_tuning,
)
from pid_sim.utils.validators import ConfigurationError, DomainError


class TestAutoTune:
    """Test suite for auto_tune."""

    def test_reference_characterization(self):
        """Gains follow the ku/tu formulas."""
        char = ProcessCharacterization(process_gain=1.0, time_constant=1.0, dead_time=0.1)

        ku = 0.6 * char.process_gain * (char.time_constant / char.dead_time)
        tu = 2 * char.dead_time
        gains = auto_tune(char)

        assert ku == pytest.approx(6.0)
        assert tu == pytest.approx(0.2)
        assert gains.kp == pytest.approx(0.6 * ku)
        assert gains.ki == pytest.approx(1.2 * ku / tu)
        assert gains.kd == pytest.approx(0.075 * ku * tu)
        assert gains.kp == pytest.approx(3.6)
        assert gains.ki == pytest.approx(36.0)
        assert gains.kd == pytest.approx(0.09)

    def test_ultimate_gain_and_period(self):
        ku, tu = ultimate_gain_and_period(
            ProcessCharacterization(process_gain=2.0, time_constant=3.0, dead_time=0.5)
        )
        assert ku == pytest.approx(0.6 * 2.0 * 3.0 / 0.5)
        assert tu == pytest.approx(1.0)

    def test_default_characterization(self):
        assert auto_tune(DEFAULT_CHARACTERIZATION) == auto_tune(
            ProcessCharacterization(1.0, 1.0, 0.1)
        )

    @pytest.mark.parametrize("dead_time", [0.0, -0.1])
    def test_non_positive_dead_time(self, dead_time):
        """Dead time must be positive; no inf/nan gains are produced."""
        with pytest.raises(DomainError):
            auto_tune(ProcessCharacterization(1.0, 1.0, dead_time))

    @pytest.mark.parametrize("field", ["process_gain", "time_constant"])
    def test_non_positive_other_fields(self, field):
        values = {'process_gain': 1.0, 'time_constant': 1.0, 'dead_time': 0.1}
        values[field] = 0.0
        with pytest.raises(DomainError):
            auto_tune(ProcessCharacterization(**values))

    def test_non_numeric_input(self):
        with pytest.raises(ConfigurationError):
            auto_tune(ProcessCharacterization(1.0, "1.0", 0.1))

    def test_wrong_type(self):
        with pytest.raises(ConfigurationError):
            auto_tune({'process_gain': 1.0, 'time_constant': 1.0, 'dead_time': 0.1})

    def test_gains_to_dict(self):
        assert PIDGains(1.0, 2.0, 3.0).to_dict() == {'kp': 1.0, 'ki': 2.0, 'kd': 3.0}


class TestApplyTuning:
    """Test suite for apply_tuning."""

    def test_replaces_gains_keeps_mode_and_state(self):
        pid = create_controller("PID 1", kp=1.0, mode=ControllerType.PI)
        pid.update(error=1.0, dt=0.1)
        integral = pid.integral

        apply_tuning(pid, PIDGains(kp=3.6, ki=36.0, kd=0.09))

        assert (pid.kp, pid.ki, pid.kd) == (3.6, 36.0, 0.09)
        assert pid.controller_type == ControllerType.PI
        assert pid.integral == integral


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
