"""
Unit tests for response metrics.
"""

import math

import numpy as np
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_sim.analyzer.metrics import (
    AnalysisResult,
    steady_state_error,
    overshoot,
    settling_index,
    settling_time,
    analyze,
)
from pid_sim.history.history_buffer import ControllerSample
from pid_sim.utils.validators import DomainError


def series(values, setpoint=1.0):
    """Build samples whose error is measured against the previous value."""
    samples = []
    previous = 0.0
    for value in values:
        samples.append(ControllerSample(
            process_variable=float(value),
            error=setpoint - previous,
            output=0.0,
        ))
        previous = value
    return samples


class TestSteadyStateError:

    def test_within_tolerance(self):
        samples = series([0.5, 0.995, 0.996])
        assert steady_state_error(samples) == pytest.approx(1.0 - 0.995)

    def test_outside_tolerance_is_undefined(self):
        assert steady_state_error(series([0.2, 0.5])) is None

    def test_empty_is_undefined(self):
        assert steady_state_error([]) is None


class TestOvershoot:

    def test_positive_overshoot(self):
        assert overshoot(series([0.5, 1.2, 1.0]), 1.0) == pytest.approx(0.2)

    def test_never_reaching_setpoint_is_negative_number(self):
        result = overshoot(series([0.0, 0.5, 0.8]), 1.0)
        assert result is not None
        assert result <= 0
        assert result == pytest.approx(-0.2)

    def test_uses_peak_below_zero(self):
        """Peak is the max of the trajectory even when it is negative."""
        assert overshoot(series([-3.0, -2.0]), -1.0) == pytest.approx(-1.0)

    def test_empty_is_undefined(self):
        assert overshoot([], 1.0) is None


class TestSettlingTime:

    def test_never_settles(self):
        """Oscillation that never enters the band is undefined."""
        values = [1.0 + 0.5 * (-1) ** k for k in range(100)]
        assert settling_index(series(values), 1.0) == -1
        assert settling_time(series(values), 1.0, 0.1) is None

    @pytest.mark.parametrize("rate", [0.05, 0.1, 0.3, 0.9])
    def test_monotone_convergence(self, rate):
        """Converging responses settle no later than the simulated horizon."""
        n = 100
        values = [1.0 - math.exp(-rate * k) for k in range(n)]
        result = settling_time(series(values), 1.0, 0.1)
        if result is not None:
            assert 0 < result <= n * 0.1
        expected_inside = np.abs(np.array(values) - 1.0) < 0.05
        if expected_inside[-1]:
            assert result is not None

    def test_first_index_after_last_excursion(self):
        values = [0.0, 0.5, 0.99, 1.2, 1.01, 1.0]
        # Last sample outside the band is at index 3
        assert settling_index(series(values), 1.0) == 4
        assert settling_time(series(values), 1.0, 0.1) == pytest.approx(0.4)

    def test_all_inside_band_starts_at_index_one(self):
        assert settling_index(series([1.0, 1.0, 1.0]), 1.0) == 1

    def test_last_sample_outside_is_undefined(self):
        assert settling_index(series([1.0, 1.0, 2.0]), 1.0) == -1

    def test_single_sample_is_undefined(self):
        assert settling_time(series([1.0]), 1.0) is None

    def test_zero_setpoint_never_settles(self):
        """The band collapses to zero width and the comparison is strict."""
        assert settling_time(series([0.0, 0.0, 0.0], setpoint=0.0), 0.0) is None

    def test_negative_setpoint_uses_magnitude(self):
        assert settling_index(series([-1.0, -1.0, -1.01], setpoint=-1.0), -1.0) == 1

    def test_invalid_dt(self):
        with pytest.raises(DomainError):
            settling_time(series([1.0, 1.0]), 1.0, 0.0)


class TestAnalyze:

    def test_result_fields(self):
        samples = series([0.5, 0.9, 1.0, 1.0, 1.0])
        result = analyze(samples, 1.0, 0.1)

        assert isinstance(result, AnalysisResult)
        assert result.overshoot == pytest.approx(0.0)
        assert result.settling_time == pytest.approx(0.2)
        assert result.steady_state_error == pytest.approx(0.0)
        assert result.current_value == 1.0

    def test_empty_series(self):
        result = analyze([], 1.0)
        assert result == AnalysisResult(None, None, None, None)

    def test_idempotent(self):
        """Repeated analysis of the same samples gives identical results."""
        samples = series([1.0 - 0.9 ** k for k in range(1, 60)])
        snapshot = list(samples)

        first = analyze(samples, 1.0, 0.1)
        second = analyze(samples, 1.0, 0.1)

        assert first == second
        assert samples == snapshot

    def test_to_dict(self):
        result = analyze(series([1.0, 1.0]), 1.0)
        assert set(result.to_dict()) == {
            'steady_state_error', 'overshoot', 'settling_time', 'current_value'
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
