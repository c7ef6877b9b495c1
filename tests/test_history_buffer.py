"""
Unit tests for the history buffer.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_sim.history.history_buffer import ControllerSample, Sample, HistoryBuffer
from pid_sim.utils.validators import ConfigurationError


def make_sample(index, names=("PID 1",), dt=0.1):
    return Sample(
        time=index * dt,
        setpoint=1.0,
        disturbance=0.0,
        controllers={
            name: ControllerSample(process_variable=float(index), error=1.0, output=2.0)
            for name in names
        },
    )


class TestHistoryBuffer:
    """Test suite for HistoryBuffer."""

    def test_starts_empty(self):
        buffer = HistoryBuffer()
        assert len(buffer) == 0
        assert buffer.last is None
        assert buffer.max_size == 100

    def test_fifo_eviction(self):
        """After 150 appends only the latest 100 remain."""
        buffer = HistoryBuffer(max_size=100)
        for i in range(1, 151):
            buffer.append(make_sample(i))

        samples = buffer.get_all()
        assert len(buffer) == 100
        assert buffer.is_full
        assert samples[0].time == pytest.approx(51 * 0.1)
        assert samples[-1].time == pytest.approx(150 * 0.1)

    def test_insertion_order_kept(self):
        buffer = HistoryBuffer(max_size=5)
        buffer.extend([make_sample(i) for i in range(8)])
        assert [s.time for s in buffer] == pytest.approx([0.3, 0.4, 0.5, 0.6, 0.7])

    def test_get_last(self):
        buffer = HistoryBuffer(max_size=10)
        buffer.extend([make_sample(i) for i in range(4)])
        assert len(buffer.get_last(2)) == 2
        assert buffer.get_last(2)[-1] is buffer.last
        assert len(buffer.get_last(10)) == 4
        assert buffer.get_last(0) == []

    def test_series_filters_by_controller(self):
        """Samples recorded before a controller existed are skipped."""
        buffer = HistoryBuffer()
        buffer.append(make_sample(1, names=("PID 1",)))
        buffer.append(make_sample(2, names=("PID 1", "PID 2")))

        assert [s.process_variable for s in buffer.series("PID 1")] == [1.0, 2.0]
        assert [s.process_variable for s in buffer.series("PID 2")] == [2.0]
        assert buffer.series("missing") == []

    def test_has_series_follows_eviction(self):
        """A name drops out once its last sample is evicted."""
        buffer = HistoryBuffer(max_size=2)
        buffer.append(make_sample(1, names=("old",)))
        assert buffer.has_series("old")
        assert not buffer.has_series("new")

        buffer.extend([make_sample(2, names=("new",)), make_sample(3, names=("new",))])
        assert not buffer.has_series("old")
        assert buffer.has_series("new")

    def test_column(self):
        buffer = HistoryBuffer()
        buffer.extend([make_sample(i) for i in range(3)])
        assert buffer.column('setpoint') == [1.0, 1.0, 1.0]
        with pytest.raises(ConfigurationError):
            buffer.column('bogus')

    def test_to_records(self):
        """Each sample flattens to one row with dotted controller columns."""
        buffer = HistoryBuffer()
        buffer.append(make_sample(1, names=("A", "B")))

        record = buffer.to_records()[0]

        assert record['time'] == pytest.approx(0.1)
        assert record['setpoint'] == 1.0
        assert record['disturbance'] == 0.0
        assert record['A.process_variable'] == 1.0
        assert record['B.output'] == 2.0
        assert 'A.integral' in record

    def test_clear(self):
        buffer = HistoryBuffer()
        buffer.extend([make_sample(i) for i in range(3)])
        buffer.clear()
        assert len(buffer) == 0

    @pytest.mark.parametrize("size", [0, -1, 2.5, True])
    def test_invalid_size(self, size):
        with pytest.raises(ConfigurationError):
            HistoryBuffer(max_size=size)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
