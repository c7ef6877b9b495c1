"""
Bounded sample history for the simulation loop.

Keeps the most recent samples in insertion (= temporal) order and
evicts the oldest one when full.
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence
from dataclasses import dataclass, field, asdict
from collections import deque

from pid_sim.utils.validators import ConfigurationError


@dataclass(frozen=True)
class ControllerSample:
    """One controller's values for one tick."""
    process_variable: float
    error: float
    output: float
    integral: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class Sample:
    """
    One simulation tick.

    ``setpoint`` and ``disturbance`` are shared by every controller in
    the tick; ``controllers`` maps controller name to its values.
    """
    time: float
    setpoint: float
    disturbance: float
    controllers: Dict[str, ControllerSample] = field(default_factory=dict)

    def get(self, name: str) -> Optional[ControllerSample]:
        return self.controllers.get(name)

    def to_record(self) -> Dict[str, Any]:
        """
        Flatten to a single tabular row.

        Controller fields are emitted as ``"<name>.<field>"`` columns.
        """
        record: Dict[str, Any] = {
            'time': self.time,
            'setpoint': self.setpoint,
            'disturbance': self.disturbance,
        }
        for name, values in self.controllers.items():
            for key, value in values.to_dict().items():
                record[f"{name}.{key}"] = value
        return record


class HistoryBuffer:
    """
    Sliding-window buffer of simulation samples.

    Example:
        >>> buffer = HistoryBuffer(max_size=100)
        >>> buffer.append(sample)
        >>> buffer.series("PID 1")
    """

    def __init__(self, max_size: int = 100):
        """
        Initialize history buffer.

        Args:
            max_size: Maximum number of samples to keep
        """
        if isinstance(max_size, bool) or not isinstance(max_size, int):
            raise ConfigurationError(
                f"max_size must be an integer, got {type(max_size).__name__}"
            )
        if max_size < 1:
            raise ConfigurationError("max_size must be at least 1")

        self._max_size = max_size
        self._buffer: deque = deque(maxlen=max_size)

    def append(self, sample: Sample) -> None:
        """Add a sample, evicting the oldest one if the buffer is full."""
        self._buffer.append(sample)

    def extend(self, samples: Sequence[Sample]) -> None:
        """Add multiple samples in order."""
        self._buffer.extend(samples)

    def get_all(self) -> List[Sample]:
        """Get all buffered samples as a list."""
        return list(self._buffer)

    def get_last(self, n: int) -> List[Sample]:
        """Get the last n samples."""
        if n <= 0:
            return []
        if n >= len(self._buffer):
            return list(self._buffer)
        return list(self._buffer)[-n:]

    @property
    def last(self) -> Optional[Sample]:
        """Most recent sample, or None when empty."""
        return self._buffer[-1] if self._buffer else None

    def series(self, name: str) -> List[ControllerSample]:
        """Samples of one controller, oldest first."""
        return [
            sample.controllers[name]
            for sample in self._buffer
            if name in sample.controllers
        ]

    def has_series(self, name: str) -> bool:
        """True if any buffered sample holds values for ``name``."""
        return any(name in sample.controllers for sample in self._buffer)

    def column(self, column: str) -> List[Any]:
        """Get all values of a shared field (time, setpoint, disturbance)."""
        if column not in ('time', 'setpoint', 'disturbance'):
            raise ConfigurationError(f"Unknown column: {column}")
        return [getattr(sample, column) for sample in self._buffer]

    def to_records(self) -> List[Dict[str, Any]]:
        """One flat row per sample, ready for tabular export."""
        return [sample.to_record() for sample in self._buffer]

    def clear(self) -> None:
        """Clear the buffer."""
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[Sample]:
        return iter(list(self._buffer))

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def is_full(self) -> bool:
        """Check if buffer is at max capacity."""
        return len(self._buffer) >= self._max_size
