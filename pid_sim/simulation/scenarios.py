"""
Setpoint and disturbance inputs for interactive sessions.
"""

from typing import Optional
import numpy as np

from pid_sim.utils.validators import ConfigurationError, validate_type


def random_setpoint(
    rng: Optional[np.random.Generator] = None,
    low: float = -1.0,
    high: float = 1.0
) -> float:
    """Draw a setpoint uniformly from [low, high)."""
    rng = rng if rng is not None else np.random.default_rng()
    return float(rng.uniform(low, high))


def random_disturbance(
    rng: Optional[np.random.Generator] = None,
    magnitude: float = 0.25
) -> float:
    """Draw a disturbance uniformly from [-magnitude, magnitude)."""
    rng = rng if rng is not None else np.random.default_rng()
    return float(rng.uniform(-magnitude, magnitude))


def parse_setpoint(text: str) -> float:
    """
    Convert user-entered text to a setpoint.

    Raises:
        ConfigurationError: If the text is not a finite number
    """
    validate_type(text, "setpoint", str)
    try:
        value = float(text.strip())
    except ValueError:
        raise ConfigurationError(f"setpoint must be numeric, got {text!r}") from None
    if not np.isfinite(value):
        raise ConfigurationError(f"setpoint must be finite, got {text!r}")
    return value
