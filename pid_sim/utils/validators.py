"""
Validation utilities and error taxonomy.

Two families of errors are raised by the engine:

- DomainError: mathematically invalid input (non-positive time step,
  non-positive dead time, ...).
- ConfigurationError: malformed input at the boundary (non-numeric or
  non-finite values, unknown fields, duplicate names).

Both derive from ValidationError, itself a ValueError.
"""

from typing import Any, Type, Union, Tuple
import math
import numbers


class ValidationError(ValueError):
    """Base exception for validation failures."""
    pass


class DomainError(ValidationError):
    """Invalid mathematical input (e.g. division by a zero time step)."""
    pass


class ConfigurationError(ValidationError):
    """Malformed input supplied at the engine boundary."""
    pass


def validate_real(
    value: Any,
    name: str,
    error: Type[ValidationError] = ConfigurationError,
    finite: bool = True
) -> float:
    """
    Validate that a value is a real number.

    Args:
        value: The value to validate
        name: Parameter name for error messages
        error: Exception class to raise
        finite: Also reject NaN and infinities

    Returns:
        The value as float

    Raises:
        ConfigurationError: If value is not a (finite) real number
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise error(f"{name} must be a real number, got {type(value).__name__}")
    value = float(value)
    if finite and not math.isfinite(value):
        raise error(f"{name} must be finite, got {value}")
    return value


def validate_positive(
    value: Any,
    name: str,
    error: Type[ValidationError] = DomainError
) -> float:
    """
    Validate that a value is a strictly positive real number.

    Non-numeric input is always a ConfigurationError; a numeric value
    that is not positive raises ``error``.
    """
    value = validate_real(value, name)
    if value <= 0:
        raise error(f"{name} must be positive, got {value}")
    return value


def validate_type(
    value: Any,
    name: str,
    expected_type: Union[Type, Tuple[Type, ...]],
    error: Type[ValidationError] = ConfigurationError
) -> Any:
    """Validate that a value is of the expected type."""
    if not isinstance(value, expected_type):
        if isinstance(expected_type, tuple):
            type_names = " or ".join(t.__name__ for t in expected_type)
        else:
            type_names = expected_type.__name__
        raise error(
            f"{name} must be of type {type_names}, got {type(value).__name__}"
        )
    return value
