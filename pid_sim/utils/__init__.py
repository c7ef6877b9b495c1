"""Validation helpers and error types."""

from pid_sim.utils.validators import (
    ValidationError,
    DomainError,
    ConfigurationError,
    validate_real,
    validate_positive,
    validate_type,
)

__all__ = [
    "ValidationError",
    "DomainError",
    "ConfigurationError",
    "validate_real",
    "validate_positive",
    "validate_type",
]
