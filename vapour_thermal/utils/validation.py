"""Input validation and engineering-limit checks for Vapour Thermal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for validation messages."""

    WARNING = "warning"
    ERROR = "error"


class InputValidationError(ValueError):
    """Raised when calculator inputs are out of range or physically impossible.

    Args:
        message: Human-readable description naming the invalid quantity.
        parameter: Name of the offending input, if known.
    """

    def __init__(self, message: str, parameter: str | None = None):
        super().__init__(message)
        self.parameter = parameter


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def raise_for_errors(self) -> None:
        """Raise InputValidationError for the first recorded error, if any."""
        if not self.is_valid:
            first = self.errors[0]
            raise InputValidationError(first.message, parameter=first.parameter)


# --- Common validators ---


def require_number(name: str, value: Any) -> float:
    """Return *value* as a float, rejecting None, booleans and non-numbers.

    Raises:
        InputValidationError: If *value* is not an int or float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputValidationError(f"{name} must be a number, got {value!r}", parameter=name)
    return float(value)


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}", value=value, limit=0.0)


def validate_non_negative(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is zero or positive."""
    if value < 0:
        result.error(name, f"{name} cannot be negative, got {value}", value=value, limit=0.0)


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.error(
            name,
            f"{name} = {value} is outside [{low}, {high}]",
            value=value,
            limit=(low, high),
        )


def validate_fraction(name: str, value: float, result: ValidationResult) -> None:
    """Validate an efficiency-like fraction in the half-open interval (0, 1]."""
    if value <= 0 or value > 1:
        result.error(name, f"{name} must be between 0 and 1, got {value}", value=value)
