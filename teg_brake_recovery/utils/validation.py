"""
Validation utilities for TEG brake energy recovery simulation.

This module defines the error types raised by the catalogs, the conversion engine,
the thermal manager and the energy recovery coordinator, together with the
structured validation result and the operating range checks applied to
vehicle-level inputs.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Optional
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("Validation")


# Valid operating ranges for integrated braking inputs: label, (min, max), unit
OPERATING_RANGES = {
    'brake_temperature': ('Brake temperature', (-40.0, 500.0), '°C'),
    'ambient_temperature': ('Ambient temperature', (-40.0, 60.0), '°C'),
    'airflow': ('Airflow velocity', (0.0, 100.0), ' m/s'),
}


class TEGSystemError(ValueError):
    """Base class for all errors raised by the TEG energy recovery system."""


class ConfigNotFound(TEGSystemError):
    """Raised when a TEG configuration id is not registered."""

    def __init__(self, config_id: str):
        self.config_id = config_id
        super().__init__(f"TEG configuration '{config_id}' not found")


class InvalidConfiguration(TEGSystemError):
    """Raised when a TEG configuration fails validation on registration."""

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__(f"Invalid TEG configuration: {', '.join(self.errors)}")


class InvalidThermalConditions(TEGSystemError):
    """Raised when thermal conditions are outside what a TEG can operate in."""

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__(f"Invalid thermal conditions: {', '.join(self.errors)}")


class UnsafeTemperature(TEGSystemError):
    """Raised when the TEG hot side exceeds the absolute safety ceiling."""

    def __init__(self, temperature: float, limit: float):
        self.temperature = temperature
        self.limit = limit
        super().__init__(
            f"TEG temperature ({temperature:g}°C) exceeds safety limit ({limit:g}°C)"
        )


class EmergencyShutdown(TEGSystemError):
    """Raised when the brake temperature reaches the emergency shutdown threshold."""

    def __init__(self, temperature: float, limit: float):
        self.temperature = temperature
        self.limit = limit
        super().__init__(
            f"Emergency thermal shutdown: brake temperature ({temperature:g}°C) "
            f"reached shutdown threshold ({limit:g}°C)"
        )


class ValueOutOfRange(TEGSystemError):
    """Raised when a vehicle-level input is outside its valid operating range."""

    def __init__(self, quantity: str, value: float, lower: float, upper: float,
                 label: Optional[str] = None, unit: str = ''):
        self.quantity = quantity
        self.value = value
        self.lower = lower
        self.upper = upper
        self.unit = unit
        label = label or quantity.replace('_', ' ').capitalize()
        super().__init__(
            f"{label} out of valid range ({lower:g} to {upper:g}{unit})"
        )


@dataclass
class ValidationResult:
    """
    Outcome of a configuration or thermal condition check.

    Attributes:
        errors: Violated constraints, any entry makes the result invalid
        warnings: Non-fatal issues worth reporting to the caller
    """
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'errors': list(self.errors),
            'warnings': list(self.warnings),
        }


def validate_in_range(value: float, metric_name: str,
                      custom_range: Optional[Tuple[float, float]] = None) -> Dict:
    """
    Validate if a value is within the valid operating range for a metric.

    Args:
        value: Value to validate
        metric_name: Name of the metric to check (key of OPERATING_RANGES)
        custom_range: Optional custom range override

    Returns:
        Dictionary with validation results
    """
    if custom_range:
        expected_range = custom_range
    elif metric_name in OPERATING_RANGES:
        expected_range = OPERATING_RANGES[metric_name][1]
    else:
        logger.warning(f"No operating range found for metric: {metric_name}")
        return {
            'status': 'unknown',
            'metric': metric_name,
            'value': value,
            'expected_range': None,
            'message': f"No operating range defined for {metric_name}"
        }

    min_value, max_value = expected_range

    if value < min_value:
        status = 'below_range'
        message = f"{metric_name} ({value:.3f}) is below minimum ({min_value:.3f})"
    elif value > max_value:
        status = 'above_range'
        message = f"{metric_name} ({value:.3f}) is above maximum ({max_value:.3f})"
    else:
        status = 'valid'
        message = f"{metric_name} ({value:.3f}) is within range ({min_value:.3f} - {max_value:.3f})"

    return {
        'status': status,
        'metric': metric_name,
        'value': value,
        'expected_range': expected_range,
        'message': message
    }


def require_in_range(value: float, metric_name: str) -> None:
    """
    Raise ValueOutOfRange if a value falls outside its operating range.

    Args:
        value: Value to check
        metric_name: Key of OPERATING_RANGES
    """
    result = validate_in_range(value, metric_name)
    if result['status'] in ('below_range', 'above_range'):
        label, (lower, upper), unit = OPERATING_RANGES[metric_name]
        raise ValueOutOfRange(metric_name, value, lower, upper, label=label, unit=unit)
