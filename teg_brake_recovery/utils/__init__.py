"""
Utility modules for TEG brake energy recovery simulation.

This package provides utility modules for constants, plotting, and validation
used throughout the TEG brake energy recovery simulation project.
"""

# Import key functions and objects for easier access
from .constants import (
    # Physical constants
    GRAVITY, REFERENCE_TEMP,

    # Unit conversion functions
    celsius_to_kelvin,

    # Unit conversion factors
    KMH_TO_MS, MM3_TO_M3, CM2_TO_M2, UV_TO_V, HOURS_TO_SECONDS,

    # Vehicle reference values
    DEFAULT_VEHICLE_MASS, DEFAULT_ROAD_FRICTION, DEFAULT_WHEEL_RADIUS,
    DEFAULT_MAX_MOTOR_TORQUE, DEFAULT_BRAKE_SURFACE_AREA, MOTOR_LOSS_FRACTION,

    # Thermal reference values
    DEFAULT_AMBIENT_TEMP, DEFAULT_SAFETY_TEMP_LIMIT, DEFAULT_EMERGENCY_SHUTDOWN_TEMP,
    BRAKE_THERMAL_MASS, MOTOR_THERMAL_MASS, TEG_MODULE_THICKNESS, REFERENCE_HEAT_LOAD,

    # TEG reference values
    BASE_RELIABILITY, BASELINE_LIFESPAN, STRUCTURAL_MASS_FACTOR,
    MANUFACTURING_COST_FACTOR, MAX_HISTORY_LENGTH, MAX_THERMAL_HISTORY_LENGTH
)

# Import plotting functions
from .plotting import (
    set_plot_style, save_plot,
    plot_teg_performance, plot_energy_recovery_history, plot_cooling_strategy_map
)

# Import validation functions and error types
from .validation import (
    TEGSystemError, ConfigNotFound, InvalidConfiguration, InvalidThermalConditions,
    UnsafeTemperature, EmergencyShutdown, ValueOutOfRange,
    ValidationResult, validate_in_range, require_in_range, OPERATING_RANGES
)

# Define what is exported by default
__all__ = [
    # Constants
    'GRAVITY', 'REFERENCE_TEMP',

    # Unit conversion functions
    'celsius_to_kelvin',

    # Unit conversion factors
    'KMH_TO_MS', 'MM3_TO_M3', 'CM2_TO_M2', 'UV_TO_V', 'HOURS_TO_SECONDS',

    # Reference values
    'DEFAULT_VEHICLE_MASS', 'DEFAULT_ROAD_FRICTION', 'DEFAULT_WHEEL_RADIUS',
    'DEFAULT_MAX_MOTOR_TORQUE', 'DEFAULT_BRAKE_SURFACE_AREA', 'MOTOR_LOSS_FRACTION',
    'DEFAULT_AMBIENT_TEMP', 'DEFAULT_SAFETY_TEMP_LIMIT', 'DEFAULT_EMERGENCY_SHUTDOWN_TEMP',
    'BRAKE_THERMAL_MASS', 'MOTOR_THERMAL_MASS', 'TEG_MODULE_THICKNESS', 'REFERENCE_HEAT_LOAD',
    'BASE_RELIABILITY', 'BASELINE_LIFESPAN', 'STRUCTURAL_MASS_FACTOR',
    'MANUFACTURING_COST_FACTOR', 'MAX_HISTORY_LENGTH', 'MAX_THERMAL_HISTORY_LENGTH',

    # Plot functions
    'set_plot_style', 'save_plot',
    'plot_teg_performance', 'plot_energy_recovery_history', 'plot_cooling_strategy_map',

    # Validation
    'TEGSystemError', 'ConfigNotFound', 'InvalidConfiguration', 'InvalidThermalConditions',
    'UnsafeTemperature', 'EmergencyShutdown', 'ValueOutOfRange',
    'ValidationResult', 'validate_in_range', 'require_in_range', 'OPERATING_RANGES'
]
