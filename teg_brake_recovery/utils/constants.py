"""
Constants module for TEG brake energy recovery simulation.

This module provides physical constants, unit conversion factors, and reference values
used throughout the thermoelectric generator and brake thermal management models.
"""

# Physical constants
GRAVITY = 9.81  # m/s², standard gravity
REFERENCE_TEMP = 25.0  # °C, reference temperature for material property data

# Unit conversion factors
KMH_TO_MS = 1.0 / 3.6  # Convert km/h to m/s
MM3_TO_M3 = 1e-9  # Convert mm³ to m³
CM2_TO_M2 = 1e-4  # Convert cm² to m²
UV_TO_V = 1e-6  # Convert μV to V
HOURS_TO_SECONDS = 3600.0  # Convert hours to seconds

# Temperature conversions
def celsius_to_kelvin(temp_c):
    """Convert temperature from Celsius to Kelvin."""
    return temp_c + 273.15

# Vehicle reference values
DEFAULT_VEHICLE_MASS = 1500.0  # kg, reference passenger EV mass
DEFAULT_ROAD_FRICTION = 0.8  # dry asphalt friction coefficient
DEFAULT_WHEEL_RADIUS = 0.35  # m
DEFAULT_MAX_MOTOR_TORQUE = 800.0  # N·m
DEFAULT_BRAKE_SURFACE_AREA = 0.1  # m², effective friction surface of the brake
MOTOR_LOSS_FRACTION = 0.1  # share of regenerated power dissipated as motor heat

# Thermal reference values
DEFAULT_AMBIENT_TEMP = 25.0  # °C, standard ambient temperature for simulations
DEFAULT_SAFETY_TEMP_LIMIT = 300.0  # °C, absolute TEG hot-side ceiling
DEFAULT_EMERGENCY_SHUTDOWN_TEMP = 300.0  # °C, brake temperature forcing shutdown
BRAKE_THERMAL_MASS = 10000.0  # J/K, brake assembly heat capacity
MOTOR_THERMAL_MASS = 5000.0  # J/K, motor housing heat capacity
TEG_MODULE_THICKNESS = 0.005  # m, used for the temperature gradient estimate
REFERENCE_HEAT_LOAD = 5000.0  # W, adaptive cooling reference heat generation

# TEG reference values
BASE_RELIABILITY = 0.98  # fresh module reliability
BASELINE_LIFESPAN = 87600.0  # hours, 10 years of continuous operation
STRUCTURAL_MASS_FACTOR = 1.5  # module mass over bare leg mass
MANUFACTURING_COST_FACTOR = 2.5  # manufacturing cost over material cost
MAX_HISTORY_LENGTH = 1000  # entries kept by engine and coordinator histories
MAX_THERMAL_HISTORY_LENGTH = 500  # entries kept by the thermal manager
