"""
Thermoelectric couple property calculations.

This module provides the couple-level relations used by the conversion engine and
the design tools: combined Seebeck coefficient, thermal conductance and electrical
resistance of one p/n couple, the couple figure of merit, the temperature
multipliers applied to material data, module mass and cost estimates, and a
simple placement selection across candidate mounting sites.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List
import logging

from .materials import ThermoelectricMaterial
from .configurations import TEGConfiguration, LegDimensions
from ..utils.constants import (
    celsius_to_kelvin, REFERENCE_TEMP, UV_TO_V, MM3_TO_M3,
    STRUCTURAL_MASS_FACTOR, MANUFACTURING_COST_FACTOR
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("TEG_Properties")


# Linear temperature coefficients relative to REFERENCE_TEMP and their clamps
SEEBECK_TEMP_COEFFICIENT = 0.001  # per °C
RESISTANCE_TEMP_COEFFICIENT = 0.004  # per °C
CONDUCTIVITY_TEMP_COEFFICIENT = 0.002  # per °C
SEEBECK_FACTOR_LIMITS = (0.5, 2.0)
RESISTANCE_FACTOR_LIMITS = (0.8, 3.0)
CONDUCTIVITY_FACTOR_LIMITS = (0.8, 1.5)

MIN_PLACEMENT_COLD_SIDE = 25.0  # °C
MIN_PLACEMENT_TEMP_DIFFERENCE = 20.0  # K


@dataclass(frozen=True)
class TemperatureEffects:
    """Multipliers applied to room temperature material data."""
    seebeck_factor: float
    resistance_factor: float
    thermal_conductivity_factor: float


def total_seebeck_coefficient(p_type: ThermoelectricMaterial,
                              n_type: ThermoelectricMaterial) -> float:
    """Seebeck coefficient of one couple in μV/K."""
    return abs(p_type.seebeck_coefficient) + abs(n_type.seebeck_coefficient)


def couple_thermal_conductance(p_type: ThermoelectricMaterial,
                               n_type: ThermoelectricMaterial,
                               legs: LegDimensions) -> float:
    """
    Thermal conductance of one couple, both legs conducting in parallel.

    Args:
        p_type: p leg material
        n_type: n leg material
        legs: Leg geometry (mm, mm²)

    Returns:
        Conductance in W/K
    """
    area_over_length = legs.cross_sectional_area / legs.length
    return (p_type.thermal_conductivity + n_type.thermal_conductivity) * area_over_length


def couple_electrical_resistance(p_type: ThermoelectricMaterial,
                                 n_type: ThermoelectricMaterial,
                                 legs: LegDimensions) -> float:
    """
    Electrical resistance of one couple, both legs in series.

    Args:
        p_type: p leg material
        n_type: n leg material
        legs: Leg geometry (mm, mm²)

    Returns:
        Resistance in Ω
    """
    area = legs.cross_sectional_area * 1e-6
    p_resistance = legs.length / (p_type.electrical_conductivity * area)
    n_resistance = legs.length / (n_type.electrical_conductivity * area)
    return p_resistance + n_resistance


def couple_zt(p_type: ThermoelectricMaterial, n_type: ThermoelectricMaterial,
              temperature: float) -> float:
    """
    Figure of merit of a couple, ZT = S²σT/κ with averaged conductivities.

    Args:
        p_type: p leg material
        n_type: n leg material
        temperature: Temperature in °C

    Returns:
        Dimensionless ZT
    """
    seebeck = total_seebeck_coefficient(p_type, n_type) * UV_TO_V
    sigma = (p_type.electrical_conductivity + n_type.electrical_conductivity) / 2
    kappa = (p_type.thermal_conductivity + n_type.thermal_conductivity) / 2
    return seebeck ** 2 * sigma * celsius_to_kelvin(temperature) / kappa


def calculate_temperature_effects(temperature: float) -> TemperatureEffects:
    """
    Linearised material property multipliers at a mean module temperature.

    Args:
        temperature: Mean of hot and cold side temperature in °C

    Returns:
        TemperatureEffects with each factor clamped to its band
    """
    delta = temperature - REFERENCE_TEMP
    return TemperatureEffects(
        seebeck_factor=float(np.clip(1 + SEEBECK_TEMP_COEFFICIENT * delta, *SEEBECK_FACTOR_LIMITS)),
        resistance_factor=float(np.clip(1 + RESISTANCE_TEMP_COEFFICIENT * delta,
                                        *RESISTANCE_FACTOR_LIMITS)),
        thermal_conductivity_factor=float(np.clip(1 + CONDUCTIVITY_TEMP_COEFFICIENT * delta,
                                                  *CONDUCTIVITY_FACTOR_LIMITS))
    )


def optimal_load_resistance(config: TEGConfiguration) -> float:
    """Load resistance for maximum power transfer, equal to the couple resistance."""
    return couple_electrical_resistance(config.p_type_material, config.n_type_material,
                                        config.leg_dimensions)


def estimate_module_mass(config: TEGConfiguration) -> float:
    """
    Estimate module mass from leg volume plus structural overhead.

    Returns:
        Mass in kg
    """
    leg_volume = config.leg_dimensions.length * config.leg_dimensions.cross_sectional_area * MM3_TO_M3
    leg_mass = leg_volume * (config.p_type_material.density + config.n_type_material.density)
    return leg_mass * config.thermoelectric_pairs * STRUCTURAL_MASS_FACTOR


def calculate_thermal_time_constant(config: TEGConfiguration, thermal_mass: float) -> float:
    """
    Thermal time constant of a module.

    Args:
        config: Module design
        thermal_mass: Module mass in kg

    Returns:
        Time constant in s
    """
    heat_capacity = thermal_mass * config.p_type_material.specific_heat
    conductance = couple_thermal_conductance(config.p_type_material, config.n_type_material,
                                             config.leg_dimensions)
    return heat_capacity / conductance


def estimate_teg_cost(config: TEGConfiguration) -> Dict[str, float]:
    """
    Estimate material and manufacturing cost of a module.

    Returns:
        Dictionary with material, manufacturing and total cost in $
    """
    leg_volume = config.leg_dimensions.length * config.leg_dimensions.cross_sectional_area * MM3_TO_M3
    pairs = config.thermoelectric_pairs
    p_cost = leg_volume * config.p_type_material.density * pairs * config.p_type_material.cost
    n_cost = leg_volume * config.n_type_material.density * pairs * config.n_type_material.cost
    material_cost = p_cost + n_cost
    manufacturing_cost = material_cost * MANUFACTURING_COST_FACTOR

    return {
        'material_cost': material_cost,
        'manufacturing_cost': manufacturing_cost,
        'total_cost': material_cost + manufacturing_cost
    }


@dataclass
class CandidateLocation:
    """
    Candidate mounting site for a module.

    Attributes:
        location: Site name
        max_temperature: Peak surface temperature in °C
        heat_flux: Available heat flux in W/m²
        available_area: Free mounting area in cm²
        cooling_capability: Temperature drop the cold side can sustain in K
    """
    location: str
    max_temperature: float
    heat_flux: float
    available_area: float
    cooling_capability: float


def optimize_teg_placement(locations: List[CandidateLocation],
                           config: TEGConfiguration) -> Dict:
    """
    Select the mounting site giving the highest estimated module power.

    Sites hotter than the material limit, or whose cooling cannot hold a
    20 K difference, are skipped.

    Args:
        locations: Candidate mounting sites
        config: Module design to place

    Returns:
        Dictionary with the selected site, expected power (W) and efficiency (%).
        If no site is suitable the first candidate is returned with zero power.

    Raises:
        ValueError: If no candidate locations are given
    """
    if not locations:
        raise ValueError("At least one candidate location is required")

    _, max_temp = config.operating_temp_range
    p_type, n_type = config.p_type_material, config.n_type_material
    seebeck = total_seebeck_coefficient(p_type, n_type)
    resistance = couple_electrical_resistance(p_type, n_type, config.leg_dimensions)

    best = None
    for site in locations:
        if site.max_temperature > max_temp:
            continue

        hot = min(site.max_temperature, max_temp)
        cold = max(MIN_PLACEMENT_COLD_SIDE, hot - site.cooling_capability)
        delta_t = hot - cold
        if delta_t < MIN_PLACEMENT_TEMP_DIFFERENCE:
            continue

        voltage = seebeck * delta_t * UV_TO_V
        power = voltage ** 2 / (4 * resistance) * config.thermoelectric_pairs

        # Mean taken in K; couple_zt adds the offset once more
        zt = couple_zt(p_type, n_type, celsius_to_kelvin((hot + cold) / 2))
        hot_k, cold_k = celsius_to_kelvin(hot), celsius_to_kelvin(cold)
        root = np.sqrt(1 + zt)
        efficiency = (delta_t / hot_k) * (root - 1) / (root + cold_k / hot_k)

        if power > (best['expected_power'] if best else 0.0):
            best = {
                'optimal_location': site.location,
                'expected_power': power,
                'efficiency': efficiency * 100,
                'temperature_difference': delta_t,
                'reasoning': (f"Selected {site.location} for a {delta_t:.0f}K temperature "
                              f"difference within the material limit of {max_temp:.0f}°C")
            }

    if best is None:
        logger.warning(f"No suitable placement found for {config.config_id}")
        first = locations[0]
        best = {
            'optimal_location': first.location,
            'expected_power': 0.0,
            'efficiency': 0.0,
            'temperature_difference': 0.0,
            'reasoning': (f"No candidate within the material limit of {max_temp:.0f}°C, "
                          f"defaulting to {first.location}")
        }

    return best
