"""
TEG conversion engine for brake energy recovery simulation.

This module turns thermal conditions at a mounting site into electrical output of
a thermoelectric generator module. It applies linearised temperature corrections
to the material data, accounts for the temperature drop across the heat exchanger
resistances, resolves the load for the selected operating mode, and estimates
heat balance, power density, reliability and lifespan. Every successful
calculation is kept in a bounded performance history.
"""

from collections import deque
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional
import logging
from enum import Enum

import pandas as pd

from .materials import ThermoelectricMaterial, MaterialCatalog
from .configurations import TEGConfiguration, TEGConfigCatalog
from .properties import (
    TemperatureEffects, calculate_temperature_effects, total_seebeck_coefficient,
    couple_thermal_conductance, couple_electrical_resistance, estimate_module_mass
)
from .optimizer import (
    ParameterSpace, OptimizationConstraints, OptimizationResult,
    search_design_space, DEFAULT_MAX_ITERATIONS
)
from ..utils.constants import (
    celsius_to_kelvin, CM2_TO_M2, UV_TO_V, DEFAULT_AMBIENT_TEMP,
    DEFAULT_SAFETY_TEMP_LIMIT, BASE_RELIABILITY, BASELINE_LIFESPAN,
    HOURS_TO_SECONDS, MAX_HISTORY_LENGTH
)
from ..utils.validation import (
    ValidationResult, InvalidThermalConditions, UnsafeTemperature
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("TEG_Conversion")


LOW_TEMP_DIFFERENCE = 10.0  # K, below this a warning is reported
LOW_HEAT_FLUX = 1000.0  # W/m², below this a warning is reported
PROTECTION_WARNING_FRACTION = 0.9  # of the material maximum


class OperatingMode(Enum):
    """Load matching strategy of the power electronics."""
    MAXIMUM_POWER = "maximum_power"            # Load equals internal resistance
    MAXIMUM_EFFICIENCY = "maximum_efficiency"  # Load at three times internal resistance
    CONSTANT_VOLTAGE = "constant_voltage"      # Load at ten times internal resistance


LOAD_RATIOS = {
    OperatingMode.MAXIMUM_POWER: 1.0,
    OperatingMode.MAXIMUM_EFFICIENCY: 3.0,
    OperatingMode.CONSTANT_VOLTAGE: 10.0,
}


@dataclass
class ThermalConditions:
    """
    Thermal boundary conditions at a TEG mounting site.

    Attributes:
        hot_side_temperature: Heat source temperature in °C
        cold_side_temperature: Heat sink temperature in °C
        heat_flux: Heat flux into the hot face in W/m²
        ambient_temperature: Ambient air temperature in °C
        hot_side_convection: Hot side convection coefficient in W/(m²·K)
        cold_side_convection: Cold side convection coefficient in W/(m²·K)
        airflow_velocity: Cooling airflow velocity in m/s
        airflow_temperature: Cooling airflow temperature in °C
        braking_duration: Duration of the braking event in s
        braking_intensity: Friction braking intensity (0-1)
    """
    hot_side_temperature: float
    cold_side_temperature: float
    heat_flux: float
    ambient_temperature: float = DEFAULT_AMBIENT_TEMP
    hot_side_convection: float = 50.0    # W/(m²·K)
    cold_side_convection: float = 25.0   # W/(m²·K)
    airflow_velocity: float = 0.0        # m/s
    airflow_temperature: float = DEFAULT_AMBIENT_TEMP
    braking_duration: float = 0.0        # s
    braking_intensity: float = 0.0

    @property
    def temperature_difference(self) -> float:
        return self.hot_side_temperature - self.cold_side_temperature

    @property
    def mean_temperature(self) -> float:
        return (self.hot_side_temperature + self.cold_side_temperature) / 2


@dataclass(frozen=True)
class TEGPerformance:
    """
    Electrical and thermal performance snapshot of one calculation.

    Attributes:
        config_id: Module design the snapshot belongs to
        operating_mode: Load matching strategy used
        electrical_power: Electrical output in W
        voltage: Terminal voltage in V
        current: Load current in A
        efficiency: Conversion efficiency in %
        power_density: Output per module mass in W/kg
        heat_input: Heat absorbed at the hot junction in W
        heat_rejected: Heat rejected at the cold junction in W
        temperature_difference: Applied hot to cold side difference in K
        effective_temperature_difference: Junction difference after heat exchanger drops in K
        internal_resistance: Temperature corrected couple resistance in Ω
        load_resistance: Resolved load resistance in Ω
        thermal_resistance: Couple thermal resistance in K/W
        reliability: Estimated reliability in %
        lifespan: Estimated lifespan in hours
    """
    config_id: str
    operating_mode: str
    electrical_power: float
    voltage: float
    current: float
    efficiency: float
    power_density: float
    heat_input: float
    heat_rejected: float
    temperature_difference: float
    effective_temperature_difference: float
    internal_resistance: float
    load_resistance: float
    thermal_resistance: float
    reliability: float
    lifespan: float

    def to_dict(self) -> Dict:
        return asdict(self)


def validate_thermal_conditions(conditions: ThermalConditions,
                                config: TEGConfiguration) -> ValidationResult:
    """
    Check thermal conditions against the operating window of a module design.

    Args:
        conditions: Thermal conditions to check
        config: Module design

    Returns:
        ValidationResult with errors for conditions the module cannot run in
    """
    result = ValidationResult()
    min_temp, max_temp = config.operating_temp_range
    hot = conditions.hot_side_temperature

    if hot > max_temp:
        result.errors.append(
            f"Hot side temperature ({hot:g}°C) exceeds maximum operating temperature ({max_temp:g}°C)"
        )
    if hot < min_temp:
        result.errors.append(
            f"Hot side temperature ({hot:g}°C) below minimum operating temperature ({min_temp:g}°C)"
        )
    if conditions.cold_side_temperature >= hot:
        result.errors.append("Cold side temperature must be lower than hot side temperature")

    if conditions.temperature_difference < LOW_TEMP_DIFFERENCE:
        result.warnings.append("Low temperature difference may result in poor performance")

    if conditions.heat_flux <= 0:
        result.errors.append("Heat flux must be positive")
    elif conditions.heat_flux < LOW_HEAT_FLUX:
        result.warnings.append("Low heat flux may result in minimal power generation")

    return result


class TEGConversionEngine:
    """
    Thermoelectric generator conversion model.

    The engine owns its material and configuration catalogs, a thermal
    protection switch with an absolute hot side ceiling, and a bounded history
    of successful calculations.
    """

    def __init__(self,
                 materials: Optional[MaterialCatalog] = None,
                 configurations: Optional[TEGConfigCatalog] = None,
                 max_operating_temperature: float = DEFAULT_SAFETY_TEMP_LIMIT,
                 history_length: int = MAX_HISTORY_LENGTH):
        """
        Initialize the conversion engine.

        Args:
            materials: Material catalog, a default catalog is created if None
            configurations: Configuration catalog, a default catalog is created if None
            max_operating_temperature: Absolute hot side ceiling in °C
            history_length: Number of performance snapshots kept
        """
        self.materials = materials if materials is not None else MaterialCatalog()
        self.configurations = (configurations if configurations is not None
                               else TEGConfigCatalog(self.materials))
        self.max_operating_temperature = max_operating_temperature
        self.thermal_protection_active = True
        self.system_reliability = BASE_RELIABILITY
        self.performance_history = deque(maxlen=history_length)

        logger.info(
            f"TEG conversion engine initialized: {len(self.configurations)} configurations, "
            f"{len(self.materials)} materials, safety limit {max_operating_temperature:.0f}°C"
        )

    def add_teg_configuration(self, config: TEGConfiguration) -> ValidationResult:
        """Validate and register a module design, raising InvalidConfiguration on errors."""
        return self.configurations.add(config)

    def add_material(self, material: ThermoelectricMaterial,
                     material_id: Optional[str] = None) -> str:
        return self.materials.add(material, material_id)

    def update_thermal_protection(self, enabled: bool,
                                  max_temperature: Optional[float] = None) -> None:
        """
        Switch thermal protection and optionally move the safety ceiling.

        Args:
            enabled: Whether protection checks run at all
            max_temperature: New absolute hot side ceiling in °C
        """
        self.thermal_protection_active = enabled
        if max_temperature is not None:
            self.max_operating_temperature = max_temperature
        logger.info(
            f"Thermal protection {'enabled' if enabled else 'disabled'}, "
            f"limit {self.max_operating_temperature:.0f}°C"
        )

    def calculate_power(self,
                        config_id: str,
                        thermal_conditions: ThermalConditions,
                        load_resistance: Optional[float] = None,
                        operating_mode: OperatingMode = OperatingMode.MAXIMUM_POWER,
                        cooling_active: bool = True,
                        thermal_protection_enabled: bool = True) -> TEGPerformance:
        """
        Calculate module performance and record it in the history.

        Args:
            config_id: Registered module design
            thermal_conditions: Thermal conditions at the mounting site
            load_resistance: Explicit load in Ω, overrides the operating mode
            operating_mode: Load matching strategy
            cooling_active: Whether the cold side cooling loop is running
            thermal_protection_enabled: Whether to apply the safety ceiling

        Returns:
            TEGPerformance snapshot

        Raises:
            ConfigNotFound: If config_id is not registered
            UnsafeTemperature: If the hot side exceeds the safety ceiling
            InvalidThermalConditions: If the module cannot operate in the conditions
        """
        config = self.configurations.get(config_id)
        performance = self._evaluate(config, thermal_conditions, load_resistance,
                                     operating_mode, thermal_protection_enabled)
        self.performance_history.append(performance)

        logger.debug(
            f"{config_id}: {performance.electrical_power:.3f}W at {performance.efficiency:.3f}% "
            f"(cooling {'on' if cooling_active else 'off'})"
        )
        return performance

    def calculate_teg_power(self, config_id: str, thermal_conditions: ThermalConditions,
                            **kwargs) -> TEGPerformance:
        return self.calculate_power(config_id, thermal_conditions, **kwargs)

    def _apply_thermal_protection(self, conditions: ThermalConditions,
                                  config: TEGConfiguration) -> None:
        hot = conditions.hot_side_temperature
        _, material_max = config.operating_temp_range

        if hot > material_max * PROTECTION_WARNING_FRACTION:
            logger.warning(
                f"TEG approaching maximum operating temperature: {hot:.1f}°C (max: {material_max:.0f}°C)"
            )

        if hot > self.max_operating_temperature:
            raise UnsafeTemperature(hot, self.max_operating_temperature)

    def _resolve_load(self, internal_resistance: float, load_resistance: Optional[float],
                      operating_mode: OperatingMode) -> float:
        if load_resistance is not None:
            return load_resistance
        return internal_resistance * LOAD_RATIOS[operating_mode]

    @staticmethod
    def _effective_temperature_difference(conditions: ThermalConditions,
                                          config: TEGConfiguration) -> float:
        hx = config.heat_exchanger
        heat_flow = conditions.heat_flux * hx.hot_side_area * CM2_TO_M2
        hot_junction = conditions.hot_side_temperature - heat_flow * hx.hot_side_resistance
        cold_junction = conditions.cold_side_temperature + heat_flow * hx.cold_side_resistance
        return max(0.0, hot_junction - cold_junction)

    def _reliability(self, config: TEGConfiguration, conditions: ThermalConditions,
                     effects: TemperatureEffects) -> float:
        _, material_max = config.operating_temp_range
        stress = conditions.hot_side_temperature / material_max

        reliability = self.system_reliability
        reliability *= max(0.7, 1 - 0.3 * stress ** 2)
        reliability *= max(0.8, 1 - 0.001 * conditions.braking_duration)
        reliability *= max(0.9, 1 - 0.1 * effects.resistance_factor)
        return max(0.5, reliability)

    @staticmethod
    def _lifespan(config: TEGConfiguration, conditions: ThermalConditions) -> float:
        # Derating starts at 100°C
        temperature_factor = 0.9 ** (max(0.0, conditions.hot_side_temperature - 100) / 50)
        cycling_factor = 0.95 ** (conditions.braking_duration / HOURS_TO_SECONDS)
        stability_factor = min(config.p_type_material.zt_value, config.n_type_material.zt_value) / 1.5
        return BASELINE_LIFESPAN * temperature_factor * cycling_factor * stability_factor

    def _evaluate(self, config: TEGConfiguration, conditions: ThermalConditions,
                  load_resistance: Optional[float] = None,
                  operating_mode: OperatingMode = OperatingMode.MAXIMUM_POWER,
                  thermal_protection_enabled: bool = True) -> TEGPerformance:
        """Compute performance without touching the history."""
        if thermal_protection_enabled and self.thermal_protection_active:
            self._apply_thermal_protection(conditions, config)

        validation = validate_thermal_conditions(conditions, config)
        if not validation.is_valid:
            raise InvalidThermalConditions(validation.errors, validation.warnings)
        for warning in validation.warnings:
            logger.warning(f"{config.config_id}: {warning}")

        p_type, n_type, legs = config.p_type_material, config.n_type_material, config.leg_dimensions
        pairs = config.thermoelectric_pairs
        effects = calculate_temperature_effects(conditions.mean_temperature)

        base_seebeck = total_seebeck_coefficient(p_type, n_type)
        conductance = couple_thermal_conductance(p_type, n_type, legs)
        base_resistance = couple_electrical_resistance(p_type, n_type, legs)
        internal_resistance = base_resistance * effects.resistance_factor

        effective_delta_t = self._effective_temperature_difference(conditions, config)
        open_circuit_voltage = base_seebeck * effects.seebeck_factor * effective_delta_t * pairs * UV_TO_V

        load = self._resolve_load(internal_resistance, load_resistance, operating_mode)
        current = open_circuit_voltage / (internal_resistance + load)
        voltage = current * load
        power = voltage * current

        seebeck_heat = (base_seebeck * current * celsius_to_kelvin(conditions.hot_side_temperature)
                        * pairs * UV_TO_V)
        conduction_heat = conductance * effective_delta_t
        joule_heat = 0.5 * current ** 2 * base_resistance
        heat_input = seebeck_heat + conduction_heat + joule_heat
        efficiency = power / heat_input * 100 if heat_input > 0 else 0.0

        mass = estimate_module_mass(config)

        return TEGPerformance(
            config_id=config.config_id,
            operating_mode=operating_mode.value,
            electrical_power=power,
            voltage=voltage,
            current=current,
            efficiency=efficiency,
            power_density=power / mass,
            heat_input=heat_input,
            heat_rejected=heat_input - power,
            temperature_difference=conditions.temperature_difference,
            effective_temperature_difference=effective_delta_t,
            internal_resistance=internal_resistance,
            load_resistance=load,
            thermal_resistance=1 / conductance,
            reliability=self._reliability(config, conditions, effects) * 100,
            lifespan=self._lifespan(config, conditions)
        )

    def optimize_configuration(self,
                               base_config_id: str,
                               target_conditions: ThermalConditions,
                               constraints: Optional[OptimizationConstraints] = None,
                               max_iterations: int = DEFAULT_MAX_ITERATIONS,
                               space: Optional[ParameterSpace] = None) -> OptimizationResult:
        """
        Search pair count and leg geometry of a registered design.

        Candidates are evaluated at maximum power under the target conditions and
        are not written to the performance history.

        Args:
            base_config_id: Registered design to start from
            target_conditions: Thermal conditions to optimise for
            constraints: Optional size, cost and target limits
            max_iterations: Number of parameter space points to consume
            space: Parameter space, the default grid if None

        Returns:
            OptimizationResult with the best design found
        """
        base_config = self.configurations.get(base_config_id)

        def evaluate(candidate: TEGConfiguration) -> TEGPerformance:
            return self._evaluate(candidate, target_conditions)

        return search_design_space(evaluate, base_config, constraints, space, max_iterations)

    def optimize_teg_configuration(self, base_config_id: str, target_conditions: ThermalConditions,
                                   constraints: Optional[OptimizationConstraints] = None,
                                   **kwargs) -> OptimizationResult:
        return self.optimize_configuration(base_config_id, target_conditions, constraints, **kwargs)

    def get_performance_history(self) -> List[TEGPerformance]:
        return list(self.performance_history)

    def get_performance_dataframe(self) -> pd.DataFrame:
        """Performance history as a DataFrame, one row per calculation."""
        return pd.DataFrame([record.to_dict() for record in self.performance_history])

    def get_system_diagnostics(self) -> Dict:
        """
        Snapshot of the engine state.

        Returns:
            Dictionary with copies of the catalogs and history, the base
            reliability and the thermal protection settings
        """
        return {
            'configurations': self.configurations.snapshot(),
            'materials': self.materials.snapshot(),
            'performance_history': self.get_performance_history(),
            'system_reliability': self.system_reliability,
            'thermal_protection_active': self.thermal_protection_active,
            'max_operating_temperature': self.max_operating_temperature,
        }
