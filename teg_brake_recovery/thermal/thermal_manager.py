"""
Brake thermal management module for TEG brake energy recovery simulation.

This module models where braking heat goes and how it is removed. It splits the
heat of a braking event between the brake assembly, the drive motor, the TEG and
the surrounding air, selects a cooling strategy from the brake temperature, and
estimates heat rejection by natural convection, forced convection and the active
cooling loop. From the resulting energy balance it derives the component
temperatures at the end of the event and the temperatures seen by the TEG faces.

Configuration is held in a YAML-backed ThermalManagementConfig so that cooling
hardware and temperature setpoints can be changed without touching code.
"""

import os
from collections import deque
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional
import logging
from enum import Enum

import numpy as np
import pandas as pd
import yaml
from scipy.interpolate import interp1d

from ..utils.constants import (
    DEFAULT_EMERGENCY_SHUTDOWN_TEMP, MOTOR_LOSS_FRACTION, BRAKE_THERMAL_MASS,
    MOTOR_THERMAL_MASS, TEG_MODULE_THICKNESS, REFERENCE_HEAT_LOAD, CM2_TO_M2,
    MAX_THERMAL_HISTORY_LENGTH
)
from ..utils.validation import EmergencyShutdown

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("Thermal_Manager")


# Heat split between components
BRAKE_HEAT_SHARE = 0.7
MOTOR_HEAT_SHARE = 0.2
TEG_HEAT_SHARE = 0.05
AMBIENT_HEAT_SHARE = 0.05

# Share of rejected heat drawn from each component
BRAKE_REJECTION_SHARE = 0.8
MOTOR_REJECTION_SHARE = 0.2

NATURAL_CONVECTION_COEFF = 5.0  # W/(m²·K)
FORCED_CONVECTION_COEFF = 10.0  # W/(m²·K) at 1 m/s
COOLING_COP = 5.0  # heat removed per W of cooling power
EMERGENCY_FRACTION = 0.9  # of the shutdown threshold
MOTOR_WARNING_TEMP = 150.0  # °C
TEG_HEAT_FLOW = 100.0  # W, assumed heat flow through the TEG faces
TEG_INTERFACE_AREA = 0.01  # m²


class ManagementMode(Enum):
    """Thermal management operating mode."""
    PASSIVE = "passive"    # Airflow only, no pump
    ACTIVE = "active"      # Pump follows the brake temperature
    ADAPTIVE = "adaptive"  # Cooling scaled with heat generation


class CoolingStatus(Enum):
    """State of the cooling strategy."""
    OFF = "off"
    PASSIVE = "passive"
    ACTIVE = "active"
    EMERGENCY = "emergency"


class ThermalManagementConfig:
    """Configuration parameters for brake thermal management."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize thermal management configuration with default values or from file.

        Args:
            config_path: Optional path to YAML configuration file
        """
        # Cooling loop
        self.cooling_type = 'hybrid'             # passive, active or hybrid
        self.coolant_type = 'glycol'
        self.coolant_flow_rate = 5.0             # L/min
        self.pump_power = 50.0                   # W

        # Temperature control setpoints (°C)
        self.max_operating_temp = 250.0
        self.optimal_temp_min = 50.0
        self.optimal_temp_max = 200.0
        self.thermal_protection = True
        self.emergency_shutdown_temp = DEFAULT_EMERGENCY_SHUTDOWN_TEMP

        # Heat sink
        self.heat_sink_material = 'aluminum'
        self.fin_density = 10.0                  # fins/cm
        self.heat_sink_area = 500.0              # cm²
        self.heat_sink_resistance = 0.2          # K/W

        # Thermal interface between brake and TEG
        self.interface_material = 'thermal_paste'
        self.interface_thickness = 0.1           # mm
        self.interface_conductivity = 5.0        # W/(m·K)

        # Load from file if provided
        if config_path:
            self.load_from_file(config_path)

    def load_from_file(self, config_path: str):
        """
        Load thermal management configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Thermal management configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if 'thermal_management' in config:
            self.update(config['thermal_management'])

    def update(self, sections: Dict):
        """
        Update attributes from a nested dictionary of configuration sections.

        Args:
            sections: Dictionary with any of the cooling_system, temperature_control,
                heat_sink and thermal_interface sections
        """
        if 'cooling_system' in sections:
            cooling = sections['cooling_system']
            self.cooling_type = cooling.get('type', self.cooling_type)
            self.coolant_type = cooling.get('coolant_type', self.coolant_type)
            self.coolant_flow_rate = cooling.get('flow_rate', self.coolant_flow_rate)
            self.pump_power = cooling.get('pump_power', self.pump_power)

        if 'temperature_control' in sections:
            control = sections['temperature_control']
            self.max_operating_temp = control.get('max_operating_temp', self.max_operating_temp)
            optimal = control.get('optimal_temp_range', {})
            self.optimal_temp_min = optimal.get('min', self.optimal_temp_min)
            self.optimal_temp_max = optimal.get('max', self.optimal_temp_max)
            self.thermal_protection = control.get('thermal_protection', self.thermal_protection)
            self.emergency_shutdown_temp = control.get('emergency_shutdown', self.emergency_shutdown_temp)

        if 'heat_sink' in sections:
            sink = sections['heat_sink']
            self.heat_sink_material = sink.get('material', self.heat_sink_material)
            self.fin_density = sink.get('fin_density', self.fin_density)
            self.heat_sink_area = sink.get('surface_area', self.heat_sink_area)
            self.heat_sink_resistance = sink.get('thermal_resistance', self.heat_sink_resistance)

        if 'thermal_interface' in sections:
            interface = sections['thermal_interface']
            self.interface_material = interface.get('material', self.interface_material)
            self.interface_thickness = interface.get('thickness', self.interface_thickness)
            self.interface_conductivity = interface.get('thermal_conductivity',
                                                        self.interface_conductivity)

    def to_dict(self) -> Dict:
        return {
            'cooling_system': {
                'type': self.cooling_type,
                'coolant_type': self.coolant_type,
                'flow_rate': self.coolant_flow_rate,
                'pump_power': self.pump_power
            },
            'temperature_control': {
                'max_operating_temp': self.max_operating_temp,
                'optimal_temp_range': {
                    'min': self.optimal_temp_min,
                    'max': self.optimal_temp_max
                },
                'thermal_protection': self.thermal_protection,
                'emergency_shutdown': self.emergency_shutdown_temp
            },
            'heat_sink': {
                'material': self.heat_sink_material,
                'fin_density': self.fin_density,
                'surface_area': self.heat_sink_area,
                'thermal_resistance': self.heat_sink_resistance
            },
            'thermal_interface': {
                'material': self.interface_material,
                'thickness': self.interface_thickness,
                'thermal_conductivity': self.interface_conductivity
            }
        }

    def save_to_file(self, config_path: str):
        """
        Save thermal management configuration to YAML file.

        Args:
            config_path: Path to save configuration
        """
        directory = os.path.dirname(config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.dump({'thermal_management': self.to_dict()}, f, default_flow_style=False)


@dataclass
class CoolingSystemConfig:
    """Cooling loop hardware derived from the management configuration."""
    system_type: str           # air, liquid or hybrid
    capacity: float            # W, maximum cooling capacity
    power_consumption: float   # W, power draw at full capacity
    response_time: float       # s
    min_operating_temp: float  # °C
    max_operating_temp: float  # °C


@dataclass
class HeatExchangerModel:
    """Brake side heat exchanger."""
    effectiveness: float
    thermal_mass: float                 # J/K
    surface_area: float                 # m²
    overall_heat_transfer_coeff: float  # W/(m²·K)
    pressure_drop: float                # Pa


@dataclass
class BrakingThermalInputs:
    """
    Thermal inputs of one braking event.

    Attributes:
        vehicle_speed: Vehicle speed in km/h
        braking_force: Front axle braking force in N
        braking_power: Total braking power in W
        brake_temperature: Brake temperature at the start of the event in °C
        motor_temperature: Motor temperature at the start of the event in °C
        ambient_temperature: Ambient temperature in °C
        airflow: Cooling airflow velocity in m/s
        braking_duration: Event duration in s
        regenerative_braking_ratio: Share of braking power recovered by the motor (0-1)
    """
    vehicle_speed: float
    braking_force: float
    braking_power: float
    brake_temperature: float
    motor_temperature: float
    ambient_temperature: float
    airflow: float
    braking_duration: float
    regenerative_braking_ratio: float

    @property
    def mechanical_braking_power(self) -> float:
        return self.braking_power * (1 - self.regenerative_braking_ratio)

    @property
    def regenerated_power(self) -> float:
        return self.braking_power * self.regenerative_braking_ratio


@dataclass(frozen=True)
class HeatDistribution:
    """Heat of a braking event split between components, in W."""
    brake_heat: float
    motor_heat: float
    teg_heat: float
    ambient_loss: float


@dataclass(frozen=True)
class CoolingStrategy:
    """Selected cooling state with its actuator commands."""
    status: CoolingStatus
    cooling_power: float  # W
    fan_speed: float      # 0-1
    pump_speed: float     # 0-1


@dataclass(frozen=True)
class ThermalManagementOutputs:
    """
    Result of one thermal management step.

    Attributes:
        final_brake_temperature: Brake temperature at the end of the event in °C
        final_motor_temperature: Motor temperature at the end of the event in °C
        teg_hot_side_temperature: TEG hot face temperature in °C
        teg_cold_side_temperature: TEG cold face temperature in °C
        heat_generation: Total heat generated in W
        heat_distribution: Heat split between components
        cooling_power: Power drawn by the cooling loop in W
        heat_rejection: Heat rejected to the environment in W
        thermal_efficiency: Net heat rejection over heat generation in %
        cooling_system_status: Selected cooling state
        fan_speed: Fan command (0-1)
        pump_speed: Pump command (0-1)
        temperature_gradient: Gradient across the TEG in K/m
    """
    final_brake_temperature: float
    final_motor_temperature: float
    teg_hot_side_temperature: float
    teg_cold_side_temperature: float
    heat_generation: float
    heat_distribution: HeatDistribution
    cooling_power: float
    heat_rejection: float
    thermal_efficiency: float
    cooling_system_status: CoolingStatus
    fan_speed: float
    pump_speed: float
    temperature_gradient: float

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['cooling_system_status'] = self.cooling_system_status.value
        return data


class ThermalManager:
    """
    Brake and TEG thermal management model.

    The manager owns a cooling loop and heat exchanger model built from its
    configuration, and keeps a bounded history of management results.
    """

    def __init__(self, config: Optional[ThermalManagementConfig] = None,
                 history_length: int = MAX_THERMAL_HISTORY_LENGTH):
        """
        Initialize the thermal manager.

        Args:
            config: Thermal management configuration, defaults if None
            history_length: Number of management results kept
        """
        self.config = config or ThermalManagementConfig()
        self.adaptive_cooling_enabled = True
        self.emergency_shutdown_active = False
        self.thermal_history = deque(maxlen=history_length)

        self._initialize_models()

        logger.info(
            f"Thermal manager initialized: {self.cooling_system.system_type} cooling, "
            f"{self.cooling_system.capacity:.0f}W capacity, shutdown at "
            f"{self.config.emergency_shutdown_temp:.0f}°C"
        )

    def _initialize_models(self):
        config = self.config
        if config.max_operating_temp <= config.optimal_temp_max:
            raise ValueError("Maximum operating temperature must exceed the optimal range maximum")

        system_type = {'passive': 'air', 'active': 'liquid'}.get(config.cooling_type, 'hybrid')
        self.cooling_system = CoolingSystemConfig(
            system_type=system_type,
            capacity=2000.0,
            power_consumption=config.pump_power,
            response_time=5.0,
            min_operating_temp=-20.0,
            max_operating_temp=120.0
        )

        self.heat_exchanger = HeatExchangerModel(
            effectiveness=0.8,
            thermal_mass=5000.0,
            surface_area=config.heat_sink_area * CM2_TO_M2,
            overall_heat_transfer_coeff=100.0,
            pressure_drop=500.0
        )

        # Share of capacity used once the brake leaves the optimal range
        self._active_cooling_curve = interp1d(
            [config.optimal_temp_max, config.max_operating_temp], [0.0, 1.0],
            bounds_error=False, fill_value=(0.0, 1.0)
        )

    def manage(self, thermal_inputs: BrakingThermalInputs,
               mode: ManagementMode = ManagementMode.ADAPTIVE,
               teg_active: bool = False) -> ThermalManagementOutputs:
        """
        Run one thermal management step for a braking event.

        Args:
            thermal_inputs: Thermal inputs of the braking event
            mode: Thermal management mode
            teg_active: Whether the TEG is harvesting during the event

        Returns:
            ThermalManagementOutputs

        Raises:
            EmergencyShutdown: If the brake temperature reaches the shutdown threshold
        """
        self._check_emergency_conditions(thermal_inputs)

        heat_generation = self.calculate_heat_generation(thermal_inputs)
        distribution = self.calculate_heat_distribution(heat_generation, teg_active)
        strategy = self.determine_cooling_strategy(thermal_inputs, mode, heat_generation)
        heat_rejection = self.calculate_heat_rejection(thermal_inputs, strategy)

        brake_temp, motor_temp = self._final_temperatures(thermal_inputs, distribution, heat_rejection)
        hot_side, cold_side = self._teg_temperatures(brake_temp, thermal_inputs.ambient_temperature,
                                                     teg_active)

        if heat_generation == 0:
            thermal_efficiency = 0.0
        else:
            thermal_efficiency = max(0.0, (heat_rejection - strategy.cooling_power) / heat_generation * 100)

        outputs = ThermalManagementOutputs(
            final_brake_temperature=brake_temp,
            final_motor_temperature=motor_temp,
            teg_hot_side_temperature=hot_side,
            teg_cold_side_temperature=cold_side,
            heat_generation=heat_generation,
            heat_distribution=distribution,
            cooling_power=strategy.cooling_power,
            heat_rejection=heat_rejection,
            thermal_efficiency=thermal_efficiency,
            cooling_system_status=strategy.status,
            fan_speed=strategy.fan_speed,
            pump_speed=strategy.pump_speed,
            temperature_gradient=(hot_side - cold_side) / TEG_MODULE_THICKNESS
        )

        self.thermal_history.append(outputs)
        return outputs

    def manage_thermal_conditions(self, thermal_inputs: BrakingThermalInputs,
                                  mode: ManagementMode = ManagementMode.ADAPTIVE,
                                  teg_active: bool = False) -> ThermalManagementOutputs:
        return self.manage(thermal_inputs, mode, teg_active)

    def _check_emergency_conditions(self, inputs: BrakingThermalInputs):
        shutdown_temp = self.config.emergency_shutdown_temp
        if inputs.brake_temperature >= shutdown_temp:
            self.emergency_shutdown_active = True
            logger.error(f"Emergency shutdown: brake at {inputs.brake_temperature:.1f}°C")
            raise EmergencyShutdown(inputs.brake_temperature, shutdown_temp)

        if inputs.motor_temperature > MOTOR_WARNING_TEMP:
            logger.warning(f"Motor temperature {inputs.motor_temperature:.1f}°C approaching critical levels")

    @staticmethod
    def calculate_heat_generation(inputs: BrakingThermalInputs) -> float:
        """Friction heat plus motor losses on the regenerated share, in W."""
        return inputs.mechanical_braking_power + inputs.regenerated_power * MOTOR_LOSS_FRACTION

    @staticmethod
    def calculate_heat_distribution(total_heat: float, teg_active: bool) -> HeatDistribution:
        return HeatDistribution(
            brake_heat=total_heat * BRAKE_HEAT_SHARE,
            motor_heat=total_heat * MOTOR_HEAT_SHARE,
            teg_heat=total_heat * TEG_HEAT_SHARE if teg_active else 0.0,
            ambient_loss=total_heat * AMBIENT_HEAT_SHARE
        )

    def determine_cooling_strategy(self, inputs: BrakingThermalInputs, mode: ManagementMode,
                                   heat_generation: float) -> CoolingStrategy:
        """
        Select the cooling state and actuator commands from the brake temperature.

        Args:
            inputs: Thermal inputs of the braking event
            mode: Thermal management mode
            heat_generation: Total heat generated in W

        Returns:
            CoolingStrategy
        """
        config = self.config
        capacity = self.cooling_system.capacity
        brake_temp = inputs.brake_temperature

        status = CoolingStatus.OFF
        cooling_power = 0.0
        fan_speed = 0.0
        pump_speed = 0.0

        if brake_temp >= config.emergency_shutdown_temp * EMERGENCY_FRACTION:
            status = CoolingStatus.EMERGENCY
            cooling_power = capacity
            fan_speed = 1.0
            pump_speed = 1.0
        elif brake_temp > config.optimal_temp_max:
            status = CoolingStatus.ACTIVE
            ratio = float(self._active_cooling_curve(brake_temp))
            cooling_power = capacity * ratio
            fan_speed = ratio
            pump_speed = ratio if mode == ManagementMode.ACTIVE else 0.0
        elif brake_temp > config.optimal_temp_min:
            status = CoolingStatus.PASSIVE
            fan_speed = min(0.5, inputs.airflow / 20)
            cooling_power = capacity * 0.1

        if self.adaptive_cooling_enabled and mode == ManagementMode.ADAPTIVE:
            heat_ratio = heat_generation / REFERENCE_HEAT_LOAD
            cooling_power *= (1 + heat_ratio * 0.5)
            fan_speed = min(1.0, fan_speed * (1 + heat_ratio * 0.3))

        return CoolingStrategy(status, cooling_power, fan_speed, pump_speed)

    def calculate_heat_rejection(self, inputs: BrakingThermalInputs,
                                 strategy: CoolingStrategy) -> float:
        """
        Heat rejected from the brake to the environment in W.

        Natural convection, forced convection from airflow and the active
        cooling loop contribute in parallel.
        """
        area = self.heat_exchanger.surface_area
        delta_t = inputs.brake_temperature - inputs.ambient_temperature

        natural = NATURAL_CONVECTION_COEFF * area * delta_t
        forced = FORCED_CONVECTION_COEFF * max(1.0, inputs.airflow) ** 0.8 * area * delta_t

        active = 0.0
        if strategy.cooling_power != 0:
            effectiveness = min(1.0, strategy.fan_speed * 0.8 + strategy.pump_speed * 0.9)
            active = strategy.cooling_power * COOLING_COP * effectiveness * min(1.0, delta_t / 100)

        return natural + forced + active

    @staticmethod
    def _final_temperatures(inputs: BrakingThermalInputs, distribution: HeatDistribution,
                            heat_rejection: float):
        duration = inputs.braking_duration

        brake_rise = distribution.brake_heat * duration / BRAKE_THERMAL_MASS
        motor_rise = distribution.motor_heat * duration / MOTOR_THERMAL_MASS
        brake_drop = heat_rejection * BRAKE_REJECTION_SHARE * duration / BRAKE_THERMAL_MASS
        motor_drop = heat_rejection * MOTOR_REJECTION_SHARE * duration / MOTOR_THERMAL_MASS

        brake_temp = max(inputs.ambient_temperature, inputs.brake_temperature + brake_rise - brake_drop)
        motor_temp = max(inputs.ambient_temperature, inputs.motor_temperature + motor_rise - motor_drop)
        return brake_temp, motor_temp

    def _teg_temperatures(self, brake_temp: float, ambient_temp: float, teg_active: bool):
        if not teg_active:
            return ambient_temp, ambient_temp

        # 2 K/W with the default interface, a 200 K drop at TEG_HEAT_FLOW
        interface_resistance = (self.config.interface_thickness
                                / (self.config.interface_conductivity * TEG_INTERFACE_AREA))
        hot_side = brake_temp - TEG_HEAT_FLOW * interface_resistance
        cold_side = ambient_temp + TEG_HEAT_FLOW * self.config.heat_sink_resistance

        return max(ambient_temp, hot_side), max(ambient_temp, cold_side)

    def estimate_cooling_power(self, fan_speed: float, pump_speed: float) -> float:
        """Electrical draw of fan and pump, 30/70 split of the pump power rating."""
        power = self.cooling_system.power_consumption
        return fan_speed * power * 0.3 + pump_speed * power * 0.7

    def estimate_achievable_temperature(self, fan_speed: float, pump_speed: float,
                                        ambient_temperature: float) -> float:
        """Brake temperature reachable from a 200°C baseline, 1°C per 100W of cooling."""
        effective_capacity = self.cooling_system.capacity * (fan_speed + pump_speed) / 2
        return max(ambient_temperature, 200.0 - effective_capacity / 100)

    def optimize_cooling_system(self, target_temperature: float, max_cooling_power: float,
                                ambient_temperature: float, airflow: float = 0.0) -> Dict:
        """
        Find the cheapest fan and pump setting reaching a target brake temperature.

        Args:
            target_temperature: Brake temperature to reach in °C
            max_cooling_power: Cooling power budget in W
            ambient_temperature: Ambient temperature in °C
            airflow: Vehicle airflow in m/s

        Returns:
            Dictionary with the optimal fan and pump speed, expected cooling power,
            achievable temperature and whether the target was feasible
        """
        best = {
            'optimal_fan_speed': 0.0,
            'optimal_pump_speed': 0.0,
            'expected_cooling_power': float('inf'),
            'achievable_temperature': target_temperature,
            'feasible': False
        }

        speeds = np.linspace(0.0, 1.0, 11)
        for fan_speed in speeds:
            for pump_speed in speeds:
                cooling_power = self.estimate_cooling_power(fan_speed, pump_speed)
                if cooling_power > max_cooling_power:
                    continue

                achieved = self.estimate_achievable_temperature(fan_speed, pump_speed,
                                                                ambient_temperature)
                if achieved <= target_temperature and cooling_power < best['expected_cooling_power']:
                    best.update({
                        'optimal_fan_speed': float(fan_speed),
                        'optimal_pump_speed': float(pump_speed),
                        'expected_cooling_power': float(cooling_power),
                        'achievable_temperature': float(achieved),
                        'feasible': True
                    })

        if not best['feasible']:
            logger.warning(
                f"Target brake temperature {target_temperature:.1f}°C not reachable within "
                f"{max_cooling_power:.0f}W (airflow {airflow:.1f}m/s)"
            )

        return best

    def update_configuration(self, config: ThermalManagementConfig):
        """Replace the configuration and rebuild the cooling and heat exchanger models."""
        self.config = config
        self._initialize_models()
        logger.info("Thermal management configuration updated")

    def set_adaptive_cooling(self, enabled: bool):
        self.adaptive_cooling_enabled = enabled

    def reset_emergency_shutdown(self):
        """Clear the emergency shutdown flag once the brakes have been inspected."""
        self.emergency_shutdown_active = False
        logger.info("Emergency shutdown flag cleared")

    def get_thermal_history(self) -> List[ThermalManagementOutputs]:
        return list(self.thermal_history)

    def get_thermal_dataframe(self) -> pd.DataFrame:
        """Thermal history as a DataFrame, heat distribution flattened into columns."""
        return pd.json_normalize([record.to_dict() for record in self.thermal_history], sep='_')

    def get_thermal_diagnostics(self) -> Dict:
        return {
            'config': self.config.to_dict(),
            'cooling_system': asdict(self.cooling_system),
            'heat_exchanger': asdict(self.heat_exchanger),
            'thermal_history': self.get_thermal_history(),
            'emergency_shutdown_active': self.emergency_shutdown_active,
            'adaptive_cooling_enabled': self.adaptive_cooling_enabled,
        }
