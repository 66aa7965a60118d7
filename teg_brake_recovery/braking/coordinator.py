"""
Energy recovery coordinator for TEG brake energy recovery simulation.

This module integrates regenerative braking, brake thermal management and TEG
harvesting into one braking calculation. For every braking event it asks the
regenerative braking controller for the motor/friction split, derives the thermal
load on the brakes, decides whether the TEG may harvest, runs the thermal manager
and the conversion engine, and dispatches the recovered power between battery,
supercapacitor and direct use. Results are kept in a bounded history and rolled
up into per-subsystem diagnostics.
"""

import copy
from collections import deque
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Union, Tuple
import logging
from enum import Enum

import pandas as pd

from .regenerative import BrakingInputs, BrakingOutputs, RegenerativeBrakingController
from .strategy import EnergyRecoveryStrategy, ThermalLimits
from ..teg.conversion import TEGConversionEngine, ThermalConditions, TEGPerformance, OperatingMode
from ..teg.configurations import TEGConfiguration, TEGConfigCatalog
from ..thermal.thermal_manager import (
    ThermalManager, ThermalManagementOutputs, BrakingThermalInputs,
    ManagementMode, CoolingStatus
)
from ..utils.constants import (
    GRAVITY, KMH_TO_MS, DEFAULT_VEHICLE_MASS, DEFAULT_ROAD_FRICTION,
    DEFAULT_BRAKE_SURFACE_AREA, MOTOR_LOSS_FRACTION, MAX_HISTORY_LENGTH
)
from ..utils.validation import (
    require_in_range, UnsafeTemperature, InvalidThermalConditions
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("Energy_Recovery")


# TEG design tiers by brake temperature (°C), first match wins
TEG_CONFIG_TIERS = [
    (200.0, 'high_performance_brake_teg'),
    (150.0, 'brake_caliper_teg'),
]
DEFAULT_TEG_CONFIG = 'brake_disc_teg'

COLD_SIDE_RISE = 20.0  # K above ambient at the TEG cold face
HOT_CONVECTION_BASE = 25.0  # W/(m²·K) at 1 m/s
COLD_CONVECTION_BASE = 15.0  # W/(m²·K) at 1 m/s
TEG_ACTIVE_POWER = 10.0  # W
REGEN_ACTIVE_RATIO = 0.1
THERMAL_STRESS_FRACTION = 0.8  # of the maximum brake temperature
DEFAULT_RELIABILITY = 95.0  # %
HIGH_SOC_LIMIT = 0.95
MOTOR_LIMIT_TEMP = 120.0  # °C


class BrakingStatus(Enum):
    """Regenerative braking subsystem status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    LIMITED = "limited"
    FAULT = "fault"


class TEGStatus(Enum):
    """TEG subsystem status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    THERMAL_LIMIT = "thermal_limit"
    FAULT = "fault"


class ThermalStatus(Enum):
    """Thermal management subsystem status."""
    OPTIMAL = "optimal"
    ACTIVE_COOLING = "active_cooling"
    THERMAL_STRESS = "thermal_stress"
    EMERGENCY = "emergency"


@dataclass
class IntegratedBrakingInputs:
    """
    Inputs of one integrated braking calculation.

    Attributes:
        driving_speed: Vehicle speed in km/h
        braking_intensity: Brake pedal demand (0-1)
        battery_soc: Battery state of charge (0-1)
        motor_temperature: Drive motor temperature in °C
        brake_temperature: Brake temperature in °C
        ambient_temperature: Ambient temperature in °C
        airflow: Cooling airflow velocity in m/s
        teg_system_enabled: Whether the TEG may harvest at all
        thermal_management_mode: Thermal management mode
    """
    driving_speed: float
    braking_intensity: float
    battery_soc: float
    motor_temperature: float
    brake_temperature: float
    ambient_temperature: float
    airflow: float
    teg_system_enabled: bool = True
    thermal_management_mode: Union[ManagementMode, str] = ManagementMode.ADAPTIVE


@dataclass(frozen=True)
class PowerDistribution:
    """Recovered power dispatch in W."""
    battery: float
    supercapacitor: float
    direct_use: float

    @property
    def total(self) -> float:
        return self.battery + self.supercapacitor + self.direct_use


@dataclass(frozen=True)
class IntegratedBrakingOutputs:
    """
    Result of one integrated braking calculation.

    Attributes:
        braking_power: Total braking power in W
        regenerative_power: Electrical power recovered by the motor in W
        teg_power: Electrical power recovered by the TEG in W
        total_recovered_power: Sum of regenerative and TEG power in W
        mechanical_braking_power: Power dissipated by the friction brakes in W
        system_efficiency: Recovered over recovered plus friction power in %
        thermal_efficiency: TEG conversion efficiency in %
        brake_temperature: Brake temperature after the event in °C
        teg_hot_side_temperature: TEG hot face temperature in °C
        teg_cold_side_temperature: TEG cold face temperature in °C
        power_distribution: Dispatch of the recovered power
        teg_config_id: TEG design used, None if the TEG did not run
        teg_status: TEG subsystem status for this event
    """
    braking_power: float
    regenerative_power: float
    teg_power: float
    total_recovered_power: float
    mechanical_braking_power: float
    system_efficiency: float
    thermal_efficiency: float
    brake_temperature: float
    teg_hot_side_temperature: float
    teg_cold_side_temperature: float
    power_distribution: PowerDistribution
    teg_config_id: Optional[str]
    teg_status: TEGStatus

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['teg_status'] = self.teg_status.value
        return data


@dataclass(frozen=True)
class RegenerativeBrakingDiagnostics:
    power: float
    efficiency: float
    status: BrakingStatus


@dataclass(frozen=True)
class TEGDiagnostics:
    power: float
    efficiency: float
    hot_side_temp: float
    cold_side_temp: float
    status: TEGStatus
    config_id: Optional[str] = None


@dataclass(frozen=True)
class ThermalDiagnostics:
    cooling_power: float
    heat_rejection: float
    thermal_efficiency: float
    status: ThermalStatus


@dataclass(frozen=True)
class OverallDiagnostics:
    total_recovered_power: float
    system_efficiency: float
    energy_savings: float
    reliability: float


@dataclass(frozen=True)
class SystemDiagnostics:
    """Per-subsystem status after the most recent braking calculation."""
    regenerative_braking: RegenerativeBrakingDiagnostics
    teg_system: TEGDiagnostics
    thermal_management: ThermalDiagnostics
    overall: OverallDiagnostics

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['regenerative_braking']['status'] = self.regenerative_braking.status.value
        data['teg_system']['status'] = self.teg_system.status.value
        data['thermal_management']['status'] = self.thermal_management.status.value
        return data


def initial_diagnostics(ambient_temperature: float = 25.0) -> SystemDiagnostics:
    return SystemDiagnostics(
        regenerative_braking=RegenerativeBrakingDiagnostics(0.0, 0.0, BrakingStatus.INACTIVE),
        teg_system=TEGDiagnostics(0.0, 0.0, ambient_temperature, ambient_temperature,
                                  TEGStatus.INACTIVE),
        thermal_management=ThermalDiagnostics(0.0, 0.0, 0.0, ThermalStatus.OPTIMAL),
        overall=OverallDiagnostics(0.0, 0.0, 0.0, DEFAULT_RELIABILITY)
    )


def calculate_braking_power(driving_speed: float, braking_intensity: float,
                            vehicle_mass: float = DEFAULT_VEHICLE_MASS) -> float:
    """
    Braking power from friction-limited deceleration.

    Args:
        driving_speed: Vehicle speed in km/h
        braking_intensity: Brake pedal demand (0-1)
        vehicle_mass: Vehicle mass in kg

    Returns:
        Braking power in W
    """
    braking_force = braking_intensity * vehicle_mass * GRAVITY * DEFAULT_ROAD_FRICTION
    return braking_force * driving_speed * KMH_TO_MS


def estimate_braking_duration(driving_speed: float, braking_intensity: float) -> float:
    """Braking event duration in s, longer for gentle braking from higher speed."""
    return 5.0 * (1.0 / max(0.1, braking_intensity)) * (driving_speed / 50.0)


def convection_coefficient(airflow: float, hot_side: bool) -> float:
    base = HOT_CONVECTION_BASE if hot_side else COLD_CONVECTION_BASE
    return base * max(1.0, airflow) ** 0.8


def select_teg_configuration(brake_temperature: float) -> str:
    """Pick the TEG design tier for a brake temperature."""
    for threshold, config_id in TEG_CONFIG_TIERS:
        if brake_temperature > threshold:
            return config_id
    return DEFAULT_TEG_CONFIG


def classify_thermal_status(brake_temperature: float, cooling_status: CoolingStatus,
                            limits: ThermalLimits) -> ThermalStatus:
    """
    Thermal management status after a braking event.

    Args:
        brake_temperature: Brake temperature after the event in °C
        cooling_status: Cooling state chosen by the thermal manager
        limits: Thermal limits of the energy recovery strategy

    Returns:
        ThermalStatus, thresholds are exclusive
    """
    if cooling_status == CoolingStatus.EMERGENCY:
        return ThermalStatus.EMERGENCY
    if brake_temperature > limits.max_brake_temp * THERMAL_STRESS_FRACTION:
        return ThermalStatus.THERMAL_STRESS
    if cooling_status == CoolingStatus.ACTIVE or brake_temperature > limits.cooling_activation_temp:
        return ThermalStatus.ACTIVE_COOLING
    return ThermalStatus.OPTIMAL


class EnergyRecoveryCoordinator:
    """
    Coordinator of regenerative braking, thermal management and TEG harvesting.

    One coordinator serves one braking session. It owns its conversion engine,
    thermal manager, regenerative braking controller and strategy.
    """

    def __init__(self,
                 teg_engine: Optional[TEGConversionEngine] = None,
                 thermal_manager: Optional[ThermalManager] = None,
                 braking_controller=None,
                 strategy: Optional[EnergyRecoveryStrategy] = None,
                 brake_surface_area: float = DEFAULT_BRAKE_SURFACE_AREA,  # m²
                 vehicle_mass: float = DEFAULT_VEHICLE_MASS,              # kg
                 history_length: int = MAX_HISTORY_LENGTH):
        """
        Initialize the energy recovery coordinator.

        Args:
            teg_engine: TEG conversion engine, a default engine if None
            thermal_manager: Thermal manager, a default manager if None
            braking_controller: Object exposing calculate_optimal_braking(BrakingInputs),
                the rule-based RegenerativeBrakingController if None
            strategy: Energy recovery strategy, defaults if None
            brake_surface_area: Brake friction surface area in m²
            vehicle_mass: Vehicle mass in kg
            history_length: Number of braking results kept
        """
        self.teg_engine = teg_engine if teg_engine is not None else TEGConversionEngine()
        self.thermal_manager = thermal_manager if thermal_manager is not None else ThermalManager()
        self.braking_controller = braking_controller or RegenerativeBrakingController()
        self.strategy = strategy or EnergyRecoveryStrategy()
        self.brake_surface_area = brake_surface_area
        self.vehicle_mass = vehicle_mass
        self.performance_history = deque(maxlen=history_length)
        self.diagnostics = initial_diagnostics()

        logger.info(
            f"Energy recovery coordinator initialized: TEG activation at "
            f"{self.strategy.activation_threshold.temperature:.0f}°C, max TEG power "
            f"{self.strategy.power_management.max_teg_power:.0f}W"
        )

    def calculate_integrated_braking(self, inputs: IntegratedBrakingInputs) -> IntegratedBrakingOutputs:
        """
        Run one integrated braking calculation.

        Args:
            inputs: Braking request, drivetrain state and thermal conditions

        Returns:
            IntegratedBrakingOutputs

        Raises:
            ValueOutOfRange: If brake temperature, ambient temperature or airflow is out of range
            EmergencyShutdown: If the brake temperature reaches the shutdown threshold
        """
        self._validate_inputs(inputs)
        mode = ManagementMode(inputs.thermal_management_mode)

        regen = self.braking_controller.calculate_optimal_braking(BrakingInputs(
            driving_speed=inputs.driving_speed,
            braking_intensity=inputs.braking_intensity,
            battery_soc=inputs.battery_soc,
            motor_temperature=inputs.motor_temperature
        ))
        ratio = regen.regenerative_braking_ratio

        thermal_inputs = BrakingThermalInputs(
            vehicle_speed=inputs.driving_speed,
            braking_force=regen.front_axle_braking_force,
            braking_power=calculate_braking_power(inputs.driving_speed, inputs.braking_intensity,
                                                  self.vehicle_mass),
            brake_temperature=inputs.brake_temperature,
            motor_temperature=inputs.motor_temperature,
            ambient_temperature=inputs.ambient_temperature,
            airflow=inputs.airflow,
            braking_duration=estimate_braking_duration(inputs.driving_speed, inputs.braking_intensity),
            regenerative_braking_ratio=ratio
        )

        teg_requested = inputs.teg_system_enabled and self.should_activate_teg(thermal_inputs)
        thermal = self.thermal_manager.manage(thermal_inputs, mode, teg_active=teg_requested)

        teg_performance, teg_status, teg_config_id = None, TEGStatus.INACTIVE, None
        if teg_requested:
            teg_performance, teg_status, teg_config_id = self._run_teg(thermal_inputs, mode)

        teg_power = 0.0
        if teg_performance is not None:
            teg_power = min(teg_performance.electrical_power,
                            self.strategy.power_management.max_teg_power)
            teg_status = TEGStatus.ACTIVE if teg_power > TEG_ACTIVE_POWER else TEGStatus.INACTIVE
            hot_side, cold_side = thermal.teg_hot_side_temperature, thermal.teg_cold_side_temperature
        else:
            hot_side = cold_side = inputs.ambient_temperature

        braking_power = thermal_inputs.braking_power
        regenerative_power = thermal_inputs.regenerated_power * (1 - MOTOR_LOSS_FRACTION)
        mechanical_power = thermal_inputs.mechanical_braking_power
        total_recovered = regenerative_power + teg_power
        distribution = self.distribute_power(total_recovered)

        denominator = mechanical_power + total_recovered
        system_efficiency = total_recovered / denominator * 100 if denominator > 0 else 0.0

        outputs = IntegratedBrakingOutputs(
            braking_power=braking_power,
            regenerative_power=regenerative_power,
            teg_power=teg_power,
            total_recovered_power=total_recovered,
            mechanical_braking_power=mechanical_power,
            system_efficiency=system_efficiency,
            thermal_efficiency=teg_performance.efficiency if teg_performance is not None else 0.0,
            brake_temperature=thermal.final_brake_temperature,
            teg_hot_side_temperature=hot_side,
            teg_cold_side_temperature=cold_side,
            power_distribution=distribution,
            teg_config_id=teg_config_id,
            teg_status=teg_status
        )

        self.diagnostics = self._build_diagnostics(inputs, regen, outputs, teg_performance, thermal)
        self.performance_history.append(outputs)

        return outputs

    @staticmethod
    def _validate_inputs(inputs: IntegratedBrakingInputs):
        require_in_range(inputs.brake_temperature, 'brake_temperature')
        require_in_range(inputs.ambient_temperature, 'ambient_temperature')
        require_in_range(inputs.airflow, 'airflow')

    def should_activate_teg(self, thermal_inputs: BrakingThermalInputs) -> bool:
        """TEG harvesting requires brake temperature, friction share and duration thresholds together."""
        threshold = self.strategy.activation_threshold
        return (
            thermal_inputs.brake_temperature >= threshold.temperature
            and (1 - thermal_inputs.regenerative_braking_ratio) >= threshold.braking_intensity
            and thermal_inputs.braking_duration >= threshold.duration
        )

    def _run_teg(self, thermal_inputs: BrakingThermalInputs,
                 mode: ManagementMode) -> Tuple[Optional[TEGPerformance], TEGStatus, str]:
        config_id = select_teg_configuration(thermal_inputs.brake_temperature)
        hot_side = thermal_inputs.brake_temperature

        shutdown_temp = self.strategy.thermal_limits.teg_shutdown_temp
        if hot_side > shutdown_temp:
            logger.warning(f"TEG held at thermal limit: {hot_side:.1f}°C above shutdown {shutdown_temp:.0f}°C")
            return None, TEGStatus.THERMAL_LIMIT, config_id

        ambient = thermal_inputs.ambient_temperature
        conditions = ThermalConditions(
            hot_side_temperature=hot_side,
            cold_side_temperature=ambient + COLD_SIDE_RISE,
            heat_flux=self.calculate_heat_flux(thermal_inputs),
            ambient_temperature=ambient,
            hot_side_convection=convection_coefficient(thermal_inputs.airflow, hot_side=True),
            cold_side_convection=convection_coefficient(thermal_inputs.airflow, hot_side=False),
            airflow_velocity=thermal_inputs.airflow,
            airflow_temperature=ambient,
            braking_duration=thermal_inputs.braking_duration,
            braking_intensity=1 - thermal_inputs.regenerative_braking_ratio
        )

        try:
            performance = self.teg_engine.calculate_power(
                config_id, conditions,
                operating_mode=OperatingMode.MAXIMUM_POWER,
                cooling_active=mode == ManagementMode.ACTIVE,
                thermal_protection_enabled=True
            )
        except UnsafeTemperature as e:
            logger.warning(f"TEG {config_id} stopped by thermal protection: {e}")
            return None, TEGStatus.THERMAL_LIMIT, config_id
        except InvalidThermalConditions as e:
            logger.warning(f"TEG {config_id} cannot operate: {e}")
            return None, TEGStatus.FAULT, config_id

        return performance, TEGStatus.ACTIVE, config_id

    def calculate_heat_flux(self, thermal_inputs: BrakingThermalInputs) -> float:
        """Friction braking power per unit brake surface in W/m²."""
        return thermal_inputs.mechanical_braking_power / self.brake_surface_area

    def distribute_power(self, total_power: float) -> PowerDistribution:
        """
        Dispatch recovered power according to the power management strategy.

        Args:
            total_power: Total recovered power in W

        Returns:
            PowerDistribution summing to total_power
        """
        policy = self.strategy.power_management

        if policy.battery_charging_priority:
            battery = total_power * 0.7
            remaining = total_power - battery
            if policy.supercapacitor_buffering:
                supercapacitor = remaining * 0.8
                direct_use = remaining - supercapacitor
            else:
                supercapacitor = 0.0
                direct_use = remaining
        else:
            battery = total_power * 0.4
            supercapacitor = total_power * 0.3
            direct_use = total_power - battery - supercapacitor

        return PowerDistribution(battery, supercapacitor, direct_use)

    def _build_diagnostics(self, inputs: IntegratedBrakingInputs, regen: BrakingOutputs,
                           outputs: IntegratedBrakingOutputs,
                           teg_performance: Optional[TEGPerformance],
                           thermal: ThermalManagementOutputs) -> SystemDiagnostics:
        ratio = regen.regenerative_braking_ratio
        if inputs.battery_soc > HIGH_SOC_LIMIT or inputs.motor_temperature > MOTOR_LIMIT_TEMP:
            braking_status = BrakingStatus.LIMITED
        elif ratio > REGEN_ACTIVE_RATIO:
            braking_status = BrakingStatus.ACTIVE
        else:
            braking_status = BrakingStatus.INACTIVE

        thermal_status = classify_thermal_status(thermal.final_brake_temperature,
                                                 thermal.cooling_system_status,
                                                 self.strategy.thermal_limits)

        reliability = DEFAULT_RELIABILITY
        if teg_performance is not None:
            reliability = min(DEFAULT_RELIABILITY, teg_performance.reliability)

        # Savings relative to all braking energy that would otherwise be dissipated
        conventional = outputs.total_recovered_power + outputs.mechanical_braking_power
        energy_savings = outputs.total_recovered_power / conventional * 100 if conventional > 0 else 0.0

        return SystemDiagnostics(
            regenerative_braking=RegenerativeBrakingDiagnostics(
                power=outputs.regenerative_power,
                efficiency=ratio * 100,
                status=braking_status
            ),
            teg_system=TEGDiagnostics(
                power=outputs.teg_power,
                efficiency=outputs.thermal_efficiency,
                hot_side_temp=outputs.teg_hot_side_temperature,
                cold_side_temp=outputs.teg_cold_side_temperature,
                status=outputs.teg_status,
                config_id=outputs.teg_config_id
            ),
            thermal_management=ThermalDiagnostics(
                cooling_power=thermal.cooling_power,
                heat_rejection=thermal.heat_rejection,
                thermal_efficiency=thermal.thermal_efficiency,
                status=thermal_status
            ),
            overall=OverallDiagnostics(
                total_recovered_power=outputs.total_recovered_power,
                system_efficiency=outputs.system_efficiency,
                energy_savings=energy_savings,
                reliability=reliability
            )
        )

    def update_energy_recovery_strategy(self, partial_strategy: Optional[Dict] = None,
                                        **changes) -> EnergyRecoveryStrategy:
        """
        Replace some strategy settings.

        Args:
            partial_strategy: Dictionary of sections or settings to change
            **changes: Sections or settings to change as keyword arguments

        Returns:
            Copy of the updated strategy
        """
        merged = dict(partial_strategy or {})
        merged.update(changes)
        self.strategy = self.strategy.updated(**merged)
        logger.info(f"Energy recovery strategy updated: {', '.join(sorted(merged)) or 'no changes'}")
        return copy.deepcopy(self.strategy)

    def get_system_diagnostics(self) -> SystemDiagnostics:
        return copy.deepcopy(self.diagnostics)

    def get_system_status(self) -> Dict:
        """
        Summarise subsystem activity, warnings and errors from the latest diagnostics.

        Returns:
            Dictionary with is_operational, active_subsystems, warnings and errors
        """
        diagnostics = self.diagnostics
        active_subsystems = []
        warnings = []
        errors = []

        if diagnostics.regenerative_braking.status == BrakingStatus.ACTIVE:
            active_subsystems.append('Regenerative Braking')
        elif diagnostics.regenerative_braking.status == BrakingStatus.LIMITED:
            active_subsystems.append('Regenerative Braking')
            warnings.append('Regenerative braking limited by battery charge or motor temperature')

        if diagnostics.teg_system.status == TEGStatus.ACTIVE:
            active_subsystems.append('TEG System')
        elif diagnostics.teg_system.status == TEGStatus.THERMAL_LIMIT:
            warnings.append('TEG output suspended at thermal limit')

        thermal_status = diagnostics.thermal_management.status
        if thermal_status == ThermalStatus.ACTIVE_COOLING:
            active_subsystems.append('Active Cooling')
            warnings.append('Active cooling engaged due to high temperatures')
        elif thermal_status == ThermalStatus.THERMAL_STRESS:
            active_subsystems.append('Active Cooling')
            warnings.append('Brake temperature approaching maximum rating')
        elif thermal_status == ThermalStatus.EMERGENCY:
            active_subsystems.append('Emergency Cooling')
            warnings.append('Emergency cooling engaged')

        if diagnostics.overall.reliability < 90:
            warnings.append('System reliability below 90%')

        if diagnostics.teg_system.hot_side_temp > 250:
            warnings.append('TEG hot side temperature approaching limits')

        if diagnostics.regenerative_braking.status == BrakingStatus.FAULT:
            errors.append('Regenerative braking system fault')

        if diagnostics.teg_system.status == TEGStatus.FAULT:
            errors.append('TEG system fault')

        return {
            'is_operational': not errors,
            'active_subsystems': active_subsystems,
            'warnings': warnings,
            'errors': errors
        }

    def get_performance_history(self) -> List[IntegratedBrakingOutputs]:
        return list(self.performance_history)

    def get_performance_dataframe(self) -> pd.DataFrame:
        """Braking history as a DataFrame, power distribution flattened into columns."""
        return pd.json_normalize([record.to_dict() for record in self.performance_history], sep='_')


def create_integrated_braking_system(
        teg_configurations: Optional[Dict[str, TEGConfiguration]] = None,
        strategy: Optional[Union[EnergyRecoveryStrategy, Dict]] = None,
        **kwargs) -> EnergyRecoveryCoordinator:
    """
    Create an energy recovery coordinator with default subsystems.

    Args:
        teg_configurations: Additional TEG designs to register next to the defaults
        strategy: Strategy, or a partial strategy dictionary applied over the defaults
        **kwargs: Further EnergyRecoveryCoordinator arguments

    Returns:
        EnergyRecoveryCoordinator
    """
    engine = TEGConversionEngine(configurations=TEGConfigCatalog(configurations=teg_configurations))

    if isinstance(strategy, dict):
        strategy = EnergyRecoveryStrategy.from_dict(strategy)

    return EnergyRecoveryCoordinator(teg_engine=engine, strategy=strategy, **kwargs)
