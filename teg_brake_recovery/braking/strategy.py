"""
Energy recovery strategy for TEG brake energy recovery simulation.

This module holds the policy settings of the energy recovery coordinator: when
the TEG may harvest alongside regenerative braking, how recovered power is
dispatched between battery, supercapacitor and direct use, and the thermal
limits the coordinator enforces. Strategies can be loaded from and saved to
YAML files and updated partially at runtime.
"""

import os
from dataclasses import dataclass, field, asdict, fields, replace
from typing import Dict, Optional
import logging

import yaml

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("Energy_Recovery_Strategy")


@dataclass
class ActivationThreshold:
    """
    Conditions that must all hold for TEG harvesting to start.

    Attributes:
        temperature: Minimum brake temperature in °C
        braking_intensity: Minimum friction braking share (0-1)
        duration: Minimum braking event duration in s
    """
    temperature: float = 80.0
    braking_intensity: float = 0.3
    duration: float = 2.0


@dataclass
class PowerManagement:
    """
    Dispatch preferences for recovered power.

    Attributes:
        max_teg_power: Cap on TEG output in W
        battery_charging_priority: Send most recovered power to the battery
        supercapacitor_buffering: Buffer the remainder in the supercapacitor
    """
    max_teg_power: float = 500.0
    battery_charging_priority: bool = True
    supercapacitor_buffering: bool = True


@dataclass
class ThermalLimits:
    """
    Thermal limits enforced by the coordinator, all in °C.

    Attributes:
        max_brake_temp: Brake temperature rated for continuous operation
        teg_shutdown_temp: Hot side temperature at which the TEG stops harvesting
        cooling_activation_temp: Brake temperature at which active cooling is expected
    """
    max_brake_temp: float = 350.0
    teg_shutdown_temp: float = 300.0
    cooling_activation_temp: float = 200.0


_SECTIONS = {
    'activation_threshold': ActivationThreshold,
    'power_management': PowerManagement,
    'thermal_limits': ThermalLimits,
}


@dataclass
class EnergyRecoveryStrategy:
    """Policy of the energy recovery coordinator."""
    prioritize_regeneration: bool = True
    activation_threshold: ActivationThreshold = field(default_factory=ActivationThreshold)
    power_management: PowerManagement = field(default_factory=PowerManagement)
    thermal_limits: ThermalLimits = field(default_factory=ThermalLimits)

    def updated(self, **partial) -> 'EnergyRecoveryStrategy':
        """
        Return a new strategy with some settings replaced.

        Sections may be given as dataclass instances or as dictionaries holding
        only the fields to change.

        Raises:
            ValueError: If a section or field name is unknown
        """
        changes = {}
        for name, value in partial.items():
            if name == 'prioritize_regeneration':
                changes[name] = bool(value)
            elif name in _SECTIONS:
                section_type = _SECTIONS[name]
                if isinstance(value, section_type):
                    changes[name] = value
                elif isinstance(value, dict):
                    known = {f.name for f in fields(section_type)}
                    unknown = set(value) - known
                    if unknown:
                        raise ValueError(f"Unknown {name} settings: {', '.join(sorted(unknown))}")
                    changes[name] = replace(getattr(self, name), **value)
                else:
                    raise ValueError(f"Invalid value for strategy section '{name}'")
            else:
                raise ValueError(f"Unknown energy recovery strategy setting: {name}")

        return replace(self, **changes)

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'EnergyRecoveryStrategy':
        return cls().updated(**(data or {}))

    @classmethod
    def load_from_file(cls, config_path: str) -> 'EnergyRecoveryStrategy':
        """
        Load an energy recovery strategy from YAML file.

        Args:
            config_path: Path to YAML configuration file
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Energy recovery strategy file not found: {config_path}")

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        strategy = cls.from_dict(config.get('energy_recovery'))
        logger.info(f"Loaded energy recovery strategy from {config_path}")
        return strategy

    def save_to_file(self, config_path: str):
        """
        Save the energy recovery strategy to YAML file.

        Args:
            config_path: Path to save configuration
        """
        directory = os.path.dirname(config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.dump({'energy_recovery': self.to_dict()}, f, default_flow_style=False)
