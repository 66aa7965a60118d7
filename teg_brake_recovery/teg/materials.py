"""
Thermoelectric material module for TEG brake energy recovery simulation.

This module provides the thermoelectric material property record and a keyed
material catalog pre-populated with the semiconductor families used for brake
and drivetrain heat recovery: bismuth telluride for low temperature sites,
lead telluride and skutterudite for mid range sites, and silicon germanium for
high temperature sites.
"""

import copy
from dataclasses import dataclass, asdict
from typing import Dict, List, Tuple, Optional
import logging
from enum import Enum

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("TEG_Materials")


class MaterialType(Enum):
    """Semiconductor polarity of a thermoelectric leg."""
    P_TYPE = "p-type"  # Positive Seebeck coefficient, hole carriers
    N_TYPE = "n-type"  # Negative Seebeck coefficient, electron carriers


@dataclass
class ThermoelectricMaterial:
    """
    Property record for a thermoelectric leg material.

    Attributes:
        name: Human readable material name
        material_type: Polarity of the material
        seebeck_coefficient: Seebeck coefficient in μV/K (negative for n-type)
        electrical_conductivity: Electrical conductivity in S/m
        thermal_conductivity: Thermal conductivity in W/(m·K)
        zt_value: Dimensionless figure of merit
        operating_temp_range: (min, max) operating temperature in °C
        density: Density in kg/m³
        specific_heat: Specific heat in J/(kg·K)
        thermal_expansion: Thermal expansion coefficient in 1/K
        cost: Material cost in $/kg
    """
    name: str
    material_type: MaterialType
    seebeck_coefficient: float
    electrical_conductivity: float
    thermal_conductivity: float
    zt_value: float
    operating_temp_range: Tuple[float, float]
    density: float
    specific_heat: float
    thermal_expansion: float
    cost: float

    @property
    def min_operating_temp(self) -> float:
        return self.operating_temp_range[0]

    @property
    def max_operating_temp(self) -> float:
        return self.operating_temp_range[1]

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['material_type'] = self.material_type.value
        data['operating_temp_range'] = list(self.operating_temp_range)
        return data


def _bi2te3(material_type: MaterialType, seebeck: float, conductivity: float,
            thermal_conductivity: float) -> ThermoelectricMaterial:
    return ThermoelectricMaterial(
        name=f"Bismuth Telluride ({material_type.value})",
        material_type=material_type,
        seebeck_coefficient=seebeck,
        electrical_conductivity=conductivity,
        thermal_conductivity=thermal_conductivity,
        zt_value=1.0,
        operating_temp_range=(-40.0, 200.0),
        density=7700.0,
        specific_heat=154.0,
        thermal_expansion=16e-6,
        cost=150.0
    )


def _pbte(material_type: MaterialType, seebeck: float, conductivity: float,
          thermal_conductivity: float) -> ThermoelectricMaterial:
    return ThermoelectricMaterial(
        name=f"Lead Telluride ({material_type.value})",
        material_type=material_type,
        seebeck_coefficient=seebeck,
        electrical_conductivity=conductivity,
        thermal_conductivity=thermal_conductivity,
        zt_value=1.4,
        operating_temp_range=(200.0, 600.0),
        density=8200.0,
        specific_heat=147.0,
        thermal_expansion=19e-6,
        cost=200.0
    )


def _sige(material_type: MaterialType, seebeck: float, conductivity: float,
          thermal_conductivity: float) -> ThermoelectricMaterial:
    return ThermoelectricMaterial(
        name=f"Silicon Germanium ({material_type.value})",
        material_type=material_type,
        seebeck_coefficient=seebeck,
        electrical_conductivity=conductivity,
        thermal_conductivity=thermal_conductivity,
        zt_value=0.9,
        operating_temp_range=(600.0, 1000.0),
        density=3200.0,
        specific_heat=712.0,
        thermal_expansion=4.2e-6,
        cost=300.0
    )


def _cosb3(material_type: MaterialType, seebeck: float, conductivity: float,
           thermal_conductivity: float) -> ThermoelectricMaterial:
    return ThermoelectricMaterial(
        name=f"Skutterudite CoSb3 ({material_type.value})",
        material_type=material_type,
        seebeck_coefficient=seebeck,
        electrical_conductivity=conductivity,
        thermal_conductivity=thermal_conductivity,
        zt_value=1.2,
        operating_temp_range=(300.0, 700.0),
        density=7600.0,
        specific_heat=230.0,
        thermal_expansion=12e-6,
        cost=400.0
    )


def create_default_materials() -> Dict[str, ThermoelectricMaterial]:
    """
    Create the default thermoelectric material set.

    Returns:
        Dictionary of materials keyed by material id
    """
    return {
        'Bi2Te3_nType': _bi2te3(MaterialType.N_TYPE, -200.0, 100000.0, 1.5),
        'Bi2Te3_pType': _bi2te3(MaterialType.P_TYPE, 200.0, 80000.0, 1.2),
        'PbTe_nType': _pbte(MaterialType.N_TYPE, -180.0, 50000.0, 2.2),
        'PbTe_pType': _pbte(MaterialType.P_TYPE, 180.0, 45000.0, 2.0),
        'SiGe_nType': _sige(MaterialType.N_TYPE, -300.0, 20000.0, 4.0),
        'SiGe_pType': _sige(MaterialType.P_TYPE, 300.0, 18000.0, 3.8),
        'CoSb3_nType': _cosb3(MaterialType.N_TYPE, -250.0, 30000.0, 3.5),
        'CoSb3_pType': _cosb3(MaterialType.P_TYPE, 250.0, 25000.0, 3.2),
    }


class MaterialCatalog:
    """
    Keyed registry of thermoelectric materials.

    The catalog is populated with the default material set at construction and
    is add-only afterwards. Each engine owns its own catalog instance.
    """

    def __init__(self, materials: Optional[Dict[str, ThermoelectricMaterial]] = None,
                 include_defaults: bool = True):
        """
        Initialize the material catalog.

        Args:
            materials: Optional additional materials keyed by id
            include_defaults: Whether to pre-populate the default material set
        """
        self._materials: Dict[str, ThermoelectricMaterial] = {}
        if include_defaults:
            self._materials.update(create_default_materials())
        if materials:
            for material_id, material in materials.items():
                self.add(material, material_id)

        logger.info(f"Material catalog initialized with {len(self._materials)} materials")

    def add(self, material: ThermoelectricMaterial, material_id: Optional[str] = None) -> str:
        """
        Register a material. No validation is applied beyond storage.

        Args:
            material: Material record to store
            material_id: Catalog key, defaults to the material name

        Returns:
            Key the material was stored under
        """
        key = material_id or material.name
        self._materials[key] = material
        logger.info(f"Added thermoelectric material: {key}")
        return key

    def get(self, material_id: str) -> ThermoelectricMaterial:
        """
        Look up a material by id.

        Raises:
            KeyError: If the material id is not registered
        """
        if material_id not in self._materials:
            raise KeyError(f"Thermoelectric material '{material_id}' not found")
        return self._materials[material_id]

    def ids(self) -> List[str]:
        return list(self._materials.keys())

    def snapshot(self) -> Dict[str, ThermoelectricMaterial]:
        """Return a deep copy of the catalog contents."""
        return copy.deepcopy(self._materials)

    def __contains__(self, material_id: str) -> bool:
        return material_id in self._materials

    def __len__(self) -> int:
        return len(self._materials)
