"""
TEG module configuration for brake energy recovery simulation.

This module describes thermoelectric generator module designs: geometry, the
p-type/n-type material pair, leg dimensions, electrical wiring, the heat
exchanger on either face and the mounting location on the vehicle. It also
provides configuration validation and a keyed configuration catalog that only
admits designs passing validation.
"""

import copy
from dataclasses import dataclass, asdict, replace
from typing import Dict, List, Optional
import logging
from enum import Enum

from .materials import ThermoelectricMaterial, MaterialType, MaterialCatalog
from ..utils.validation import ValidationResult, InvalidConfiguration, ConfigNotFound

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("TEG_Configuration")


class TEGType(Enum):
    """Module topology."""
    SINGLE_STAGE = "single_stage"  # One layer of couples
    MULTI_STAGE = "multi_stage"    # Stacked layers with the same material
    CASCADED = "cascaded"          # Stacked layers tuned to their temperature band
    SEGMENTED = "segmented"        # Legs built from several material segments


class ElectricalConfiguration(Enum):
    """Wiring of the thermoelectric couples."""
    SERIES = "series"
    PARALLEL = "parallel"
    SERIES_PARALLEL = "series_parallel"


class HotSideType(Enum):
    """Heat collection method on the hot face."""
    DIRECT_CONTACT = "direct_contact"
    HEAT_PIPE = "heat_pipe"
    FINNED = "finned"
    LIQUID_COOLED = "liquid_cooled"


class ColdSideType(Enum):
    """Heat rejection method on the cold face."""
    AIR_COOLED = "air_cooled"
    LIQUID_COOLED = "liquid_cooled"
    HEAT_SINK = "heat_sink"
    AMBIENT = "ambient"


class MountingLocation(Enum):
    """Vehicle component the module is mounted on."""
    BRAKE_DISC = "brake_disc"
    BRAKE_CALIPER = "brake_caliper"
    BRAKE_PAD = "brake_pad"
    EXHAUST_MANIFOLD = "exhaust_manifold"
    MOTOR_HOUSING = "motor_housing"


class MountingType(Enum):
    """How the module is attached to the heat source."""
    DIRECT = "direct"
    THERMAL_INTERFACE = "thermal_interface"
    HEAT_PIPE_COUPLED = "heat_pipe_coupled"


@dataclass
class ModuleDimensions:
    """Outer module dimensions in mm."""
    length: float
    width: float
    height: float


@dataclass
class LegDimensions:
    """
    Thermoelectric leg geometry.

    Attributes:
        length: Leg length in mm
        cross_sectional_area: Leg cross-section in mm²
    """
    length: float
    cross_sectional_area: float


@dataclass
class HeatExchanger:
    """
    Heat exchanger on both module faces.

    Attributes:
        hot_side_type: Heat collection method
        cold_side_type: Heat rejection method
        hot_side_area: Hot face area in cm²
        cold_side_area: Cold face area in cm²
        hot_side_resistance: Hot side thermal resistance in K/W
        cold_side_resistance: Cold side thermal resistance in K/W
    """
    hot_side_type: HotSideType
    cold_side_type: ColdSideType
    hot_side_area: float
    cold_side_area: float
    hot_side_resistance: float
    cold_side_resistance: float


@dataclass
class Placement:
    """Mounting metadata for a module."""
    location: MountingLocation
    mounting_type: MountingType
    thermal_interface: str = "thermal_paste"


@dataclass
class TEGConfiguration:
    """
    Complete thermoelectric generator module design.

    Attributes:
        config_id: Catalog key of the design
        teg_type: Module topology
        dimensions: Outer module dimensions
        thermoelectric_pairs: Number of p/n couples
        p_type_material: Material of the p legs
        n_type_material: Material of the n legs
        leg_dimensions: Geometry of a single leg
        electrical_configuration: Wiring of the couples
        heat_exchanger: Hot and cold side heat exchanger
        placement: Mounting metadata
    """
    config_id: str
    teg_type: TEGType
    dimensions: ModuleDimensions
    thermoelectric_pairs: int
    p_type_material: ThermoelectricMaterial
    n_type_material: ThermoelectricMaterial
    leg_dimensions: LegDimensions
    electrical_configuration: ElectricalConfiguration
    heat_exchanger: HeatExchanger
    placement: Placement

    @property
    def operating_temp_range(self):
        """Intersection of both material operating ranges as (min, max) in °C."""
        return (
            max(self.p_type_material.min_operating_temp, self.n_type_material.min_operating_temp),
            min(self.p_type_material.max_operating_temp, self.n_type_material.max_operating_temp)
        )

    def with_geometry(self, thermoelectric_pairs: int, leg_length: float,
                      leg_area: float, config_id: Optional[str] = None) -> 'TEGConfiguration':
        """Return a copy of this design with a different pair count and leg geometry."""
        return replace(
            self,
            config_id=config_id or self.config_id,
            thermoelectric_pairs=thermoelectric_pairs,
            leg_dimensions=LegDimensions(length=leg_length, cross_sectional_area=leg_area)
        )

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['teg_type'] = self.teg_type.value
        data['electrical_configuration'] = self.electrical_configuration.value
        data['p_type_material'] = self.p_type_material.to_dict()
        data['n_type_material'] = self.n_type_material.to_dict()
        data['heat_exchanger']['hot_side_type'] = self.heat_exchanger.hot_side_type.value
        data['heat_exchanger']['cold_side_type'] = self.heat_exchanger.cold_side_type.value
        data['placement']['location'] = self.placement.location.value
        data['placement']['mounting_type'] = self.placement.mounting_type.value
        return data


def validate_teg_configuration(config: TEGConfiguration) -> ValidationResult:
    """
    Validate a TEG configuration.

    Args:
        config: Configuration to check

    Returns:
        ValidationResult with fatal errors and non-fatal warnings
    """
    result = ValidationResult()

    dims = config.dimensions
    if dims.length <= 0 or dims.width <= 0 or dims.height <= 0:
        result.errors.append("TEG dimensions must be positive values")

    if config.thermoelectric_pairs <= 0:
        result.errors.append("Number of thermoelectric pairs must be positive")

    legs = config.leg_dimensions
    if legs.length <= 0 or legs.cross_sectional_area <= 0:
        result.errors.append("TE leg dimensions must be positive values")

    if config.p_type_material.material_type != MaterialType.P_TYPE:
        result.errors.append('P-type material must have type "p-type"')
    if config.n_type_material.material_type != MaterialType.N_TYPE:
        result.errors.append('N-type material must have type "n-type"')

    p_min, p_max = config.p_type_material.operating_temp_range
    n_min, n_max = config.n_type_material.operating_temp_range
    if p_max < n_min or n_max < p_min:
        result.warnings.append(
            "P-type and N-type materials have non-overlapping operating temperature ranges"
        )

    hx = config.heat_exchanger
    if hx.hot_side_area <= 0 or hx.cold_side_area <= 0:
        result.errors.append("Heat exchanger areas must be positive values")

    if hx.hot_side_resistance <= 0 or hx.cold_side_resistance <= 0:
        result.errors.append("Thermal resistances must be positive values")

    if hx.cold_side_area < hx.hot_side_area:
        result.warnings.append(
            "Cold side area is smaller than hot side area - may limit heat rejection"
        )

    average_zt = (config.p_type_material.zt_value + config.n_type_material.zt_value) / 2
    if average_zt < 0.5:
        result.warnings.append("Low ZT value materials may result in poor efficiency")

    return result


def create_default_configurations(materials: MaterialCatalog) -> Dict[str, TEGConfiguration]:
    """
    Create the default TEG module designs.

    Args:
        materials: Catalog supplying the leg materials

    Returns:
        Dictionary of configurations keyed by config id
    """
    return {
        'brake_disc_teg': TEGConfiguration(
            config_id='brake_disc_teg',
            teg_type=TEGType.SINGLE_STAGE,
            dimensions=ModuleDimensions(100.0, 80.0, 15.0),
            thermoelectric_pairs=127,
            p_type_material=materials.get('Bi2Te3_pType'),
            n_type_material=materials.get('Bi2Te3_nType'),
            leg_dimensions=LegDimensions(3.0, 4.0),
            electrical_configuration=ElectricalConfiguration.SERIES,
            heat_exchanger=HeatExchanger(
                hot_side_type=HotSideType.DIRECT_CONTACT,
                cold_side_type=ColdSideType.AIR_COOLED,
                hot_side_area=80.0,
                cold_side_area=120.0,
                hot_side_resistance=0.1,
                cold_side_resistance=0.3
            ),
            placement=Placement(MountingLocation.BRAKE_DISC, MountingType.THERMAL_INTERFACE,
                                "thermal_paste")
        ),
        'brake_caliper_teg': TEGConfiguration(
            config_id='brake_caliper_teg',
            teg_type=TEGType.MULTI_STAGE,
            dimensions=ModuleDimensions(60.0, 40.0, 20.0),
            thermoelectric_pairs=64,
            p_type_material=materials.get('PbTe_pType'),
            n_type_material=materials.get('PbTe_nType'),
            leg_dimensions=LegDimensions(4.0, 6.0),
            electrical_configuration=ElectricalConfiguration.SERIES_PARALLEL,
            heat_exchanger=HeatExchanger(
                hot_side_type=HotSideType.HEAT_PIPE,
                cold_side_type=ColdSideType.LIQUID_COOLED,
                hot_side_area=24.0,
                cold_side_area=48.0,
                hot_side_resistance=0.05,
                cold_side_resistance=0.15
            ),
            placement=Placement(MountingLocation.BRAKE_CALIPER, MountingType.HEAT_PIPE_COUPLED,
                                "thermal_pad")
        ),
        'motor_housing_teg': TEGConfiguration(
            config_id='motor_housing_teg',
            teg_type=TEGType.CASCADED,
            dimensions=ModuleDimensions(150.0, 100.0, 25.0),
            thermoelectric_pairs=256,
            p_type_material=materials.get('SiGe_pType'),
            n_type_material=materials.get('SiGe_nType'),
            leg_dimensions=LegDimensions(5.0, 8.0),
            electrical_configuration=ElectricalConfiguration.SERIES,
            heat_exchanger=HeatExchanger(
                hot_side_type=HotSideType.FINNED,
                cold_side_type=ColdSideType.LIQUID_COOLED,
                hot_side_area=150.0,
                cold_side_area=200.0,
                hot_side_resistance=0.08,
                cold_side_resistance=0.12
            ),
            placement=Placement(MountingLocation.MOTOR_HOUSING, MountingType.DIRECT,
                                "liquid_metal")
        ),
        'high_performance_brake_teg': TEGConfiguration(
            config_id='high_performance_brake_teg',
            teg_type=TEGType.CASCADED,
            dimensions=ModuleDimensions(120.0, 100.0, 20.0),
            thermoelectric_pairs=200,
            p_type_material=materials.get('CoSb3_pType'),
            n_type_material=materials.get('CoSb3_nType'),
            leg_dimensions=LegDimensions(4.0, 6.0),
            electrical_configuration=ElectricalConfiguration.SERIES,
            heat_exchanger=HeatExchanger(
                hot_side_type=HotSideType.HEAT_PIPE,
                cold_side_type=ColdSideType.LIQUID_COOLED,
                hot_side_area=120.0,
                cold_side_area=180.0,
                hot_side_resistance=0.03,
                cold_side_resistance=0.08
            ),
            placement=Placement(MountingLocation.BRAKE_DISC, MountingType.HEAT_PIPE_COUPLED,
                                "liquid_metal")
        ),
    }


class TEGConfigCatalog:
    """
    Keyed registry of TEG module designs.

    Designs are validated before admission; a design with validation errors
    never enters the catalog.
    """

    def __init__(self, materials: Optional[MaterialCatalog] = None,
                 configurations: Optional[Dict[str, TEGConfiguration]] = None,
                 include_defaults: bool = True):
        """
        Initialize the configuration catalog.

        Args:
            materials: Material catalog used to build the default designs
            configurations: Optional additional designs keyed by id
            include_defaults: Whether to pre-populate the default designs
        """
        self._configs: Dict[str, TEGConfiguration] = {}
        if include_defaults:
            self._configs.update(create_default_configurations(
                materials if materials is not None else MaterialCatalog()))
        if configurations:
            for config in configurations.values():
                self.add(config)

        logger.info(f"TEG configuration catalog initialized with {len(self._configs)} designs")

    def add(self, config: TEGConfiguration) -> ValidationResult:
        """
        Validate and register a design.

        Args:
            config: Design to register

        Returns:
            ValidationResult of the admitted design (warnings only)

        Raises:
            InvalidConfiguration: If the design has validation errors
        """
        result = validate_teg_configuration(config)
        if not result.is_valid:
            raise InvalidConfiguration(result.errors, result.warnings)

        for warning in result.warnings:
            logger.warning(f"TEG configuration {config.config_id}: {warning}")

        self._configs[config.config_id] = config
        logger.info(f"Added TEG configuration: {config.config_id}")
        return result

    def get(self, config_id: str) -> TEGConfiguration:
        """
        Look up a design by id.

        Raises:
            ConfigNotFound: If the id is not registered
        """
        if config_id not in self._configs:
            raise ConfigNotFound(config_id)
        return self._configs[config_id]

    def ids(self) -> List[str]:
        return list(self._configs.keys())

    def snapshot(self) -> Dict[str, TEGConfiguration]:
        """Return a deep copy of the catalog contents."""
        return copy.deepcopy(self._configs)

    def __contains__(self, config_id: str) -> bool:
        return config_id in self._configs

    def __len__(self) -> int:
        return len(self._configs)
