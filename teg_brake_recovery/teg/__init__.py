"""
Thermoelectric generator module for brake energy recovery simulation.

This module provides the thermoelectric side of the recovery system: material
property records and catalogs, module designs and their validation, couple-level
property relations, the conversion engine that turns thermal conditions into
electrical output, and a bounded design-space search over module geometry.

The module includes:
- Thermoelectric materials (Bi2Te3, PbTe, SiGe, CoSb3) and a material catalog
- TEG module designs with geometry, heat exchanger and placement metadata
- Conversion engine with temperature corrected material data and history
- Geometry optimizer with an explicit parameter space and evaluation budget
"""

# Import material components
from .materials import (
    MaterialType, ThermoelectricMaterial, MaterialCatalog, create_default_materials
)

# Import configuration components
from .configurations import (
    TEGType, ElectricalConfiguration, HotSideType, ColdSideType,
    MountingLocation, MountingType,
    ModuleDimensions, LegDimensions, HeatExchanger, Placement, TEGConfiguration,
    TEGConfigCatalog, validate_teg_configuration, create_default_configurations
)

# Import couple property relations
from .properties import (
    TemperatureEffects, CandidateLocation,
    total_seebeck_coefficient, couple_thermal_conductance, couple_electrical_resistance,
    couple_zt, calculate_temperature_effects, optimal_load_resistance,
    estimate_module_mass, calculate_thermal_time_constant, estimate_teg_cost,
    optimize_teg_placement
)

# Import optimizer components
from .optimizer import (
    ParameterSpace, OptimizationConstraints, OptimizationResult,
    score_performance, search_design_space
)

# Import conversion engine
from .conversion import (
    OperatingMode, ThermalConditions, TEGPerformance, TEGConversionEngine,
    validate_thermal_conditions
)

# Define public API
__all__ = [
    # Materials
    'MaterialType', 'ThermoelectricMaterial', 'MaterialCatalog', 'create_default_materials',

    # Configurations
    'TEGType', 'ElectricalConfiguration', 'HotSideType', 'ColdSideType',
    'MountingLocation', 'MountingType',
    'ModuleDimensions', 'LegDimensions', 'HeatExchanger', 'Placement', 'TEGConfiguration',
    'TEGConfigCatalog', 'validate_teg_configuration', 'create_default_configurations',

    # Couple properties
    'TemperatureEffects', 'CandidateLocation',
    'total_seebeck_coefficient', 'couple_thermal_conductance', 'couple_electrical_resistance',
    'couple_zt', 'calculate_temperature_effects', 'optimal_load_resistance',
    'estimate_module_mass', 'calculate_thermal_time_constant', 'estimate_teg_cost',
    'optimize_teg_placement',

    # Optimizer
    'ParameterSpace', 'OptimizationConstraints', 'OptimizationResult',
    'score_performance', 'search_design_space',

    # Conversion engine
    'OperatingMode', 'ThermalConditions', 'TEGPerformance', 'TEGConversionEngine',
    'validate_thermal_conditions'
]
