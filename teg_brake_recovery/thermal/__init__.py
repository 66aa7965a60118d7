"""
Thermal module for TEG brake energy recovery simulation.

This module provides the brake thermal management model: heat generation and
distribution during braking, cooling strategy selection, heat rejection, and the
resulting brake, motor and TEG face temperatures. Configuration is loaded from
YAML files.
"""

# Import thermal management components
from .thermal_manager import (
    ManagementMode, CoolingStatus,
    ThermalManagementConfig, CoolingSystemConfig, HeatExchangerModel,
    BrakingThermalInputs, HeatDistribution, CoolingStrategy, ThermalManagementOutputs,
    ThermalManager
)

# Define public API
__all__ = [
    # Enumerations
    'ManagementMode', 'CoolingStatus',

    # Configuration and hardware models
    'ThermalManagementConfig', 'CoolingSystemConfig', 'HeatExchangerModel',

    # Inputs, outputs and manager
    'BrakingThermalInputs', 'HeatDistribution', 'CoolingStrategy', 'ThermalManagementOutputs',
    'ThermalManager'
]
