"""
Braking module for TEG brake energy recovery simulation.

This module provides the vehicle-level side of the recovery system: the
regenerative braking controller, the energy recovery strategy, and the
coordinator that combines regenerative braking, brake thermal management and
TEG harvesting for each braking event.
"""

# Import regenerative braking components
from .regenerative import (
    BrakingInputs, BrakingOutputs, RegenerativeBrakingController
)

# Import strategy components
from .strategy import (
    ActivationThreshold, PowerManagement, ThermalLimits, EnergyRecoveryStrategy
)

# Import coordinator components
from .coordinator import (
    BrakingStatus, TEGStatus, ThermalStatus,
    IntegratedBrakingInputs, IntegratedBrakingOutputs, PowerDistribution,
    RegenerativeBrakingDiagnostics, TEGDiagnostics, ThermalDiagnostics,
    OverallDiagnostics, SystemDiagnostics,
    calculate_braking_power, estimate_braking_duration, select_teg_configuration,
    classify_thermal_status,
    EnergyRecoveryCoordinator, create_integrated_braking_system
)

# Define public API
__all__ = [
    # Regenerative braking
    'BrakingInputs', 'BrakingOutputs', 'RegenerativeBrakingController',

    # Strategy
    'ActivationThreshold', 'PowerManagement', 'ThermalLimits', 'EnergyRecoveryStrategy',

    # Coordinator
    'BrakingStatus', 'TEGStatus', 'ThermalStatus',
    'IntegratedBrakingInputs', 'IntegratedBrakingOutputs', 'PowerDistribution',
    'RegenerativeBrakingDiagnostics', 'TEGDiagnostics', 'ThermalDiagnostics',
    'OverallDiagnostics', 'SystemDiagnostics',
    'calculate_braking_power', 'estimate_braking_duration', 'select_teg_configuration',
    'classify_thermal_status',
    'EnergyRecoveryCoordinator', 'create_integrated_braking_system'
]
