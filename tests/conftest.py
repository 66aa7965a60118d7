"""
tests/conftest.py
=================
Shared fixtures for the TEG brake energy recovery tests.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from teg_brake_recovery.teg.conversion import TEGConversionEngine, ThermalConditions
from teg_brake_recovery.braking.coordinator import (
    EnergyRecoveryCoordinator, IntegratedBrakingInputs
)


@pytest.fixture
def engine():
    return TEGConversionEngine()


@pytest.fixture
def disc_conditions():
    """Brake disc TEG at 200°C hot side, 50°C cold side and 5 kW/m² during a 5 s hard stop."""
    return ThermalConditions(
        hot_side_temperature=200.0, cold_side_temperature=50.0, heat_flux=5000.0,
        ambient_temperature=25.0, hot_side_convection=50.0, cold_side_convection=25.0,
        airflow_velocity=15.0, airflow_temperature=25.0, braking_duration=5.0,
        braking_intensity=0.7
    )


@pytest.fixture
def coordinator():
    # A large effective brake area keeps the heat flux low enough for the
    # disc module to see a positive junction temperature difference
    return EnergyRecoveryCoordinator(brake_surface_area=5.0)


@pytest.fixture
def urban_stop():
    """50 km/h stop at 0.4 intensity with warm brakes."""
    return IntegratedBrakingInputs(
        driving_speed=50.0, braking_intensity=0.4, battery_soc=0.6, motor_temperature=60.0,
        brake_temperature=100.0, ambient_temperature=25.0, airflow=10.0
    )
