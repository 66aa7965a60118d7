"""
tests/test_strategy.py
======================
Energy recovery strategy defaults, partial updates and YAML persistence.
"""

import os

import pytest

from teg_brake_recovery.braking.strategy import (
    EnergyRecoveryStrategy, ActivationThreshold, PowerManagement
)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "configs", "strategy", "energy_recovery.yaml")


class TestDefaults:

    def test_default_values(self):
        strategy = EnergyRecoveryStrategy()
        assert strategy.prioritize_regeneration
        assert strategy.activation_threshold == ActivationThreshold(80.0, 0.3, 2.0)
        assert strategy.power_management.max_teg_power == 500.0
        assert strategy.thermal_limits.teg_shutdown_temp == 300.0

    def test_instances_do_not_share_sections(self):
        first, second = EnergyRecoveryStrategy(), EnergyRecoveryStrategy()
        assert first.activation_threshold is not second.activation_threshold


class TestUpdates:

    def test_partial_section_update_keeps_other_fields(self):
        strategy = EnergyRecoveryStrategy().updated(activation_threshold={'temperature': 120.0})
        assert strategy.activation_threshold.temperature == 120.0
        assert strategy.activation_threshold.duration == 2.0

    def test_update_returns_new_strategy(self):
        original = EnergyRecoveryStrategy()
        original.updated(power_management={'max_teg_power': 50.0})
        assert original.power_management.max_teg_power == 500.0

    def test_whole_section_replacement(self):
        section = PowerManagement(max_teg_power=100.0, battery_charging_priority=False)
        strategy = EnergyRecoveryStrategy().updated(power_management=section)
        assert strategy.power_management is section

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown energy recovery strategy setting"):
            EnergyRecoveryStrategy().updated(fuel_map={})

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown thermal_limits settings"):
            EnergyRecoveryStrategy().updated(thermal_limits={'max_rotor_temp': 400.0})


class TestPersistence:

    def test_save_and_load(self, tmp_path):
        strategy = EnergyRecoveryStrategy().updated(thermal_limits={'teg_shutdown_temp': 250.0})
        path = tmp_path / "strategy" / "energy_recovery.yaml"
        strategy.save_to_file(str(path))
        assert EnergyRecoveryStrategy.load_from_file(str(path)) == strategy

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            EnergyRecoveryStrategy.load_from_file(str(tmp_path / "missing.yaml"))

    def test_shipped_configuration_matches_defaults(self):
        assert EnergyRecoveryStrategy.load_from_file(CONFIG_PATH) == EnergyRecoveryStrategy()
