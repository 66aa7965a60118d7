"""
tests/test_coordinator.py
=========================
Integrated braking: regenerative braking, thermal management and TEG harvesting.

Urban stop reference (50 km/h, 0.4 intensity, 100°C brakes):
    Braking power = 0.4 * 1500 * 9.81 * 0.8 * 50/3.6 = 65.4 kW
    Regenerative share = 2/3, friction power = 21.8 kW
    Braking duration = 5 * 2.5 * 1 = 12.5 s
    Heat flux over a 5 m² brake surface = 4360 W/m²
"""

import pytest

from teg_brake_recovery.braking.coordinator import (
    BrakingStatus, TEGStatus, ThermalStatus, IntegratedBrakingInputs,
    EnergyRecoveryCoordinator, calculate_braking_power, estimate_braking_duration,
    select_teg_configuration, classify_thermal_status, create_integrated_braking_system
)
from teg_brake_recovery.braking.strategy import EnergyRecoveryStrategy, ThermalLimits
from teg_brake_recovery.thermal.thermal_manager import CoolingStatus
from teg_brake_recovery.utils.validation import EmergencyShutdown, ValueOutOfRange


def event(**overrides):
    values = dict(driving_speed=50.0, braking_intensity=0.4, battery_soc=0.6, motor_temperature=60.0,
                  brake_temperature=100.0, ambient_temperature=25.0, airflow=10.0)
    values.update(overrides)
    return IntegratedBrakingInputs(**values)


class TestBrakingPhysics:

    def test_braking_power(self):
        assert calculate_braking_power(50.0, 0.4) == pytest.approx(65400.0)

    def test_braking_duration(self):
        assert estimate_braking_duration(50.0, 0.4) == pytest.approx(12.5)
        assert estimate_braking_duration(50.0, 0.0) == pytest.approx(50.0)

    def test_teg_tiers(self):
        assert select_teg_configuration(100.0) == "brake_disc_teg"
        assert select_teg_configuration(150.0) == "brake_disc_teg"
        assert select_teg_configuration(175.0) == "brake_caliper_teg"
        assert select_teg_configuration(250.0) == "high_performance_brake_teg"


class TestIntegratedBraking:

    def test_urban_stop_recovers_with_both_systems(self, coordinator, urban_stop):
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        assert outputs.braking_power == pytest.approx(65400.0)
        assert outputs.regenerative_power == pytest.approx(65400.0 * 2 / 3 * 0.9, rel=1e-6)
        assert outputs.teg_power > 0
        assert outputs.teg_config_id == "brake_disc_teg"
        assert outputs.total_recovered_power == pytest.approx(outputs.regenerative_power
                                                              + outputs.teg_power)

    def test_system_efficiency(self, coordinator, urban_stop):
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        recovered = outputs.total_recovered_power
        expected = recovered / (outputs.mechanical_braking_power + recovered) * 100
        assert outputs.system_efficiency == pytest.approx(expected)
        assert 0 < outputs.system_efficiency < 100

    def test_teg_faces_come_from_thermal_model(self, coordinator, urban_stop):
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        # A 200 K interface drop from a ~120°C brake floors the hot face at ambient
        assert outputs.brake_temperature < 225.0
        assert outputs.teg_hot_side_temperature == 25.0
        assert outputs.teg_cold_side_temperature == pytest.approx(45.0)

    def test_cold_brakes_do_not_activate_teg(self, coordinator):
        outputs = coordinator.calculate_integrated_braking(event(brake_temperature=70.0))
        assert outputs.teg_power == 0.0
        assert outputs.regenerative_power > 0
        assert outputs.teg_status == TEGStatus.INACTIVE
        assert outputs.teg_config_id is None
        assert outputs.teg_hot_side_temperature == 25.0
        assert outputs.thermal_efficiency == 0.0

    def test_disabled_teg_leaves_regeneration_only(self, coordinator):
        outputs = coordinator.calculate_integrated_braking(event(teg_system_enabled=False))
        assert outputs.teg_power == 0.0
        assert outputs.total_recovered_power == outputs.regenerative_power
        assert outputs.thermal_efficiency == 0.0

    def test_short_braking_does_not_activate_teg(self, coordinator):
        # 10 km/h at 0.4 intensity lasts 2.5 s, raise the duration threshold above it
        coordinator.update_energy_recovery_strategy(activation_threshold={'duration': 3.0})
        outputs = coordinator.calculate_integrated_braking(event(driving_speed=10.0))
        assert outputs.teg_config_id is None

    def test_teg_power_is_capped(self, coordinator, urban_stop):
        coordinator.update_energy_recovery_strategy(power_management={'max_teg_power': 0.01})
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        assert outputs.teg_power == pytest.approx(0.01)

    def test_accepts_mode_names(self, coordinator):
        outputs = coordinator.calculate_integrated_braking(event(thermal_management_mode="active"))
        assert outputs.braking_power > 0


class TestPowerDistribution:

    def test_battery_priority_with_buffering(self, coordinator, urban_stop):
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        distribution = outputs.power_distribution
        total = outputs.total_recovered_power
        assert distribution.battery == pytest.approx(0.7 * total)
        assert distribution.supercapacitor == pytest.approx(0.24 * total)
        assert distribution.direct_use == pytest.approx(0.06 * total)
        assert distribution.total == pytest.approx(total)

    def test_battery_priority_without_buffering(self, coordinator):
        coordinator.update_energy_recovery_strategy(power_management={'supercapacitor_buffering': False})
        distribution = coordinator.distribute_power(1000.0)
        assert distribution.supercapacitor == 0.0
        assert distribution.direct_use == pytest.approx(300.0)

    def test_balanced_distribution(self, coordinator):
        coordinator.update_energy_recovery_strategy(power_management={'battery_charging_priority': False})
        distribution = coordinator.distribute_power(1000.0)
        assert (distribution.battery, distribution.supercapacitor) == pytest.approx((400.0, 300.0))
        assert distribution.direct_use == pytest.approx(300.0)


class TestFailureModes:

    @pytest.mark.parametrize("overrides, message", [
        ({'brake_temperature': 600.0}, "Brake temperature out of valid range"),
        ({'ambient_temperature': -50.0}, "Ambient temperature out of valid range"),
        ({'airflow': -5.0}, "Airflow velocity out of valid range"),
    ])
    def test_out_of_range_inputs(self, coordinator, overrides, message):
        with pytest.raises(ValueOutOfRange, match=message):
            coordinator.calculate_integrated_braking(event(**overrides))
        assert coordinator.get_performance_history() == []

    def test_emergency_shutdown_propagates(self, coordinator):
        with pytest.raises(EmergencyShutdown):
            coordinator.calculate_integrated_braking(event(brake_temperature=300.0))
        assert coordinator.get_performance_history() == []
        assert coordinator.get_system_diagnostics().overall.total_recovered_power == 0.0

    def test_teg_shutdown_temperature(self, coordinator, urban_stop):
        coordinator.update_energy_recovery_strategy(thermal_limits={'teg_shutdown_temp': 90.0})
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        assert outputs.teg_status == TEGStatus.THERMAL_LIMIT
        assert outputs.teg_power == 0.0
        assert outputs.regenerative_power > 0
        assert 'TEG output suspended at thermal limit' in coordinator.get_system_status()['warnings']

    def test_material_range_mismatch_is_a_fault(self, coordinator):
        # 160°C selects the PbTe caliper module, rated from 200°C
        outputs = coordinator.calculate_integrated_braking(event(brake_temperature=160.0))
        assert outputs.teg_status == TEGStatus.FAULT
        assert outputs.teg_power == 0.0

        status = coordinator.get_system_status()
        assert 'TEG system fault' in status['errors']
        assert not status['is_operational']


class TestDiagnostics:

    def test_initial_diagnostics(self, coordinator):
        diagnostics = coordinator.get_system_diagnostics()
        assert diagnostics.regenerative_braking.status == BrakingStatus.INACTIVE
        assert diagnostics.teg_system.status == TEGStatus.INACTIVE
        assert diagnostics.thermal_management.status == ThermalStatus.OPTIMAL
        assert diagnostics.overall.reliability == 95.0

    def test_urban_stop_diagnostics(self, coordinator, urban_stop):
        outputs = coordinator.calculate_integrated_braking(urban_stop)
        diagnostics = coordinator.get_system_diagnostics()
        assert diagnostics.regenerative_braking.status == BrakingStatus.ACTIVE
        assert diagnostics.regenerative_braking.efficiency == pytest.approx(200 / 3, rel=1e-6)
        assert diagnostics.thermal_management.status == ThermalStatus.OPTIMAL
        assert diagnostics.teg_system.config_id == "brake_disc_teg"
        recovered = outputs.total_recovered_power
        assert diagnostics.overall.energy_savings == pytest.approx(
            recovered / (recovered + outputs.mechanical_braking_power) * 100)
        assert diagnostics.overall.energy_savings > recovered / outputs.braking_power * 100
        assert diagnostics.overall.reliability <= 95.0

    def test_thermal_status_thresholds_are_exclusive(self):
        limits = ThermalLimits()
        assert classify_thermal_status(200.0, CoolingStatus.PASSIVE, limits) == ThermalStatus.OPTIMAL
        assert classify_thermal_status(200.5, CoolingStatus.PASSIVE, limits) == ThermalStatus.ACTIVE_COOLING
        assert classify_thermal_status(280.0, CoolingStatus.ACTIVE, limits) == ThermalStatus.ACTIVE_COOLING
        assert classify_thermal_status(281.0, CoolingStatus.ACTIVE, limits) == ThermalStatus.THERMAL_STRESS
        assert classify_thermal_status(150.0, CoolingStatus.EMERGENCY, limits) == ThermalStatus.EMERGENCY

    def test_full_battery_limits_regeneration(self, coordinator):
        coordinator.calculate_integrated_braking(event(battery_soc=0.97))
        assert coordinator.get_system_diagnostics().regenerative_braking.status == BrakingStatus.LIMITED

    def test_system_status_lists_active_subsystems(self, coordinator, urban_stop):
        coordinator.calculate_integrated_braking(urban_stop)
        status = coordinator.get_system_status()
        assert status['is_operational']
        assert 'Regenerative Braking' in status['active_subsystems']
        assert status['errors'] == []

    def test_diagnostics_are_copies(self, coordinator, urban_stop):
        coordinator.calculate_integrated_braking(urban_stop)
        diagnostics = coordinator.get_system_diagnostics()
        assert diagnostics == coordinator.get_system_diagnostics()
        assert diagnostics is not coordinator.diagnostics

    def test_diagnostics_to_dict(self, coordinator, urban_stop):
        coordinator.calculate_integrated_braking(urban_stop)
        data = coordinator.get_system_diagnostics().to_dict()
        assert data['regenerative_braking']['status'] == 'active'
        assert set(data) == {'regenerative_braking', 'teg_system', 'thermal_management', 'overall'}


class TestHistoryAndFactory:

    def test_history_records_each_event(self, coordinator, urban_stop):
        coordinator.calculate_integrated_braking(urban_stop)
        coordinator.calculate_integrated_braking(event(brake_temperature=70.0))
        assert len(coordinator.get_performance_history()) == 2

    def test_history_is_bounded(self, urban_stop):
        coordinator = EnergyRecoveryCoordinator(brake_surface_area=5.0, history_length=1)
        coordinator.calculate_integrated_braking(urban_stop)
        coordinator.calculate_integrated_braking(urban_stop)
        assert len(coordinator.get_performance_history()) == 1

    def test_history_drops_oldest_first(self):
        coordinator = EnergyRecoveryCoordinator(brake_surface_area=5.0, history_length=2)
        for speed in (30.0, 40.0, 50.0):
            coordinator.calculate_integrated_braking(event(driving_speed=speed))
        history = coordinator.get_performance_history()
        assert len(history) == 2
        assert history[0].braking_power == pytest.approx(calculate_braking_power(40.0, 0.4))
        assert history[-1].braking_power == pytest.approx(calculate_braking_power(50.0, 0.4))

    def test_history_dataframe(self, coordinator, urban_stop):
        coordinator.calculate_integrated_braking(urban_stop)
        frame = coordinator.get_performance_dataframe()
        assert "power_distribution_battery" in frame.columns
        assert frame.loc[0, "teg_status"] == "inactive"

    def test_strategy_update_returns_copy(self, coordinator):
        updated = coordinator.update_energy_recovery_strategy(activation_threshold={'temperature': 90.0})
        updated.activation_threshold.temperature = 10.0
        assert coordinator.strategy.activation_threshold.temperature == 90.0

    def test_factory_with_strategy_overrides(self):
        coordinator = create_integrated_braking_system(
            strategy={'power_management': {'max_teg_power': 100.0}}, brake_surface_area=2.0
        )
        assert coordinator.strategy.power_management.max_teg_power == 100.0
        assert coordinator.brake_surface_area == 2.0
        assert "brake_disc_teg" in coordinator.teg_engine.configurations

    def test_factory_registers_extra_designs(self):
        base = create_integrated_braking_system().teg_engine.configurations.get("brake_disc_teg")
        variant = base.with_geometry(254, 3.0, 4.0, config_id="double_disc")
        coordinator = create_integrated_braking_system(teg_configurations={"double_disc": variant},
                                                       strategy=EnergyRecoveryStrategy())
        assert "double_disc" in coordinator.teg_engine.configurations
