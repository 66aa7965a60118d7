"""
tests/test_thermal_manager.py
=============================
Brake thermal management: heat split, cooling strategy, temperatures and config.
"""

import pytest

from teg_brake_recovery.thermal.thermal_manager import (
    ThermalManager, ThermalManagementConfig, BrakingThermalInputs, ManagementMode, CoolingStatus
)
from teg_brake_recovery.utils.validation import EmergencyShutdown


@pytest.fixture
def manager():
    return ThermalManager()


def make_inputs(brake_temperature=100.0, braking_power=20000.0, ratio=0.5, airflow=10.0,
                duration=5.0, motor_temperature=60.0, ambient_temperature=25.0):
    return BrakingThermalInputs(
        vehicle_speed=50.0, braking_force=500.0, braking_power=braking_power,
        brake_temperature=brake_temperature, motor_temperature=motor_temperature,
        ambient_temperature=ambient_temperature, airflow=airflow, braking_duration=duration,
        regenerative_braking_ratio=ratio
    )


class TestHeatBalance:

    def test_heat_generation_adds_motor_losses(self):
        inputs = make_inputs(braking_power=20000.0, ratio=0.5)
        assert ThermalManager.calculate_heat_generation(inputs) == pytest.approx(10000.0 + 1000.0)

    def test_distribution_shares(self):
        distribution = ThermalManager.calculate_heat_distribution(1000.0, teg_active=True)
        assert distribution.brake_heat == pytest.approx(700.0)
        assert distribution.motor_heat == pytest.approx(200.0)
        assert distribution.teg_heat == pytest.approx(50.0)
        assert distribution.ambient_loss == pytest.approx(50.0)

    def test_no_teg_heat_when_inactive(self):
        assert ThermalManager.calculate_heat_distribution(1000.0, teg_active=False).teg_heat == 0.0

    def test_rejection_grows_with_airflow(self, manager):
        strategy = manager.determine_cooling_strategy(make_inputs(brake_temperature=40.0),
                                                      ManagementMode.PASSIVE, 0.0)
        still = manager.calculate_heat_rejection(make_inputs(airflow=0.0), strategy)
        windy = manager.calculate_heat_rejection(make_inputs(airflow=20.0), strategy)
        assert windy > still > 0


class TestCoolingStrategy:

    def test_off_below_optimal_range(self, manager):
        strategy = manager.determine_cooling_strategy(make_inputs(brake_temperature=40.0),
                                                      ManagementMode.PASSIVE, 5000.0)
        assert strategy.status == CoolingStatus.OFF
        assert strategy.cooling_power == 0.0

    def test_passive_inside_optimal_range(self, manager):
        strategy = manager.determine_cooling_strategy(make_inputs(brake_temperature=100.0, airflow=4.0),
                                                      ManagementMode.PASSIVE, 5000.0)
        assert strategy.status == CoolingStatus.PASSIVE
        assert strategy.fan_speed == pytest.approx(0.2)
        assert strategy.cooling_power == pytest.approx(200.0)

    def test_active_cooling_follows_curve(self, manager):
        strategy = manager.determine_cooling_strategy(make_inputs(brake_temperature=225.0),
                                                      ManagementMode.ACTIVE, 5000.0)
        assert strategy.status == CoolingStatus.ACTIVE
        assert strategy.cooling_power == pytest.approx(1000.0)
        assert strategy.fan_speed == pytest.approx(0.5)
        assert strategy.pump_speed == pytest.approx(0.5)

    def test_pump_only_runs_in_active_mode(self, manager):
        strategy = manager.determine_cooling_strategy(make_inputs(brake_temperature=225.0),
                                                      ManagementMode.PASSIVE, 5000.0)
        assert strategy.pump_speed == 0.0

    def test_emergency_near_shutdown(self, manager):
        strategy = manager.determine_cooling_strategy(make_inputs(brake_temperature=280.0),
                                                      ManagementMode.PASSIVE, 5000.0)
        assert strategy.status == CoolingStatus.EMERGENCY
        assert strategy.cooling_power == pytest.approx(2000.0)

    def test_adaptive_mode_scales_with_heat_load(self, manager):
        inputs = make_inputs(brake_temperature=225.0)
        active = manager.determine_cooling_strategy(inputs, ManagementMode.ACTIVE, 5000.0)
        adaptive = manager.determine_cooling_strategy(inputs, ManagementMode.ADAPTIVE, 5000.0)
        assert adaptive.cooling_power == pytest.approx(active.cooling_power * 1.5)

    def test_adaptive_correction_can_be_disabled(self, manager):
        manager.set_adaptive_cooling(False)
        inputs = make_inputs(brake_temperature=225.0)
        strategy = manager.determine_cooling_strategy(inputs, ManagementMode.ADAPTIVE, 5000.0)
        assert strategy.cooling_power == pytest.approx(1000.0)


class TestManage:

    def test_emergency_shutdown_at_threshold(self, manager):
        with pytest.raises(EmergencyShutdown):
            manager.manage(make_inputs(brake_temperature=300.0))
        assert manager.get_thermal_history() == []

    def test_emergency_shutdown_is_latched_until_reset(self, manager):
        assert not manager.get_thermal_diagnostics()["emergency_shutdown_active"]
        with pytest.raises(EmergencyShutdown):
            manager.manage(make_inputs(brake_temperature=320.0))

        # Later events still run and leave the flag set
        manager.manage(make_inputs(brake_temperature=100.0))
        assert manager.get_thermal_diagnostics()["emergency_shutdown_active"]

        manager.reset_emergency_shutdown()
        assert not manager.get_thermal_diagnostics()["emergency_shutdown_active"]

    def test_teg_faces_at_ambient_when_inactive(self, manager):
        outputs = manager.manage(make_inputs(), teg_active=False)
        assert outputs.teg_hot_side_temperature == 25.0
        assert outputs.teg_cold_side_temperature == 25.0
        assert outputs.temperature_gradient == 0.0

    def test_teg_face_temperatures_when_active(self, manager):
        outputs = manager.manage(make_inputs(brake_temperature=260.0), teg_active=True)
        # 100 W through 0.1 / (5 * 0.01) = 2 K/W of interface
        assert outputs.teg_hot_side_temperature == pytest.approx(outputs.final_brake_temperature - 200.0)
        assert outputs.teg_hot_side_temperature > 25.0
        assert outputs.teg_cold_side_temperature == pytest.approx(45.0)

    def test_teg_hot_side_floored_at_ambient(self, manager):
        outputs = manager.manage(make_inputs(brake_temperature=100.0), teg_active=True)
        assert outputs.final_brake_temperature - 200.0 < 25.0
        assert outputs.teg_hot_side_temperature == 25.0
        assert outputs.temperature_gradient == pytest.approx((25.0 - 45.0) / 0.005)

    def test_temperatures_never_below_ambient(self, manager):
        outputs = manager.manage(make_inputs(brake_temperature=30.0, braking_power=100.0, duration=600.0))
        assert outputs.final_brake_temperature >= 25.0
        assert outputs.final_motor_temperature >= 25.0

    def test_hard_braking_heats_brakes(self, manager):
        outputs = manager.manage(make_inputs(braking_power=80000.0, ratio=0.2, duration=10.0))
        assert outputs.final_brake_temperature > 100.0

    def test_history_and_dataframe(self, manager):
        manager.manage_thermal_conditions(make_inputs())
        manager.manage(make_inputs(brake_temperature=150.0))
        frame = manager.get_thermal_dataframe()
        assert len(frame) == 2
        assert "heat_distribution_brake_heat" in frame.columns
        assert set(frame["cooling_system_status"]) == {"passive"}


class TestCoolingOptimization:

    def test_cheapest_setting_reaching_target(self, manager):
        result = manager.optimize_cooling_system(target_temperature=190.0, max_cooling_power=60.0,
                                                 ambient_temperature=25.0)
        assert result["feasible"]
        assert result["optimal_fan_speed"] == pytest.approx(1.0)
        assert result["optimal_pump_speed"] == pytest.approx(0.0)
        assert result["expected_cooling_power"] == pytest.approx(15.0)

    def test_unreachable_target(self, manager):
        result = manager.optimize_cooling_system(target_temperature=100.0, max_cooling_power=60.0,
                                                 ambient_temperature=25.0)
        assert not result["feasible"]


class TestConfiguration:

    def test_defaults(self):
        config = ThermalManagementConfig()
        assert config.emergency_shutdown_temp == 300.0
        assert (config.optimal_temp_min, config.optimal_temp_max) == (50.0, 200.0)

    def test_inconsistent_setpoints_rejected(self):
        config = ThermalManagementConfig()
        config.max_operating_temp = 150.0
        with pytest.raises(ValueError):
            ThermalManager(config)

    def test_partial_update(self):
        config = ThermalManagementConfig()
        config.update({'temperature_control': {'optimal_temp_range': {'max': 180.0}}})
        assert config.optimal_temp_max == 180.0
        assert config.optimal_temp_min == 50.0

    def test_save_and_load(self, tmp_path):
        config = ThermalManagementConfig()
        config.heat_sink_area = 750.0
        path = tmp_path / "thermal" / "thermal_management.yaml"
        config.save_to_file(str(path))
        assert ThermalManagementConfig(str(path)).heat_sink_area == 750.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ThermalManagementConfig(str(tmp_path / "missing.yaml"))

    def test_update_configuration_rebuilds_models(self, manager):
        config = ThermalManagementConfig()
        config.heat_sink_area = 1000.0
        manager.update_configuration(config)
        assert manager.heat_exchanger.surface_area == pytest.approx(0.1)
        assert manager.get_thermal_diagnostics()['config']['heat_sink']['surface_area'] == 1000.0
