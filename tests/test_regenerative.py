"""
tests/test_regenerative.py
==========================
Rule-based regenerative braking controller.

At 50 km/h the speed curve gives 0.7 + 0.2 * 20/30 = 0.8333 and at 0.4
intensity the intensity curve gives 0.85 - 0.15 / 3 = 0.8, so the
unconstrained regenerative share is 0.6667.
"""

import pytest

from teg_brake_recovery.braking.regenerative import BrakingInputs, RegenerativeBrakingController


@pytest.fixture
def controller():
    return RegenerativeBrakingController()


def braking(speed=50.0, intensity=0.4, soc=0.6, motor=60.0):
    return BrakingInputs(driving_speed=speed, braking_intensity=intensity,
                         battery_soc=soc, motor_temperature=motor)


class TestRegenerativeShare:

    def test_nominal_share(self, controller):
        outputs = controller.calculate_optimal_braking(braking())
        assert outputs.regenerative_braking_ratio == pytest.approx(2 / 3, rel=1e-6)
        assert outputs.motor_torque == pytest.approx(800 * 0.4 * 2 / 3, rel=1e-6)

    def test_front_axle_force(self, controller):
        outputs = controller.calculate_optimal_braking(braking())
        expected = outputs.motor_torque * outputs.regenerative_braking_ratio / 0.35
        assert outputs.front_axle_braking_force == pytest.approx(expected)

    def test_standstill_has_no_regeneration(self, controller):
        outputs = controller.calculate_optimal_braking(braking(speed=0.0))
        assert outputs.regenerative_braking_ratio == 0.0
        assert outputs.front_axle_braking_force == 0.0

    def test_full_battery_limits_share(self, controller):
        outputs = controller.calculate_optimal_braking(braking(soc=0.97))
        assert outputs.regenerative_braking_ratio == pytest.approx(0.1)

    def test_hot_motor_halves_share_and_torque(self, controller):
        cool = controller.calculate_optimal_braking(braking())
        hot = controller.calculate_optimal_braking(braking(motor=130.0))
        assert hot.regenerative_braking_ratio == pytest.approx(cool.regenerative_braking_ratio / 2)
        assert hot.motor_torque == pytest.approx(cool.motor_torque / 2)

    def test_hard_braking_caps_share(self, controller):
        outputs = controller.calculate_optimal_braking(braking(speed=60.0, intensity=0.9))
        assert outputs.regenerative_braking_ratio <= 0.6

    def test_inputs_are_clamped(self, controller):
        over = controller.calculate_optimal_braking(braking(intensity=1.5, soc=-0.2))
        full = controller.calculate_optimal_braking(braking(intensity=1.0, soc=0.0))
        assert over == full

    def test_torque_never_exceeds_rating(self):
        controller = RegenerativeBrakingController(max_motor_torque=100.0)
        for intensity in (0.2, 0.5, 0.8, 1.0):
            outputs = controller.calculate_optimal_braking(braking(intensity=intensity))
            assert outputs.motor_torque <= 100.0
