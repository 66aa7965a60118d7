"""
tests/test_optimizer.py
=======================
Geometry design-space search.
"""

import pytest

from teg_brake_recovery.teg.configurations import ModuleDimensions
from teg_brake_recovery.teg.conversion import ThermalConditions, TEGPerformance
from teg_brake_recovery.teg.optimizer import (
    ParameterSpace, OptimizationConstraints, score_performance, search_design_space
)
from teg_brake_recovery.utils.validation import InvalidThermalConditions


@pytest.fixture
def target():
    return ThermalConditions(hot_side_temperature=150.0, cold_side_temperature=45.0, heat_flux=4000.0)


def make_performance(power=1.0, efficiency=0.5, power_density=20.0, reliability=80.0):
    return TEGPerformance(
        config_id="candidate", operating_mode="maximum_power", electrical_power=power,
        voltage=1.0, current=power, efficiency=efficiency, power_density=power_density,
        heat_input=100.0, heat_rejected=100.0 - power, temperature_difference=100.0,
        effective_temperature_difference=80.0, internal_resistance=1.0, load_resistance=1.0,
        thermal_resistance=0.3, reliability=reliability, lifespan=50000.0
    )


class TestParameterSpace:

    def test_default_size(self):
        assert len(ParameterSpace()) == 46 * 13 * 11

    def test_iteration_order(self):
        points = list(ParameterSpace(pairs=(50, 60, 10), leg_length=(2.0, 2.5, 0.5),
                                     leg_area=(2.0, 3.0, 1.0)))
        assert points[0] == (50, 2.0, 2.0)
        assert points[1] == (50, 2.0, 3.0)
        assert points[-1] == (60, 2.5, 3.0)
        assert len(points) == 8

    def test_points_are_plain_numbers(self):
        pairs, length, area = next(iter(ParameterSpace()))
        assert type(pairs) is int
        assert type(length) is float
        assert type(area) is float


class TestScoring:

    def test_weighted_sum(self):
        score = score_performance(make_performance(), OptimizationConstraints())
        assert score == pytest.approx(0.4 * 1.0 + 0.3 * 0.5 + 0.2 * 20.0 + 0.1 * 80.0)

    def test_each_missed_target_halves_score(self):
        base = score_performance(make_performance(), OptimizationConstraints())
        one_missed = score_performance(make_performance(), OptimizationConstraints(min_power=5.0))
        both_missed = score_performance(make_performance(),
                                        OptimizationConstraints(min_power=5.0, min_efficiency=1.0))
        assert one_missed == pytest.approx(base / 2)
        assert both_missed == pytest.approx(base / 4)

    def test_cost_constraint(self, engine):
        disc = engine.configurations.get("brake_disc_teg")
        constraints = OptimizationConstraints(max_cost=1000.0)
        assert constraints.admits(disc.with_geometry(100, 3.0, 4.0))
        assert not constraints.admits(disc.with_geometry(110, 3.0, 4.0))

    def test_size_constraint_uses_module_dimensions(self, engine):
        disc = engine.configurations.get("brake_disc_teg")
        assert not OptimizationConstraints(max_size=ModuleDimensions(90.0, 80.0, 15.0)).admits(disc)
        assert OptimizationConstraints(max_size=ModuleDimensions(100.0, 80.0, 15.0)).admits(disc)


class TestDesignSearch:

    def test_budget_bounds_iterations(self, engine, target):
        result = engine.optimize_configuration("brake_disc_teg", target, max_iterations=25)
        assert result.iterations == 25

    def test_default_budget_explores_first_pair_count(self, engine, target):
        result = engine.optimize_configuration("brake_disc_teg", target)
        assert result.iterations == 100
        assert result.best_config.thermoelectric_pairs == 50

    def test_zero_budget_returns_base(self, engine, target):
        result = engine.optimize_configuration("brake_disc_teg", target, max_iterations=0)
        assert result.best_config is engine.configurations.get("brake_disc_teg")
        assert result.score == 0.0
        assert result.iterations == 0

    def test_rejected_points_consume_budget(self, engine, target):
        result = engine.optimize_configuration("brake_disc_teg", target,
                                               OptimizationConstraints(max_cost=100.0),
                                               max_iterations=30)
        assert result.iterations == 30
        assert result.best_config.thermoelectric_pairs == 127
        assert result.score == 0.0

    def test_small_space_is_exhausted(self, engine, target):
        space = ParameterSpace(pairs=(100, 200, 100), leg_length=(3.0, 3.0, 1.0),
                               leg_area=(4.0, 4.0, 1.0))
        result = engine.optimize_configuration("brake_disc_teg", target, space=space)
        assert result.iterations == 2
        assert result.best_config.thermoelectric_pairs == 200
        assert result.score > 0

    def test_best_performance_matches_best_config(self, engine, target):
        result = engine.optimize_configuration("brake_disc_teg", target, max_iterations=20)
        expected = engine._evaluate(result.best_config, target)
        assert result.expected_performance.electrical_power == pytest.approx(expected.electrical_power)

    def test_search_does_not_touch_history(self, engine, target):
        engine.optimize_configuration("brake_disc_teg", target, max_iterations=10)
        assert engine.get_performance_history() == []

    def test_invalid_target_conditions_raise(self, engine):
        with pytest.raises(InvalidThermalConditions):
            engine.optimize_configuration("brake_disc_teg", ThermalConditions(250.0, 45.0, 4000.0))

    def test_search_with_custom_evaluator(self, engine):
        base = engine.configurations.get("brake_disc_teg")

        def evaluate(candidate):
            return make_performance(power=candidate.thermoelectric_pairs / 100)

        space = ParameterSpace(pairs=(50, 80, 10), leg_length=(3.0, 3.0, 1.0), leg_area=(4.0, 4.0, 1.0))
        result = search_design_space(evaluate, base, space=space, max_iterations=10)
        assert result.best_config.thermoelectric_pairs == 80
        assert result.to_dict()["iterations"] == 4
