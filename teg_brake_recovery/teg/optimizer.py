"""
Design-space search for TEG module geometry.

This module enumerates candidate module geometries (pair count, leg length and
leg cross-section) and scores each candidate on electrical power, efficiency,
power density and reliability under a fixed set of target thermal conditions.
The parameter space knows how many points it holds; the search decides how many
of them it is willing to evaluate.
"""

import itertools
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple, Callable
import logging

from .configurations import TEGConfiguration, ModuleDimensions

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("TEG_Optimizer")


# Score weights
POWER_WEIGHT = 0.4
EFFICIENCY_WEIGHT = 0.3
POWER_DENSITY_WEIGHT = 0.2
RELIABILITY_WEIGHT = 0.1
MISSED_TARGET_PENALTY = 0.5

COST_PER_PAIR = 10.0  # $, simplified module cost model
DEFAULT_MAX_ITERATIONS = 100


def _inclusive_range(start: float, stop: float, step: float) -> np.ndarray:
    return np.arange(start, stop + step / 2, step)


@dataclass(frozen=True)
class ParameterSpace:
    """
    Grid of candidate module geometries.

    Iteration order is nested with the pair count outermost and the leg
    cross-section innermost.

    Attributes:
        pairs: (start, stop, step) for the number of couples
        leg_length: (start, stop, step) for leg length in mm
        leg_area: (start, stop, step) for leg cross-section in mm²
    """
    pairs: Tuple[int, int, int] = (50, 500, 10)
    leg_length: Tuple[float, float, float] = (2.0, 8.0, 0.5)
    leg_area: Tuple[float, float, float] = (2.0, 12.0, 1.0)

    def axes(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return (
            _inclusive_range(*self.pairs).astype(int),
            _inclusive_range(*self.leg_length),
            _inclusive_range(*self.leg_area),
        )

    def __iter__(self) -> Iterator[Tuple[int, float, float]]:
        for pairs, length, area in itertools.product(*self.axes()):
            yield int(pairs), float(length), float(area)

    def __len__(self) -> int:
        pairs, lengths, areas = self.axes()
        return len(pairs) * len(lengths) * len(areas)


@dataclass
class OptimizationConstraints:
    """
    Optional limits applied to candidate designs.

    Attributes:
        max_size: Largest admissible module dimensions in mm
        max_cost: Budget under the simplified cost model in $
        min_power: Power target in W, missing it halves the score
        min_efficiency: Efficiency target in %, missing it halves the score
    """
    max_size: Optional[ModuleDimensions] = None
    max_cost: Optional[float] = None
    min_power: Optional[float] = None
    min_efficiency: Optional[float] = None

    def admits(self, config: TEGConfiguration) -> bool:
        """Check size and cost limits for a candidate design."""
        if self.max_size is not None:
            dims = config.dimensions
            if (dims.length > self.max_size.length or dims.width > self.max_size.width
                    or dims.height > self.max_size.height):
                return False

        if self.max_cost is not None and config.thermoelectric_pairs * COST_PER_PAIR > self.max_cost:
            return False

        return True


@dataclass
class OptimizationResult:
    """Best design found by the search."""
    best_config: TEGConfiguration
    expected_performance: object
    score: float
    iterations: int

    def to_dict(self) -> Dict:
        return {
            'best_config': self.best_config.to_dict(),
            'expected_performance': self.expected_performance.to_dict(),
            'score': self.score,
            'iterations': self.iterations
        }


def score_performance(performance, constraints: OptimizationConstraints) -> float:
    """
    Weighted design score of a performance snapshot.

    Args:
        performance: TEGPerformance of a candidate
        constraints: Constraints carrying the optional minimum targets

    Returns:
        Score, halved for each minimum target that is not met
    """
    score = (POWER_WEIGHT * performance.electrical_power
             + EFFICIENCY_WEIGHT * performance.efficiency
             + POWER_DENSITY_WEIGHT * performance.power_density
             + RELIABILITY_WEIGHT * performance.reliability)

    if constraints.min_power is not None and performance.electrical_power < constraints.min_power:
        score *= MISSED_TARGET_PENALTY
    if constraints.min_efficiency is not None and performance.efficiency < constraints.min_efficiency:
        score *= MISSED_TARGET_PENALTY

    return score


def search_design_space(evaluate: Callable[[TEGConfiguration], object],
                        base_config: TEGConfiguration,
                        constraints: Optional[OptimizationConstraints] = None,
                        space: Optional[ParameterSpace] = None,
                        max_iterations: int = DEFAULT_MAX_ITERATIONS) -> OptimizationResult:
    """
    Bounded grid search over module geometry.

    Every point drawn from the space consumes one unit of the budget, including
    points rejected by the constraints. The unmodified base design is the
    starting best with a score of zero.

    Args:
        evaluate: Callable returning the performance of a design under the target conditions
        base_config: Design whose materials, heat exchanger and placement are kept
        constraints: Optional size, cost and target limits
        space: Parameter space to draw candidates from
        max_iterations: Evaluation budget

    Returns:
        OptimizationResult with the best design, its performance, score and points consumed
    """
    constraints = constraints or OptimizationConstraints()
    space = space if space is not None else ParameterSpace()

    # Raises for target conditions the base design cannot operate in
    best_performance = evaluate(base_config)
    best_config = base_config
    best_score = 0.0
    iterations = 0

    for pairs, leg_length, leg_area in itertools.islice(space, max(0, max_iterations)):
        iterations += 1
        candidate = base_config.with_geometry(pairs, leg_length, leg_area)
        if not constraints.admits(candidate):
            continue

        performance = evaluate(candidate)
        score = score_performance(performance, constraints)
        if score > best_score:
            best_config, best_performance, best_score = candidate, performance, score

    logger.info(
        f"Design search on {base_config.config_id}: {iterations} of {len(space)} points, "
        f"best score {best_score:.3f} with {best_config.thermoelectric_pairs} pairs, "
        f"{best_config.leg_dimensions.length}mm x {best_config.leg_dimensions.cross_sectional_area}mm² legs"
    )

    return OptimizationResult(
        best_config=best_config,
        expected_performance=best_performance,
        score=best_score,
        iterations=iterations
    )
