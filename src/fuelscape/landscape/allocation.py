"""Category weight allocation and cumulative threshold tables."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidPercentageError
from ..fuel_types import LAND_CATEGORIES, FuelCategory
from .config import LandscapeConfig, PercentageConfig
from .noise import make_rng

# Range of each randomized weight before normalization
RANDOM_WEIGHT_MIN = 5.0
RANDOM_WEIGHT_MAX = 20.0


@dataclass(frozen=True)
class ThresholdTable:
    """Cumulative noise boundaries for the non-water categories.

    Boundary ``i`` is the upper (exclusive) noise limit of
    ``LAND_CATEGORIES[i]``. Boundaries are non-decreasing and end at 1.0.
    """

    boundaries: tuple[float, ...]
    weights: tuple[float, ...]

    def as_array(self) -> NDArray[np.float64]:
        return np.array(self.boundaries, dtype=np.float64)


def randomize_percentages(seed: int) -> PercentageConfig:
    """Draw nine random weights and normalize them to sum to 100.

    Each raw weight is uniform in [5, 20].

    Args:
        seed: Random seed.

    Returns:
        PercentageConfig whose weights sum to 100.
    """
    rng = make_rng(seed)
    values = rng.uniform(RANDOM_WEIGHT_MIN, RANDOM_WEIGHT_MAX, size=len(LAND_CATEGORIES))
    shares = values / values.sum() * 100.0
    return PercentageConfig.from_weights(shares.tolist())


def resolve_percentages(config: LandscapeConfig) -> PercentageConfig:
    """Return the weights a generation pass will use.

    Manual control keeps the configured weights; otherwise a seeded random
    draw replaces them.
    """
    if config.manual_percentage_control:
        return config.percentages
    return randomize_percentages(config.seed)


def build_threshold_table(
    percentages: PercentageConfig,
    generate_burned_areas: bool,
) -> ThresholdTable:
    """Turn category weights into cumulative thresholds.

    When burned areas are disabled the burned weight counts as zero but keeps
    its slot, so its boundary equals the grassland boundary.

    Args:
        percentages: Category weights.
        generate_burned_areas: Whether the burned category is allowed.

    Returns:
        ThresholdTable in category enumeration order.

    Raises:
        InvalidPercentageError: If any weight is negative or the weights
            sum to zero or less.
    """
    weights = list(percentages.weights())

    negative = [
        category.name
        for category, weight in zip(LAND_CATEGORIES, weights)
        if weight < 0
    ]
    if negative:
        raise InvalidPercentageError(
            f"Category weights must be non-negative: {', '.join(negative)}"
        )

    if not generate_burned_areas:
        weights[LAND_CATEGORIES.index(FuelCategory.BURNED)] = 0.0

    total_non_water = sum(weights)
    if total_non_water <= 0:
        raise InvalidPercentageError(
            f"Total non-water weight must be positive, got {total_non_water}"
        )

    cumulative = np.cumsum(np.array(weights, dtype=np.float64) / total_non_water)

    return ThresholdTable(
        boundaries=tuple(float(b) for b in cumulative),
        weights=tuple(weights),
    )
