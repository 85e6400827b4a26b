"""Fuel classification: water by elevation, land categories by noise."""

import numpy as np
from numpy.typing import NDArray

from ..exceptions import SequencingViolationError
from ..fuel_types import LAND_CATEGORIES, FuelCategory
from .allocation import ThresholdTable
from .noise import NoiseField, noise_coordinates

CATEGORY_COLORS: NDArray[np.float32] = np.array(
    [category.rgb for category in FuelCategory], dtype=np.float32
)


def fold_disabled(
    categories: NDArray[np.uint8],
    generate_urban_areas: bool,
) -> NDArray[np.uint8]:
    """Relabel disabled urban cells as sparse, the next category in order.

    Urban keeps its share of the threshold table, so sparse absorbs it.
    Returns a new grid.
    """
    result = categories.copy()
    if not generate_urban_areas:
        result[result == FuelCategory.URBAN] = FuelCategory.SPARSE
    return result


def classify_land(
    classification_noise: NDArray[np.float64],
    thresholds: ThresholdTable,
) -> NDArray[np.uint8]:
    """Map noise values to land categories with the threshold table.

    Each cell gets the first category whose boundary is greater than its
    noise value; values past every boundary become floodplain.
    """
    # side="right" gives the first boundary strictly greater than the value
    index = np.searchsorted(thresholds.as_array(), classification_noise, side="right")
    index = np.minimum(index, len(LAND_CATEGORIES) - 1)
    land_values = np.array([int(c) for c in LAND_CATEGORIES], dtype=np.uint8)
    return land_values[index]


def classify_fuel(
    elevation: NDArray[np.float32] | None,
    thresholds: ThresholdTable,
    noise_scale: float,
    seed: int,
    noise_field: NoiseField,
    water_elevation_threshold: float = 0.3,
    generate_urban_areas: bool = False,
) -> NDArray[np.uint8]:
    """Classify each cell into a fuel category.

    Args:
        elevation: Elevation field of shape (height, width).
        thresholds: Cumulative thresholds for the land categories.
        noise_scale: Noise coordinate scale.
        seed: Random seed.
        noise_field: Noise source for the single-octave classification noise.
        water_elevation_threshold: Elevation below this is water.
        generate_urban_areas: Whether urban cells are allowed. When False,
            cells in the urban band fold into sparse.

    Returns:
        2D array of FuelCategory values as uint8.

    Raises:
        SequencingViolationError: If no elevation field is given.
    """
    if elevation is None:
        raise SequencingViolationError(
            "Fuel classification requires an elevation field; generate it first"
        )

    height, width = elevation.shape
    fx, fy = noise_coordinates(width, height, noise_scale, seed)
    classification_noise = noise_field.sample(fx, fy, seed)

    categories = classify_land(classification_noise, thresholds)
    categories = fold_disabled(categories, generate_urban_areas)

    # Water depends on elevation alone
    categories[elevation < water_elevation_threshold] = FuelCategory.WATER

    return categories


def colorize_categories(categories: NDArray[np.uint8]) -> NDArray[np.float32]:
    """Convert a category grid to an RGB image of shape (height, width, 3)."""
    return CATEGORY_COLORS[categories]
