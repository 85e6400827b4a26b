"""Continuous field generation: elevation and fuel density."""

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidDimensionError, SequencingViolationError
from ..fuel_types import FuelCategory
from .noise import NoiseField, noise_coordinates

# Fixed three-octave blend: (weight, frequency multiplier)
ELEVATION_OCTAVES: tuple[tuple[float, float], ...] = (
    (0.6, 1.0),
    (0.3, 2.0),
    (0.1, 4.0),
)

# Density noise is sampled at twice the classification scale
DENSITY_FREQUENCY = 2.0

DENSITY_MODIFIERS: NDArray[np.float32] = np.array(
    [category.density_modifier for category in FuelCategory], dtype=np.float32
)


def check_dimensions(width: int, height: int) -> None:
    """Raise InvalidDimensionError unless both dimensions exceed 1."""
    if width <= 1 or height <= 1:
        raise InvalidDimensionError(
            f"Map dimensions must be greater than 1, got {width}x{height}"
        )


def make_elevation(
    width: int,
    height: int,
    noise_scale: float,
    seed: int,
    noise_field: NoiseField,
) -> NDArray[np.float32]:
    """Generate the elevation field.

    Blends three octaves of the noise field at 1x, 2x and 4x frequency with
    weights 0.6, 0.3 and 0.1, then clamps to [0, 1].

    Args:
        width: Map width in cells.
        height: Map height in cells.
        noise_scale: Noise coordinate scale.
        seed: Random seed.
        noise_field: Noise source.

    Returns:
        2D elevation array of shape (height, width) in [0, 1].

    Raises:
        InvalidDimensionError: If width or height is 1 or less.
    """
    check_dimensions(width, height)

    fx, fy = noise_coordinates(width, height, noise_scale, seed)

    elevation = np.zeros((height, width), dtype=np.float64)
    for weight, multiplier in ELEVATION_OCTAVES:
        elevation += weight * noise_field.sample(fx * multiplier, fy * multiplier, seed)

    return np.clip(elevation, 0.0, 1.0).astype(np.float32)


def make_fuel_density(
    categories: NDArray[np.uint8] | None,
    noise_scale: float,
    seed: int,
    noise_field: NoiseField,
) -> NDArray[np.float32]:
    """Generate the fuel density field.

    Samples noise at twice the classification scale and scales each cell by
    its category's density modifier. Water cells are always zero.

    Args:
        categories: Category grid from classification, shape (height, width).
        noise_scale: Noise coordinate scale.
        seed: Random seed.
        noise_field: Noise source.

    Returns:
        2D density array in [0, 1].

    Raises:
        SequencingViolationError: If no category grid is given.
    """
    if categories is None:
        raise SequencingViolationError(
            "Fuel density requires a classification grid; classify first"
        )

    height, width = categories.shape
    fx, fy = noise_coordinates(
        width, height, noise_scale, seed, frequency=DENSITY_FREQUENCY
    )
    density_noise = noise_field.sample(fx, fy, seed).astype(np.float32)

    return density_noise * DENSITY_MODIFIERS[categories]
