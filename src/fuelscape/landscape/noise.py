"""Coherent noise sampling for landscape generation.

Provides a seeded 2D gradient (Perlin) noise field that can be sampled at
arbitrary continuous coordinates, plus helpers for building the per-cell
sample coordinates used by every synthesizer.
"""

from functools import lru_cache
from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Gradient directions with components in {-1, 0, 1}. With these, the raw
# noise magnitude is bounded by 1.
_GRADIENTS = np.array(
    [
        [1, 1],
        [-1, 1],
        [1, -1],
        [-1, -1],
        [1, 0],
        [-1, 0],
        [0, 1],
        [0, -1],
    ],
    dtype=np.float64,
)

# Offset applied to sample coordinates per unit of seed
SEED_OFFSET_SCALE = 0.01


class NoiseField(Protocol):
    """A deterministic, smooth scalar field over continuous 2D coordinates."""

    def sample(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64]:
        """Sample the field at coordinate arrays of equal shape.

        Returns:
            Values in [0, 1] with the same shape as x and y.
        """
        ...


def make_rng(seed: int) -> np.random.Generator:
    """Create a numpy Generator from any integer seed, negative included."""
    return np.random.default_rng(seed % (2**32))


@lru_cache(maxsize=32)
def permutation_table(seed: int) -> NDArray[np.int64]:
    """Return the doubled 256-entry permutation table for a seed."""
    p = np.arange(256, dtype=np.int64)
    make_rng(seed).shuffle(p)
    table = np.concatenate([p, p])
    table.setflags(write=False)
    return table


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: NDArray[np.float64], b: NDArray[np.float64], t: NDArray[np.float64]) -> NDArray[np.float64]:
    return a + t * (b - a)


def _gradient_dot(
    h: NDArray[np.int64], x: NDArray[np.float64], y: NDArray[np.float64]
) -> NDArray[np.float64]:
    g = _GRADIENTS[h % len(_GRADIENTS)]
    return g[..., 0] * x + g[..., 1] * y


def perlin_noise_2d(x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64]:
    """Raw 2D Perlin noise.

    The lattice wraps every 256 units, so any finite coordinate is valid.

    Args:
        x: X coordinates.
        y: Y coordinates, same shape as x.
        seed: Seed selecting the permutation table.

    Returns:
        Noise values in [-1, 1] with the shape of the inputs.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    perm = permutation_table(seed)

    x_floor = np.floor(x)
    y_floor = np.floor(y)
    xf = x - x_floor
    yf = y - y_floor

    xi = x_floor.astype(np.int64) & 255
    yi = y_floor.astype(np.int64) & 255

    u = _fade(xf)
    v = _fade(yf)

    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi + 1]
    ba = perm[perm[xi + 1] + yi]
    bb = perm[perm[xi + 1] + yi + 1]

    n00 = _gradient_dot(aa, xf, yf)
    n10 = _gradient_dot(ba, xf - 1.0, yf)
    n01 = _gradient_dot(ab, xf, yf - 1.0)
    n11 = _gradient_dot(bb, xf - 1.0, yf - 1.0)

    return _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v)


class PerlinNoiseField:
    """Seeded Perlin noise mapped to [0, 1]."""

    def sample(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64]:
        raw = perlin_noise_2d(x, y, seed)
        return np.clip((raw + 1.0) * 0.5, 0.0, 1.0)


def noise_coordinates(
    width: int,
    height: int,
    noise_scale: float,
    seed: int,
    frequency: float = 1.0,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Build per-cell noise sample coordinates.

    Each cell (x, y) maps to
    ``(x / width * noise_scale * frequency + seed * 0.01,
    y / height * noise_scale * frequency + seed * 0.01)``.
    The seed offset is not scaled by frequency.

    Args:
        width: Raster width in cells.
        height: Raster height in cells.
        noise_scale: Noise coordinate scale.
        seed: Seed whose offset shifts the coordinates.
        frequency: Extra multiplier on the scale.

    Returns:
        Tuple of (fx, fy) arrays, each of shape (height, width).
    """
    ys, xs = np.meshgrid(
        np.arange(height, dtype=np.float64),
        np.arange(width, dtype=np.float64),
        indexing="ij",
    )
    offset = seed * SEED_OFFSET_SCALE
    fx = xs / width * noise_scale * frequency + offset
    fy = ys / height * noise_scale * frequency + offset
    return fx, fy
