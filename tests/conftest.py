"""Shared test fixtures for landscape tests."""

import numpy as np
import pytest

from fuelscape.landscape.config import LandscapeConfig, MeshConfig


class ConstantNoiseField:
    """Noise double returning the same value everywhere."""

    def __init__(self, value: float) -> None:
        self.value = value

    def sample(self, x, y, seed):
        return np.full(np.shape(x), self.value, dtype=np.float64)


class TableNoiseField:
    """Noise double looking values up by (x, y) coordinate.

    Coordinates missing from the table return the default.
    """

    def __init__(self, table: dict[tuple[float, float], float], default: float = 0.5) -> None:
        self.table = {(round(x, 6), round(y, 6)): v for (x, y), v in table.items()}
        self.default = default

    def sample(self, x, y, seed):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        values = [
            self.table.get((round(float(a), 6), round(float(b), 6)), self.default)
            for a, b in zip(x.ravel(), y.ravel())
        ]
        return np.array(values, dtype=np.float64).reshape(x.shape)


class RecordingNoiseField:
    """Noise double that records every sample call."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.calls: list[tuple[np.ndarray, np.ndarray, int]] = []

    def sample(self, x, y, seed):
        self.calls.append((np.array(x), np.array(y), seed))
        return np.full(np.shape(x), self.value, dtype=np.float64)


@pytest.fixture
def constant_noise():
    """Factory for constant noise doubles."""
    return ConstantNoiseField


@pytest.fixture
def table_noise():
    """Factory for table-driven noise doubles."""
    return TableNoiseField


@pytest.fixture
def recording_noise() -> RecordingNoiseField:
    """Noise double that records its calls."""
    return RecordingNoiseField()


@pytest.fixture
def small_config() -> LandscapeConfig:
    """Small landscape that generates quickly."""
    return LandscapeConfig(
        map_width=48,
        map_height=32,
        noise_scale=4.0,
        seed=7,
        mesh=MeshConfig(resolution=9, plane_size=10.0, elevation_multiplier=10.0),
    )
