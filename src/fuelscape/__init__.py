"""Fuel landscape synthesis core."""

from .exceptions import (
    InvalidDimensionError,
    InvalidPercentageError,
    LandscapeError,
    SequencingViolationError,
)
from .fuel_types import LAND_CATEGORIES, FuelCategory
from .landscape import (
    GenerationResult,
    LandscapeConfig,
    LandscapeGenerator,
    MeshResult,
    generate_landscape,
)

__all__ = [
    # Types
    "FuelCategory",
    "LAND_CATEGORIES",
    # Generation
    "GenerationResult",
    "LandscapeConfig",
    "LandscapeGenerator",
    "MeshResult",
    "generate_landscape",
    # Exceptions
    "LandscapeError",
    "InvalidDimensionError",
    "InvalidPercentageError",
    "SequencingViolationError",
]
