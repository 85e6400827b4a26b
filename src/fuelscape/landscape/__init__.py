"""Procedural fuel landscape generation package.

This package implements noise-based landscape generation: elevation, fuel
classification, fuel density, topographic contours and a terrain mesh.
"""

from .allocation import ThresholdTable, build_threshold_table, randomize_percentages
from .config import LandscapeConfig, MeshConfig, PercentageConfig, load_config
from .generator import (
    GenerationResult,
    LandscapeGenerator,
    generate_landscape,
    with_mesh,
)
from .mesh import MeshResult, build_mesh
from .noise import NoiseField, PerlinNoiseField
from .validation import ValidationResult, validate_landscape

__all__ = [
    "GenerationResult",
    "LandscapeConfig",
    "LandscapeGenerator",
    "MeshConfig",
    "MeshResult",
    "NoiseField",
    "PercentageConfig",
    "PerlinNoiseField",
    "ThresholdTable",
    "ValidationResult",
    "build_mesh",
    "build_threshold_table",
    "generate_landscape",
    "load_config",
    "randomize_percentages",
    "validate_landscape",
    "with_mesh",
]
