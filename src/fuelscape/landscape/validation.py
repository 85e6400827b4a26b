"""Post-generation consistency checks."""

import logging

import numpy as np

from ..fuel_types import LAND_CATEGORIES, FuelCategory
from .generator import GenerationResult

logger = logging.getLogger(__name__)

THRESHOLD_TOLERANCE = 1e-5


class ValidationResult:
    """Result of landscape validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_landscape(result: GenerationResult) -> ValidationResult:
    """Validate a generated landscape against its invariants.

    Args:
        result: Generation result to check.

    Returns:
        ValidationResult with any errors/warnings.
    """
    validation = ValidationResult()

    _check_shapes(result, validation)
    if not validation.passed:
        # Remaining checks compare rasters cell by cell
        _log_validation(validation)
        return validation

    _check_elevation_range(result, validation)
    _check_thresholds(result, validation)
    _check_water(result, validation)
    _check_disabled_categories(result, validation)
    _check_density(result, validation)
    _check_mesh(result, validation)
    _check_coverage(result, validation)

    _log_validation(validation)
    return validation


def _log_validation(validation: ValidationResult) -> None:
    if validation.passed:
        logger.info("Landscape validation passed")
    else:
        logger.warning(
            f"Landscape validation failed with {len(validation.errors)} errors"
        )
        for error in validation.errors:
            logger.error(f"  - {error}")

    for warning in validation.warnings:
        logger.warning(f"  - {warning}")


def _check_shapes(result: GenerationResult, validation: ValidationResult) -> None:
    """Check all rasters share the elevation shape."""
    shape = result.elevation.shape
    rasters = {
        "categories": result.categories.shape,
        "classification": result.classification.shape[:2],
        "density": result.density.shape,
        "contour": result.contour.shape,
    }
    for name, other in rasters.items():
        if other != shape:
            validation.add_error(f"{name} shape {other} differs from elevation {shape}")


def _check_elevation_range(
    result: GenerationResult, validation: ValidationResult
) -> None:
    """Check elevation is within [0, 1]."""
    low, high = float(result.elevation.min()), float(result.elevation.max())
    if low < 0.0 or high > 1.0:
        validation.add_error(f"Elevation range [{low:.3f}, {high:.3f}] outside [0, 1]")


def _check_thresholds(result: GenerationResult, validation: ValidationResult) -> None:
    """Check the threshold table is monotonic and ends at 1."""
    boundaries = result.thresholds.as_array()
    if np.any(np.diff(boundaries) < 0):
        validation.add_error("Threshold boundaries are not non-decreasing")
    if abs(boundaries[-1] - 1.0) > THRESHOLD_TOLERANCE:
        validation.add_error(f"Final threshold {boundaries[-1]:.6f} is not 1.0")


def _check_water(result: GenerationResult, validation: ValidationResult) -> None:
    """Check water cells are exactly the cells below the water threshold."""
    below = result.elevation < result.config.water_elevation_threshold
    water = result.categories == FuelCategory.WATER
    mismatched = int(np.sum(below != water))
    if mismatched > 0:
        validation.add_error(f"{mismatched} cells disagree with the water threshold")


def _check_disabled_categories(
    result: GenerationResult, validation: ValidationResult
) -> None:
    """Check disabled categories never appear."""
    config = result.config
    if not config.generate_urban_areas:
        urban = int(np.sum(result.categories == FuelCategory.URBAN))
        if urban > 0:
            validation.add_error(f"{urban} urban cells with urban areas disabled")
    if not config.generate_burned_areas:
        burned = int(np.sum(result.categories == FuelCategory.BURNED))
        if burned > 0:
            validation.add_error(f"{burned} burned cells with burned areas disabled")


def _check_density(result: GenerationResult, validation: ValidationResult) -> None:
    """Check density range and zero density on water."""
    water = result.categories == FuelCategory.WATER
    if np.any(result.density[water] != 0.0):
        validation.add_error("Water cells have non-zero fuel density")
    if result.density.min() < 0.0 or result.density.max() > 1.0:
        validation.add_error("Fuel density outside [0, 1]")


def _check_mesh(result: GenerationResult, validation: ValidationResult) -> None:
    """Check mesh vertex and triangle counts match its resolution."""
    mesh = result.mesh
    resolution = mesh.resolution
    expected_vertices = resolution * resolution
    expected_triangles = (resolution - 1) ** 2 * 2

    if mesh.vertex_count != expected_vertices:
        validation.add_error(
            f"Mesh has {mesh.vertex_count} vertices, expected {expected_vertices}"
        )
    if mesh.triangle_count != expected_triangles:
        validation.add_error(
            f"Mesh has {mesh.triangle_count} triangles, expected {expected_triangles}"
        )
    if len(mesh.uvs) != mesh.vertex_count or len(mesh.normals) != mesh.vertex_count:
        validation.add_error("Mesh UV or normal count differs from vertex count")


def _check_coverage(result: GenerationResult, validation: ValidationResult) -> None:
    """Warn when a weighted, enabled category produced no cells."""
    counts = result.category_counts()
    land_cells = result.categories.size - counts[FuelCategory.WATER]
    if land_cells == 0:
        validation.add_warning("No land cells above the water threshold")
        return

    skipped = {FuelCategory.URBAN} if not result.config.generate_urban_areas else set()
    for category, weight in zip(LAND_CATEGORIES, result.thresholds.weights):
        if category in skipped or weight <= 0:
            continue
        if counts[category] == 0:
            validation.add_warning(
                f"{category.name.lower()} has weight {weight:.1f} but no cells"
            )
