"""Main landscape generation orchestration."""

import dataclasses
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidDimensionError, SequencingViolationError
from ..fuel_types import FuelCategory
from .allocation import ThresholdTable, build_threshold_table, resolve_percentages
from .classification import classify_fuel, colorize_categories
from .config import LandscapeConfig, MeshConfig, PercentageConfig
from .contour import make_contours
from .fields import check_dimensions, make_elevation, make_fuel_density
from .mesh import MeshResult, build_mesh
from .noise import NoiseField, PerlinNoiseField

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GenerationResult:
    """Immutable bundle of everything one generation pass produced."""

    config: LandscapeConfig
    percentages: PercentageConfig
    thresholds: ThresholdTable
    elevation: NDArray[np.float32]
    categories: NDArray[np.uint8]
    classification: NDArray[np.float32]
    density: NDArray[np.float32]
    contour: NDArray[np.float32]
    mesh: MeshResult

    def __post_init__(self) -> None:
        for array in (
            self.elevation,
            self.categories,
            self.classification,
            self.density,
            self.contour,
        ):
            array.setflags(write=False)

    @property
    def width(self) -> int:
        return self.elevation.shape[1]

    @property
    def height(self) -> int:
        return self.elevation.shape[0]

    def category_counts(self) -> dict[FuelCategory, int]:
        """Number of cells in each fuel category."""
        counts = np.bincount(self.categories.ravel(), minlength=len(FuelCategory))
        return {category: int(counts[category]) for category in FuelCategory}


def generate_landscape(
    config: LandscapeConfig,
    noise_field: NoiseField | None = None,
) -> GenerationResult:
    """Generate a complete landscape from configuration.

    All preconditions are checked before any raster is produced.

    Args:
        config: Landscape generation configuration.
        noise_field: Noise source; defaults to PerlinNoiseField.

    Returns:
        GenerationResult with every raster and the mesh.

    Raises:
        InvalidDimensionError: If a map dimension or the mesh resolution
            is 1 or less.
        InvalidPercentageError: If the category weights are unusable.
    """
    if noise_field is None:
        noise_field = PerlinNoiseField()

    width, height = config.map_width, config.map_height
    check_dimensions(width, height)
    _check_mesh_resolution(config.mesh)

    percentages = resolve_percentages(config)
    thresholds = build_threshold_table(percentages, config.generate_burned_areas)

    logger.info(f"Generating landscape {width}x{height} with seed {config.seed}")

    # Stage A: Elevation
    logger.info("Stage A: Generating elevation field...")
    elevation = make_elevation(
        width, height, config.noise_scale, config.seed, noise_field
    )

    # Stage B: Fuel classification
    logger.info("Stage B: Classifying fuels...")
    categories = classify_fuel(
        elevation,
        thresholds,
        config.noise_scale,
        config.seed,
        noise_field,
        water_elevation_threshold=config.water_elevation_threshold,
        generate_urban_areas=config.generate_urban_areas,
    )
    classification = colorize_categories(categories)

    # Stage C: Fuel density
    logger.info("Stage C: Generating fuel density...")
    density = make_fuel_density(
        categories, config.noise_scale, config.seed, noise_field
    )

    # Stage D: Topography
    logger.info("Stage D: Extracting contours...")
    contour = make_contours(elevation)

    # Stage E: Mesh
    logger.info(f"Stage E: Building {config.mesh.resolution}x{config.mesh.resolution} mesh...")
    mesh = build_mesh(
        elevation,
        resolution=config.mesh.resolution,
        plane_size=config.mesh.plane_size,
        elevation_multiplier=config.mesh.elevation_multiplier,
    )

    _log_fuel_stats(categories)

    if config.debug_output_dir:
        _dump_debug_images(
            Path(config.debug_output_dir),
            elevation=elevation,
            categories=categories,
            density=density,
            contour=contour,
        )

    return GenerationResult(
        config=config,
        percentages=percentages,
        thresholds=thresholds,
        elevation=elevation,
        categories=categories,
        classification=classification,
        density=density,
        contour=contour,
        mesh=mesh,
    )


def with_mesh(result: GenerationResult, mesh_config: MeshConfig) -> GenerationResult:
    """Return a copy of a result with its mesh rebuilt.

    The rasters are shared with the original result; they are read-only.

    Raises:
        InvalidDimensionError: If the mesh resolution is 1 or less.
    """
    _check_mesh_resolution(mesh_config)
    mesh = build_mesh(
        result.elevation,
        resolution=mesh_config.resolution,
        plane_size=mesh_config.plane_size,
        elevation_multiplier=mesh_config.elevation_multiplier,
    )
    config = result.config.model_copy(update={"mesh": mesh_config})
    return dataclasses.replace(result, config=config, mesh=mesh)


class LandscapeGenerator:
    """Generator that keeps the last successful result.

    Calls are serialized with a lock. A failed pass leaves the previous
    result in place.
    """

    def __init__(
        self,
        config: LandscapeConfig | None = None,
        noise_field: NoiseField | None = None,
    ) -> None:
        self.config = config if config is not None else LandscapeConfig()
        self.noise_field = noise_field if noise_field is not None else PerlinNoiseField()
        self._lock = threading.Lock()
        self._last_result: GenerationResult | None = None

    @property
    def last_result(self) -> GenerationResult | None:
        return self._last_result

    def generate(self, config: LandscapeConfig | None = None) -> GenerationResult:
        """Run a generation pass and keep its result.

        Args:
            config: Replacement configuration; the current one if None.

        Returns:
            The new GenerationResult.
        """
        with self._lock:
            use_config = config if config is not None else self.config
            result = generate_landscape(use_config, self.noise_field)
            self.config = use_config
            self._last_result = result
        return result

    def regenerate_mesh(self, mesh_config: MeshConfig | None = None) -> MeshResult:
        """Rebuild the mesh of the last result without regenerating rasters.

        Raises:
            SequencingViolationError: If nothing has been generated yet.
        """
        with self._lock:
            result = self._require_result("mesh")
            if mesh_config is None:
                mesh_config = self.config.mesh
            updated = with_mesh(result, mesh_config)
            self.config = updated.config
            self._last_result = updated
        return updated.mesh

    @property
    def elevation(self) -> NDArray[np.float32]:
        return self._require_result("elevation").elevation

    @property
    def categories(self) -> NDArray[np.uint8]:
        return self._require_result("categories").categories

    @property
    def classification(self) -> NDArray[np.float32]:
        return self._require_result("classification").classification

    @property
    def density(self) -> NDArray[np.float32]:
        return self._require_result("density").density

    @property
    def contour(self) -> NDArray[np.float32]:
        return self._require_result("contour").contour

    def _require_result(self, what: str) -> GenerationResult:
        result = self._last_result
        if result is None:
            raise SequencingViolationError(
                f"No landscape generated yet; cannot provide {what}"
            )
        return result


def _check_mesh_resolution(mesh_config: MeshConfig) -> None:
    if mesh_config.resolution <= 1:
        raise InvalidDimensionError(
            f"Mesh resolution must be greater than 1, got {mesh_config.resolution}"
        )


def _log_fuel_stats(categories: NDArray[np.uint8]) -> None:
    """Log fuel classification statistics."""
    total = categories.size
    counts = np.bincount(categories.ravel(), minlength=len(FuelCategory))

    logger.info(f"Fuel stats ({total:,} cells):")
    for category in FuelCategory:
        count = int(counts[category])
        pct = count / total * 100
        logger.info(f"  {category.name.lower()}: {count:,} ({pct:.1f}%)")


def _dump_debug_images(output_dir: Path, **arrays: NDArray) -> None:
    """Save arrays as images for debugging.

    Args:
        output_dir: Directory to save images.
        **arrays: Named arrays to save.
    """
    try:
        import matplotlib.pyplot as plt
        from matplotlib.colors import ListedColormap
    except ImportError:
        logger.warning("matplotlib not available, skipping debug images")
        return

    output_dir.mkdir(parents=True, exist_ok=True)
    fuel_cmap = ListedColormap([category.color for category in FuelCategory])

    for name, arr in arrays.items():
        fig, ax = plt.subplots(figsize=(10, 10))

        if arr.dtype == np.uint8:
            ax.imshow(
                arr, cmap=fuel_cmap, vmin=0, vmax=len(FuelCategory) - 1,
                origin="lower", interpolation="nearest",
            )
        else:
            ax.imshow(arr, cmap="gray", vmin=0.0, vmax=1.0, origin="lower")

        ax.set_title(name)
        ax.axis("off")

        fig.savefig(output_dir / f"{name}.png", dpi=150, bbox_inches="tight")
        plt.close(fig)

    logger.info(f"Debug images saved to {output_dir}")
