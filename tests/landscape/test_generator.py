"""Tests for landscape generation orchestration."""

import threading

import numpy as np
import pytest

from fuelscape.exceptions import (
    InvalidDimensionError,
    InvalidPercentageError,
    SequencingViolationError,
)
from fuelscape.fuel_types import FuelCategory
from fuelscape.landscape.config import LandscapeConfig, MeshConfig, PercentageConfig
from fuelscape.landscape.generator import (
    GenerationResult,
    LandscapeGenerator,
    generate_landscape,
    with_mesh,
)


class TestGenerateLandscape:
    """Tests for a single generation pass."""

    def test_all_rasters_share_shape(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        shape = (small_config.map_height, small_config.map_width)

        assert result.elevation.shape == shape
        assert result.categories.shape == shape
        assert result.classification.shape == shape + (3,)
        assert result.density.shape == shape
        assert result.contour.shape == shape
        assert (result.width, result.height) == (48, 32)

    def test_deterministic(self, small_config: LandscapeConfig) -> None:
        """Same seed and parameters reproduce every output."""
        a = generate_landscape(small_config)
        b = generate_landscape(small_config)

        np.testing.assert_array_equal(a.elevation, b.elevation)
        np.testing.assert_array_equal(a.categories, b.categories)
        np.testing.assert_array_equal(a.classification, b.classification)
        np.testing.assert_array_equal(a.density, b.density)
        np.testing.assert_array_equal(a.contour, b.contour)
        np.testing.assert_array_equal(a.mesh.vertices, b.mesh.vertices)
        np.testing.assert_array_equal(a.mesh.triangles, b.mesh.triangles)
        np.testing.assert_array_equal(a.mesh.normals, b.mesh.normals)

    def test_random_percentages_deterministic(self, small_config: LandscapeConfig) -> None:
        config = small_config.model_copy(update={"manual_percentage_control": False})
        a = generate_landscape(config)
        b = generate_landscape(config)
        assert a.percentages == b.percentages
        assert sum(a.percentages.weights()) == pytest.approx(100.0)
        np.testing.assert_array_equal(a.categories, b.categories)

    def test_different_seed_different_elevation(self, small_config: LandscapeConfig) -> None:
        other = small_config.model_copy(update={"seed": small_config.seed + 1})
        a = generate_landscape(small_config)
        b = generate_landscape(other)
        assert not np.array_equal(a.elevation, b.elevation)

    def test_elevation_range(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        assert result.elevation.min() >= 0.0
        assert result.elevation.max() <= 1.0

    def test_water_consistency(self, small_config: LandscapeConfig) -> None:
        config = small_config.model_copy(update={"water_elevation_threshold": 0.5})
        result = generate_landscape(config)
        is_water = result.categories == FuelCategory.WATER
        np.testing.assert_array_equal(is_water, result.elevation < 0.5)
        assert np.any(is_water)

    def test_water_density_zero(self, small_config: LandscapeConfig) -> None:
        config = small_config.model_copy(update={"water_elevation_threshold": 0.5})
        result = generate_landscape(config)
        water = result.categories == FuelCategory.WATER
        assert np.all(result.density[water] == 0.0)

    def test_urban_disable_fallthrough(self, small_config: LandscapeConfig) -> None:
        """With urban disabled, would-be urban cells become sparse."""
        base = small_config.model_copy(
            update={
                "percentages": PercentageConfig(urban=40.0),
                "water_elevation_threshold": 0.0,
            }
        )
        enabled = generate_landscape(base.model_copy(update={"generate_urban_areas": True}))
        disabled = generate_landscape(base)

        was_urban = enabled.categories == FuelCategory.URBAN
        assert np.any(was_urban)
        assert not np.any(disabled.categories == FuelCategory.URBAN)
        assert np.all(disabled.categories[was_urban] == FuelCategory.SPARSE)
        np.testing.assert_array_equal(
            disabled.categories[~was_urban], enabled.categories[~was_urban]
        )

    def test_mesh_uses_configured_resolution(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        assert result.mesh.resolution == 9
        assert result.mesh.vertex_count == 81
        assert result.mesh.triangle_count == 128

    def test_rasters_read_only(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        with pytest.raises(ValueError):
            result.elevation[0, 0] = 0.0
        with pytest.raises(ValueError):
            result.categories[0, 0] = 0

    def test_result_is_frozen(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        with pytest.raises(AttributeError):
            result.elevation = np.zeros((2, 2), dtype=np.float32)  # type: ignore[misc]

    def test_category_counts_cover_every_cell(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        counts = result.category_counts()
        assert set(counts) == set(FuelCategory)
        assert sum(counts.values()) == 48 * 32

    def test_injected_noise_field(self, small_config: LandscapeConfig, constant_noise) -> None:
        result = generate_landscape(small_config, noise_field=constant_noise(0.2))
        np.testing.assert_allclose(result.elevation, 0.2, rtol=1e-6)
        assert np.all(result.categories == FuelCategory.WATER)
        assert np.all(result.density == 0.0)

    @pytest.mark.parametrize(
        "update",
        [{"map_width": 1}, {"map_height": 0}, {"mesh": MeshConfig(resolution=1)}],
    )
    def test_invalid_dimensions(self, small_config: LandscapeConfig, update: dict) -> None:
        with pytest.raises(InvalidDimensionError):
            generate_landscape(small_config.model_copy(update=update))

    def test_invalid_percentages(self, small_config: LandscapeConfig) -> None:
        config = small_config.model_copy(
            update={"percentages": PercentageConfig.from_weights([0] * 9)}
        )
        with pytest.raises(InvalidPercentageError):
            generate_landscape(config)

    def test_debug_images(self, small_config: LandscapeConfig, tmp_path) -> None:
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        config = small_config.model_copy(update={"debug_output_dir": str(tmp_path)})
        generate_landscape(config)
        for name in ("elevation", "categories", "density", "contour"):
            assert (tmp_path / f"{name}.png").exists()


class TestWithMesh:
    """Tests for rebuilding the mesh of an existing result."""

    def test_new_resolution(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        updated = with_mesh(result, MeshConfig(resolution=5))

        assert updated.mesh.vertex_count == 25
        assert updated.config.mesh.resolution == 5
        assert updated.elevation is result.elevation

    def test_original_untouched(self, small_config: LandscapeConfig) -> None:
        result = generate_landscape(small_config)
        with_mesh(result, MeshConfig(resolution=5))
        assert result.mesh.resolution == 9
        assert result.config.mesh.resolution == 9


class TestLandscapeGenerator:
    """Tests for the stateful generator wrapper."""

    def test_accessors_before_generation(self, small_config: LandscapeConfig) -> None:
        generator = LandscapeGenerator(small_config)
        assert generator.last_result is None
        for accessor in ("elevation", "categories", "classification", "density", "contour"):
            with pytest.raises(SequencingViolationError):
                getattr(generator, accessor)

    def test_regenerate_mesh_before_generation(self, small_config: LandscapeConfig) -> None:
        generator = LandscapeGenerator(small_config)
        with pytest.raises(SequencingViolationError):
            generator.regenerate_mesh()

    def test_generate_keeps_result(self, small_config: LandscapeConfig) -> None:
        generator = LandscapeGenerator(small_config)
        result = generator.generate()

        assert isinstance(result, GenerationResult)
        assert generator.last_result is result
        assert generator.elevation is result.elevation
        assert generator.categories is result.categories

    def test_failed_pass_keeps_previous_result(self, small_config: LandscapeConfig) -> None:
        generator = LandscapeGenerator(small_config)
        first = generator.generate()

        bad = small_config.model_copy(
            update={"percentages": PercentageConfig(sparse=-5.0)}
        )
        with pytest.raises(InvalidPercentageError):
            generator.generate(bad)

        assert generator.last_result is first
        assert generator.config == small_config

    def test_generate_with_new_config(self, small_config: LandscapeConfig) -> None:
        generator = LandscapeGenerator(small_config)
        first = generator.generate()
        other = small_config.model_copy(update={"seed": 99})
        second = generator.generate(other)

        assert generator.config == other
        assert generator.last_result is second
        # Earlier bundles stay valid and unchanged
        assert first.config.seed == small_config.seed

    def test_regenerate_mesh(self, small_config: LandscapeConfig) -> None:
        generator = LandscapeGenerator(small_config)
        first = generator.generate()

        mesh = generator.regenerate_mesh(MeshConfig(resolution=4, plane_size=2.0))

        assert mesh.vertex_count == 16
        assert generator.last_result.mesh is mesh
        assert generator.config.mesh.resolution == 4
        np.testing.assert_array_equal(generator.elevation, first.elevation)
        assert first.mesh.resolution == 9

    def test_concurrent_generation(self, small_config: LandscapeConfig) -> None:
        """Concurrent calls are serialized and each gets a full result."""
        generator = LandscapeGenerator(small_config)
        results: list[GenerationResult] = []

        def run() -> None:
            results.append(generator.generate())

        threads = [threading.Thread(target=run) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 4
        for result in results:
            np.testing.assert_array_equal(result.categories, results[0].categories)
        assert any(generator.last_result is result for result in results)
