"""Landscape generation configuration models."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class PercentageConfig(BaseModel):
    """Relative weights of the non-water fuel categories.

    Weights are only ever used as ratios, so they need not sum to 100.
    Water is not listed here: it is decided by elevation alone.
    """

    urban: float = Field(default=10.0, description="Urban weight (0-100)")
    sparse: float = Field(default=10.0, description="Sparse weight (0-100)")
    dry_forest: float = Field(default=15.0, description="Dry forest weight (0-100)")
    wet_forest: float = Field(default=15.0, description="Wet forest weight (0-100)")
    mixed_forest: float = Field(
        default=10.0, description="Mixed forest weight (0-100)"
    )
    shrubland: float = Field(default=10.0, description="Shrubland weight (0-100)")
    grassland: float = Field(default=5.0, description="Grassland weight (0-100)")
    burned: float = Field(default=3.0, description="Burned area weight (0-100)")
    floodplain: float = Field(default=2.0, description="Floodplain weight (0-100)")

    def weights(self) -> tuple[float, ...]:
        """Return the nine weights in category enumeration order."""
        return tuple(getattr(self, name) for name in _FIELD_NAMES)

    @classmethod
    def from_weights(cls, weights: tuple[float, ...] | list[float]) -> "PercentageConfig":
        """Build a config from nine weights in enumeration order."""
        if len(weights) != len(_FIELD_NAMES):
            raise ValueError(
                f"Expected {len(_FIELD_NAMES)} weights, got {len(weights)}"
            )
        return cls(**dict(zip(_FIELD_NAMES, (float(w) for w in weights))))


# Field names in LAND_CATEGORIES order
_FIELD_NAMES: tuple[str, ...] = (
    "urban",
    "sparse",
    "dry_forest",
    "wet_forest",
    "mixed_forest",
    "shrubland",
    "grassland",
    "burned",
    "floodplain",
)


class MeshConfig(BaseModel):
    """Terrain mesh parameters."""

    resolution: int = Field(
        default=256, description="Vertices per side, independent of map size"
    )
    plane_size: float = Field(default=10.0, description="Side length of the mesh")
    elevation_multiplier: float = Field(
        default=10.0, description="Vertical scale applied to elevation"
    )


class LandscapeConfig(BaseModel):
    """Complete landscape generation configuration."""

    map_width: int = Field(default=256, description="Raster width in cells")
    map_height: int = Field(default=256, description="Raster height in cells")
    noise_scale: float = Field(default=20.0, description="Noise coordinate scale")
    seed: int = Field(default=42, description="Random seed for reproducibility")

    generate_urban_areas: bool = Field(
        default=False, description="Allow the urban category"
    )
    generate_burned_areas: bool = Field(
        default=False, description="Allow the burned category"
    )
    manual_percentage_control: bool = Field(
        default=True, description="Use configured weights instead of random ones"
    )
    percentages: PercentageConfig = Field(default_factory=PercentageConfig)

    water_elevation_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Elevation below this is water (0-1)",
    )

    mesh: MeshConfig = Field(default_factory=MeshConfig)

    # Debug options
    debug_output_dir: str | None = Field(
        default=None, description="Directory for debug images (None = disabled)"
    )


def load_config(config_path: Path) -> LandscapeConfig:
    """Load a landscape configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed LandscapeConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return LandscapeConfig.model_validate(data)
