"""Fuel categories and their display and density properties."""

from enum import IntEnum


class FuelCategory(IntEnum):
    """Landcover fuel categories, stored by value in the category grid."""

    WATER = 0
    URBAN = 1
    SPARSE = 2
    DRY_FOREST = 3
    WET_FOREST = 4
    MIXED_FOREST = 5
    SHRUBLAND = 6
    GRASSLAND = 7
    BURNED = 8
    FLOODPLAIN = 9

    @property
    def color(self) -> str:
        """Display color as a hex string."""
        return _COLORS[self]

    @property
    def rgb(self) -> tuple[float, float, float]:
        """Display color as RGB floats in [0, 1]."""
        return hex_to_rgb(_COLORS[self])

    @property
    def density_modifier(self) -> float:
        """Multiplier applied to the density noise for this category."""
        return _DENSITY_MODIFIERS.get(self, 1.0)


# Categories driven by the percentage weights, in threshold order
LAND_CATEGORIES: tuple[FuelCategory, ...] = tuple(
    c for c in FuelCategory if c != FuelCategory.WATER
)

_COLORS: dict[FuelCategory, str] = {
    FuelCategory.WATER: "#0000FF",
    FuelCategory.URBAN: "#FF0000",
    FuelCategory.SPARSE: "#808080",
    FuelCategory.DRY_FOREST: "#88CC88",
    FuelCategory.WET_FOREST: "#006400",
    FuelCategory.MIXED_FOREST: "#228B22",
    FuelCategory.SHRUBLAND: "#C2B280",
    FuelCategory.GRASSLAND: "#F0E68C",
    FuelCategory.BURNED: "#800080",
    FuelCategory.FLOODPLAIN: "#00FFFF",
}

_DENSITY_MODIFIERS: dict[FuelCategory, float] = {
    FuelCategory.WATER: 0.0,
    FuelCategory.URBAN: 0.2,
    FuelCategory.BURNED: 0.1,
    FuelCategory.FLOODPLAIN: 0.5,
}


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    """Convert a '#RRGGBB' string to RGB floats.

    Raises:
        ValueError: If the string is not a six-digit hex color.
    """
    digits = hex_color.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return (r / 255.0, g / 255.0, b / 255.0)
