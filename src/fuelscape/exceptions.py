"""Custom exceptions for landscape generation."""


class LandscapeError(Exception):
    """Base exception for landscape generation errors."""

    pass


class InvalidDimensionError(LandscapeError):
    """Raised when a raster or mesh dimension is too small."""

    pass


class InvalidPercentageError(LandscapeError):
    """Raised when category weights cannot form a threshold table."""

    pass


class SequencingViolationError(LandscapeError):
    """Raised when a synthesizer runs before its prerequisite raster exists."""

    pass
