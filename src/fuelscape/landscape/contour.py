"""Topographic contour banding of the elevation field."""

import numpy as np
from numpy.typing import NDArray

from ..exceptions import SequencingViolationError

CONTOUR_INTERVAL = 0.05
CONTOUR_HALF_WIDTH = 0.005
CONTOUR_LINE_VALUE = 1.0


def make_contours(
    elevation: NDArray[np.float32] | None,
    interval: float = CONTOUR_INTERVAL,
    half_width: float = CONTOUR_HALF_WIDTH,
) -> NDArray[np.float32]:
    """Overlay contour lines on the elevation field.

    A cell lies on a contour line when its elevation modulo the interval is
    within half_width of the interval midpoint. Line cells are set to 1.0,
    all other cells keep their elevation.

    Args:
        elevation: Elevation field in [0, 1].
        interval: Elevation spacing between contour lines.
        half_width: Half the thickness of a line, in elevation units.

    Returns:
        2D array with the same shape as elevation.

    Raises:
        SequencingViolationError: If no elevation field is given.
    """
    if elevation is None:
        raise SequencingViolationError(
            "Contours require an elevation field; generate it first"
        )

    values = elevation.astype(np.float64)
    on_line = np.abs(np.mod(values, interval) - interval / 2.0) < half_width

    return np.where(on_line, CONTOUR_LINE_VALUE, values).astype(np.float32)
