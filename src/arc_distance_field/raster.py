"""Distance-field rasterizer.

Computes, for every pixel, the distance from the corner ``(size, size)`` to
the pixel minus the arc radius, normalizes it by the scaling factor and
stores it as a byte centered on ``color_value_factor``:

    distance_to_corner = sqrt((size - y)^2 + (size - x)^2)
    distance           = distance_to_corner - radius
    value              = floor((1 - distance / scaling) * color_value_factor)

Pixels on the arc get ``color_value_factor`` (128 by default), pixels inside
it brighter, pixels outside darker.  With the default parameters every value
lies in [45, 173], so no wraparound happens at this stage.

The computation is vectorized over the full grid in float64.
"""

from __future__ import annotations

import logging

import numpy as np

from .params import DEFAULT_PARAMS, ArcFieldParams
from .quantize import to_byte

logger = logging.getLogger(__name__)


def corner_distance(params: ArcFieldParams = DEFAULT_PARAMS) -> np.ndarray:
    """Signed distance (pixels) of each pixel from the arc, shape (size, size).

    Negative inside the arc, positive outside.  Indexed ``[y, x]``.
    """
    size = params.size
    y, x = np.mgrid[0:size, 0:size].astype(np.float64)
    distance_to_corner = np.sqrt((size - y) ** 2 + (size - x) ** 2)
    return distance_to_corner - params.effective_radius


def rasterize_arc_distance_field(params: ArcFieldParams = DEFAULT_PARAMS) -> np.ndarray:
    """Rasterize the arc distance field.

    Parameters
    ----------
    params : ArcFieldParams
        Generation parameters.

    Returns
    -------
    np.ndarray
        uint8 array of shape (size, size), row-major, top row first.
    """
    distance = corner_distance(params)
    scaled = (1.0 - distance / params.effective_scaling_factor) * params.color_value_factor
    field = to_byte(scaled, params.overflow)

    logger.debug(
        "Raster: unscaled range [%.3f, %.3f], byte range [%d, %d]",
        scaled.min(), scaled.max(), field.min(), field.max()
    )
    return field
