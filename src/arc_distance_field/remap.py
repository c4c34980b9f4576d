"""Gaussian remap of the raw distance field.

Each byte of the raster is read back as a normalized offset
``d = value / color_value_factor / 2`` (0.0-0.5 outside the arc, 0.5-1.0
inside) and pushed through the normal PDF with standard deviation ``sigma``:

    g     = 1 / (sigma * sqrt(2 * pi)) * exp(-d^2 / (2 * sigma^2))
    value = floor(g * color_value_factor * 2)

The PDF peak is about 2.82 for the default sigma, so the result can exceed
255 where ``d`` is small.  Those pixels go through the same overflow rule
as the raster stage (wrap by default).

Purely elementwise; no pixel depends on its neighbours.
"""

from __future__ import annotations

import logging

import numpy as np

from .params import DEFAULT_PARAMS, ArcFieldParams
from .quantize import to_byte

logger = logging.getLogger(__name__)


def normalized_offset(field: np.ndarray, params: ArcFieldParams = DEFAULT_PARAMS) -> np.ndarray:
    """Reinterpret raster bytes as offsets around the arc boundary."""
    return field.astype(np.float64) / params.color_value_factor / 2.0


def gaussian_response(distance: np.ndarray, params: ArcFieldParams = DEFAULT_PARAMS) -> np.ndarray:
    """Normal PDF of *distance* (float, unquantized)."""
    return params.gaussian_norm * np.exp(-(distance * distance) / params.two_sigma_squared)


def gaussian_remap(field: np.ndarray, params: ArcFieldParams = DEFAULT_PARAMS) -> np.ndarray:
    """Remap a raw distance field through the Gaussian response curve.

    Parameters
    ----------
    field : np.ndarray
        uint8 raster from ``rasterize_arc_distance_field``.
    params : ArcFieldParams
        Generation parameters.

    Returns
    -------
    np.ndarray
        uint8 array with the shape of *field*.

    Raises
    ------
    ValueError
        If *field* is not a uint8 array.
    """
    field = np.asarray(field)
    if field.dtype != np.uint8:
        raise ValueError(f"Expected uint8 distance field, got {field.dtype}")

    distance = normalized_offset(field, params)
    logger.debug("Remap: offset range [%.6f, %.6f]", distance.min(), distance.max())

    scaled = gaussian_response(distance, params) * params.color_value_factor * 2.0
    overflowing = int(np.count_nonzero(scaled >= 256.0))
    if overflowing:
        logger.debug(
            "Remap: %d pixel(s) above 255 (peak %.3f), overflow=%s",
            overflowing, scaled.max(), params.overflow.value
        )

    return to_byte(scaled, params.overflow)
