"""Float → byte conversion shared by the raster and remap stages."""

from __future__ import annotations

import numpy as np

from .params import OverflowMode


def to_byte(values: np.ndarray, overflow: OverflowMode = OverflowMode.WRAP) -> np.ndarray:
    """Floor *values* and store them as uint8.

    Parameters
    ----------
    values : np.ndarray
        Finite float array of any shape.
    overflow : OverflowMode
        ``WRAP`` keeps the low eight bits of the floored integer, so 256
        becomes 0 and -1 becomes 255.  ``CLAMP`` saturates to [0, 255].

    Returns
    -------
    np.ndarray
        uint8 array with the same shape as *values*.
    """
    floored = np.floor(values).astype(np.int64)
    if OverflowMode(overflow) is OverflowMode.CLAMP:
        return np.clip(floored, 0, 255).astype(np.uint8)
    return (floored & 0xFF).astype(np.uint8)
