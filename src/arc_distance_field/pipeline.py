"""End-to-end generation: raster → Gaussian remap → TGA file.

Runs the three stages once, in order, each on the fully computed output of
the previous one:
    1. rasterize_arc_distance_field(params) → raw field (uint8, size × size)
    2. gaussian_remap(raw, params)          → blur field (uint8, size × size)
    3. write_tga(output_dir / output_name)  → file, replaced if present

Optionally the raw field is also dumped as ``distance-field.tga`` beside the
main output for inspection.

Refactored architecture:
    - generate(params, output_dir) → ArcFieldResult
        * Callable function (used by scripts/ and tests)
    - CLI entry point lives in scripts/generate_arc_distance_field.py

The output is a pure function of ``params``: repeated calls produce
byte-identical files, and the logged SHA-256 can be compared across runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from src.utils import hashing
from src.utils.logging_config import pop_context, push_context

from .params import DEFAULT_PARAMS, ArcFieldParams
from .raster import rasterize_arc_distance_field
from .remap import gaussian_remap
from .tga import write_tga

logger = logging.getLogger(__name__)

RAW_FIELD_NAME = "distance-field.tga"


@dataclass(frozen=True)
class ArcFieldResult:
    """Buffers and file produced by one ``generate`` call."""

    raw_field: np.ndarray
    blur_field: np.ndarray
    output_path: Path
    sha256: str
    raw_field_path: Path | None = None


def generate(
    params: ArcFieldParams = DEFAULT_PARAMS,
    output_dir: str | Path = ".",
    write_raw_field: bool = False,
) -> ArcFieldResult:
    """Generate the arc distance field texture.

    Parameters
    ----------
    params : ArcFieldParams
        Generation parameters, ``DEFAULT_PARAMS`` for the shipped texture.
    output_dir : str | Path
        Directory receiving ``params.output_name``; defaults to the CWD.
    write_raw_field : bool
        Also write the pre-remap field as ``distance-field.tga``.

    Returns
    -------
    ArcFieldResult
        Both intensity buffers, the written path and its SHA-256.

    Raises
    ------
    OSError
        If the output cannot be written.  Not caught here.
    """
    output_dir = Path(output_dir)
    logger.info(
        "Generating %dx%d arc distance field (radius=%.1f, sigma=%.6f, overflow=%s)",
        params.size, params.size, params.effective_radius, params.sigma,
        params.overflow.value
    )

    push_context(stage="raster")
    try:
        raw = rasterize_arc_distance_field(params)
        logger.info("Raw field range [%d, %d]", raw.min(), raw.max())
        logger.debug("Raw field sha256=%s", hashing.sha256_array(raw))

        raw_path = None
        if write_raw_field:
            raw_path = write_tga(output_dir / RAW_FIELD_NAME, raw)

        push_context(stage="remap")
        blur = gaussian_remap(raw, params)
        logger.info("Remapped field range [%d, %d]", blur.min(), blur.max())
        logger.debug("Remapped field sha256=%s", hashing.sha256_array(blur))

        push_context(stage="encode")
        output_path = write_tga(output_dir / params.output_name, blur)
    finally:
        pop_context(keys=["stage"])

    digest = hashing.sha256_file(output_path)
    logger.info("Output %s sha256=%s", output_path, digest)

    return ArcFieldResult(
        raw_field=raw,
        blur_field=blur,
        output_path=output_path,
        sha256=digest,
        raw_field_path=raw_path,
    )
