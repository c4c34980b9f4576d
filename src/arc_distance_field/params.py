"""Generator parameters.

All constants of the pipeline live in one frozen dataclass that is passed
explicitly to every stage.  The shipped entrypoint always uses
``DEFAULT_PARAMS``; ``load_params`` exists for library callers that want a
different size or falloff.

Derived values (radius, scaling factor, Gaussian constants) are computed
from the stored fields on access, so two instances with equal fields always
drive the stages identically.

Usage::

    from src.arc_distance_field.params import DEFAULT_PARAMS, load_params
    params = DEFAULT_PARAMS
    params = load_params("configs/arc_distance_field.v1.yaml")
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from src.utils.fs import load_yaml

logger = logging.getLogger(__name__)

# TGA stores width/height as unsigned 16-bit fields
MAX_SIZE = 0xFFFF


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when parameter validation fails."""

    pass


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


def _finite_float(name: str, value: Any) -> float:
    """Coerce a numeric field to a finite float or raise ConfigError."""
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(result):
        raise ConfigError(f"{name} must be finite, got {value!r}")
    return result


class OverflowMode(str, enum.Enum):
    """How a floored pixel value outside [0, 255] becomes a byte.

    ``WRAP`` keeps the low eight bits (modulo 256).  This is what the
    reference textures were generated with and is the default.
    ``CLAMP`` saturates to [0, 255] and changes the output wherever the
    Gaussian peak exceeds 255.
    """

    WRAP = "wrap"
    CLAMP = "clamp"


@dataclass(frozen=True)
class ArcFieldParams:
    """Arc distance field generation parameters.

    ``radius`` and ``distance_scaling_factor`` default to ``size / 2`` and
    ``size * sqrt(2)`` when left as ``None``.  Distances are measured from
    the corner ``(size, size)``, not the image center.
    """

    size: int = 512
    radius: float | None = None
    distance_scaling_factor: float | None = None
    color_value_factor: float = 128.0
    sigma: float = math.sqrt(0.02)
    overflow: OverflowMode = OverflowMode.WRAP
    output_name: str = "arc-distance-field.tga"

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ConfigError(f"size must be an integer, got {self.size!r}")
        if not 1 <= self.size <= MAX_SIZE:
            raise ConfigError(f"size must be in [1, {MAX_SIZE}], got {self.size}")

        # Frozen: normalized values go through object.__setattr__
        for name in ("radius", "distance_scaling_factor", "color_value_factor", "sigma"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _finite_float(name, value))

        if self.radius is not None and self.radius < 0:
            raise ConfigError(f"radius must be non-negative, got {self.radius}")
        if self.distance_scaling_factor is not None and not self.distance_scaling_factor > 0:
            raise ConfigError(
                f"distance_scaling_factor must be positive, got {self.distance_scaling_factor}"
            )
        if not self.color_value_factor > 0:
            raise ConfigError(
                f"color_value_factor must be positive, got {self.color_value_factor}"
            )
        if not self.sigma > 0:
            raise ConfigError(f"sigma must be positive, got {self.sigma}")
        if not isinstance(self.overflow, OverflowMode):
            try:
                object.__setattr__(self, "overflow", OverflowMode(self.overflow))
            except ValueError:
                raise ConfigError(
                    f"overflow must be one of {[m.value for m in OverflowMode]}, "
                    f"got {self.overflow!r}"
                ) from None
        if (not isinstance(self.output_name, str)
                or self.output_name in ("", ".", "..")
                or Path(self.output_name).name != self.output_name):
            raise ConfigError(f"output_name must be a bare file name, got {self.output_name!r}")

    @property
    def effective_radius(self) -> float:
        """Arc radius in pixels."""
        return self.size / 2 if self.radius is None else float(self.radius)

    @property
    def effective_scaling_factor(self) -> float:
        """Distance normalization (the image diagonal by default)."""
        if self.distance_scaling_factor is None:
            return self.size * math.sqrt(2)
        return float(self.distance_scaling_factor)

    @property
    def two_sigma_squared(self) -> float:
        return 2.0 * self.sigma * self.sigma

    @property
    def gaussian_norm(self) -> float:
        """Normal PDF peak height, ``1 / (sigma * sqrt(2 * pi))``."""
        return 1.0 / (self.sigma * math.sqrt(2.0 * math.pi))

    @property
    def tga_file_size(self) -> int:
        """Exact size in bytes of the encoded output file."""
        return 18 + self.size * self.size * 3


DEFAULT_PARAMS = ArcFieldParams()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def params_to_dict(params: ArcFieldParams) -> dict[str, Any]:
    """Plain-dict view of *params*, suitable for YAML dumping."""
    data = asdict(params)
    data["overflow"] = params.overflow.value
    return data


def load_params(path: str | Path) -> ArcFieldParams:
    """Load and validate generator parameters from YAML.

    Parameters
    ----------
    path : str | Path
        YAML file with a top-level ``arc_distance_field`` mapping (or the
        fields at top level).  Missing fields take their defaults.

    Returns
    -------
    ArcFieldParams
        Validated, frozen parameters.

    Raises
    ------
    ConfigError
        If the file is empty, contains unknown keys, or a value fails
        validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path)
    logger.info("Loading parameters from %s", path)

    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty parameter file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Parameter file must contain a mapping, got {type(data).__name__}")

    section = data.get("arc_distance_field", data)
    if not isinstance(section, dict):
        raise ConfigError("'arc_distance_field' must be a mapping")

    known = {f.name for f in fields(ArcFieldParams)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"Unknown parameter(s) in {path}: {', '.join(unknown)}")

    try:
        return ArcFieldParams(**section)
    except TypeError as e:
        raise ConfigError(f"Invalid parameter value in {path}: {e}") from e
