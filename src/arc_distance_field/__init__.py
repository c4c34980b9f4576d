"""Arc distance field generator.

Pipeline stages:
    - raster: corner-distance field around the arc (uint8)
    - remap: Gaussian response curve over the raw field (uint8)
    - tga: 24-bit uncompressed Targa encoding, bottom-up rows

Usage:
    from src.arc_distance_field import generate
    result = generate()  # writes ./arc-distance-field.tga
"""

from .params import (
    DEFAULT_PARAMS,
    ArcFieldParams,
    ConfigError,
    OverflowMode,
    load_params,
    params_to_dict,
)
from .pipeline import ArcFieldResult, generate
from .quantize import to_byte
from .raster import rasterize_arc_distance_field
from .remap import gaussian_remap
from .tga import TGAError, encode_tga, read_tga, tga_header, write_tga

__all__ = [
    'DEFAULT_PARAMS',
    'ArcFieldParams',
    'ArcFieldResult',
    'ConfigError',
    'OverflowMode',
    'TGAError',
    'encode_tga',
    'gaussian_remap',
    'generate',
    'load_params',
    'params_to_dict',
    'rasterize_arc_distance_field',
    'read_tga',
    'tga_header',
    'to_byte',
    'write_tga',
]
