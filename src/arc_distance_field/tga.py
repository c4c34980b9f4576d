"""Minimal uncompressed Targa (TGA) codec for grayscale intensity grids.

Writes type-2 (uncompressed true-color) 24-bit images with an 18-byte
header and no image ID, color map, or footer:

    offset  size  field                 value
    0       1     ID length             0
    1       1     color map type        0
    2       1     image type            2
    3       5     color map spec        0
    8       4     x/y origin            0
    12      2     width (LE uint16)     buffer width
    14      2     height (LE uint16)    buffer height
    16      1     bits per pixel        24
    17      1     image descriptor      0 (bottom-left origin)

Pixel data follows row by row, bottom row first, each intensity repeated in
all three channel bytes (the B, G, R order of the format is irrelevant
when the channels are equal).

The same layout was used for debug dumps of texture atlas pages, so
``encode_tga`` accepts any rectangular uint8 grid, not only square ones.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path

import numpy as np

from src.utils import fs

logger = logging.getLogger(__name__)

HEADER_SIZE = 18
IMAGE_TYPE_TRUE_COLOR = 2
BITS_PER_PIXEL = 24
BYTES_PER_PIXEL = BITS_PER_PIXEL // 8

# id_len, cmap_type, img_type, cmap_first, cmap_len, cmap_depth,
# x_origin, y_origin, width, height, bpp, descriptor
_HEADER = struct.Struct("<BBBHHBHHHHBB")

# Descriptor bit 5: rows stored top-down
_TOP_LEFT_ORIGIN = 0x20


class TGAError(ValueError):
    """Raised for buffers or files this codec cannot represent."""

    pass


def tga_header(width: int, height: int) -> bytes:
    """Build the 18-byte header for a 24-bit uncompressed image."""
    for name, value in (("width", width), ("height", height)):
        if not 1 <= value <= 0xFFFF:
            raise TGAError(f"TGA {name} must be in [1, 65535], got {value}")
    return _HEADER.pack(
        0, 0, IMAGE_TYPE_TRUE_COLOR, 0, 0, 0, 0, 0,
        width, height, BITS_PER_PIXEL, 0
    )


def encode_tga(buffer: np.ndarray) -> bytes:
    """Encode a grayscale intensity grid as a TGA file image.

    Parameters
    ----------
    buffer : np.ndarray
        uint8 array of shape (height, width), top row first.

    Returns
    -------
    bytes
        Header followed by ``height * width * 3`` pixel bytes.  Output row
        ``y`` holds input row ``height - 1 - y``.

    Raises
    ------
    TGAError
        If *buffer* is not a 2-D uint8 array of representable size.
    """
    buffer = np.asarray(buffer)
    if buffer.ndim != 2:
        raise TGAError(f"Expected 2-D intensity grid, got shape {buffer.shape}")
    if buffer.dtype != np.uint8:
        raise TGAError(f"Expected uint8 intensity grid, got {buffer.dtype}")

    height, width = buffer.shape
    header = tga_header(width, height)

    bottom_up = buffer[::-1]
    pixels = np.repeat(bottom_up[:, :, np.newaxis], BYTES_PER_PIXEL, axis=2)

    return header + pixels.tobytes()


def write_tga(path: str | Path, buffer: np.ndarray) -> Path:
    """Encode *buffer* and write it to *path*, replacing any existing file.

    Filesystem errors propagate unchanged.
    """
    data = encode_tga(buffer)
    path = fs.atomic_write_bytes(path, data)
    logger.info("Wrote %s (%d bytes)", path, len(data))
    return path


def read_tga(path: str | Path) -> np.ndarray:
    """Decode a file written by ``write_tga`` back into a top-down grid.

    Parameters
    ----------
    path : str | Path
        TGA file path.

    Returns
    -------
    np.ndarray
        uint8 array of shape (height, width), top row first.

    Raises
    ------
    TGAError
        If the file is not an uncompressed 24-bit grayscale-valued TGA.
    """
    data = Path(path).read_bytes()
    if len(data) < HEADER_SIZE:
        raise TGAError(f"{path}: truncated header ({len(data)} bytes)")

    (id_len, cmap_type, img_type, _, _, _, _, _,
     width, height, bpp, descriptor) = _HEADER.unpack_from(data)

    if img_type != IMAGE_TYPE_TRUE_COLOR or cmap_type != 0:
        raise TGAError(f"{path}: unsupported image type {img_type} (color map {cmap_type})")
    if bpp != BITS_PER_PIXEL:
        raise TGAError(f"{path}: expected {BITS_PER_PIXEL} bits per pixel, got {bpp}")

    start = HEADER_SIZE + id_len
    end = start + width * height * BYTES_PER_PIXEL
    if len(data) < end:
        raise TGAError(f"{path}: expected {end} bytes, got {len(data)}")

    pixels = np.frombuffer(data, dtype=np.uint8, count=end - start, offset=start)
    pixels = pixels.reshape(height, width, BYTES_PER_PIXEL)
    if not (np.array_equal(pixels[..., 0], pixels[..., 1])
            and np.array_equal(pixels[..., 0], pixels[..., 2])):
        raise TGAError(f"{path}: color channels differ, not a grayscale image")

    gray = pixels[..., 0]
    if not descriptor & _TOP_LEFT_ORIGIN:
        gray = gray[::-1]
    return np.ascontiguousarray(gray)
