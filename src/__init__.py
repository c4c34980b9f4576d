"""Arc Distance Field: offline generator for a grayscale arc falloff texture.

This package rasterizes a distance field around a circular arc, remaps it
through a Gaussian response curve, and writes the result as an uncompressed
24-bit Targa image for use as a shader lookup texture.

Architecture layers (strict one-way dependency):
    scripts/ → src/arc_distance_field/ → src/utils/

Key invariants:
    - Fixed 512×512 output at default parameters, 786,450 bytes on disk
    - Output is a pure function of the parameters (byte-identical reruns)
    - Intensity buffers are row-major uint8, top row first
    - TGA rows are stored bottom-up
"""

__version__ = "1.0.0"
