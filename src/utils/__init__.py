"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Atomic I/O and YAML loading (fs)
    - Hashing for provenance (hashing)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (arc_distance_field, scripts).

Convenience imports:
    from src.utils import fs, hashing
    from src.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import hashing
from . import logging_config

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'hashing',
    'logging_config',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
