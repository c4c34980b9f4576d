"""Generator script: write arc-distance-field.tga into the current directory.

Runs the full pipeline with the built-in parameters:
    1. Rasterize the corner-distance field around the arc
    2. Remap it through the Gaussian response curve
    3. Write the 24-bit TGA (bottom-up rows), replacing any existing file

Takes no arguments, flags, or environment variables; the output is fully
determined by DEFAULT_PARAMS and is byte-identical across runs.

CLI:
    python scripts/generate_arc_distance_field.py

Output:
    ./arc-distance-field.tga  (786,450 bytes)

Exit status:
    0 on success.  Filesystem errors are not caught: they are logged by the
    excepthook and terminate the process with a traceback and non-zero status.
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.arc_distance_field import DEFAULT_PARAMS, generate
from src.utils.logging_config import install_excepthook, setup_logging, shutdown

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    setup_logging(log_level="INFO", context={"app": "arc_field"})
    install_excepthook()

    result = generate(DEFAULT_PARAMS)
    logger.info("Done: %s", result.output_path)

    shutdown()


if __name__ == "__main__":
    main()
