"""Animate the classical transport solution as a GIF.

Requires the ``viz`` extra (matplotlib and pillow). The output path defaults
to ``transport.gif`` in the current directory.

Usage:
    python examples/animate_transport.py [output.gif]
"""

from __future__ import annotations

import logging
import sys

import moltransport as mt
from moltransport.viz import animate_record


def main(path: str = "transport.gif") -> None:
    """Solve the classical problem and write one frame per output sample."""
    mt.configure_logging(level=logging.INFO, stream=sys.stdout)
    record = mt.solve_problem(mt.classical_transport())
    written = animate_record(record, path, fps=10)
    print(f"Wrote {len(record)} frames to {written}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
