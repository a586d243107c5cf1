"""
Plain PGM (P2) export.

Cells at 1 are written as the darkest sample and cells at 0 as the
lightest, so the image reads like a classical CA plot.
"""

from pathlib import Path
from typing import Union
import numpy as np
import logging

logger = logging.getLogger(__name__)


def to_pgm(grid: np.ndarray, max_value: int = 255) -> str:
    """Encode a grid as plain-text PGM.

    Args:
        grid: 2D array of 0/1 values (rows x cells)
        max_value: Lightest gray level (1-65535)

    Returns:
        P2 document text, one pixel row per line

    Raises:
        ValueError: If grid is not 2D or empty, or max_value is out of range
    """
    cells = np.asarray(grid)
    if cells.ndim != 2 or cells.size == 0:
        raise ValueError(f"PGM export needs a non-empty 2D grid, got shape {cells.shape}")
    if not (1 <= max_value <= 65535):
        raise ValueError(f"max_value must be in [1, 65535], got {max_value}")

    height, width = cells.shape
    pixels = np.where(cells != 0, 0, max_value)

    lines = ["P2", f"{width} {height}", str(max_value)]
    lines.extend(" ".join(str(int(v)) for v in row) for row in pixels)
    return "\n".join(lines) + "\n"


def write_pgm(path: Union[str, Path], grid: np.ndarray, max_value: int = 255) -> Path:
    """Write a grid to a .pgm file, creating parent directories."""
    cells = np.asarray(grid)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_pgm(cells, max_value), encoding="utf-8")
    logger.info(f"Wrote {path} ({cells.shape[1]}x{cells.shape[0]})")
    return path
