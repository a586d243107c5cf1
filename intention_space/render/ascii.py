"""ASCII rendering of CA grids."""

from typing import Sequence, Union
import numpy as np

SOLID = '█'
BLANK = ' '


def to_ascii(grid: Union[np.ndarray, Sequence[Sequence[int]]],
             on: str = SOLID, off: str = BLANK) -> str:
    """Render a grid as text, one line per row.

    Args:
        grid: 2D array of 0/1 values (rows x cells)
        on: Glyph for cells at 1
        off: Glyph for cells at 0

    Returns:
        Newline-joined rows (no trailing newline)
    """
    cells = np.asarray(grid)
    if cells.ndim == 1:
        cells = cells[np.newaxis, :]

    return "\n".join(''.join(on if v else off for v in row) for row in cells)


def side_by_side(left: np.ndarray, right: np.ndarray, gap: str = " | ",
                 on: str = SOLID, off: str = BLANK) -> str:
    """Render two grids of equal height next to each other."""
    left_lines = to_ascii(left, on, off).split("\n")
    right_lines = to_ascii(right, on, off).split("\n")
    if len(left_lines) != len(right_lines):
        raise ValueError(f"Grids differ in height: {len(left_lines)} vs {len(right_lines)}")
    return "\n".join(f"{a}{gap}{b}" for a, b in zip(left_lines, right_lines))
