"""
Elementary Cellular Automaton Rule Table

Maps a 3-cell neighborhood (left, center, right) to the next cell value
using the classical 8-bit rule number encoding. Pure: the baseline CA physics
without proposals or randomness.
"""

import numpy as np
from typing import List, Tuple

from ..errors import ConfigurationError


RULE_MIN = 0
RULE_MAX = 255
NEIGHBORHOODS = 8  # 2 states ** 3 cells


def _check_bit(name: str, value: int) -> None:
    if value not in (0, 1):
        raise ValueError(f"{name} must be 0 or 1, got {value!r}")


def neighborhood(row: np.ndarray, index: int) -> Tuple[int, int, int]:
    """Read the wrapped 1-neighborhood of a cell.

    Args:
        row: 1D array of cell values
        index: Cell index (0 to len(row)-1)

    Returns:
        (left, center, right) values, with index -1 wrapping to size-1 and
        index size wrapping to 0
    """
    size = len(row)
    left = int(row[(index - 1) % size])
    center = int(row[index])
    right = int(row[(index + 1) % size])
    return left, center, right


def neighborhood_key(row: np.ndarray, index: int) -> str:
    """Neighborhood of a cell as a left-center-right string such as "101"."""
    left, center, right = neighborhood(row, index)
    return f"{left}{center}{right}"


class RuleTable:
    """Transition table for a 1D, 2-state, radius-1 cellular automaton.

    Attributes:
        rule_number: Rule in [0, 255]; bit k gives the next value for the
            neighborhood whose binary reading (left*4 + center*2 + right) is k
    """

    def __init__(self, rule_number: int):
        """Initialize rule table.

        Args:
            rule_number: Wolfram rule number (0-255)

        Raises:
            ConfigurationError: If rule_number is not an integer in [0, 255]
        """
        if isinstance(rule_number, bool) or not isinstance(rule_number, int):
            raise ConfigurationError(f"Rule number must be an integer, got {rule_number!r}")
        if not (RULE_MIN <= rule_number <= RULE_MAX):
            raise ConfigurationError(f"Rule number must be in [0, 255], got {rule_number}")

        self.rule_number = rule_number

    def evaluate(self, left: int, center: int, right: int) -> int:
        """Apply the rule to one neighborhood.

        Args:
            left: Left neighbor value (0 or 1)
            center: Cell value (0 or 1)
            right: Right neighbor value (0 or 1)

        Returns:
            Next cell value (0 or 1)

        Raises:
            ValueError: If any input is not 0 or 1
        """
        _check_bit("left", left)
        _check_bit("center", center)
        _check_bit("right", right)

        index = (int(left) << 2) | (int(center) << 1) | int(right)
        return (self.rule_number >> index) & 1

    def outputs(self) -> List[int]:
        """Next value for each of the 8 neighborhoods, indexed by their binary reading."""
        return [(self.rule_number >> index) & 1 for index in range(NEIGHBORHOODS)]

    def apply(self, row: np.ndarray) -> np.ndarray:
        """Compute the whole next row at once with circular boundaries.

        Args:
            row: 1D array of 0/1 values

        Returns:
            New uint8 array with the rule applied to every cell
        """
        cells = np.asarray(row, dtype=np.uint8)
        index = (np.roll(cells, 1) << 2) | (cells << 1) | np.roll(cells, -1)
        lookup = np.array(self.outputs(), dtype=np.uint8)
        return lookup[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleTable):
            return False
        return self.rule_number == other.rule_number

    def __hash__(self) -> int:
        return hash(self.rule_number)

    def __repr__(self) -> str:
        return f"RuleTable(rule={self.rule_number}, outputs={self.outputs()})"
