"""Proposal and Row value types.

A Proposal is a candidate next value for one cell, emitted by a proposal
source for a specific future step. Rows are read-only numpy arrays of 0/1
values. Neither is ever edited after construction: an update always builds
a new instance.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence, Union
import numpy as np

from ..errors import ConfigurationError, DimensionMismatch


class Category(str, Enum):
    """Kind of proposal source, used for precedence during resolution."""

    BASELINE = "baseline"
    PATTERN_TRIGGER = "pattern-trigger"
    REFLECTION = "reflection"
    NOVELTY = "novelty"

    @classmethod
    def parse(cls, value: Union[str, 'Category']) -> 'Category':
        """Look up a category by value or name.

        Raises:
            ConfigurationError: If the category is not one of the four known kinds
        """
        if isinstance(value, cls):
            return value
        for category in cls:
            if value == category.value or value == category.name:
                return category
        raise ConfigurationError(
            f"Unknown category {value!r}; expected one of {[c.value for c in cls]}"
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Proposal:
    """Immutable candidate value for one cell at one future step.

    Attributes:
        step_index: Step this proposal is meant to influence
        cell_index: Target cell
        value: Proposed value (0 or 1)
        category: Source kind, drives precedence
        source_id: Identifier of the emitting source
        details: Read-only diagnostic payload
    """

    step_index: int
    cell_index: int
    value: int
    category: Category
    source_id: str
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        """Validate and freeze the proposal payload."""
        if self.step_index < 0:
            raise ValueError(f"step_index must be >= 0, got {self.step_index}")
        if self.value not in (0, 1):
            raise ValueError(f"Proposal value must be 0 or 1, got {self.value!r}")
        if not isinstance(self.source_id, str) or not self.source_id.strip():
            raise ValueError("source_id must be non-empty string")

        # frozen dataclass: bypass __setattr__ to normalise fields once
        object.__setattr__(self, "category", Category.parse(self.category))
        object.__setattr__(self, "value", int(self.value))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def to_dict(self) -> dict:
        """Plain-dict form for JSON export."""
        return {
            "step_index": self.step_index,
            "cell_index": self.cell_index,
            "value": self.value,
            "category": self.category.value,
            "source_id": self.source_id,
            "details": dict(self.details),
        }


def make_row(values: Union[Sequence[int], np.ndarray], size: int = None) -> np.ndarray:
    """Build a read-only row from 0/1 values.

    Args:
        values: Cell values in index order
        size: Expected length, checked when given

    Returns:
        New uint8 array with its write flag cleared

    Raises:
        ValueError: If values are not all 0 or 1 or the row is not 1D
        DimensionMismatch: If size is given and does not match
    """
    row = np.array(values, dtype=np.int64, copy=True)
    if row.ndim != 1:
        raise ValueError(f"Row must be one-dimensional, got shape {row.shape}")
    if size is not None and row.shape[0] != size:
        raise DimensionMismatch(f"Row has {row.shape[0]} cells, expected {size}")
    if not np.isin(row, (0, 1)).all():
        raise ValueError("Row values must be 0 or 1")

    row = row.astype(np.uint8)
    row.flags.writeable = False
    return row


def make_grid(rows: Iterable[np.ndarray]) -> np.ndarray:
    """Stack rows into a read-only (steps, size) uint8 grid."""
    grid = np.array([np.asarray(r, dtype=np.uint8) for r in rows], dtype=np.uint8)
    grid.flags.writeable = False
    return grid
