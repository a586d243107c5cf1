"""Current-row state for the one-dimensional automaton.

The Field holds the authoritative row for the step being processed. Proposal
sources only ever see snapshots of it; the step engine swaps in a whole new
row once a step has been resolved.
"""

from enum import Enum
from typing import Optional, Sequence, Union
import numpy as np
import logging

from ..errors import ConfigurationError, DimensionMismatch, InvalidCellIndex
from .proposal import make_row

logger = logging.getLogger(__name__)

DEFAULT_DENSITY = 0.1


class SeedPolicy(str, Enum):
    """How the step-0 row is initialised."""

    ALL_ZERO = "zero"
    SINGLE_CENTER = "single"
    SPARSE_RANDOM = "random"

    @classmethod
    def parse(cls, value: Union[str, 'SeedPolicy']) -> 'SeedPolicy':
        """Look up a seed policy by value or name.

        Raises:
            ConfigurationError: If the policy is unknown
        """
        if isinstance(value, cls):
            return value
        for policy in cls:
            if value == policy.value or value == policy.name:
                return policy
        raise ConfigurationError(
            f"Unknown seed policy {value!r}; expected one of {[p.value for p in cls]}"
        )


def seed_row(size: int, policy: Union[str, SeedPolicy] = SeedPolicy.SINGLE_CENTER,
             rng: Optional[np.random.Generator] = None,
             density: float = DEFAULT_DENSITY) -> np.ndarray:
    """Build the initial row for a run.

    Args:
        size: Row width in cells
        policy: Seeding policy (all-zero, single-center, sparse-random)
        rng: Random generator for sparse-random seeding (fresh unseeded
            generator if None)
        density: Probability that a cell starts at 1 under sparse-random

    Returns:
        Read-only seed row

    Raises:
        ConfigurationError: If size is not positive, density is outside [0, 1]
            or the policy is unknown
    """
    if size < 1:
        raise ConfigurationError(f"Row size must be positive, got {size}")
    if not (0.0 <= density <= 1.0):
        raise ConfigurationError(f"Seed density must be in [0.0, 1.0], got {density}")

    policy = SeedPolicy.parse(policy)
    values = np.zeros(size, dtype=np.uint8)

    if policy is SeedPolicy.SINGLE_CENTER:
        values[size // 2] = 1
    elif policy is SeedPolicy.SPARSE_RANDOM:
        if rng is None:
            rng = np.random.default_rng()
        values = (rng.random(size) < density).astype(np.uint8)

    return make_row(values, size)


class Field:
    """Authoritative current row of the simulation.

    Attributes:
        size: Number of cells
    """

    def __init__(self, initial_row: Union[Sequence[int], np.ndarray]):
        """Initialize field with its step-0 row.

        Args:
            initial_row: 0/1 values, one per cell

        Raises:
            ConfigurationError: If the row is empty
        """
        row = make_row(initial_row)
        if row.shape[0] < 1:
            raise ConfigurationError("Field needs at least one cell")

        self.size = int(row.shape[0])
        self._row = row

        logger.debug(f"Created field with {self.size} cells, {self.live_count()} live")

    @classmethod
    def seeded(cls, size: int, policy: Union[str, SeedPolicy] = SeedPolicy.SINGLE_CENTER,
               rng: Optional[np.random.Generator] = None,
               density: float = DEFAULT_DENSITY) -> 'Field':
        """Create a field from a seeding policy."""
        return cls(seed_row(size, policy, rng=rng, density=density))

    def read(self, index: int) -> int:
        """Get one cell value.

        Args:
            index: Cell index in [0, size); callers wrap

        Raises:
            InvalidCellIndex: If index is out of range
        """
        if not (0 <= index < self.size):
            raise InvalidCellIndex(f"Cell index {index} out of bounds for field of size {self.size}")
        return int(self._row[index])

    def snapshot_row(self) -> np.ndarray:
        """Read-only copy of the current row, safe to retain."""
        return make_row(self._row, self.size)

    def replace(self, new_row: Union[Sequence[int], np.ndarray]) -> None:
        """Swap in the next row.

        Raises:
            DimensionMismatch: If new_row does not have exactly size cells
        """
        row = np.asarray(new_row)
        if row.ndim != 1 or row.shape[0] != self.size:
            raise DimensionMismatch(
                f"Replacement row has shape {row.shape}, field expects ({self.size},)"
            )
        self._row = make_row(row, self.size)

    def live_count(self) -> int:
        """Number of cells currently at 1."""
        return int(np.sum(self._row))

    def __len__(self) -> int:
        return self.size

    def __str__(self) -> str:
        return ''.join('█' if v else '░' for v in self._row)

    def __repr__(self) -> str:
        return f"Field(size={self.size}, live={self.live_count()})"
