"""Persistence-triggered reflection.

Tracks how many consecutive steps each cell has been 1. Once a cell has held
for at least ``hold`` steps it pushes a 1 onto a neighbor: even-indexed cells
push right, odd-indexed cells push left (wrapping at the edges).
"""

from typing import Any, Dict, List, Optional
import numpy as np
import logging

from ..core.proposal import Category, Proposal
from ..errors import ConfigurationError, DimensionMismatch
from .base import ProposalSource

logger = logging.getLogger(__name__)


class PersistenceReflector(ProposalSource):
    """Reflection source with private per-cell persistence counters.

    A hold at or above the run's step count never fires, which is how the
    source is disabled.
    """

    category = Category.REFLECTION
    default_id = "reflector"

    def __init__(self, hold: int, source_id: Optional[str] = None):
        """Initialize reflector.

        Args:
            hold: Consecutive steps at 1 before a cell reflects (positive)
            source_id: Identifier recorded on every proposal

        Raises:
            ConfigurationError: If hold is not a positive integer
        """
        super().__init__(source_id)
        if isinstance(hold, bool) or not isinstance(hold, (int, np.integer)) or hold < 1:
            raise ConfigurationError(f"Reflection hold must be a positive integer, got {hold!r}")

        self.hold = int(hold)
        self._counters: Optional[np.ndarray] = None

    @property
    def counters(self) -> Optional[np.ndarray]:
        """Copy of the persistence counters (None before the first observation)."""
        return None if self._counters is None else self._counters.copy()

    def reset(self) -> None:
        self._counters = None

    @staticmethod
    def target_of(index: int, size: int) -> int:
        """Neighbor that a reflecting cell pushes onto."""
        direction = 1 if index % 2 == 0 else -1
        return (index + direction) % size

    def observe(self, current_step: int, current_row: np.ndarray) -> List[Proposal]:
        size = len(current_row)
        if self._counters is None:
            self._counters = np.zeros(size, dtype=np.int64)
        elif self._counters.shape[0] != size:
            raise DimensionMismatch(
                f"{self.source_id} tracks {self._counters.shape[0]} cells, row has {size}"
            )

        cells = np.asarray(current_row)
        self._counters = np.where(cells == 1, self._counters + 1, 0)

        proposals = []
        for i in np.flatnonzero(self._counters >= self.hold):
            i = int(i)
            target = self.target_of(i, size)
            proposals.append(self._propose(current_step, target, 1,
                                           from_index=i,
                                           hold=self.hold,
                                           count=int(self._counters[i]),
                                           direction=1 if i % 2 == 0 else -1))

        if proposals:
            logger.debug(f"{self.source_id}: {len(proposals)} reflections at step {current_step}")
        return proposals

    def get_params(self) -> Dict[str, Any]:
        return {"hold": self.hold}
