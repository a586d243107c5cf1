"""
Precedence-based resolution of proposals into the next row.

The resolution policy is the single mapping knob that decides between
classical and perception-driven behaviour: for every cell it keeps the
proposal whose category ranks highest, breaking ties by append order.
"""

from typing import Dict, List, Optional, Sequence, Union
import numpy as np
import logging

from ..errors import ConfigurationError, InvalidCellIndex
from .proposal import Category, Proposal, make_row

logger = logging.getLogger(__name__)

DEFAULT_PRECEDENCE = (
    Category.PATTERN_TRIGGER,
    Category.NOVELTY,
    Category.REFLECTION,
    Category.BASELINE,
)
BASELINE_ONLY = (Category.BASELINE,)


class ResolutionPolicy:
    """Resolve one value per cell from competing proposals.

    Attributes:
        size: Number of cells in a row
        precedence: Categories in descending priority
    """

    def __init__(self, size: int,
                 precedence: Sequence[Union[str, Category]] = DEFAULT_PRECEDENCE):
        """Initialize resolution policy.

        Args:
            size: Row width in cells
            precedence: Category ordering, highest priority first. Must contain
                baseline; categories left out are ignored during resolution.

        Raises:
            ConfigurationError: If size is not positive, a category is unknown
                or repeated, or baseline is missing
        """
        if size < 1:
            raise ConfigurationError(f"Row size must be positive, got {size}")

        order = tuple(Category.parse(c) for c in precedence)
        if len(set(order)) != len(order):
            raise ConfigurationError(f"Precedence lists a category twice: {[c.value for c in order]}")
        if Category.BASELINE not in order:
            raise ConfigurationError("Precedence must include the baseline category")

        self.size = size
        self.precedence = order
        self._rank: Dict[Category, int] = {category: rank for rank, category in enumerate(order)}

        logger.debug(f"Resolution policy size={size} precedence={[c.value for c in order]}")

    def rank(self, category: Category) -> Optional[int]:
        """Position of a category in the precedence (0 = highest), None if ignored."""
        return self._rank.get(Category.parse(category))

    def select(self, step_index: int, proposals: Sequence[Proposal]) -> List[Proposal]:
        """Pick the winning proposal for every cell.

        Args:
            step_index: Step being resolved
            proposals: Candidate proposals in append order

        Returns:
            One proposal per cell index, in index order

        Raises:
            ValueError: If a proposal targets a different step
            InvalidCellIndex: If a proposal targets a cell outside [0, size)
            ConfigurationError: If some cell received no proposal at all
        """
        winners: List[Optional[Proposal]] = [None] * self.size
        winner_ranks: List[Optional[int]] = [None] * self.size

        for proposal in proposals:
            if proposal.step_index != step_index:
                raise ValueError(
                    f"Proposal from {proposal.source_id} targets step {proposal.step_index}, "
                    f"resolving step {step_index}"
                )
            cell = proposal.cell_index
            if not (0 <= cell < self.size):
                raise InvalidCellIndex(
                    f"Proposal from {proposal.source_id} targets cell {cell} outside [0, {self.size})"
                )

            rank = self._rank.get(proposal.category)
            if rank is None:
                continue

            # strict comparison keeps the earliest proposal on ties
            current = winner_ranks[cell]
            if current is None or rank < current:
                winners[cell] = proposal
                winner_ranks[cell] = rank

        missing = [i for i, p in enumerate(winners) if p is None]
        if missing:
            preview = missing[:10]
            raise ConfigurationError(
                f"No proposal for {len(missing)} cell(s) at step {step_index} "
                f"(first: {preview}); is a baseline rule source configured?"
            )

        return winners

    def resolve(self, step_index: int, proposals: Sequence[Proposal]) -> np.ndarray:
        """Merge proposals into the row for step_index.

        Returns:
            New read-only row holding each cell's winning value
        """
        winners = self.select(step_index, proposals)
        return make_row([p.value for p in winners], self.size)

    def __repr__(self) -> str:
        return f"ResolutionPolicy(size={self.size}, precedence={[c.value for c in self.precedence]})"
