"""Pattern-triggered injection (CPI).

Proposes setting a cell to 1 whenever its neighborhood matches one of the
configured left-center-right patterns. It never proposes 0.
"""

from typing import Any, Dict, FrozenSet, Iterable, List, Optional
import numpy as np
import logging

from ..core.proposal import Category, Proposal
from ..core.rule_table import neighborhood_key
from ..errors import ConfigurationError
from .base import ProposalSource

logger = logging.getLogger(__name__)


def parse_patterns(patterns: Iterable[str]) -> FrozenSet[str]:
    """Normalise a pattern collection.

    Whitespace is stripped and empty entries dropped.

    Args:
        patterns: Neighborhood strings such as "101"

    Returns:
        Frozen set of validated patterns

    Raises:
        ConfigurationError: If a pattern is not three '0'/'1' characters
    """
    if isinstance(patterns, str):
        raise ConfigurationError(f"Patterns must be a collection of strings, got string {patterns!r}")

    parsed = set()
    for raw in patterns:
        if not isinstance(raw, str):
            raise ConfigurationError(f"Pattern must be a string, got {raw!r}")
        pattern = raw.strip()
        if not pattern:
            continue
        if len(pattern) != 3 or set(pattern) - {"0", "1"}:
            raise ConfigurationError(
                f"Pattern {raw!r} must be three '0'/'1' characters in left-center-right order"
            )
        parsed.add(pattern)
    return frozenset(parsed)


class PatternTrigger(ProposalSource):
    """Neighborhood-pattern injector. An empty pattern set makes it a no-op."""

    category = Category.PATTERN_TRIGGER
    default_id = "pattern-trigger"

    def __init__(self, patterns: Iterable[str] = (), source_id: Optional[str] = None):
        super().__init__(source_id)
        self.patterns = parse_patterns(patterns)
        if not self.patterns:
            logger.debug(f"{self.source_id}: empty pattern set, source disabled")

    @property
    def enabled(self) -> bool:
        return bool(self.patterns)

    def observe(self, current_step: int, current_row: np.ndarray) -> List[Proposal]:
        if not self.patterns:
            return []

        proposals = []
        for i in range(len(current_row)):
            key = neighborhood_key(current_row, i)
            if key in self.patterns:
                proposals.append(self._propose(current_step, i, 1,
                                               neighborhood=key, reason="pattern-match"))
        return proposals

    def get_params(self) -> Dict[str, Any]:
        return {"patterns": sorted(self.patterns)}
