"""Append-only proposal ledger.

Every proposal emitted during a run is recorded here, tagged with the step
it targets. Entries are never edited or removed by appending; the append
order is the tie-break signal used by resolution.
"""

from collections import Counter, defaultdict
from typing import Dict, Iterable, Iterator, List, Optional
import logging

from .proposal import Category, Proposal

logger = logging.getLogger(__name__)


class ProposalLedger:
    """Ordered record of proposals, indexed by target step.

    Attributes:
        total_appended: Number of proposals ever appended (pruning does not
            decrease it)
    """

    def __init__(self):
        """Initialize empty ledger."""
        self._entries: List[Proposal] = []
        self._by_step: Dict[int, List[Proposal]] = defaultdict(list)
        self.total_appended = 0
        self.pruned_through: Optional[int] = None

    def append(self, proposal: Proposal) -> None:
        """Record one proposal.

        Args:
            proposal: Proposal to record

        Raises:
            TypeError: If proposal is not a Proposal
        """
        if not isinstance(proposal, Proposal):
            raise TypeError(f"Ledger only accepts Proposal entries, got {type(proposal).__name__}")

        self._entries.append(proposal)
        self._by_step[proposal.step_index].append(proposal)
        self.total_appended += 1

    def extend(self, proposals: Iterable[Proposal]) -> None:
        """Record proposals in the given order."""
        for proposal in proposals:
            self.append(proposal)

    def select_for_step(self, step_index: int) -> List[Proposal]:
        """Get all proposals targeting a step, in append order.

        Args:
            step_index: Target step

        Returns:
            New list of matching proposals (empty if none)
        """
        if step_index not in self._by_step:
            return []
        return list(self._by_step[step_index])

    def prune_through(self, step_index: int) -> int:
        """Discard entries for steps up to and including step_index.

        Only used to bound memory once those steps are resolved. Entries for
        later steps are untouched.

        Returns:
            Number of entries discarded
        """
        stale = [step for step in self._by_step if step <= step_index]
        if not stale:
            return 0

        for step in stale:
            del self._by_step[step]

        before = len(self._entries)
        self._entries = [p for p in self._entries if p.step_index > step_index]
        removed = before - len(self._entries)

        self.pruned_through = step_index
        logger.debug(f"Pruned {removed} ledger entries through step {step_index}")
        return removed

    def steps(self) -> List[int]:
        """Step indices that currently have entries, ascending."""
        return sorted(self._by_step)

    def count_by_category(self, step_index: Optional[int] = None) -> Dict[Category, int]:
        """Count entries per category, for one step or the whole ledger."""
        entries = self._entries if step_index is None else self._by_step.get(step_index, [])
        counts = Counter(p.category for p in entries)
        return {category: counts.get(category, 0) for category in Category}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Proposal]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ProposalLedger(entries={len(self._entries)}, steps={len(self._by_step)})"
