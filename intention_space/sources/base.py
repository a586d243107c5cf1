"""
Abstract Base Class for Proposal Sources

Every source observes the current row once per step and returns proposals
for the next step. The set of implementations is closed: baseline rule,
pattern trigger, persistence reflector and random injector.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import numpy as np

from ..core.proposal import Category, Proposal


class ProposalSource(ABC):
    """Base class for proposal sources."""

    category: Category = Category.BASELINE
    default_id = "source"

    def __init__(self, source_id: Optional[str] = None):
        self.source_id = source_id or self.default_id

    @abstractmethod
    def observe(self, current_step: int, current_row: np.ndarray) -> List[Proposal]:
        """Inspect the row for current_step and propose values for current_step + 1."""

    def reset(self) -> None:
        """Clear private state at the start of a run. Stateless by default."""

    def get_params(self) -> Dict[str, Any]:
        """Return dict of current configuration values."""
        return {}

    def _propose(self, current_step: int, cell_index: int, value: int,
                 **details: Any) -> Proposal:
        return Proposal(
            step_index=current_step + 1,
            cell_index=cell_index,
            value=value,
            category=self.category,
            source_id=self.source_id,
            details=details,
        )

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}(id={self.source_id!r}, {params})"
