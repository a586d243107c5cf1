"""Baseline CA rule as a proposal source.

Emits one baseline proposal per cell every step, so resolution always has a
candidate for every cell.
"""

from typing import Any, Dict, List, Optional, Union
import numpy as np

from ..core.proposal import Category, Proposal
from ..core.rule_table import RuleTable, neighborhood_key
from .base import ProposalSource


class BaselineRule(ProposalSource):
    """Deterministic elementary CA rule over wrapped neighborhoods."""

    category = Category.BASELINE
    default_id = "baseline-rule"

    def __init__(self, rule: Union[int, RuleTable], source_id: Optional[str] = None):
        """Initialize baseline source.

        Args:
            rule: Rule number (0-255) or an existing RuleTable
            source_id: Identifier recorded on every proposal

        Raises:
            ConfigurationError: If the rule number is out of range
        """
        super().__init__(source_id)
        self.rule_table = rule if isinstance(rule, RuleTable) else RuleTable(rule)

    def observe(self, current_step: int, current_row: np.ndarray) -> List[Proposal]:
        values = self.rule_table.apply(current_row)
        return [
            self._propose(current_step, i, int(value), neighborhood=neighborhood_key(current_row, i))
            for i, value in enumerate(values)
        ]

    def get_params(self) -> Dict[str, Any]:
        return {"rule": self.rule_table.rule_number}
