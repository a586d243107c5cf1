"""Random novelty injection.

Each cell independently draws a uniform number per step and receives a
proposal of 1 when the draw falls below the injection probability.
"""

from typing import Any, Dict, List, Optional
import numpy as np

from ..core.proposal import Category, Proposal
from ..errors import ConfigurationError
from .base import ProposalSource


class RandomInjector(ProposalSource):
    """Novelty source driven by an explicit numpy Generator.

    With probability 0 no draws are made at all, so a disabled injector
    leaves the generator state untouched.
    """

    category = Category.NOVELTY
    default_id = "random-injector"

    def __init__(self, probability: float, rng: Optional[np.random.Generator] = None,
                 source_id: Optional[str] = None):
        """Initialize injector.

        Args:
            probability: Per-cell injection probability in [0, 1]
            rng: Source of uniform draws in [0, 1) (fresh unseeded generator if None)
            source_id: Identifier recorded on every proposal

        Raises:
            ConfigurationError: If probability is outside [0, 1]
        """
        super().__init__(source_id)
        if not (0.0 <= probability <= 1.0):
            raise ConfigurationError(f"Injection probability must be in [0.0, 1.0], got {probability}")

        self.probability = float(probability)
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def enabled(self) -> bool:
        return self.probability > 0.0

    def observe(self, current_step: int, current_row: np.ndarray) -> List[Proposal]:
        if self.probability <= 0.0:
            return []

        draws = self.rng.random(len(current_row))
        return [
            self._propose(current_step, int(i), 1, draw=float(draws[i]), reason="random-injection")
            for i in np.flatnonzero(draws < self.probability)
        ]

    def get_params(self) -> Dict[str, Any]:
        return {"probability": self.probability}
