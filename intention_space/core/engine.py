"""Step engine for the Intention-Space automaton.

Drives the per-step pipeline:

    Field snapshot -> proposal sources (in order) -> ledger -> resolution -> Field

Steps are strictly sequential. A step either commits fully (ledger entries,
new field row, recorded grid row) or not at all.
"""

from enum import Enum
from typing import List, Optional, Sequence, Union, TYPE_CHECKING
import numpy as np
import logging

from ..errors import DimensionMismatch
from .field import DEFAULT_DENSITY, Field, SeedPolicy
from .ledger import ProposalLedger
from .proposal import Proposal, make_grid
from .resolution import ResolutionPolicy

if TYPE_CHECKING:
    from ..sources.base import ProposalSource

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    """Lifecycle of a StepEngine."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StepEngine:
    """Orchestrates proposal generation and resolution, one step at a time.

    Attributes:
        sources: Proposal sources in the order they are consulted
        policy: Resolution policy applied to each target step
        state: Current lifecycle state
        current_step: Index of the row currently held by the field
    """

    def __init__(self, size: int,
                 sources: Sequence['ProposalSource'],
                 policy: ResolutionPolicy,
                 seed_policy: Union[str, SeedPolicy] = SeedPolicy.SINGLE_CENTER,
                 rng: Optional[np.random.Generator] = None,
                 density: float = DEFAULT_DENSITY,
                 initial_row: Optional[Sequence[int]] = None,
                 prune_ledger: bool = False):
        """Initialize engine and seed its field.

        Args:
            size: Row width in cells
            sources: Proposal sources, consulted in this order every step
            policy: Resolution policy (its size must equal size)
            seed_policy: Seeding policy used when initial_row is None
            rng: Random generator for sparse-random seeding
            density: Live-cell density for sparse-random seeding
            initial_row: Explicit step-0 row, overrides seed_policy
            prune_ledger: Drop ledger entries once their step is resolved

        Raises:
            DimensionMismatch: If policy or initial_row size differs from size
            ConfigurationError: If seeding parameters are invalid
        """
        self.state = EngineState.UNINITIALIZED

        if policy.size != size:
            raise DimensionMismatch(f"Resolution policy covers {policy.size} cells, engine has {size}")

        if initial_row is not None:
            field = Field(initial_row)
            if field.size != size:
                raise DimensionMismatch(f"Initial row has {field.size} cells, engine has {size}")
        else:
            field = Field.seeded(size, seed_policy, rng=rng, density=density)

        self.size = size
        self.sources: List['ProposalSource'] = list(sources)
        self.policy = policy
        self.prune_ledger = prune_ledger

        self._field = field
        self._ledger = ProposalLedger()
        self._rows: List[np.ndarray] = [field.snapshot_row()]
        self.current_step = 0

        for source in self.sources:
            source.reset()

        self.state = EngineState.READY
        logger.debug(f"Engine ready: size={size}, sources={[s.source_id for s in self.sources]}")

    @property
    def field(self) -> Field:
        return self._field

    @property
    def ledger(self) -> ProposalLedger:
        return self._ledger

    @property
    def grid(self) -> np.ndarray:
        """Read-only (rows, size) array of every committed row, seed first."""
        return make_grid(self._rows)

    @property
    def last_row(self) -> np.ndarray:
        return self._rows[-1]

    def _collect(self, current_step: int, snapshot: np.ndarray) -> List[Proposal]:
        batch: List[Proposal] = []
        for source in self.sources:
            batch.extend(source.observe(current_step, snapshot))
        return batch

    def step(self) -> np.ndarray:
        """Perform one transition.

        Returns:
            The newly committed row

        Raises:
            RuntimeError: If the engine has completed or failed
            Exception: Whatever a source or the resolution policy raises; the
                engine moves to FAILED and nothing from the step is committed
        """
        if self.state in (EngineState.COMPLETED, EngineState.FAILED):
            raise RuntimeError(f"Cannot step engine in state {self.state.value}")

        self.state = EngineState.RUNNING
        target = self.current_step + 1
        snapshot = self._field.snapshot_row()

        try:
            batch = self._collect(self.current_step, snapshot)
            pending = self._ledger.select_for_step(target) + batch
            next_row = self.policy.resolve(target, pending)
        except Exception as e:
            self.state = EngineState.FAILED
            logger.error(f"Step {target} aborted: {e}")
            raise

        self._ledger.extend(batch)
        self._field.replace(next_row)
        self._rows.append(next_row)
        self.current_step = target

        if logger.isEnabledFor(logging.DEBUG):
            counts = {c.value: n for c, n in self._ledger.count_by_category(target).items() if n}
            logger.debug(f"Step {target}: live={int(next_row.sum())}, proposals={counts}")

        if self.prune_ledger:
            self._ledger.prune_through(target)

        return next_row

    def run_steps(self, steps: int) -> np.ndarray:
        """Run until the grid holds ``steps`` rows (the seed counts as row 0).

        Args:
            steps: Total rows wanted, >= 1

        Returns:
            Read-only grid of shape (steps, size)

        Raises:
            ValueError: If steps < 1 or fewer than the rows already committed
            RuntimeError: If the engine has completed or failed
        """
        if self.state in (EngineState.COMPLETED, EngineState.FAILED):
            raise RuntimeError(f"Cannot run engine in state {self.state.value}")
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")
        if steps < len(self._rows):
            raise ValueError(f"Engine already holds {len(self._rows)} rows, asked for {steps}")

        logger.info(f"Running {steps - len(self._rows)} steps on {self.size} cells "
                    f"with {len(self.sources)} source(s)")

        while len(self._rows) < steps:
            self.step()

        self.state = EngineState.COMPLETED
        logger.info(f"Run completed: {len(self._rows)} rows, {self._ledger.total_appended} proposals")
        return self.grid

    def __repr__(self) -> str:
        return (f"StepEngine(size={self.size}, step={self.current_step}, "
                f"state={self.state.value}, sources={len(self.sources)})")
