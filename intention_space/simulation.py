"""
Simulation runners for classical CA and Intention-Space runs.

Builds step engines from a SimulationConfig and runs them. Randomness comes
from one seed sequence per run, split into independent seeding and novelty
streams: a CA run and an IS run with the same seed start from the same row,
and an IS run with every override disabled reproduces the CA grid exactly.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np
import logging

from .config import SimulationConfig
from .core.engine import StepEngine
from .core.ledger import ProposalLedger
from .core.resolution import BASELINE_ONLY, ResolutionPolicy
from .sources import BaselineRule, PatternTrigger, PersistenceReflector, RandomInjector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """Output of one run: the grid plus the ledger that produced it."""

    grid: np.ndarray
    ledger: ProposalLedger
    config: SimulationConfig
    mode: str

    @property
    def live_cells(self) -> int:
        return int(self.grid.sum())


def make_streams(seed: Optional[int]) -> Tuple[np.random.Generator, np.random.Generator]:
    """Independent (seeding, novelty) generators derived from one seed."""
    seed_stream, novelty_stream = np.random.SeedSequence(seed).spawn(2)
    return np.random.default_rng(seed_stream), np.random.default_rng(novelty_stream)


def build_ca_engine(config: SimulationConfig,
                    seed_rng: Optional[np.random.Generator] = None) -> StepEngine:
    """Engine with only the baseline rule and a baseline-only precedence."""
    if seed_rng is None:
        seed_rng, _ = make_streams(config.seed)

    return StepEngine(
        size=config.size,
        sources=[BaselineRule(config.rule, source_id=f"rule{config.rule}")],
        policy=ResolutionPolicy(config.size, BASELINE_ONLY),
        seed_policy=config.seed_policy,
        rng=seed_rng,
        density=config.density,
    )


def build_is_engine(config: SimulationConfig,
                    seed_rng: Optional[np.random.Generator] = None,
                    novelty_rng: Optional[np.random.Generator] = None) -> StepEngine:
    """Engine with the three override sources ahead of the baseline rule."""
    if seed_rng is None or novelty_rng is None:
        default_seed, default_novelty = make_streams(config.seed)
        seed_rng = seed_rng if seed_rng is not None else default_seed
        novelty_rng = novelty_rng if novelty_rng is not None else default_novelty

    sources = [
        PatternTrigger(config.patterns, source_id="cpi"),
        RandomInjector(config.inject_prob, rng=novelty_rng, source_id="inject"),
        PersistenceReflector(config.reflection_hold, source_id="reflect"),
        BaselineRule(config.rule, source_id=f"rule{config.rule}"),
    ]

    return StepEngine(
        size=config.size,
        sources=sources,
        policy=ResolutionPolicy(config.size, config.precedence),
        seed_policy=config.seed_policy,
        rng=seed_rng,
        density=config.density,
    )


def run_ca(config: SimulationConfig) -> SimulationResult:
    """Run the classical CA for config.steps rows."""
    engine = build_ca_engine(config)
    grid = engine.run_steps(config.steps)
    logger.info(f"[{config.key}] CA rule {config.rule}: {int(grid.sum())} live cells over {config.steps} rows")
    return SimulationResult(grid=grid, ledger=engine.ledger, config=config, mode="ca")


def run_is(config: SimulationConfig) -> SimulationResult:
    """Run the Intention-Space variant for config.steps rows."""
    engine = build_is_engine(config)
    grid = engine.run_steps(config.steps)
    logger.info(f"[{config.key}] IS rule {config.rule}: {int(grid.sum())} live cells, "
                f"{engine.ledger.total_appended} proposals")
    return SimulationResult(grid=grid, ledger=engine.ledger, config=config, mode="is")


def run_pair(config: SimulationConfig) -> Tuple[SimulationResult, SimulationResult]:
    """Run CA and IS side by side from the same seed.

    An unseeded config draws fresh entropy once and uses it for both runs, so
    the pair still starts from the same row. The drawn seed is recorded on
    both results' config.
    """
    if config.seed is None:
        config = config.replace(seed=int(np.random.SeedSequence().entropy))
        logger.debug(f"[{config.key}] drew seed {config.seed}")
    return run_ca(config), run_is(config)
