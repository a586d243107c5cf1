"""
Intention-Space cellular automata

One-dimensional elementary CA plus the Intention-Space variant, in which
pattern injection, persistence reflection and random novelty proposals are
resolved against the baseline rule by a configurable precedence.
"""

__version__ = "0.1.0"

from .errors import ConfigurationError, DimensionMismatch, InvalidCellIndex
from .core import (
    Category,
    Field,
    Proposal,
    ProposalLedger,
    ResolutionPolicy,
    RuleTable,
    SeedPolicy,
    StepEngine,
    EngineState,
)
from .sources import BaselineRule, PatternTrigger, PersistenceReflector, RandomInjector
from .config import SimulationConfig, PRESETS, get_preset
from .simulation import SimulationResult, run_ca, run_is, run_pair

__all__ = [
    'ConfigurationError',
    'DimensionMismatch',
    'InvalidCellIndex',
    'Category',
    'Field',
    'Proposal',
    'ProposalLedger',
    'ResolutionPolicy',
    'RuleTable',
    'SeedPolicy',
    'StepEngine',
    'EngineState',
    'BaselineRule',
    'PatternTrigger',
    'PersistenceReflector',
    'RandomInjector',
    'SimulationConfig',
    'PRESETS',
    'get_preset',
    'SimulationResult',
    'run_ca',
    'run_is',
    'run_pair',
    '__version__',
]
