"""
Core step pipeline: rule table, proposals, ledger, resolution, field and
the step engine that ties them together.
"""

from .rule_table import RuleTable, neighborhood, neighborhood_key
from .proposal import Category, Proposal, make_row, make_grid
from .ledger import ProposalLedger
from .resolution import ResolutionPolicy, DEFAULT_PRECEDENCE, BASELINE_ONLY
from .field import Field, SeedPolicy, seed_row, DEFAULT_DENSITY
from .engine import StepEngine, EngineState

__all__ = [
    'RuleTable',
    'neighborhood',
    'neighborhood_key',
    'Category',
    'Proposal',
    'make_row',
    'make_grid',
    'ProposalLedger',
    'ResolutionPolicy',
    'DEFAULT_PRECEDENCE',
    'BASELINE_ONLY',
    'Field',
    'SeedPolicy',
    'seed_row',
    'DEFAULT_DENSITY',
    'StepEngine',
    'EngineState',
]
