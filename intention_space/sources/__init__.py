"""
Proposal sources for the Intention-Space step pipeline.

BaselineRule supplies the classical CA value for every cell; the other three
are override sources whose proposals win or lose according to the
resolution precedence.
"""

from .base import ProposalSource
from .baseline import BaselineRule
from .pattern import PatternTrigger, parse_patterns
from .reflection import PersistenceReflector
from .novelty import RandomInjector

__all__ = [
    'ProposalSource',
    'BaselineRule',
    'PatternTrigger',
    'PersistenceReflector',
    'RandomInjector',
    'parse_patterns',
]
