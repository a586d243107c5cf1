"""
Pytest configuration and fixtures for Intention-Space tests.
"""

import numpy as np
import pytest

from intention_space.core.proposal import Category, Proposal
from intention_space.core.resolution import ResolutionPolicy


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for stochastic tests."""
    return np.random.default_rng(12345)


@pytest.fixture
def cpi_row() -> np.ndarray:
    """Row where only cell 1 sees the "101" neighborhood."""
    return np.array([1, 0, 1, 0, 0], dtype=np.uint8)


@pytest.fixture
def full_policy() -> ResolutionPolicy:
    """Default precedence over a 5-cell row."""
    return ResolutionPolicy(5)


@pytest.fixture
def make_proposal():
    """Factory for proposals with sensible defaults."""
    def _make(cell_index: int, value: int, category=Category.BASELINE,
              step_index: int = 1, source_id: str = "test", **details) -> Proposal:
        return Proposal(step_index=step_index, cell_index=cell_index, value=value,
                        category=category, source_id=source_id, details=details)
    return _make


@pytest.fixture
def baseline_proposals(make_proposal):
    """Baseline proposal of 0 for each of 5 cells at step 1."""
    return [make_proposal(i, 0) for i in range(5)]
