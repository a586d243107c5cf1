"""Tests for the four proposal sources.

Each source is exercised in isolation: what it proposes, for which step,
and that its disabled configuration emits nothing.
"""

import pytest
import numpy as np

from intention_space.core.proposal import Category
from intention_space.core.rule_table import neighborhood
from intention_space.errors import ConfigurationError, DimensionMismatch
from intention_space.sources import (
    BaselineRule,
    PatternTrigger,
    PersistenceReflector,
    RandomInjector,
    parse_patterns,
)


class TestBaselineRule:
    """Baseline emits exactly one proposal per cell."""

    def test_conservation(self, rng):
        """size proposals, one per index, no gaps."""
        source = BaselineRule(30)
        row = (rng.random(17) < 0.5).astype(np.uint8)

        proposals = source.observe(3, row)

        assert len(proposals) == 17
        assert [p.cell_index for p in proposals] == list(range(17))
        assert all(p.step_index == 4 for p in proposals)
        assert all(p.category is Category.BASELINE for p in proposals)

    def test_values_follow_rule(self, cpi_row):
        """Rule 0 proposes 0 and rule 255 proposes 1 everywhere."""
        assert {p.value for p in BaselineRule(0).observe(0, cpi_row)} == {0}
        assert {p.value for p in BaselineRule(255).observe(0, cpi_row)} == {1}

    def test_wrapping_boundary(self):
        """Edge cells read their neighbors across the wrap."""
        row = np.array([1, 0, 0, 0, 0], dtype=np.uint8)
        # rule 2 fires only on neighborhood 001
        proposals = BaselineRule(2).observe(0, row)
        assert [p.value for p in proposals] == [0, 0, 0, 0, 1]
        assert proposals[4].details["neighborhood"] == "001"

    def test_values_match_evaluate_for_every_rule(self, rng):
        """Whole-row values agree with per-neighborhood evaluate."""
        row = (rng.random(23) < 0.5).astype(np.uint8)
        for rule in range(256):
            source = BaselineRule(rule)
            proposals = source.observe(0, row)
            expected = [source.rule_table.evaluate(*neighborhood(row, i)) for i in range(len(row))]
            assert [p.value for p in proposals] == expected, f"rule {rule}"
            assert all(type(p.value) is int for p in proposals)

    def test_invalid_rule(self):
        """Out-of-range rule fails at construction."""
        with pytest.raises(ConfigurationError):
            BaselineRule(300)

    def test_source_id(self):
        """Default and custom identifiers."""
        assert BaselineRule(30).source_id == "baseline-rule"
        assert BaselineRule(30, source_id="rule30").source_id == "rule30"


class TestPatternTrigger:
    """Pattern-triggered injection."""

    def test_matching_cell(self, cpi_row):
        """Only the cell with neighborhood 101 is proposed."""
        proposals = PatternTrigger({"101"}).observe(0, cpi_row)

        assert len(proposals) == 1
        p = proposals[0]
        assert (p.cell_index, p.value, p.step_index) == (1, 1, 1)
        assert p.category is Category.PATTERN_TRIGGER
        assert p.details["neighborhood"] == "101"
        assert p.details["reason"] == "pattern-match"

    def test_multiple_patterns(self, cpi_row):
        """Every matching cell is proposed, in index order."""
        proposals = PatternTrigger(["010", "001"]).observe(0, cpi_row)
        assert [p.cell_index for p in proposals] == [0, 2, 4]

    def test_empty_pattern_set_is_noop(self, cpi_row):
        """No patterns means no proposals, without error."""
        source = PatternTrigger([])
        assert not source.enabled
        assert source.observe(0, cpi_row) == []

    def test_pattern_normalisation(self):
        """Whitespace is stripped and blank entries dropped."""
        assert parse_patterns([" 101 ", "", "100", "101"]) == frozenset({"101", "100"})

    def test_malformed_patterns(self):
        """Patterns must be three binary characters."""
        with pytest.raises(ConfigurationError, match="three"):
            PatternTrigger(["10"])
        with pytest.raises(ConfigurationError, match="three"):
            PatternTrigger(["1x1"])
        with pytest.raises(ConfigurationError, match="collection"):
            PatternTrigger("101")


class TestPersistenceReflector:
    """Persistence-triggered reflection."""

    def test_reflects_after_hold(self):
        """Cell held at 1 for hold steps pushes onto its neighbor."""
        source = PersistenceReflector(hold=2)
        row = np.array([0, 0, 1, 0, 0], dtype=np.uint8)

        assert source.observe(0, row) == []
        proposals = source.observe(1, row)

        assert len(proposals) == 1
        p = proposals[0]
        assert (p.step_index, p.cell_index, p.value) == (2, 3, 1)
        assert p.category is Category.REFLECTION
        assert p.details["from_index"] == 2
        assert p.details["hold"] == 2
        assert p.details["count"] == 2
        assert p.details["direction"] == 1

    def test_alternating_direction(self):
        """Even cells push right, odd cells push left, with wrapping."""
        assert PersistenceReflector.target_of(0, 5) == 1
        assert PersistenceReflector.target_of(1, 5) == 0
        assert PersistenceReflector.target_of(3, 5) == 2
        assert PersistenceReflector.target_of(4, 5) == 0
        assert PersistenceReflector.target_of(5, 6) == 4

    def test_counter_resets_on_zero(self):
        """A 0 resets the persistence count."""
        source = PersistenceReflector(hold=2)
        on = np.array([0, 1, 0], dtype=np.uint8)
        off = np.array([0, 0, 0], dtype=np.uint8)

        source.observe(0, on)
        source.observe(1, off)
        assert source.observe(2, on) == []
        assert source.counters.tolist() == [0, 1, 0]

        proposals = source.observe(3, on)
        assert [p.cell_index for p in proposals] == [0]

    def test_keeps_firing_while_held(self):
        """Once past hold, the cell reflects every step."""
        source = PersistenceReflector(hold=1)
        row = np.array([1, 0, 0, 0], dtype=np.uint8)
        for step in range(4):
            proposals = source.observe(step, row)
            assert [p.cell_index for p in proposals] == [1]
            assert proposals[0].details["hold"] == 1
            assert proposals[0].details["count"] == step + 1

    def test_hold_beyond_run_is_disabled(self):
        """hold >= steps never fires over a run of that length."""
        steps = 6
        source = PersistenceReflector(hold=steps)
        row = np.ones(4, dtype=np.uint8)
        emitted = [source.observe(t, row) for t in range(steps - 1)]
        assert all(p == [] for p in emitted)

    def test_reset(self):
        """reset clears the counters."""
        source = PersistenceReflector(hold=3)
        source.observe(0, np.ones(3, dtype=np.uint8))
        source.reset()
        assert source.counters is None

    def test_size_change(self):
        """Counters are bound to the first row size."""
        source = PersistenceReflector(hold=2)
        source.observe(0, np.zeros(4, dtype=np.uint8))
        with pytest.raises(DimensionMismatch):
            source.observe(1, np.zeros(5, dtype=np.uint8))

    def test_invalid_hold(self):
        """hold must be a positive integer."""
        with pytest.raises(ConfigurationError, match="hold"):
            PersistenceReflector(hold=0)
        with pytest.raises(ConfigurationError, match="hold"):
            PersistenceReflector(hold=2.5)


class TestRandomInjector:
    """Random novelty injection."""

    def test_zero_probability_draws_nothing(self, rng):
        """p = 0 returns no proposals and leaves the generator untouched."""
        state_before = rng.bit_generator.state
        source = RandomInjector(0.0, rng=rng)

        for step in range(10):
            assert source.observe(step, np.zeros(50, dtype=np.uint8)) == []

        assert rng.bit_generator.state == state_before
        assert not source.enabled

    def test_probability_one_hits_every_cell(self, rng):
        """p = 1 proposes 1 for every cell."""
        proposals = RandomInjector(1.0, rng=rng).observe(2, np.zeros(8, dtype=np.uint8))
        assert [p.cell_index for p in proposals] == list(range(8))
        assert all(p.value == 1 and p.step_index == 3 for p in proposals)
        assert all(p.category is Category.NOVELTY for p in proposals)

    def test_reproducible_with_seed(self):
        """Same seed yields the same injection sites."""
        row = np.zeros(300, dtype=np.uint8)
        a = RandomInjector(0.05, rng=np.random.default_rng(99)).observe(0, row)
        b = RandomInjector(0.05, rng=np.random.default_rng(99)).observe(0, row)
        assert [p.cell_index for p in a] == [p.cell_index for p in b]
        assert 0 < len(a) < 300

    def test_one_draw_per_cell(self):
        """Each step consumes exactly one draw per cell."""
        rng = np.random.default_rng(5)
        RandomInjector(0.5, rng=rng).observe(0, np.zeros(10, dtype=np.uint8))

        reference = np.random.default_rng(5)
        reference.random(10)
        assert rng.random() == reference.random()

    def test_invalid_probability(self):
        """Probability must lie in [0, 1]."""
        with pytest.raises(ConfigurationError, match="probability"):
            RandomInjector(1.5)
        with pytest.raises(ConfigurationError, match="probability"):
            RandomInjector(-0.1)
