"""Tests for precedence-based resolution.

Covers the precedence law, append-order tie-breaks, the missing-proposal
invariant and policy configuration errors.
"""

import pytest

from intention_space.core.proposal import Category
from intention_space.core.resolution import BASELINE_ONLY, DEFAULT_PRECEDENCE, ResolutionPolicy
from intention_space.errors import ConfigurationError, InvalidCellIndex


class TestPolicyConfiguration:
    """Test precedence validation."""

    def test_default_precedence(self):
        """Default ranks pattern-trigger first and baseline last."""
        policy = ResolutionPolicy(5)
        assert policy.precedence == DEFAULT_PRECEDENCE
        assert policy.rank(Category.PATTERN_TRIGGER) == 0
        assert policy.rank(Category.BASELINE) == 3

    def test_accepts_category_names(self):
        """Precedence may be given as strings."""
        policy = ResolutionPolicy(3, ["reflection", "novelty", "pattern-trigger", "baseline"])
        assert policy.precedence[0] is Category.REFLECTION

    def test_missing_baseline(self):
        """Baseline must always be ranked."""
        with pytest.raises(ConfigurationError, match="baseline"):
            ResolutionPolicy(5, [Category.PATTERN_TRIGGER, Category.NOVELTY])

    def test_unknown_category(self):
        """Undefined categories are configuration errors."""
        with pytest.raises(ConfigurationError, match="Unknown category"):
            ResolutionPolicy(5, ["pattern-trigger", "intuition", "baseline"])

    def test_duplicate_category(self):
        """A category may appear only once."""
        with pytest.raises(ConfigurationError, match="twice"):
            ResolutionPolicy(5, ["baseline", "novelty", "baseline"])

    def test_invalid_size(self):
        """Size must be positive."""
        with pytest.raises(ConfigurationError):
            ResolutionPolicy(0)


class TestPrecedenceLaw:
    """Higher-precedence proposals override baseline regardless of order."""

    def test_pattern_beats_baseline_appended_after(self, full_policy, baseline_proposals, make_proposal):
        """Override appended after baseline wins."""
        proposals = baseline_proposals + [make_proposal(1, 1, Category.PATTERN_TRIGGER)]
        assert full_policy.resolve(1, proposals).tolist() == [0, 1, 0, 0, 0]

    def test_pattern_beats_baseline_appended_before(self, full_policy, baseline_proposals, make_proposal):
        """Override appended before baseline still wins."""
        proposals = [make_proposal(1, 1, Category.PATTERN_TRIGGER)] + baseline_proposals
        assert full_policy.resolve(1, proposals).tolist() == [0, 1, 0, 0, 0]

    def test_every_override_category_beats_baseline(self, full_policy, baseline_proposals, make_proposal):
        """Reflection and novelty also override baseline under the default order."""
        proposals = baseline_proposals + [
            make_proposal(2, 1, Category.REFLECTION),
            make_proposal(4, 1, Category.NOVELTY),
        ]
        assert full_policy.resolve(1, proposals).tolist() == [0, 0, 1, 0, 1]

    def test_baseline_first_disables_overrides(self, baseline_proposals, make_proposal):
        """Ranking baseline highest restores classical behaviour."""
        policy = ResolutionPolicy(5, ["baseline", "pattern-trigger", "novelty", "reflection"])
        proposals = [make_proposal(1, 1, Category.PATTERN_TRIGGER)] + baseline_proposals
        assert policy.resolve(1, proposals).tolist() == [0, 0, 0, 0, 0]

    def test_category_order_between_overrides(self, make_proposal):
        """Among overrides, the configured order decides."""
        policy = ResolutionPolicy(1, ["novelty", "pattern-trigger", "baseline"])
        proposals = [
            make_proposal(0, 1, Category.BASELINE),
            make_proposal(0, 0, Category.PATTERN_TRIGGER),
            make_proposal(0, 1, Category.NOVELTY),
        ]
        winner = policy.select(1, proposals)[0]
        assert winner.category is Category.NOVELTY

    def test_unlisted_category_ignored(self, baseline_proposals, make_proposal):
        """Baseline-only precedence ignores every override."""
        policy = ResolutionPolicy(5, BASELINE_ONLY)
        proposals = baseline_proposals + [make_proposal(0, 1, Category.NOVELTY)]
        assert policy.resolve(1, proposals).tolist() == [0, 0, 0, 0, 0]


class TestTieBreak:
    """Same-category conflicts resolve by append order."""

    def test_first_appended_wins(self, full_policy, baseline_proposals, make_proposal):
        """Earliest of equal-rank proposals is kept."""
        first = make_proposal(3, 0, Category.PATTERN_TRIGGER, source_id="cpi-a")
        second = make_proposal(3, 1, Category.PATTERN_TRIGGER, source_id="cpi-b")

        winners = full_policy.select(1, baseline_proposals + [first, second])

        assert winners[3] is first
        assert full_policy.resolve(1, baseline_proposals + [first, second])[3] == 0

    def test_duplicate_baselines(self, make_proposal):
        """Two baseline proposals for the same cell keep the first."""
        policy = ResolutionPolicy(1, BASELINE_ONLY)
        proposals = [make_proposal(0, 1), make_proposal(0, 0)]
        assert policy.resolve(1, proposals).tolist() == [1]


class TestResolutionErrors:
    """Invariant violations fail loudly."""

    def test_missing_cell(self, full_policy, baseline_proposals):
        """A cell with no proposal is a configuration error."""
        with pytest.raises(ConfigurationError, match="No proposal"):
            full_policy.resolve(1, baseline_proposals[:4])

    def test_only_overrides(self, full_policy, make_proposal):
        """Without baseline, cells nobody proposed for are not defaulted to 0."""
        with pytest.raises(ConfigurationError, match="baseline"):
            full_policy.resolve(1, [make_proposal(0, 1, Category.NOVELTY)])

    def test_out_of_range_cell(self, full_policy, baseline_proposals, make_proposal):
        """Proposals outside [0, size) are rejected."""
        with pytest.raises(InvalidCellIndex):
            full_policy.resolve(1, baseline_proposals + [make_proposal(5, 1, Category.NOVELTY)])
        with pytest.raises(InvalidCellIndex):
            full_policy.resolve(1, baseline_proposals + [make_proposal(-1, 1, Category.NOVELTY)])

    def test_wrong_step(self, full_policy, baseline_proposals, make_proposal):
        """Proposals for other steps must not be mixed in."""
        with pytest.raises(ValueError, match="targets step 2"):
            full_policy.resolve(1, baseline_proposals + [make_proposal(0, 1, step_index=2)])

    def test_resolved_row_is_read_only(self, full_policy, baseline_proposals):
        """resolve returns an immutable row."""
        row = full_policy.resolve(1, baseline_proposals)
        with pytest.raises(ValueError):
            row[0] = 1
