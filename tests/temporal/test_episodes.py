"""Tests for gap-based episode segmentation."""

import pytest

from vibe_profiler.config import ThresholdConfig
from vibe_profiler.temporal import build_episodes, is_quick_fix, segment_by_gap


class TestSegmentByGap:
    """Gap threshold semantics."""

    def test_gap_equal_to_threshold_splits(self, make_commit):
        """A gap of exactly the threshold starts a new episode."""
        commits = [make_commit(0, hours=0), make_commit(1, hours=4)]
        assert len(segment_by_gap(commits, 4.0)) == 2

    def test_gap_below_threshold_joins(self, make_commit):
        """A gap under the threshold stays in the episode."""
        commits = [make_commit(0, hours=0), make_commit(1, hours=3.9)]
        assert len(segment_by_gap(commits, 4.0)) == 1

    def test_input_order_does_not_matter(self, make_commit):
        """Commits are sorted by committer date first."""
        commits = [make_commit(2, hours=10), make_commit(0, hours=0), make_commit(1, hours=1)]
        groups = segment_by_gap(commits, 4.0)
        assert [[c.sha for c in g] for g in groups] == [["c0000", "c0001"], ["c0002"]]

    def test_empty(self):
        """No commits, no segments."""
        assert segment_by_gap([], 4.0) == []

    def test_non_positive_gap_rejected(self, make_commit):
        """The gap must be positive."""
        with pytest.raises(ValueError):
            segment_by_gap([make_commit()], 0)


class TestBuildEpisodes:
    """Episode records built from each segment."""

    def test_two_working_days(self, feature_fix_history):
        """The fixture's two days are two episodes."""
        episodes = build_episodes(feature_fix_history)
        assert [e.episode_id for e in episodes] == ["ep_001", "ep_002"]
        assert [e.commit_count for e in episodes] == [6, 6]

    def test_episode_detail(self, feature_fix_history):
        """Span, categories, subsystems and quick fixes of the first day."""
        first = build_episodes(feature_fix_history)[0]
        assert first.span_hours == 5.0
        assert first.category_counts == {"docs": 1, "feature": 2, "fix": 2, "test": 1}
        assert first.subsystems_touched == ("api", "docs", "tests", "ui")
        assert first.quick_fix_count == 2
        assert first.fix_density == pytest.approx(2 / 6)
        assert first.shas[0] == "c0000"

    def test_streak_gap_is_separate(self, feature_fix_history):
        """A custom episode gap does not move the streak gap."""
        thresholds = ThresholdConfig(episode_gap_hours=0.5)
        assert len(build_episodes(feature_fix_history, thresholds=thresholds)) == 12
        assert thresholds.streak_gap_hours == 8.0

    def test_explicit_gap_overrides_config(self, feature_fix_history):
        """A gap argument wins over thresholds."""
        assert len(build_episodes(feature_fix_history, gap_hours=48)) == 1


class TestQuickFix:
    def test_small_fix(self, make_commit):
        """A small, narrow fix is quick."""
        assert is_quick_fix(make_commit(message="fix: typo", additions=3, deletions=1, paths=("a.py",)))

    def test_large_fix_is_not_quick(self, make_commit):
        """Too many changed lines."""
        assert not is_quick_fix(make_commit(message="fix: rewrite", additions=300, paths=("a.py",)))

    def test_wide_fix_is_not_quick(self, make_commit):
        """Too many files."""
        paths = ("a.py", "b.py", "c.py", "d.py")
        assert not is_quick_fix(make_commit(message="fix: rename", paths=paths))

    def test_non_fix(self, make_commit):
        """Only fix commits qualify."""
        assert not is_quick_fix(make_commit(message="feat: tiny", additions=1))
