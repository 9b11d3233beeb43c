"""Tests for AI-collaboration metrics."""

from vibe_profiler.attribution import AIToolMetrics, compute_ai_tool_metrics, merge_ai_tool_metrics

CLAUDE = "feat: x\n\nCo-authored-by: Claude <noreply@anthropic.com>"
CURSOR = "fix: y\n\nCo-authored-by: Cursor Agent <cursoragent@cursor.com>"
HUMAN = "chore: z"


class TestComputeMetrics:
    """Aggregate counts, rates and ranking."""

    def test_three_of_four_claude(self):
        """3 Claude-attributed commits out of 4 is a 0.75 rate."""
        metrics = compute_ai_tool_metrics([CLAUDE, CLAUDE, CLAUDE, HUMAN])
        assert metrics.detected
        assert metrics.ai_assisted_commits == 3
        assert metrics.ai_collaboration_rate == 0.75
        assert metrics.tool_diversity == 1
        assert metrics.primary_tool.tool_id == "claude"
        assert metrics.primary_tool.percentage == 100.0

    def test_caller_denominator(self):
        """The rate uses the repository total when given."""
        metrics = compute_ai_tool_metrics([CLAUDE, HUMAN], total_commits=10)
        assert metrics.ai_collaboration_rate == 0.1

    def test_ties_keep_first_seen_order(self):
        """Tools with equal counts keep first-seen order."""
        metrics = compute_ai_tool_metrics([CURSOR, CLAUDE])
        assert [t.tool_id for t in metrics.tools] == ["cursor", "claude"]

    def test_sorted_by_count(self):
        """Tools are ranked by commit count."""
        metrics = compute_ai_tool_metrics([CURSOR, CLAUDE, CLAUDE])
        assert [t.tool_id for t in metrics.tools] == ["claude", "cursor"]

    def test_commit_events_accepted(self, make_commit):
        """Commit events work as well as raw messages."""
        metrics = compute_ai_tool_metrics([make_commit(0, message=CLAUDE), make_commit(1)])
        assert metrics.ai_assisted_commits == 1

    def test_no_commits(self):
        """No commits means nothing detected at low confidence."""
        metrics = compute_ai_tool_metrics([])
        assert not metrics.detected
        assert metrics.ai_collaboration_rate == 0.0
        assert metrics.primary_tool is None
        assert metrics.confidence == "low"

    def test_confidence_bands(self):
        """Confidence follows the attributed commit count."""
        assert compute_ai_tool_metrics([CLAUDE] * 2).confidence == "low"
        assert compute_ai_tool_metrics([CLAUDE] * 3).confidence == "medium"
        assert compute_ai_tool_metrics([CLAUDE] * 10).confidence == "high"


class TestMergeAndSerialize:
    def test_merge_sums_counts(self):
        """Counts and denominators are summed across repos."""
        a = compute_ai_tool_metrics([CLAUDE, HUMAN])
        b = compute_ai_tool_metrics([CURSOR, CURSOR, HUMAN, HUMAN])
        merged = merge_ai_tool_metrics([a, b])
        assert merged.total_commits == 6
        assert merged.ai_assisted_commits == 3
        assert merged.ai_collaboration_rate == 0.5
        assert merged.primary_tool.tool_id == "cursor"

    def test_rate_capped_at_one(self):
        """A denominator below the attributed count cannot push the rate past 1."""
        metrics = compute_ai_tool_metrics([CLAUDE, CLAUDE, CLAUDE], total_commits=2)
        assert metrics.ai_collaboration_rate == 1.0

    def test_merge_uses_commit_count_for_legacy_records(self):
        """Records without a stored total take the paired commit count."""
        legacy = AIToolMetrics.from_dict(
            {"ai_assisted_commits": 5, "tools": [{"tool_id": "claude", "commit_count": 5}]}
        )
        merged = merge_ai_tool_metrics([(legacy, 20), compute_ai_tool_metrics([CLAUDE, HUMAN])])
        assert merged.total_commits == 22
        assert merged.ai_collaboration_rate == 0.2727

    def test_dict_round_trip(self):
        """to_dict and from_dict agree."""
        metrics = compute_ai_tool_metrics([CLAUDE, CURSOR, HUMAN])
        assert AIToolMetrics.from_dict(metrics.to_dict()) == metrics
