"""Tests for multi-repository profile aggregation."""

import pytest

from vibe_profiler.attribution import AIToolMetrics, compute_ai_tool_metrics
from vibe_profiler.community import adoption_bucket, snapshot_from_profile
from vibe_profiler.exceptions import EmptyProfileError
from vibe_profiler.personas import detect_persona
from vibe_profiler.profile import (
    FullAxisRecord,
    PlaceholderAxisRecord,
    RepoInsightSummary,
    aggregate_profile,
    axis_record_from_dict,
    profile_data_quality,
)

CLAUDE = "feat: x\n\nCo-authored-by: Claude <noreply@anthropic.com>"


def _stored_ai(claude_commits):
    return AIToolMetrics.from_dict(
        {
            "detected": True,
            "ai_assisted_commits": claude_commits,
            "tool_diversity": 1,
            "tools": [{"tool_id": "claude", "commit_count": claude_commits}],
        }
    )


def _summary(job_id, commits, axes, ai_tools=None):
    return RepoInsightSummary(
        job_id=job_id,
        repo_name=f"acme/{job_id}",
        commit_count=commits,
        axes_record=FullAxisRecord(axes),
        persona=detect_persona(axes, commits),
        analyzed_at="2025-03-04T12:00:00+00:00",
        ai_tools=ai_tools,
    )


class TestAggregateProfile:
    """Weighted axes, persona and breakdown."""

    def test_single_repo_keeps_its_axes(self, flat_axes):
        """One repo passes its axes and persona through."""
        axes = flat_axes(A=80, C=75, B=20, D=30)
        profile = aggregate_profile([_summary("j1", 120, axes)])
        assert profile.axes.scores() == axes.scores()
        assert profile.persona.id == "prompt_sprinter"
        assert profile.repo_breakdown[0].weight == 100.0

    def test_commit_weighted_mean(self, flat_axes):
        """Axes are weighted by commit count."""
        profile = aggregate_profile(
            [_summary("j1", 300, flat_axes(A=80)), _summary("j2", 100, flat_axes(A=20))]
        )
        automation = profile.axes["automation_heaviness"]
        assert automation.score == 65
        assert automation.why[0] == "Commit-weighted mean across 2 repo(s) = 65"
        assert [r.weight for r in profile.repo_breakdown] == [75.0, 25.0]
        assert profile.total_commits == 400
        assert profile.total_repos == 2
        assert profile.job_ids == ("j1", "j2")

    def test_zero_commits_weigh_equally(self, flat_axes):
        """Repos with no commits get equal weight."""
        profile = aggregate_profile(
            [_summary("j1", 0, flat_axes(A=80)), _summary("j2", 0, flat_axes(A=20))]
        )
        assert profile.axes["automation_heaviness"].score == 50

    def test_persona_redetected_from_aggregate(self, flat_axes):
        """Per-repo personas are echoed, not voted on."""
        first = _summary("j1", 100, flat_axes(A=90, B=90))
        second = _summary("j2", 100, flat_axes(A=40, B=10))
        profile = aggregate_profile([first, second])
        assert profile.repo_breakdown[0].persona_id == "guardrailed_viber"
        assert profile.persona.id == detect_persona(profile.axes, 200).id

    def test_placeholder_repo(self, flat_axes):
        """A legacy repo contributes the neutral placeholder."""
        placeholder = RepoInsightSummary(
            job_id="legacy",
            repo_name="acme/old",
            commit_count=100,
            axes_record=axis_record_from_dict(None),
            persona=None,
            analyzed_at="2024-01-01T00:00:00+00:00",
        )
        profile = aggregate_profile([_summary("j1", 100, flat_axes(A=90)), placeholder])
        assert profile.axes["automation_heaviness"].score == 70
        assert profile.placeholder_repos == 1
        assert profile.repo_breakdown[1].placeholder
        assert profile.repo_breakdown[1].persona_id is None

    def test_ai_tools_merged(self, flat_axes):
        """Per-repo AI metrics are merged into the profile."""
        ai = compute_ai_tool_metrics([CLAUDE, "fix: y"])
        profile = aggregate_profile(
            [_summary("j1", 2, flat_axes(), ai), _summary("j2", 2, flat_axes())]
        )
        assert profile.ai_tools.ai_assisted_commits == 1

    def test_stored_ai_tools_without_total_commits(self, flat_axes):
        """Legacy aiTools records fall back to the summary's commit count."""
        first = _summary("j1", 100, flat_axes(), _stored_ai(50))
        second = _summary("j2", 100, flat_axes(), _stored_ai(30))
        profile = aggregate_profile([first, second])
        assert profile.ai_tools.ai_assisted_commits == 80
        assert profile.ai_tools.total_commits == 200
        assert profile.ai_tools.ai_collaboration_rate == 0.4
        assert adoption_bucket(snapshot_from_profile(profile).ai_collaboration_rate) == "heavy"

    def test_no_ai_data(self, flat_axes):
        """No repo with AI metrics leaves the profile without them."""
        assert aggregate_profile([_summary("j1", 10, flat_axes())]).ai_tools is None

    def test_empty_raises(self):
        """A profile needs at least one repo."""
        with pytest.raises(EmptyProfileError):
            aggregate_profile([])

    def test_updated_at_is_caller_supplied(self, flat_axes):
        """The timestamp comes from the caller."""
        profile = aggregate_profile([_summary("j1", 10, flat_axes())], updated_at="2025-03-05")
        assert profile.to_dict()["updatedAt"] == "2025-03-05"


class TestAxisRecords:
    """Reading stored axes."""

    def test_full(self, flat_axes):
        """Six axes with evidence read as a full record."""
        assert isinstance(axis_record_from_dict(flat_axes().to_dict()), FullAxisRecord)

    def test_missing_axes(self, flat_axes):
        """Surviving axes are kept, missing ones placeholdered."""
        data = flat_axes(A=90).to_dict()
        del data["shipping_rhythm"]
        record = axis_record_from_dict(data)
        assert isinstance(record, PlaceholderAxisRecord)
        assert record.reason == "missing shipping_rhythm"
        assert record.axes["automation_heaviness"].score == 90
        assert record.axes["shipping_rhythm"].score == 50

    def test_missing_evidence(self, flat_axes):
        """Scores without evidence are a placeholder."""
        data = {k: {"score": v["score"]} for k, v in flat_axes().to_dict().items()}
        assert axis_record_from_dict(data).reason == "axes stored without evidence"

    def test_nothing_stored(self):
        """An empty mapping is a placeholder."""
        assert axis_record_from_dict({}).reason == "no axes stored"


class TestSummarySerialization:
    def test_camel_case_round_trip(self, flat_axes):
        """Summaries serialize with camelCase keys."""
        summary = _summary("j1", 42, flat_axes(E=80))
        data = summary.to_dict()
        assert data["jobId"] == "j1"
        assert RepoInsightSummary.from_dict(data) == summary

    def test_snake_case_accepted(self, flat_axes):
        """snake_case rows load too."""
        summary = RepoInsightSummary.from_dict(
            {"job_id": "j9", "repo_name": "r", "commit_count": 3, "axes": flat_axes().to_dict()}
        )
        assert summary.commit_count == 3
        assert not summary.axes_record.is_placeholder


class TestDataQuality:
    def test_saturates(self):
        """Five repos and 500 commits reach 100."""
        assert profile_data_quality(5, 500) == 100
        assert profile_data_quality(12, 9000) == 100

    def test_partial(self):
        """Repo and commit terms contribute separately."""
        assert profile_data_quality(1, 0) == 8
        assert profile_data_quality(0, 250) == 30
