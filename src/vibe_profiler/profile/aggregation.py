"""Commit-weighted aggregation of repository summaries into one profile."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from ..attribution.metrics import merge_ai_tool_metrics
from ..axes.models import AXIS_KEYS, AxisScore, VibeAxes
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..exceptions import EmptyProfileError
from ..logging_config import get_logger
from ..math import Scales
from ..personas.engine import detect_persona
from ..personas.rules import PERSONA_RULES, PersonaRule
from .models import PlaceholderAxisRecord, RepoBreakdown, RepoInsightSummary, UnifiedProfile

logger = get_logger(__name__)

# Profile data quality saturates at this many repos / commits
QUALITY_FULL_REPOS = 5
QUALITY_FULL_COMMITS = 500


def repo_weights(summaries: Sequence[RepoInsightSummary]) -> list[float]:
    """Share of total commits per repository; equal shares when all are zero."""
    total = sum(s.commit_count for s in summaries)
    if total <= 0:
        return [1.0 / len(summaries)] * len(summaries)
    return [s.commit_count / total for s in summaries]


def profile_data_quality(total_repos: int, total_commits: int) -> int:
    repo_factor = min(1.0, total_repos / QUALITY_FULL_REPOS)
    commit_factor = min(1.0, total_commits / QUALITY_FULL_COMMITS)
    return Scales.round_half_up(100 * (0.4 * repo_factor + 0.6 * commit_factor))


def weighted_axes(
    axes_list: Sequence[VibeAxes],
    weights: Sequence[float],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> VibeAxes:
    values = {}
    for key in AXIS_KEYS:
        score = Scales.round_half_up(sum(a[key].score * w for a, w in zip(axes_list, weights)))
        why = [f"Commit-weighted mean across {len(axes_list)} repo(s) = {score}"]
        for axes in axes_list:
            for line in axes[key].why:
                if line not in why:
                    why.append(line)
        values[key] = AxisScore.of(score, why[: thresholds.max_why_items], thresholds)
    return VibeAxes(**values)


def aggregate_profile(
    summaries: Sequence[RepoInsightSummary],
    updated_at: Optional[str] = None,
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> UnifiedProfile:
    """Fold repository summaries into one ``UnifiedProfile``.

    Each axis is the commit-weighted mean of the per-repo axes. The persona
    is detected again from those axes; per-repo personas are only echoed in
    the breakdown.

    Args:
        summaries: One summary per repository, at least one
        updated_at: Timestamp to stamp on the profile (caller's clock)
        rules: Persona rule table
        thresholds: Level bands and persona confidence policy

    Raises:
        EmptyProfileError: If ``summaries`` is empty
    """
    if not summaries:
        raise EmptyProfileError()

    placeholders = [s for s in summaries if isinstance(s.axes_record, PlaceholderAxisRecord)]
    for summary in placeholders:
        logger.warning(
            "Repo %s (%s) has incomplete axes (%s); using neutral placeholders",
            summary.repo_name,
            summary.job_id,
            summary.axes_record.reason,
        )

    total_commits = sum(s.commit_count for s in summaries)
    weights = repo_weights(summaries)
    axes = weighted_axes(
        [s.axes_record.resolve(thresholds) for s in summaries],
        weights,
        thresholds,
    )
    persona = detect_persona(axes, total_commits, rules, thresholds)

    breakdown = tuple(
        RepoBreakdown(
            job_id=s.job_id,
            repo_name=s.repo_name,
            persona_id=s.persona.id if s.persona else None,
            persona_name=s.persona.name if s.persona else None,
            commit_count=s.commit_count,
            weight=round(100 * w, 1),
            placeholder=s.axes_record.is_placeholder,
        )
        for s, w in zip(summaries, weights)
    )

    ai_metrics = [(s.ai_tools, s.commit_count) for s in summaries if s.ai_tools is not None]
    ai_tools = merge_ai_tool_metrics(ai_metrics, thresholds) if ai_metrics else None

    logger.debug(
        "Aggregated %d repos (%d commits) -> %s", len(summaries), total_commits, persona.id
    )
    return UnifiedProfile(
        axes=axes,
        persona=persona,
        repo_breakdown=breakdown,
        total_commits=total_commits,
        total_repos=len(summaries),
        job_ids=tuple(s.job_id for s in summaries),
        ai_tools=ai_tools,
        data_quality_score=profile_data_quality(len(summaries), total_commits),
        updated_at=updated_at,
        placeholder_repos=len(placeholders),
    )
