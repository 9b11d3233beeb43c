"""Axis scoring: six pure functions from repository metrics to ``AxisScore``.

Every score blends a few sub-scores, each mapped to 0-100 either as a
clamped ratio or against an expected midpoint (``Scales.score_from_z``).
Each ``why`` line quotes the value it was computed from.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from ..analysis.metrics import AnalysisMetrics
from ..attribution.metrics import AIToolMetrics
from ..classification.categories import DOCS, FEATURE, GUARDRAIL_CATEGORIES
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..math import Scales, Statistics
from ..temporal.models import Episode
from .models import (
    AUTOMATION,
    GUARDRAIL,
    ITERATION,
    NEUTRAL_SCORE,
    PLANNING,
    RHYTHM,
    SURFACE,
    AxisScore,
    VibeAxes,
)

logger = get_logger(__name__)

# Expected midpoints and spreads for z-style sub-scores
FILES_MID, FILES_SPREAD = 4.0, 4.0
P90_SIZE_MID, P90_SIZE_SPREAD = 400.0, 400.0
FIXSEQ_MID, FIXSEQ_SPREAD = 0.12, 0.12
SUBSYSTEMS_MID, SUBSYSTEMS_SPREAD = 3.0, 2.0
EPISODE_P90_MID, EPISODE_P90_SPREAD = 6.0, 6.0

AI_DIVERSITY_BONUS = 0.05
AI_CONFIG_BONUS = 0.1


def _blend(*weighted: tuple[float, float]) -> int:
    return int(Scales.clamp(Scales.round_half_up(sum(w * s for w, s in weighted)), 0, 100))


def score_automation(
    metrics: AnalysisMetrics, ai: Optional[AIToolMetrics], thresholds: ThresholdConfig
) -> AxisScore:
    avg_files = metrics.avg_files_changed
    p90 = metrics.commit_size_p90
    rate = ai.ai_collaboration_rate if ai else 0.0
    diversity = ai.tool_diversity if ai else 0
    ai_config_touch = metrics.first_touch.percentiles.get("ai_config")

    ai_signal = rate + AI_DIVERSITY_BONUS * max(0, diversity - 1)
    if ai_config_touch is not None:
        ai_signal += AI_CONFIG_BONUS

    score = _blend(
        (0.4, Scales.score_from_z(avg_files, FILES_MID, FILES_SPREAD)),
        (0.3, Scales.score_from_z(p90, P90_SIZE_MID, P90_SIZE_SPREAD)),
        (0.3, Scales.ratio_score(ai_signal)),
    )
    why = [
        f"Average files changed per commit = {avg_files:.1f}",
        f"p90 commit size (additions+deletions) = {p90:.0f} lines",
        f"AI-attributed commits = {rate * 100:.1f}% across {diversity} tool(s)",
    ]
    if ai_config_touch is not None:
        why.append(f"AI assistant config first touched {ai_config_touch * 100:.0f}% into the history")
    return AxisScore.of(score, why, thresholds)


def score_guardrails(metrics: AnalysisMetrics, thresholds: ThresholdConfig) -> AxisScore:
    touches = [
        metrics.first_touch.percentiles[key]
        for key in ("tests", "ci", "docs")
        if key in metrics.first_touch.percentiles
    ]
    early = 1.0 - Statistics.mean(touches) if touches else 0.5

    total = max(1, metrics.total_commits)
    guard_commits = sum(metrics.category_distribution.get(c, 0) for c in GUARDRAIL_CATEGORIES)
    density = guard_commits / total

    score = _blend(
        (0.5, Scales.ratio_score(early)),
        (0.5, Scales.ratio_score(density * 2)),
    )
    if touches:
        early_why = (
            f"Tests/CI/docs first appear on average {Statistics.mean(touches) * 100:.0f}% "
            f"into the history"
        )
    else:
        early_why = "No tests/CI/docs paths seen; early-guardrail signal held at 0.5"
    why = [
        early_why,
        f"Share of test/docs/CI/chore commits = {density * 100:.1f}% ({guard_commits} of {total})",
    ]
    return AxisScore.of(score, why, thresholds)


def score_iteration(
    metrics: AnalysisMetrics, episodes: Sequence[Episode], thresholds: ThresholdConfig
) -> AxisScore:
    total = max(1, metrics.total_commits)
    fix_seq = metrics.fixup_sequence_count
    fix_ratio = metrics.fix_commit_ratio
    episode_fix = Statistics.mean([e.fix_density for e in episodes])

    score = _blend(
        (0.5, Scales.score_from_z(fix_seq / total, FIXSEQ_MID, FIXSEQ_SPREAD)),
        (0.3, Scales.ratio_score(fix_ratio)),
        (0.2, Scales.ratio_score(episode_fix)),
    )
    why = [
        f"Fix-after-feature sequences = {fix_seq} ({fix_seq / total * 100:.1f}% of commits)",
        f"Fix commits = {fix_ratio * 100:.1f}%",
        f"Average fix share per episode = {episode_fix * 100:.1f}% over {len(episodes)} episode(s)",
    ]
    return AxisScore.of(score, why, thresholds)


def score_planning(metrics: AnalysisMetrics, thresholds: ThresholdConfig) -> AxisScore:
    conventional = metrics.conventional_commit_ratio
    docs_idx = metrics.category_first_occurrence.get(DOCS, -1)
    feature_idx = metrics.category_first_occurrence.get(FEATURE, -1)
    if docs_idx >= 0 and feature_idx >= 0:
        docs_first = 1.0 if docs_idx < feature_idx else 0.0
        order_why = f"First docs commit at #{docs_idx + 1}, first feature commit at #{feature_idx + 1}"
    else:
        docs_first = 0.5
        order_why = "Docs-before-features order unknown; signal held at 0.5"

    score = _blend(
        (0.5, Scales.ratio_score(conventional)),
        (0.3, Scales.ratio_score(docs_first)),
        (0.2, Scales.ratio_score(metrics.body_ratio)),
    )
    why = [
        f"Conventional commit ratio = {conventional * 100:.1f}%",
        order_why,
        f"Commits with a message body = {metrics.body_ratio * 100:.1f}%",
    ]
    return AxisScore.of(score, why, thresholds)


def score_surface_area(
    metrics: AnalysisMetrics, episodes: Sequence[Episode], thresholds: ThresholdConfig
) -> AxisScore:
    if not metrics.has_path_data or not episodes:
        return AxisScore.of(
            NEUTRAL_SCORE,
            [f"No file path data; surface area held at neutral {NEUTRAL_SCORE}"],
            thresholds,
        )

    median = Statistics.lower_rank([len(e.subsystems_touched) for e in episodes], 0.5)
    score = _blend((1.0, Scales.score_from_z(median, SUBSYSTEMS_MID, SUBSYSTEMS_SPREAD)))
    why = [
        f"Median subsystems touched per episode = {median:g} across {len(episodes)} episode(s)",
        f"Average files changed per commit = {metrics.avg_files_changed:.1f} ({metrics.chunkiness})",
    ]
    return AxisScore.of(score, why, thresholds)


def score_rhythm(
    metrics: AnalysisMetrics, episodes: Sequence[Episode], thresholds: ThresholdConfig
) -> AxisScore:
    burst = metrics.burstiness_score
    episode_p90 = Statistics.lower_rank([e.commit_count for e in episodes], 0.9)

    score = _blend(
        (0.6, Scales.ratio_score((burst + 1) / 2)),
        (0.4, Scales.score_from_z(episode_p90, EPISODE_P90_MID, EPISODE_P90_SPREAD)),
    )
    why = [
        f"Burstiness score = {burst:.2f}",
        f"p90 commits per episode = {episode_p90:g}",
    ]
    return AxisScore.of(score, why, thresholds)


def compute_axes(
    metrics: AnalysisMetrics,
    episodes: Sequence[Episode],
    ai_metrics: Optional[AIToolMetrics] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> VibeAxes:
    """Score all six axes for one repository.

    An empty history yields neutral axes rather than an error.
    """
    if metrics.total_commits == 0:
        return VibeAxes.neutral("No commits analyzed", thresholds)

    axes = VibeAxes(
        **{
            AUTOMATION: score_automation(metrics, ai_metrics, thresholds),
            GUARDRAIL: score_guardrails(metrics, thresholds),
            ITERATION: score_iteration(metrics, episodes, thresholds),
            PLANNING: score_planning(metrics, thresholds),
            SURFACE: score_surface_area(metrics, episodes, thresholds),
            RHYTHM: score_rhythm(metrics, episodes, thresholds),
        }
    )
    logger.debug("Axes: %s", axes.letters())
    return axes
