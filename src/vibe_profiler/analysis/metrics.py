"""Per-repository commit metrics that feed axis scoring."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from ..classification import (
    CATEGORIES,
    chunkiness_label,
    classify_category,
    classify_size,
    classify_subsystem,
    is_conventional_commit,
)
from ..classification.categories import FEATURE, FIX
from ..classification.size import SIZE_BUCKETS, UNKNOWN
from ..commits.models import CommitEvent, sort_by_committer_date
from ..logging_config import get_logger
from ..math import Scales, Statistics

logger = get_logger(__name__)

# first-touch keys reported, and the subsystem each one reads
FIRST_TOUCH_KEYS: tuple[tuple[str, str], ...] = (
    ("tests", "tests"),
    ("ci", "infra"),
    ("docs", "docs"),
    ("ai_config", "ai_config"),
)


@dataclass(frozen=True)
class FirstTouch:
    """Where in the timeline each subsystem first appeared.

    ``percentiles`` are 0..1 (0 = first commit, 1 = last); subsystems never
    touched are absent rather than defaulted.
    """

    percentiles: dict[str, float] = field(default_factory=dict)
    first_indices: dict[str, int] = field(default_factory=dict)


def first_touch_percentiles(ordered: Sequence[CommitEvent]) -> FirstTouch:
    """Compute first-touch positions over commits already in time order."""
    if not ordered:
        return FirstTouch()

    first_indices: dict[str, int] = {}
    for index, commit in enumerate(ordered):
        for path in commit.file_paths:
            first_indices.setdefault(classify_subsystem(path), index)

    denominator = max(1, len(ordered) - 1)
    percentiles = {
        key: first_indices[subsystem] / denominator
        for key, subsystem in FIRST_TOUCH_KEYS
        if subsystem in first_indices
    }
    return FirstTouch(percentiles=percentiles, first_indices=dict(sorted(first_indices.items())))


@dataclass(frozen=True)
class AnalysisMetrics:
    total_commits: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    total_files_changed: int = 0
    first_commit_date: Optional[str] = None
    last_commit_date: Optional[str] = None
    active_days: int = 0
    span_days: int = 0
    commit_size_p50: float = 0.0
    commit_size_p90: float = 0.0
    commit_size_mean: float = 0.0
    commit_size_stddev: float = 0.0
    commits_per_active_day_mean: float = 0.0
    commits_per_active_day_max: int = 0
    hours_between_commits_p50: float = 0.0
    hours_between_commits_p90: float = 0.0
    burstiness_score: float = 0.0
    message_length_p50: float = 0.0
    message_length_p90: float = 0.0
    conventional_commit_ratio: float = 0.0
    body_ratio: float = 0.0
    fix_commit_ratio: float = 0.0
    fixup_sequence_count: int = 0
    category_distribution: dict[str, int] = field(default_factory=dict)
    category_first_occurrence: dict[str, int] = field(default_factory=dict)
    merge_commit_ratio: float = 0.0
    size_distribution: dict[str, int] = field(default_factory=dict)
    avg_files_changed: float = 0.0
    chunkiness: str = UNKNOWN
    commits_with_paths: int = 0
    first_touch: FirstTouch = field(default_factory=FirstTouch)
    data_quality_score: int = 0

    @property
    def has_path_data(self) -> bool:
        return self.commits_with_paths > 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, float):
                value = round(value, 4)
            elif isinstance(value, FirstTouch):
                value = {
                    "percentiles": {k: round(v, 4) for k, v in value.percentiles.items()},
                    "first_indices": dict(value.first_indices),
                }
            elif isinstance(value, dict):
                value = dict(value)
            result[name] = value
        return result


def _ratio(count: int, total: int) -> float:
    return count / total if total > 0 else 0.0


def compute_analysis_metrics(commits: Sequence[CommitEvent]) -> AnalysisMetrics:
    """Summarize a repository's commits; empty input gives an all-zero record."""
    ordered = sort_by_committer_date(list(commits))
    total = len(ordered)
    if total == 0:
        return AnalysisMetrics(
            category_distribution={c: 0 for c in CATEGORIES},
            category_first_occurrence={c: -1 for c in CATEGORIES},
        )

    sizes = [c.changed_lines for c in ordered]
    timestamps = [c.timestamp for c in ordered]
    intervals = Statistics.intervals_hours(timestamps)
    message_lengths = [len(c.message) for c in ordered]

    commits_by_day = Counter(c.committer_date.date() for c in ordered)
    first = ordered[0].committer_date
    last = ordered[-1].committer_date
    span_seconds = (last - first).total_seconds()
    span_days = int(-(-span_seconds // 86400))  # ceiling

    categories = [classify_category(c.message) for c in ordered]
    distribution = {c: 0 for c in CATEGORIES}
    first_occurrence = {c: -1 for c in CATEGORIES}
    for index, category in enumerate(categories):
        distribution[category] += 1
        if first_occurrence[category] == -1:
            first_occurrence[category] = index

    fixup_sequences = sum(
        1 for prev, curr in zip(categories, categories[1:]) if prev == FEATURE and curr == FIX
    )

    size_distribution = {bucket: 0 for _, bucket in SIZE_BUCKETS}
    size_distribution[UNKNOWN] = 0
    for commit in ordered:
        size_distribution[classify_size(commit.changed_lines, commit.has_stats)] += 1

    files = [c.files_changed for c in ordered]
    with_stats = sum(1 for c in ordered if c.has_stats)
    data_quality = Scales.round_half_up(
        100 * (0.6 * Scales.clamp01(total / 100) + 0.4 * _ratio(with_stats, total))
    )

    metrics = AnalysisMetrics(
        total_commits=total,
        total_additions=sum(c.additions for c in ordered),
        total_deletions=sum(c.deletions for c in ordered),
        total_files_changed=sum(files),
        first_commit_date=first.isoformat(),
        last_commit_date=last.isoformat(),
        active_days=len(commits_by_day),
        span_days=span_days,
        commit_size_p50=Statistics.percentile(sizes, 50),
        commit_size_p90=Statistics.percentile(sizes, 90),
        commit_size_mean=Statistics.mean(sizes),
        commit_size_stddev=Statistics.pstdev(sizes),
        commits_per_active_day_mean=total / len(commits_by_day),
        commits_per_active_day_max=max(commits_by_day.values()),
        hours_between_commits_p50=Statistics.percentile(intervals, 50),
        hours_between_commits_p90=Statistics.percentile(intervals, 90),
        burstiness_score=Statistics.burstiness(intervals),
        message_length_p50=Statistics.percentile(message_lengths, 50),
        message_length_p90=Statistics.percentile(message_lengths, 90),
        conventional_commit_ratio=_ratio(
            sum(1 for c in ordered if is_conventional_commit(c.message)), total
        ),
        body_ratio=_ratio(sum(1 for c in ordered if c.body), total),
        fix_commit_ratio=_ratio(distribution[FIX], total),
        fixup_sequence_count=fixup_sequences,
        category_distribution=distribution,
        category_first_occurrence=first_occurrence,
        merge_commit_ratio=_ratio(sum(1 for c in ordered if c.is_merge), total),
        size_distribution=size_distribution,
        avg_files_changed=sum(files) / total,
        chunkiness=chunkiness_label(files),
        commits_with_paths=sum(1 for c in ordered if c.file_paths),
        first_touch=first_touch_percentiles(ordered),
        data_quality_score=int(Scales.clamp(data_quality, 0, 100)),
    )
    logger.debug(
        "Metrics: %d commits, p90 size %.0f, fix ratio %.2f, quality %d",
        total,
        metrics.commit_size_p90,
        metrics.fix_commit_ratio,
        metrics.data_quality_score,
    )
    return metrics
