"""Gap-based segmentation of commit histories."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ..classification import classify_category, subsystems_for_paths
from ..commits.models import CommitEvent, sort_by_committer_date
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from .models import Episode

logger = get_logger(__name__)


def segment_by_gap(commits: Sequence[CommitEvent], gap_hours: float) -> list[list[CommitEvent]]:
    """Split commits into runs separated by idle gaps of at least ``gap_hours``.

    Commits are sorted by committer date first; equal timestamps keep
    input order.
    """
    if gap_hours <= 0:
        raise ValueError("gap_hours must be positive")

    ordered = sort_by_committer_date(list(commits))
    if not ordered:
        return []

    gap_seconds = gap_hours * 3600.0
    groups: list[list[CommitEvent]] = [[ordered[0]]]
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.timestamp - prev.timestamp >= gap_seconds:
            groups.append([curr])
        else:
            groups[-1].append(curr)
    return groups


def is_quick_fix(commit: CommitEvent, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> bool:
    """Small commit whose subject mentions a fix."""
    return (
        "fix" in commit.subject.lower()
        and commit.changed_lines < thresholds.quick_fix_max_lines
        and commit.files_changed <= thresholds.quick_fix_max_files
    )


def _episode(index: int, group: list[CommitEvent], thresholds: ThresholdConfig) -> Episode:
    categories = Counter(classify_category(c.message) for c in group)
    paths = [p for c in group for p in c.file_paths]
    return Episode(
        episode_id=f"ep_{index + 1:03d}",
        start=group[0].committer_date,
        end=group[-1].committer_date,
        commit_count=len(group),
        total_additions=sum(c.additions for c in group),
        total_deletions=sum(c.deletions for c in group),
        total_files_changed=sum(c.files_changed for c in group),
        category_counts=dict(sorted(categories.items())),
        subsystems_touched=tuple(subsystems_for_paths(paths)),
        quick_fix_count=sum(1 for c in group if is_quick_fix(c, thresholds)),
        shas=tuple(c.sha for c in group),
    )


def build_episodes(
    commits: Sequence[CommitEvent],
    gap_hours: float | None = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> list[Episode]:
    """Group commits into work episodes.

    Args:
        commits: Commits in any order
        gap_hours: Idle gap that starts a new episode; defaults to
            ``thresholds.episode_gap_hours``
        thresholds: Supplies the default gap and quick-fix limits
    """
    gap = thresholds.episode_gap_hours if gap_hours is None else gap_hours
    episodes = [_episode(i, g, thresholds) for i, g in enumerate(segment_by_gap(commits, gap))]
    logger.debug("Built %d episodes from %d commits (gap=%.1fh)", len(episodes), len(commits), gap)
    return episodes
