"""Commit size buckets and change-breadth labels."""

from collections.abc import Sequence

UNKNOWN = "unknown"

# (upper bound exclusive, bucket) over additions + deletions
SIZE_BUCKETS: tuple[tuple[float, str], ...] = (
    (10, "tiny"),
    (50, "small"),
    (250, "medium"),
    (1000, "large"),
    (float("inf"), "huge"),
)

# (upper bound exclusive, label) over average files changed per commit
CHUNKINESS_LABELS: tuple[tuple[float, str], ...] = (
    (3, "slicer"),
    (6, "mixer"),
    (float("inf"), "chunker"),
)


def classify_size(changed_lines: int, has_stats: bool = True) -> str:
    """Bucket a commit by changed lines; ``unknown`` when the host gave no stats."""
    if not has_stats:
        return UNKNOWN
    for bound, bucket in SIZE_BUCKETS:
        if changed_lines < bound:
            return bucket
    return SIZE_BUCKETS[-1][1]


def chunkiness_label(files_changed: Sequence[int]) -> str:
    """Label change breadth from per-commit file counts.

    Returns ``unknown`` when no commit reports files.
    """
    if not files_changed or not any(files_changed):
        return UNKNOWN
    average = sum(files_changed) / len(files_changed)
    for bound, label in CHUNKINESS_LABELS:
        if average < bound:
            return label
    return CHUNKINESS_LABELS[-1][1]
