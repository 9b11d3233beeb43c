"""Commit normalization and local history extraction."""

from .git_extractor import GitExtractor
from .models import CommitEvent, sort_by_committer_date
from .normalizer import detect_shape, normalize_commit, normalize_commits, parse_timestamp

__all__ = [
    "CommitEvent",
    "GitExtractor",
    "detect_shape",
    "normalize_commit",
    "normalize_commits",
    "parse_timestamp",
    "sort_by_committer_date",
]
