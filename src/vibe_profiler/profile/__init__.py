"""Multi-repository aggregation into a unified profile."""

from .aggregation import aggregate_profile, profile_data_quality, repo_weights, weighted_axes
from .models import (
    PLACEHOLDER_SCORE,
    PLACEHOLDER_WHY,
    AxisRecord,
    FullAxisRecord,
    PlaceholderAxisRecord,
    RepoBreakdown,
    RepoInsightSummary,
    UnifiedProfile,
    axis_record_from_dict,
)

__all__ = [
    "PLACEHOLDER_SCORE",
    "PLACEHOLDER_WHY",
    "AxisRecord",
    "FullAxisRecord",
    "PlaceholderAxisRecord",
    "RepoBreakdown",
    "RepoInsightSummary",
    "UnifiedProfile",
    "aggregate_profile",
    "axis_record_from_dict",
    "profile_data_quality",
    "repo_weights",
    "weighted_axes",
]
