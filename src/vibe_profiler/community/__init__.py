"""Community rollup with k-anonymity suppression."""

from .models import (
    BELOW_THRESHOLD,
    NO_DATA_YET,
    AIToolStats,
    AxisPercentiles,
    Bucket,
    CommunitySnapshot,
    CommunityStats,
    CommunityStatsPayload,
    PersonaShare,
    SuppressedStats,
)
from .rollup import (
    ADOPTION_BUCKETS,
    DIVERSITY_BUCKETS,
    OTHER_PERSONA_ID,
    adoption_bucket,
    ai_tool_stats,
    axis_percentiles,
    compute_community_rollup,
    diversity_bucket,
    is_eligible_for_community,
    persona_distribution,
    snapshot_from_profile,
)

__all__ = [
    "ADOPTION_BUCKETS",
    "BELOW_THRESHOLD",
    "DIVERSITY_BUCKETS",
    "NO_DATA_YET",
    "OTHER_PERSONA_ID",
    "AIToolStats",
    "AxisPercentiles",
    "Bucket",
    "CommunitySnapshot",
    "CommunityStats",
    "CommunityStatsPayload",
    "PersonaShare",
    "SuppressedStats",
    "adoption_bucket",
    "ai_tool_stats",
    "axis_percentiles",
    "compute_community_rollup",
    "diversity_bucket",
    "is_eligible_for_community",
    "persona_distribution",
    "snapshot_from_profile",
]
