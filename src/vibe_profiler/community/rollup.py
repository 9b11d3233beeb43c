"""Privacy-preserving community rollup.

The caller has already filtered snapshots down to opted-in, eligible
profiles. Below ``community_min_profiles`` nothing but the head count is
published; above it, persona rows are still folded into ``other`` until
they reach ``community_bucket_min`` profiles of their own.

The rollup is order-independent: every aggregate is computed from sorted
values or counts, and the date is supplied by the caller.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Optional

import numpy as np

from ..axes.models import AXIS_KEYS
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..math import Scales
from ..personas.rules import FALLBACK_PERSONA, PERSONA_RULES, PersonaRule
from ..profile.models import UnifiedProfile
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

logger = get_logger(__name__)

OTHER_PERSONA_ID = "other"
OTHER_PERSONA_NAME = "Other personas"

ADOPTION_BUCKETS = ("none", "light", "moderate", "heavy", "ai-native")
DIVERSITY_BUCKETS = ("1", "2", "3+")


def is_eligible_for_community(
    total_commits: int, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> bool:
    return total_commits >= thresholds.community_eligible_min_commits


def snapshot_from_profile(profile: UnifiedProfile) -> CommunitySnapshot:
    ai = profile.ai_tools
    return CommunitySnapshot(
        total_commits=profile.total_commits,
        total_repos=profile.total_repos,
        persona_id=profile.persona.id,
        persona_name=profile.persona.name,
        persona_confidence=profile.persona.confidence,
        axes=profile.axes.scores(),
        ai_collaboration_rate=ai.ai_collaboration_rate if ai else None,
        ai_tool_diversity=ai.tool_diversity if ai else None,
    )


def adoption_bucket(rate: float, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    if rate <= 0:
        return "none"
    if rate < thresholds.adoption_light_below:
        return "light"
    if rate < thresholds.adoption_moderate_below:
        return "moderate"
    if rate < thresholds.adoption_heavy_below:
        return "heavy"
    return "ai-native"


def diversity_bucket(diversity: int) -> Optional[str]:
    if diversity <= 0:
        return None
    return "3+" if diversity >= 3 else str(diversity)


def axis_percentiles(values: Sequence[int]) -> AxisPercentiles:
    p25, p50, p75 = np.percentile(np.sort(np.asarray(values, dtype=float)), [25, 50, 75])
    return AxisPercentiles(
        p25=Scales.round_half_up(p25),
        p50=Scales.round_half_up(p50),
        p75=Scales.round_half_up(p75),
    )


def _buckets(counts: Counter, labels: Sequence[str], total: int) -> tuple[Bucket, ...]:
    return tuple(Bucket(label, counts[label], Scales.share_pct(counts[label], total)) for label in labels)


def _persona_names(
    snapshots: Sequence[CommunitySnapshot], rules: Sequence[PersonaRule]
) -> dict[str, str]:
    names = {rule.id: rule.name for rule in rules}
    names[FALLBACK_PERSONA.id] = FALLBACK_PERSONA.name
    for snapshot in sorted(snapshots, key=lambda s: (s.persona_id, s.persona_name or "")):
        if snapshot.persona_name:
            names.setdefault(snapshot.persona_id, snapshot.persona_name)
    return names


def persona_distribution(
    snapshots: Sequence[CommunitySnapshot],
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> tuple[PersonaShare, ...]:
    """Persona shares, largest first; small buckets fold into ``other``."""
    total = len(snapshots)
    counts = Counter(s.persona_id for s in snapshots)
    names = _persona_names(snapshots, rules)

    rows = []
    folded = 0
    for persona_id, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        if count < thresholds.community_bucket_min:
            folded += count
            continue
        rows.append(
            PersonaShare(persona_id, names.get(persona_id, persona_id), count, Scales.share_pct(count, total))
        )
    if folded:
        rows.append(
            PersonaShare(OTHER_PERSONA_ID, OTHER_PERSONA_NAME, folded, Scales.share_pct(folded, total))
        )
    return tuple(rows)


def ai_tool_stats(
    snapshots: Sequence[CommunitySnapshot], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> Optional[AIToolStats]:
    with_data = [s for s in snapshots if s.has_ai_data]
    if not with_data:
        return None

    adoption = Counter(adoption_bucket(s.ai_collaboration_rate, thresholds) for s in with_data)
    diversity = Counter(
        bucket
        for bucket in (diversity_bucket(s.ai_tool_diversity or 0) for s in with_data)
        if bucket is not None
    )
    return AIToolStats(
        eligible_profiles_with_data=len(with_data),
        collaboration_rate_buckets=_buckets(adoption, ADOPTION_BUCKETS, len(with_data)),
        tool_diversity_buckets=_buckets(diversity, DIVERSITY_BUCKETS, sum(diversity.values())),
    )


def compute_community_rollup(
    snapshots: Sequence[CommunitySnapshot],
    as_of: Optional[str] = None,
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> CommunityStatsPayload:
    """Aggregate eligible snapshots into a publishable payload.

    Args:
        snapshots: Opted-in, eligible profiles; eligibility is not rechecked
        as_of: Date string to stamp on the payload
        rules: Rule table used to name persona rows
        thresholds: k-anonymity threshold, bucket minimum and adoption bands

    Returns:
        ``SuppressedStats`` when fewer than ``community_min_profiles``
        snapshots are given, otherwise ``CommunityStats``
    """
    threshold = thresholds.community_min_profiles
    eligible = len(snapshots)
    if eligible == 0 or eligible < threshold:
        reason = NO_DATA_YET if eligible == 0 else BELOW_THRESHOLD
        logger.info("Community rollup suppressed: %d of %d profiles (%s)", eligible, threshold, reason)
        return SuppressedStats(reason=reason, eligible_profiles=eligible, threshold=threshold)

    stats = CommunityStats(
        as_of=as_of,
        eligible_profiles=eligible,
        eligible_repos=sum(s.total_repos for s in snapshots),
        total_analyzed_commits=sum(s.total_commits for s in snapshots),
        personas=persona_distribution(snapshots, rules, thresholds),
        axes={key: axis_percentiles([s.axes[key] for s in snapshots]) for key in AXIS_KEYS},
        ai_tools=ai_tool_stats(snapshots, thresholds),
    )
    logger.info("Community rollup computed: %d eligible profiles", eligible)
    return stats
