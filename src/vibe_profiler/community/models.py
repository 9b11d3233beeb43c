"""Community snapshot rows and the rollup payload variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..axes.models import AXIS_KEYS

BELOW_THRESHOLD = "below_threshold"
NO_DATA_YET = "no_data_yet"


@dataclass(frozen=True)
class CommunitySnapshot:
    """One anonymized, eligible profile. Carries no user identity."""

    total_commits: int
    total_repos: int
    persona_id: str
    persona_confidence: str
    axes: dict[str, int]
    persona_name: Optional[str] = None
    ai_collaboration_rate: Optional[float] = None
    ai_tool_diversity: Optional[int] = None

    @property
    def has_ai_data(self) -> bool:
        return self.ai_collaboration_rate is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_commits": self.total_commits,
            "total_repos": self.total_repos,
            "persona_id": self.persona_id,
            "persona_name": self.persona_name,
            "persona_confidence": self.persona_confidence,
            **{key: self.axes[key] for key in AXIS_KEYS},
            "ai_collaboration_rate": self.ai_collaboration_rate,
            "ai_tool_diversity": self.ai_tool_diversity,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CommunitySnapshot:
        """Read a flat row; axes may also be nested under ``axes``."""
        source = data.get("axes") if isinstance(data.get("axes"), Mapping) else data
        missing = [key for key in AXIS_KEYS if source.get(key) is None]
        if missing:
            raise ValueError(f"snapshot is missing {', '.join(missing)}")
        rate = data.get("ai_collaboration_rate")
        diversity = data.get("ai_tool_diversity")
        return cls(
            total_commits=int(data.get("total_commits", 0)),
            total_repos=int(data.get("total_repos", 0)),
            persona_id=data["persona_id"],
            persona_name=data.get("persona_name"),
            persona_confidence=data.get("persona_confidence", "low"),
            axes={key: int(source[key]) for key in AXIS_KEYS},
            ai_collaboration_rate=float(rate) if rate is not None else None,
            ai_tool_diversity=int(diversity) if diversity is not None else None,
        )


@dataclass(frozen=True)
class SuppressedStats:
    """Cohort too small to publish; carries only the count and the threshold."""

    reason: str
    eligible_profiles: int
    threshold: int

    suppressed = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "suppressed": True,
            "reason": self.reason,
            "eligible_profiles": self.eligible_profiles,
            "threshold": self.threshold,
        }


@dataclass(frozen=True)
class PersonaShare:
    id: str
    name: str
    count: int
    pct: float

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "count": self.count, "pct": self.pct}


@dataclass(frozen=True)
class AxisPercentiles:
    p25: int
    p50: int
    p75: int

    def to_dict(self) -> dict[str, int]:
        return {"p25": self.p25, "p50": self.p50, "p75": self.p75}


@dataclass(frozen=True)
class Bucket:
    label: str
    count: int
    pct: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "count": self.count, "pct": self.pct}


@dataclass(frozen=True)
class AIToolStats:
    eligible_profiles_with_data: int
    collaboration_rate_buckets: tuple[Bucket, ...]
    tool_diversity_buckets: tuple[Bucket, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "eligible_profiles_with_data": self.eligible_profiles_with_data,
            "collaboration_rate_buckets": [b.to_dict() for b in self.collaboration_rate_buckets],
            "tool_diversity_buckets": [b.to_dict() for b in self.tool_diversity_buckets],
        }


@dataclass(frozen=True)
class CommunityStats:
    """Published rollup for a cohort at or above the k-anonymity threshold."""

    as_of: Optional[str]
    eligible_profiles: int
    eligible_repos: int
    total_analyzed_commits: int
    personas: tuple[PersonaShare, ...]
    axes: dict[str, AxisPercentiles]
    ai_tools: Optional[AIToolStats] = field(default=None)

    suppressed = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "suppressed": False,
            "as_of": self.as_of,
            "eligible_profiles": self.eligible_profiles,
            "eligible_repos": self.eligible_repos,
            "total_analyzed_commits": self.total_analyzed_commits,
            "personas": [p.to_dict() for p in self.personas],
            "axes": {key: self.axes[key].to_dict() for key in AXIS_KEYS},
            "ai_tools": self.ai_tools.to_dict() if self.ai_tools else None,
        }


CommunityStatsPayload = Union[SuppressedStats, CommunityStats]
