"""Per-repository summaries and the unified, cross-repository profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..attribution.metrics import AIToolMetrics
from ..axes.models import AXIS_KEYS, AxisScore, VibeAxes
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..personas.models import Persona

PLACEHOLDER_SCORE = 50
PLACEHOLDER_WHY = "Legacy insight - no detailed axis data available"


def _get(data: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass(frozen=True)
class FullAxisRecord:
    """A summary that carries all six axes with their evidence."""

    axes: VibeAxes

    is_placeholder = False

    def resolve(self, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> VibeAxes:
        return self.axes

    def to_dict(self) -> dict[str, Any]:
        return self.axes.to_dict()


@dataclass(frozen=True)
class PlaceholderAxisRecord:
    """A legacy summary with missing axis detail.

    Axes that did survive are kept in ``known``; the rest read as the
    neutral placeholder when ``axes`` is built.
    """

    reason: str
    known: tuple[tuple[str, AxisScore], ...] = ()

    is_placeholder = True

    def resolve(self, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> VibeAxes:
        known = dict(self.known)
        placeholder = AxisScore.of(PLACEHOLDER_SCORE, (PLACEHOLDER_WHY,), thresholds)
        return VibeAxes(**{key: known.get(key, placeholder) for key in AXIS_KEYS})

    @property
    def axes(self) -> VibeAxes:
        return self.resolve()

    def to_dict(self) -> dict[str, Any]:
        return {key: axis.to_dict() for key, axis in self.known}


AxisRecord = Union[FullAxisRecord, PlaceholderAxisRecord]


def axis_record_from_dict(data: Optional[Mapping[str, Any]]) -> AxisRecord:
    """Read a stored axes object, degrading to a placeholder when incomplete."""
    if not isinstance(data, Mapping) or not data:
        return PlaceholderAxisRecord(reason="no axes stored")

    known: list[tuple[str, AxisScore]] = []
    for key in AXIS_KEYS:
        value = data.get(key)
        if not isinstance(value, Mapping) or "score" not in value:
            continue
        score = int(value["score"])
        level = value.get("level")
        why = tuple(value.get("why") or ())
        if level is None:
            known.append((key, AxisScore.of(score, why)))
        else:
            known.append((key, AxisScore(score=score, level=level, why=why)))

    if len(known) == len(AXIS_KEYS) and all(axis.why for _, axis in known):
        return FullAxisRecord(VibeAxes(**dict(known)))
    missing = [key for key in AXIS_KEYS if key not in dict(known)]
    reason = f"missing {', '.join(missing)}" if missing else "axes stored without evidence"
    return PlaceholderAxisRecord(reason=reason, known=tuple(known))


@dataclass(frozen=True)
class RepoInsightSummary:
    """One completed repository analysis, as persisted."""

    job_id: str
    repo_name: str
    commit_count: int
    axes_record: AxisRecord
    persona: Optional[Persona]
    analyzed_at: str
    ai_tools: Optional[AIToolMetrics] = None

    @property
    def axes(self) -> VibeAxes:
        return self.axes_record.axes

    def to_dict(self) -> dict[str, Any]:
        return {
            "jobId": self.job_id,
            "repoName": self.repo_name,
            "commitCount": self.commit_count,
            "axes": self.axes_record.to_dict(),
            "persona": self.persona.to_dict() if self.persona else None,
            "analyzedAt": self.analyzed_at,
            "aiTools": self.ai_tools.to_dict() if self.ai_tools else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepoInsightSummary:
        """Accept both the camelCase persisted form and snake_case keys."""
        persona = data.get("persona")
        ai_tools = _get(data, "aiTools", "ai_tools")
        return cls(
            job_id=str(_get(data, "jobId", "job_id", "")),
            repo_name=str(_get(data, "repoName", "repo_name", "")),
            commit_count=int(_get(data, "commitCount", "commit_count", 0) or 0),
            axes_record=axis_record_from_dict(data.get("axes")),
            persona=Persona.from_dict(persona) if persona else None,
            analyzed_at=str(_get(data, "analyzedAt", "analyzed_at", "")),
            ai_tools=AIToolMetrics.from_dict(ai_tools) if ai_tools else None,
        )


@dataclass(frozen=True)
class RepoBreakdown:
    job_id: str
    repo_name: str
    persona_id: Optional[str]
    persona_name: Optional[str]
    commit_count: int
    weight: float  # percentage of total commits, 1 decimal
    placeholder: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "jobId": self.job_id,
            "repoName": self.repo_name,
            "personaId": self.persona_id,
            "personaName": self.persona_name,
            "commitCount": self.commit_count,
            "weight": self.weight,
            "placeholder": self.placeholder,
        }


@dataclass(frozen=True)
class UnifiedProfile:
    """All of a user's repositories folded into one profile.

    Rebuilt wholesale from the summaries; never patched.
    """

    axes: VibeAxes
    persona: Persona
    repo_breakdown: tuple[RepoBreakdown, ...]
    total_commits: int
    total_repos: int
    job_ids: tuple[str, ...] = ()
    ai_tools: Optional[AIToolMetrics] = None
    data_quality_score: int = 0
    updated_at: Optional[str] = None
    placeholder_repos: int = field(default=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCommits": self.total_commits,
            "totalRepos": self.total_repos,
            "jobIds": list(self.job_ids),
            "axes": self.axes.to_dict(),
            "persona": self.persona.to_dict(),
            "repoBreakdown": [r.to_dict() for r in self.repo_breakdown],
            "aiTools": self.ai_tools.to_dict() if self.ai_tools else None,
            "dataQualityScore": self.data_quality_score,
            "placeholderRepos": self.placeholder_repos,
            "updatedAt": self.updated_at,
        }
