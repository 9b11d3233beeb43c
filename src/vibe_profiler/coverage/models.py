"""Coverage probe inputs and report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..axes.models import VibeAxes


@dataclass(frozen=True)
class LiveProfile:
    """A real user's stored axes, cross-checked against the rule table."""

    user_id: str
    axes: VibeAxes
    username: Optional[str] = None
    total_commits: int = 0
    total_repos: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LiveProfile:
        axes = data["axes"]
        first = next(iter(axes.values()), None) if isinstance(axes, Mapping) else None
        parsed = VibeAxes.from_dict(axes) if isinstance(first, Mapping) else VibeAxes.from_scores(axes)
        return cls(
            user_id=str(data.get("user_id") or data.get("userId")),
            axes=parsed,
            username=data.get("username"),
            total_commits=int(data.get("total_commits", data.get("totalCommits", 0))),
            total_repos=int(data.get("total_repos", data.get("totalRepos", 0))),
        )


@dataclass(frozen=True)
class UserFallback:
    user_id: str
    username: Optional[str]
    total_commits: int
    total_repos: int
    axes: dict[str, int]  # letter -> score
    suggestion: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "total_commits": self.total_commits,
            "total_repos": self.total_repos,
            "axes": dict(self.axes),
            "suggestion": self.suggestion,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserFallback:
        return cls(
            user_id=data["user_id"],
            username=data.get("username"),
            total_commits=int(data.get("total_commits", 0)),
            total_repos=int(data.get("total_repos", 0)),
            axes={k: int(v) for k, v in data["axes"].items()},
            suggestion=data.get("suggestion", ""),
        )


@dataclass(frozen=True)
class FallbackSample:
    """A grid vector that hit the fallback, with the nearest-rule hint."""

    axes: dict[str, int]  # letter -> score
    suggestion: str

    def to_dict(self) -> dict[str, Any]:
        return {"axes": dict(self.axes), "suggestion": self.suggestion}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FallbackSample:
        return cls(
            axes={k: int(v) for k, v in data["axes"].items()},
            suggestion=data.get("suggestion", ""),
        )


@dataclass(frozen=True)
class CoverageReport:
    total_combinations: int
    fallback_count: int
    fallback_percentage: int
    persona_counts: dict[str, int]
    step_size: int
    probed_axes: tuple[str, ...]
    sample_fallbacks: tuple[FallbackSample, ...] = ()
    real_user_fallbacks: Optional[tuple[UserFallback, ...]] = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_combinations": self.total_combinations,
            "fallback_count": self.fallback_count,
            "fallback_percentage": self.fallback_percentage,
            "persona_counts": dict(self.persona_counts),
            "step_size": self.step_size,
            "probed_axes": list(self.probed_axes),
            "sample_fallbacks": [s.to_dict() for s in self.sample_fallbacks],
            "real_user_fallbacks": (
                [u.to_dict() for u in self.real_user_fallbacks]
                if self.real_user_fallbacks is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CoverageReport:
        users = data.get("real_user_fallbacks")
        return cls(
            total_combinations=int(data["total_combinations"]),
            fallback_count=int(data["fallback_count"]),
            fallback_percentage=int(data["fallback_percentage"]),
            persona_counts={k: int(v) for k, v in data["persona_counts"].items()},
            step_size=int(data["step_size"]),
            probed_axes=tuple(data.get("probed_axes") or ()),
            sample_fallbacks=tuple(
                FallbackSample.from_dict(s) for s in data.get("sample_fallbacks") or ()
            ),
            real_user_fallbacks=(
                tuple(UserFallback.from_dict(u) for u in users) if users is not None else None
            ),
        )
