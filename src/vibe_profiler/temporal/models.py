"""Data models for time segmentation and rhythm statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Episode:
    """A burst of commits with no idle gap at or above the episode threshold.

    Derived on every analysis and never stored on its own.
    """

    episode_id: str  # ep_001, ep_002, ... in chronological order
    start: datetime
    end: datetime
    commit_count: int
    total_additions: int = 0
    total_deletions: int = 0
    total_files_changed: int = 0
    category_counts: dict[str, int] = field(default_factory=dict)
    subsystems_touched: tuple[str, ...] = ()
    quick_fix_count: int = 0
    shas: tuple[str, ...] = ()

    @property
    def span_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600.0

    @property
    def fix_density(self) -> float:
        return self.category_counts.get("fix", 0) / max(1, self.commit_count)

    def to_dict(self) -> dict[str, Any]:
        return {
            "episode_id": self.episode_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "commit_count": self.commit_count,
            "span_hours": round(self.span_hours, 2),
            "total_additions": self.total_additions,
            "total_deletions": self.total_deletions,
            "total_files_changed": self.total_files_changed,
            "category_counts": dict(self.category_counts),
            "subsystems_touched": list(self.subsystems_touched),
            "quick_fix_count": self.quick_fix_count,
            "shas": list(self.shas),
        }


@dataclass(frozen=True)
class TimingInsights:
    """Streak, peak-time and cadence statistics for one commit history."""

    total_commits: int = 0
    active_days: int = 0
    streak_days: int = 0
    streak_start: Optional[str] = None  # YYYY-MM-DD (UTC)
    streak_end: Optional[str] = None
    peak_weekday: Optional[int] = None  # Monday = 0
    peak_weekday_name: Optional[str] = None
    top_weekdays: tuple[int, ...] = ()
    peak_hour: Optional[int] = None  # UTC
    peak_window: Optional[str] = None
    session_count: int = 0
    longest_session_commits: int = 0
    longest_session_hours: float = 0.0
    burstiness: float = 0.0
    gap_p50_hours: float = 0.0
    gap_p90_hours: float = 0.0
    confidence: str = "low"

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_commits": self.total_commits,
            "active_days": self.active_days,
            "streak": {
                "longest_days": self.streak_days,
                "start_day": self.streak_start,
                "end_day": self.streak_end,
            },
            "peak_weekday": self.peak_weekday,
            "peak_weekday_name": self.peak_weekday_name,
            "top_weekdays": list(self.top_weekdays),
            "peak_hour": self.peak_hour,
            "peak_window": self.peak_window,
            "session_count": self.session_count,
            "longest_session_commits": self.longest_session_commits,
            "longest_session_hours": round(self.longest_session_hours, 2),
            "burstiness": round(self.burstiness, 4),
            "gap_p50_hours": round(self.gap_p50_hours, 2),
            "gap_p90_hours": round(self.gap_p90_hours, 2),
            "confidence": self.confidence,
        }
