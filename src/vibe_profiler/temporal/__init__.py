"""Episode segmentation and timing statistics."""

from .episodes import build_episodes, is_quick_fix, segment_by_gap
from .models import Episode, TimingInsights
from .rhythm import compute_timing_insights, longest_streak, time_window

__all__ = [
    "Episode",
    "TimingInsights",
    "build_episodes",
    "compute_timing_insights",
    "is_quick_fix",
    "longest_streak",
    "segment_by_gap",
    "time_window",
]
