"""Streaks, peak times and cadence statistics.

Day-level statistics use sessions split on the coarser streak gap: every
commit counts towards the UTC day its session started, so a late-night
session running past midnight is one active day, not two.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import date, timedelta

from ..commits.models import CommitEvent, sort_by_committer_date
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..math import Statistics
from .episodes import segment_by_gap
from .models import TimingInsights

logger = get_logger(__name__)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# (window, first hour, last hour inclusive); anything else is late_nights
TIME_WINDOWS: tuple[tuple[str, int, int], ...] = (
    ("mornings", 5, 11),
    ("afternoons", 12, 16),
    ("evenings", 17, 21),
)
LATE_NIGHTS = "late_nights"
_WINDOW_ORDER = [w for w, _, _ in TIME_WINDOWS] + [LATE_NIGHTS]


def time_window(hour: int) -> str:
    for window, first, last in TIME_WINDOWS:
        if first <= hour <= last:
            return window
    return LATE_NIGHTS


def longest_streak(days: Sequence[date]) -> tuple[int, date | None, date | None]:
    """Longest run of consecutive calendar days; earliest run wins ties."""
    ordered = sorted(set(days))
    if not ordered:
        return 0, None, None

    best = (1, ordered[0], ordered[0])
    run_start = ordered[0]
    run_len = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if curr - prev == timedelta(days=1):
            run_len += 1
        else:
            run_start = curr
            run_len = 1
        if run_len > best[0]:
            best = (run_len, run_start, curr)
    return best


def _ranked(counter: Counter, order: Sequence) -> list:
    """Keys by descending count, ties resolved by position in ``order``."""
    position = {key: i for i, key in enumerate(order)}
    return sorted(counter, key=lambda k: (-counter[k], position.get(k, len(position))))


def _volume_confidence(total: int) -> str:
    if total >= 50:
        return "high"
    if total >= 15:
        return "medium"
    return "low"


def compute_timing_insights(
    commits: Sequence[CommitEvent], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> TimingInsights:
    """Compute streak, peak weekday/window and gap statistics."""
    if not commits:
        return TimingInsights()

    ordered = sort_by_committer_date(list(commits))
    sessions = segment_by_gap(ordered, thresholds.streak_gap_hours)

    weekday_counts: Counter = Counter()
    active_days: list[date] = []
    for session in sessions:
        day = session[0].committer_date.date()
        active_days.append(day)
        weekday_counts[day.weekday()] += len(session)

    streak_days, streak_start, streak_end = longest_streak(active_days)

    hour_counts = Counter(c.committer_date.hour for c in ordered)
    window_counts = Counter(time_window(c.committer_date.hour) for c in ordered)

    top_weekdays = _ranked(weekday_counts, range(7))[:2]
    peak_hour = _ranked(hour_counts, range(24))[0]
    peak_window = _ranked(window_counts, _WINDOW_ORDER)[0]

    longest = max(sessions, key=len)
    intervals = Statistics.intervals_hours([c.timestamp for c in ordered])

    insights = TimingInsights(
        total_commits=len(ordered),
        active_days=len(set(active_days)),
        streak_days=streak_days,
        streak_start=streak_start.isoformat() if streak_start else None,
        streak_end=streak_end.isoformat() if streak_end else None,
        peak_weekday=top_weekdays[0],
        peak_weekday_name=WEEKDAY_NAMES[top_weekdays[0]],
        top_weekdays=tuple(top_weekdays),
        peak_hour=peak_hour,
        peak_window=peak_window,
        session_count=len(sessions),
        longest_session_commits=len(longest),
        longest_session_hours=(longest[-1].timestamp - longest[0].timestamp) / 3600.0,
        burstiness=Statistics.burstiness(intervals),
        gap_p50_hours=Statistics.percentile(intervals, 50),
        gap_p90_hours=Statistics.percentile(intervals, 90),
        confidence=_volume_confidence(len(ordered)),
    )
    logger.debug(
        "Timing: %d sessions, streak %d days, peak %s/%s",
        insights.session_count,
        insights.streak_days,
        insights.peak_weekday_name,
        insights.peak_window,
    )
    return insights
