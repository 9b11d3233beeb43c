"""Mapping raw metrics onto bounded 0-100 scores."""

import math


class Scales:
    """Clamping, rounding and banded-score helpers shared by every scorer."""

    @staticmethod
    def clamp(value: float, low: float, high: float) -> float:
        return max(low, min(high, value))

    @staticmethod
    def clamp01(value: float) -> float:
        return max(0.0, min(1.0, value))

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round with .5 going up (2.5 -> 3, -2.5 -> -2), unlike Python's banker's rounding."""
        return int(math.floor(value + 0.5))

    @staticmethod
    def ratio_score(ratio: float) -> int:
        """Map a 0-1 ratio to 0-100, clamping out-of-range input."""
        return Scales.round_half_up(100 * Scales.clamp01(ratio))

    @staticmethod
    def score_from_z(x: float, mid: float, spread: float) -> int:
        """
        Score a raw metric against an expected midpoint.

        ``mid`` maps to 50 and each ``spread`` away moves the score by 25
        points, clamped to [0, 100]. ``spread`` must be positive.
        """
        z = (x - mid) / spread
        return Scales.round_half_up(100 * Scales.clamp01(0.5 + 0.25 * z))

    @staticmethod
    def share_pct(part: float, total: float, digits: int = 1) -> float:
        """Percentage share rounded to ``digits``; 0.0 when total is zero."""
        if total <= 0:
            return 0.0
        return round(100.0 * part / total, digits)
