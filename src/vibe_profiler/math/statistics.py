"""Descriptive statistics over commit-derived series: percentiles, dispersion, burstiness."""

from typing import Sequence

import numpy as np


class Statistics:
    """Statistical helpers that tolerate empty input."""

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        """Arithmetic mean; 0.0 for an empty series."""
        if not values:
            return 0.0
        return float(np.mean(values))

    @staticmethod
    def pstdev(values: Sequence[float]) -> float:
        """Population standard deviation; 0.0 for fewer than two values."""
        if len(values) < 2:
            return 0.0
        return float(np.std(values))

    @staticmethod
    def percentile(values: Sequence[float], p: float) -> float:
        """
        Percentile with linear interpolation between closest ranks.

        Args:
            values: Unsorted values
            p: Percentile in [0, 100]

        Returns:
            Interpolated percentile, or 0.0 when there are no values
        """
        if len(values) == 0:
            return 0.0
        return float(np.percentile(np.asarray(values, dtype=float), p, method="linear"))

    @staticmethod
    def lower_rank(values: Sequence[float], q: float) -> float:
        """
        Value at index floor(q * (n - 1)) of the sorted series.

        Used where the statistic must be an observed value (median subsystem
        count, p90 episode size) rather than an interpolation.
        """
        if len(values) == 0:
            return 0.0
        ordered = sorted(values)
        return ordered[int(np.floor(q * (len(ordered) - 1)))]

    @staticmethod
    def intervals_hours(timestamps: Sequence[float]) -> list[float]:
        """Gaps in hours between consecutive unix timestamps (already sorted)."""
        return [(b - a) / 3600.0 for a, b in zip(timestamps, timestamps[1:])]

    @staticmethod
    def burstiness(intervals: Sequence[float]) -> float:
        """
        Burstiness B = (sigma - mu) / (sigma + mu) over inter-event gaps.

        Range is [-1, 1]: -1 is perfectly regular, 0 is Poisson-like,
        values towards 1 mean activity arrives in clumps.
        """
        if not intervals:
            return 0.0
        mu = float(np.mean(intervals))
        sigma = float(np.std(intervals))
        if sigma + mu == 0:
            return 0.0
        return (sigma - mu) / (sigma + mu)
