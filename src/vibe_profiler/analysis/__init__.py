"""Commit-level metrics for one repository."""

from .metrics import AnalysisMetrics, FirstTouch, compute_analysis_metrics, first_touch_percentiles

__all__ = ["AnalysisMetrics", "FirstTouch", "compute_analysis_metrics", "first_touch_percentiles"]
