"""Numeric utilities for commit analytics."""

from .scales import Scales
from .statistics import Statistics

__all__ = ["Scales", "Statistics"]
