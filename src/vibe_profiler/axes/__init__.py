"""Behavioral axes and their scoring."""

from .models import (
    AXIS_KEYS,
    AXIS_LABELS,
    AXIS_LETTERS,
    LETTER_AXES,
    NEUTRAL_SCORE,
    AxisScore,
    VibeAxes,
    to_level,
)
from .scoring import compute_axes

__all__ = [
    "AXIS_KEYS",
    "AXIS_LABELS",
    "AXIS_LETTERS",
    "LETTER_AXES",
    "NEUTRAL_SCORE",
    "AxisScore",
    "VibeAxes",
    "compute_axes",
    "to_level",
]
