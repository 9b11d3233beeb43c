"""Axis score records: one ``AxisScore`` per behavioral axis, six per ``VibeAxes``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig

AUTOMATION = "automation_heaviness"
GUARDRAIL = "guardrail_strength"
ITERATION = "iteration_loop_intensity"
PLANNING = "planning_signal"
SURFACE = "surface_area_per_change"
RHYTHM = "shipping_rhythm"

AXIS_KEYS: tuple[str, ...] = (AUTOMATION, GUARDRAIL, ITERATION, PLANNING, SURFACE, RHYTHM)

# Short letters used in rule labels ("A>=70") and diagnostics
AXIS_LETTERS: dict[str, str] = dict(zip(AXIS_KEYS, "ABCDEF"))
LETTER_AXES: dict[str, str] = {letter: key for key, letter in AXIS_LETTERS.items()}

AXIS_LABELS: dict[str, str] = {
    AUTOMATION: "Automation intensity",
    GUARDRAIL: "Guardrail strength",
    ITERATION: "Iteration-loop intensity",
    PLANNING: "Planning signal",
    SURFACE: "Change surface area",
    RHYTHM: "Shipping rhythm",
}

LEVELS = ("low", "medium", "high")
NEUTRAL_SCORE = 50


def to_level(score: int, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    """Map a 0-100 score onto the low/medium/high bands."""
    if score < thresholds.level_medium_from:
        return "low"
    if score < thresholds.level_high_from:
        return "medium"
    return "high"


@dataclass(frozen=True)
class AxisScore:
    score: int
    level: str
    why: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValueError(f"axis score must be an int, got {self.score!r}")
        if not 0 <= self.score <= 100:
            raise ValueError(f"axis score must be in [0, 100], got {self.score}")
        if self.level not in LEVELS:
            raise ValueError(f"axis level must be one of {LEVELS}, got {self.level!r}")

    @classmethod
    def of(
        cls,
        score: int,
        why: tuple[str, ...] | list[str] = (),
        thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    ) -> AxisScore:
        """Build from a score, deriving the level from ``thresholds``."""
        clamped = max(0, min(100, int(score)))
        return cls(score=clamped, level=to_level(clamped, thresholds), why=tuple(why))

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "level": self.level, "why": list(self.why)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AxisScore:
        return cls(score=int(data["score"]), level=data["level"], why=tuple(data.get("why") or ()))


@dataclass(frozen=True)
class VibeAxes:
    """The six axis scores of one evaluation; never partial."""

    automation_heaviness: AxisScore
    guardrail_strength: AxisScore
    iteration_loop_intensity: AxisScore
    planning_signal: AxisScore
    surface_area_per_change: AxisScore
    shipping_rhythm: AxisScore

    def __getitem__(self, key: str) -> AxisScore:
        if key not in AXIS_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def items(self) -> list[tuple[str, AxisScore]]:
        return [(key, getattr(self, key)) for key in AXIS_KEYS]

    def scores(self) -> dict[str, int]:
        return {key: axis.score for key, axis in self.items()}

    def letters(self) -> dict[str, int]:
        """Scores keyed by short letter (A-F)."""
        return {AXIS_LETTERS[key]: axis.score for key, axis in self.items()}

    def to_dict(self) -> dict[str, Any]:
        return {key: axis.to_dict() for key, axis in self.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VibeAxes:
        missing = [key for key in AXIS_KEYS if key not in data]
        if missing:
            raise ValueError(f"axes record is missing {', '.join(missing)}")
        return cls(**{key: AxisScore.from_dict(data[key]) for key in AXIS_KEYS})

    @classmethod
    def from_scores(
        cls,
        scores: Mapping[str, int],
        why: Optional[Mapping[str, tuple[str, ...]]] = None,
        thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    ) -> VibeAxes:
        """Build from bare scores keyed by axis name or letter.

        Axes without their own evidence get a line citing the score itself.
        """
        values: dict[str, AxisScore] = {}
        for key in AXIS_KEYS:
            if key in scores:
                score = scores[key]
            elif AXIS_LETTERS[key] in scores:
                score = scores[AXIS_LETTERS[key]]
            else:
                raise ValueError(f"no score given for {key}")
            evidence = (why or {}).get(key) or (f"{AXIS_LABELS[key]} score = {int(score)}",)
            values[key] = AxisScore.of(int(score), evidence, thresholds)
        return cls(**values)

    @classmethod
    def neutral(
        cls, reason: str, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
    ) -> VibeAxes:
        """All axes at the neutral score, each citing ``reason``."""
        evidence = (f"{reason}; score held at neutral {NEUTRAL_SCORE}",)
        return cls(**{key: AxisScore.of(NEUTRAL_SCORE, evidence, thresholds) for key in AXIS_KEYS})
