"""Persona result records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class RuleEvaluation:
    """How one rule fared against an axis vector."""

    rule_id: str
    name: str
    satisfied: tuple[str, ...]
    failed: tuple[str, ...]
    satisfied_ratio: float
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "name": self.name,
            "satisfied": list(self.satisfied),
            "failed": list(self.failed),
            "satisfied_ratio": self.satisfied_ratio,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RuleEvaluation:
        return cls(
            rule_id=data["rule_id"],
            name=data["name"],
            satisfied=tuple(data.get("satisfied") or ()),
            failed=tuple(data.get("failed") or ()),
            satisfied_ratio=float(data["satisfied_ratio"]),
            score=int(data["score"]),
        )


@dataclass(frozen=True)
class AxisChange:
    axis: str
    letter: str
    current: int
    target: int

    @property
    def delta(self) -> int:
        return self.target - self.current

    def to_dict(self) -> dict[str, Any]:
        return {
            "axis": self.axis,
            "letter": self.letter,
            "current": self.current,
            "target": self.target,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AxisChange:
        return cls(
            axis=data["axis"],
            letter=data["letter"],
            current=int(data["current"]),
            target=int(data["target"]),
        )


@dataclass(frozen=True)
class NearestRule:
    """The rule reachable with the fewest total axis points moved."""

    rule_id: str
    name: str
    points_needed: int
    changes: tuple[AxisChange, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "name": self.name,
            "points_needed": self.points_needed,
            "changes": [c.to_dict() for c in self.changes],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NearestRule:
        return cls(
            rule_id=data["rule_id"],
            name=data["name"],
            points_needed=int(data["points_needed"]),
            changes=tuple(AxisChange.from_dict(c) for c in data.get("changes") or ()),
        )


@dataclass(frozen=True)
class PersonaDiagnostics:
    """Why no rule matched, and what would have changed that."""

    axes: dict[str, int]  # letter -> score snapshot
    suggestion: str
    near_misses: tuple[RuleEvaluation, ...] = ()
    rule_evaluations: tuple[RuleEvaluation, ...] = ()
    nearest_rule: Optional[NearestRule] = None
    pattern: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "axes": dict(self.axes),
            "suggestion": self.suggestion,
            "near_misses": [r.to_dict() for r in self.near_misses],
            "rule_evaluations": [r.to_dict() for r in self.rule_evaluations],
            "nearest_rule": self.nearest_rule.to_dict() if self.nearest_rule else None,
            "pattern": self.pattern,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PersonaDiagnostics:
        nearest = data.get("nearest_rule")
        return cls(
            axes={k: int(v) for k, v in (data.get("axes") or {}).items()},
            suggestion=data.get("suggestion", ""),
            near_misses=tuple(RuleEvaluation.from_dict(r) for r in data.get("near_misses") or ()),
            rule_evaluations=tuple(
                RuleEvaluation.from_dict(r) for r in data.get("rule_evaluations") or ()
            ),
            nearest_rule=NearestRule.from_dict(nearest) if nearest else None,
            pattern=data.get("pattern", ""),
        )


@dataclass(frozen=True)
class Persona:
    id: str
    name: str
    tagline: str
    confidence: str  # high | medium | low
    score: int
    matched_rules: tuple[str, ...] = ()
    why: tuple[str, ...] = ()
    caveats: tuple[str, ...] = ()
    diagnostics: Optional[PersonaDiagnostics] = field(default=None)

    @property
    def is_fallback(self) -> bool:
        return self.diagnostics is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tagline": self.tagline,
            "confidence": self.confidence,
            "score": self.score,
            "matched_rules": list(self.matched_rules),
            "why": list(self.why),
            "caveats": list(self.caveats),
            "diagnostics": self.diagnostics.to_dict() if self.diagnostics else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Persona:
        diagnostics = data.get("diagnostics")
        return cls(
            id=data["id"],
            name=data["name"],
            tagline=data.get("tagline", ""),
            confidence=data.get("confidence", "low"),
            score=int(data.get("score", 0)),
            matched_rules=tuple(data.get("matched_rules") or ()),
            why=tuple(data.get("why") or ()),
            caveats=tuple(data.get("caveats") or ()),
            diagnostics=PersonaDiagnostics.from_dict(diagnostics) if diagnostics else None,
        )
