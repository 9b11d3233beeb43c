"""Declarative persona rule table.

A rule is an ordered conjunction of per-axis threshold predicates plus the
axes its match score is averaged from. The table is plain data: it can be
serialized, versioned and loaded from JSON without touching the
interpreter in ``engine.py``. Table order is the precedence order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from ..axes.models import AXIS_KEYS, AXIS_LETTERS
from ..exceptions import InvalidConfigError
from ..math import Scales


@dataclass(frozen=True)
class AtLeast:
    """``axis >= value``"""

    axis: str
    value: int

    @property
    def bounds(self) -> tuple[int, int]:
        return self.value, 100

    @property
    def label(self) -> str:
        return f"{AXIS_LETTERS[self.axis]}>={self.value}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "at_least", "axis": self.axis, "value": self.value}


@dataclass(frozen=True)
class AtMost:
    """``axis <= value``"""

    axis: str
    value: int

    @property
    def bounds(self) -> tuple[int, int]:
        return 0, self.value

    @property
    def label(self) -> str:
        return f"{AXIS_LETTERS[self.axis]}<={self.value}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "at_most", "axis": self.axis, "value": self.value}


@dataclass(frozen=True)
class Between:
    """``low <= axis <= high``"""

    axis: str
    low: int
    high: int

    @property
    def bounds(self) -> tuple[int, int]:
        return self.low, self.high

    @property
    def label(self) -> str:
        return f"{AXIS_LETTERS[self.axis]} in [{self.low},{self.high}]"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "between", "axis": self.axis, "low": self.low, "high": self.high}


Predicate = Union[AtLeast, AtMost, Between]


def holds(predicate: Predicate, value: int) -> bool:
    low, high = predicate.bounds
    return low <= value <= high


def margin(predicate: Predicate, value: int) -> int:
    """Points by which ``value`` clears the predicate (negative when it fails).

    Only the bounds the predicate actually constrains count: the implicit
    0 and 100 of an open-ended threshold are not a margin.
    """
    if isinstance(predicate, AtLeast):
        return value - predicate.value
    if isinstance(predicate, AtMost):
        return predicate.value - value
    return min(value - predicate.low, predicate.high - value)


@dataclass(frozen=True)
class ScoreTerm:
    """One term of a rule's match score: the max of ``axes``, optionally inverted."""

    axes: tuple[str, ...]
    inverted: bool = False

    def value(self, scores: Mapping[str, int]) -> int:
        best = max(scores[a] for a in self.axes)
        return 100 - best if self.inverted else best

    def to_dict(self) -> dict[str, Any]:
        return {"axes": list(self.axes), "inverted": self.inverted}


@dataclass(frozen=True)
class PersonaRule:
    id: str
    name: str
    tagline: str
    predicates: tuple[Predicate, ...]
    score_terms: tuple[ScoreTerm, ...] = ()

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(p.label for p in self.predicates)

    @property
    def axes(self) -> frozenset[str]:
        return frozenset(p.axis for p in self.predicates)

    def matches(self, scores: Mapping[str, int]) -> bool:
        return all(holds(p, scores[p.axis]) for p in self.predicates)

    def score(self, scores: Mapping[str, int]) -> int:
        """Mean of the score terms; defaults to one term per predicate.

        ``AtMost`` predicates contribute the inverted axis so that a deep
        match always scores high.
        """
        terms = self.score_terms or tuple(
            ScoreTerm((p.axis,), inverted=isinstance(p, AtMost)) for p in self.predicates
        )
        return Scales.round_half_up(sum(t.value(scores) for t in terms) / len(terms))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tagline": self.tagline,
            "predicates": [p.to_dict() for p in self.predicates],
            "score_terms": [t.to_dict() for t in self.score_terms],
        }


@dataclass(frozen=True)
class PersonaIdentity:
    id: str
    name: str
    tagline: str


A, B, C, D, E, F = AXIS_KEYS

PERSONA_RULES: tuple[PersonaRule, ...] = (
    PersonaRule(
        id="prompt_sprinter",
        name="Vibe Prototyper",
        tagline="You build to think: code is your sketchpad.",
        predicates=(AtLeast(A, 70), AtLeast(C, 65), AtMost(B, 39), AtMost(D, 44)),
    ),
    PersonaRule(
        id="guardrailed_viber",
        name="Test-First Validator",
        tagline="You lean on tests and safety nets before big changes.",
        predicates=(AtLeast(A, 65), AtLeast(B, 65), AtLeast(C, 40)),
    ),
    PersonaRule(
        id="spec_first_director",
        name="Spec-Driven Architect",
        tagline="Plans thoroughly before touching code; constraints show up early and often.",
        predicates=(AtLeast(D, 70), AtLeast(B, 55), AtLeast(A, 40)),
    ),
    PersonaRule(
        id="vertical_slice_shipper",
        name="Agent Orchestrator",
        tagline="Coordinates tools and assistants; breaks work into structured moves.",
        predicates=(AtLeast(E, 70), AtLeast(A, 60)),
        score_terms=(ScoreTerm((E,)), ScoreTerm((A,)), ScoreTerm((C, F))),
    ),
    PersonaRule(
        id="fix_loop_hacker",
        name="Hands-On Debugger",
        tagline="You move fast through triage and fix loops, refining in tight cycles.",
        predicates=(AtLeast(C, 80), AtLeast(F, 60)),
        score_terms=(ScoreTerm((C,)), ScoreTerm((F,)), ScoreTerm((B,), inverted=True)),
    ),
    PersonaRule(
        id="rapid_risk_taker",
        name="Rapid Risk-Taker",
        tagline="You vibe with AI and ship fast; guardrails can wait.",
        predicates=(AtLeast(A, 65), AtMost(B, 44), AtMost(D, 49), AtLeast(F, 40)),
    ),
)

FALLBACK_PERSONA = PersonaIdentity(
    id="balanced_builder",
    name="Reflective Balancer",
    tagline="You balance exploration, guardrails, and shipping rhythm.",
)


def _axis(value: Any) -> str:
    if value in AXIS_KEYS:
        return value
    for key, letter in AXIS_LETTERS.items():
        if value == letter:
            return key
    raise InvalidConfigError("axis", value, f"expected one of {', '.join(AXIS_KEYS)}")


def predicate_from_dict(data: Mapping[str, Any]) -> Predicate:
    kind = data.get("kind")
    axis = _axis(data.get("axis"))
    if kind == "at_least":
        return AtLeast(axis, int(data["value"]))
    if kind == "at_most":
        return AtMost(axis, int(data["value"]))
    if kind == "between":
        return Between(axis, int(data["low"]), int(data["high"]))
    raise InvalidConfigError("kind", kind, "expected at_least, at_most or between")


def rule_from_dict(data: Mapping[str, Any]) -> PersonaRule:
    return PersonaRule(
        id=data["id"],
        name=data["name"],
        tagline=data.get("tagline", ""),
        predicates=tuple(predicate_from_dict(p) for p in data.get("predicates") or []),
        score_terms=tuple(
            ScoreTerm(tuple(_axis(a) for a in t["axes"]), bool(t.get("inverted", False)))
            for t in data.get("score_terms") or []
        ),
    )


def validate_rules(rules: Sequence[PersonaRule]) -> None:
    """Reject tables the interpreter cannot evaluate consistently.

    Raises:
        InvalidConfigError: On duplicate ids, empty rules, out-of-range or
            inverted thresholds, or a rule reusing the fallback id
    """
    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise InvalidConfigError("rule.id", rule.id, "duplicate rule id")
        if rule.id == FALLBACK_PERSONA.id:
            raise InvalidConfigError("rule.id", rule.id, "reserved for the fallback persona")
        seen.add(rule.id)
        if not rule.predicates:
            raise InvalidConfigError(f"{rule.id}.predicates", "[]", "a rule needs predicates")
        for predicate in rule.predicates:
            low, high = predicate.bounds
            if not 0 <= low <= high <= 100:
                raise InvalidConfigError(
                    f"{rule.id}.{predicate.label}", f"[{low}, {high}]", "bounds must lie in [0, 100]"
                )
        for term in rule.score_terms:
            if not term.axes or any(a not in AXIS_KEYS for a in term.axes):
                raise InvalidConfigError(f"{rule.id}.score_terms", term.axes, "unknown axis")


def load_rules(data: Iterable[Mapping[str, Any]]) -> tuple[PersonaRule, ...]:
    """Build and validate a rule table from its serialized form."""
    rules = tuple(rule_from_dict(d) for d in data)
    validate_rules(rules)
    return rules
