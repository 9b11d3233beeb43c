"""Persona rule interpreter.

Walks the rule table in declared order and returns the first rule whose
predicates all hold. When none does, the fallback persona is returned with
diagnostics describing the smallest axis change that would have produced a
real match.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Optional

from ..axes.models import AXIS_KEYS, AXIS_LABELS, AXIS_LETTERS, VibeAxes
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..math import Scales
from .models import AxisChange, NearestRule, Persona, PersonaDiagnostics, RuleEvaluation
from .rules import FALLBACK_PERSONA, PERSONA_RULES, PersonaRule, holds, margin

logger = get_logger(__name__)

CAVEATS: tuple[str, ...] = (
    "Inferred from commit metadata only, not from prompts, IDE telemetry or source code.",
    "Unpushed local work and private discussions are not visible.",
)

# Axis scores at or above / below these are called out in fallback patterns
PATTERN_HIGH = 60
PATTERN_LOW = 40


def evaluate_rule(rule: PersonaRule, scores: Mapping[str, int]) -> RuleEvaluation:
    satisfied = tuple(p.label for p in rule.predicates if holds(p, scores[p.axis]))
    failed = tuple(p.label for p in rule.predicates if not holds(p, scores[p.axis]))
    return RuleEvaluation(
        rule_id=rule.id,
        name=rule.name,
        satisfied=satisfied,
        failed=failed,
        satisfied_ratio=round(len(satisfied) / len(rule.predicates), 4),
        score=rule.score(scores),
    )


def nearest_change(rule: PersonaRule, scores: Mapping[str, int]) -> Optional[NearestRule]:
    """Smallest per-axis moves that satisfy every predicate of ``rule``.

    Predicates on the same axis are intersected; None when they contradict.
    """
    bounds: dict[str, tuple[int, int]] = {}
    for predicate in rule.predicates:
        low, high = predicate.bounds
        current_low, current_high = bounds.get(predicate.axis, (0, 100))
        bounds[predicate.axis] = (max(low, current_low), min(high, current_high))

    changes = []
    for axis in AXIS_KEYS:
        if axis not in bounds:
            continue
        low, high = bounds[axis]
        if low > high:
            return None
        current = scores[axis]
        target = int(Scales.clamp(current, low, high))
        if target != current:
            changes.append(AxisChange(axis, AXIS_LETTERS[axis], current, target))

    return NearestRule(
        rule_id=rule.id,
        name=rule.name,
        points_needed=sum(abs(c.delta) for c in changes),
        changes=tuple(changes),
    )


def _describe_pattern(scores: Mapping[str, int]) -> str:
    high = [f"{AXIS_LETTERS[k]}={scores[k]}" for k in AXIS_KEYS if scores[k] >= PATTERN_HIGH]
    low = [f"{AXIS_LETTERS[k]}={scores[k]}" for k in AXIS_KEYS if scores[k] < PATTERN_LOW]
    parts = []
    if high:
        parts.append(f"high: {', '.join(high)}")
    if low:
        parts.append(f"low: {', '.join(low)}")
    return "; ".join(parts) if parts else "all axes mid-range"


def _suggestion(nearest: Optional[NearestRule], pattern: str) -> str:
    if nearest is None:
        return (
            f"No persona rule can be reached from these axes ({pattern}). "
            "Consider adding a rule for this pattern."
        )
    moves = []
    for change in nearest.changes:
        verb = "raise" if change.delta > 0 else "lower"
        moves.append(
            f"{verb} {AXIS_LABELS[change.axis]} ({change.letter}) "
            f"from {change.current} to {change.target}"
        )
    return (
        f"Closest rule is {nearest.name} ({nearest.rule_id}), {nearest.points_needed} points away: "
        f"{'; '.join(moves)}. Axis pattern: {pattern}."
    )


def build_diagnostics(
    scores: Mapping[str, int], rules: Sequence[PersonaRule] = PERSONA_RULES
) -> PersonaDiagnostics:
    evaluations = tuple(evaluate_rule(rule, scores) for rule in rules)
    near_misses = tuple(
        sorted(
            (e for e in evaluations if 0.5 <= e.satisfied_ratio < 1.0),
            key=lambda e: -e.satisfied_ratio,
        )
    )

    candidates = [c for c in (nearest_change(rule, scores) for rule in rules) if c is not None]
    # min() keeps the first of equal candidates, i.e. table order
    nearest = min(candidates, key=lambda c: c.points_needed) if candidates else None

    pattern = _describe_pattern(scores)
    return PersonaDiagnostics(
        axes={AXIS_LETTERS[k]: scores[k] for k in AXIS_KEYS},
        suggestion=_suggestion(nearest, pattern),
        near_misses=near_misses,
        rule_evaluations=evaluations,
        nearest_rule=nearest,
        pattern=pattern,
    )


def _match_confidence(
    rule: PersonaRule,
    scores: Mapping[str, int],
    commit_count: Optional[int],
    thresholds: ThresholdConfig,
) -> str:
    deep = sum(
        1 for p in rule.predicates if margin(p, scores[p.axis]) >= thresholds.confidence_margin_points
    )
    total = len(rule.predicates)
    if deep == total:
        confidence = "high"
    elif deep * 2 >= total:
        confidence = "medium"
    else:
        confidence = "low"

    if commit_count is not None and commit_count < thresholds.low_volume_commits:
        return "low"
    return confidence


def _fallback_confidence(commit_count: Optional[int], thresholds: ThresholdConfig) -> str:
    if commit_count is None:
        return "low"
    if commit_count >= thresholds.fallback_high_commits:
        return "high"
    if commit_count >= thresholds.fallback_medium_commits:
        return "medium"
    return "low"


def _why(axes: VibeAxes, referenced: frozenset[str], limit: int) -> tuple[str, ...]:
    lines: list[str] = []
    for key in AXIS_KEYS:
        if key not in referenced:
            continue
        for line in axes[key].why:
            if line not in lines:
                lines.append(line)
    return tuple(lines[:limit])


def match_rule(
    scores: Mapping[str, int], rules: Sequence[PersonaRule] = PERSONA_RULES
) -> Optional[PersonaRule]:
    """First rule in table order whose predicates all hold, or None."""
    for rule in rules:
        if rule.matches(scores):
            return rule
    return None


def detect_persona(
    axes: VibeAxes,
    commit_count: Optional[int] = None,
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> Persona:
    """Match a persona against six axis scores.

    Args:
        axes: The evaluated axes
        commit_count: Commits behind the axes; drives confidence. None
            (synthetic vectors) means no volume evidence.
        rules: Ordered rule table; first full match wins
        thresholds: Confidence margins and volume bands

    Returns:
        The matched persona, or the fallback persona carrying diagnostics
    """
    scores = axes.scores()

    rule = match_rule(scores, rules)
    if rule is not None:
        persona = Persona(
            id=rule.id,
            name=rule.name,
            tagline=rule.tagline,
            confidence=_match_confidence(rule, scores, commit_count, thresholds),
            score=rule.score(scores),
            matched_rules=rule.labels,
            why=_why(axes, rule.axes, thresholds.max_why_items),
            caveats=CAVEATS,
        )
        logger.debug("Persona %s matched (%s)", rule.id, ", ".join(rule.labels))
        return persona

    diagnostics = build_diagnostics(scores, rules)
    logger.debug("No persona rule matched %s; using fallback", diagnostics.axes)
    return Persona(
        id=FALLBACK_PERSONA.id,
        name=FALLBACK_PERSONA.name,
        tagline=FALLBACK_PERSONA.tagline,
        confidence=_fallback_confidence(commit_count, thresholds),
        score=Scales.round_half_up(sum(scores.values()) / len(scores)),
        matched_rules=(),
        why=tuple(axes[k].why[0] for k in AXIS_KEYS if axes[k].why)[: thresholds.max_why_items],
        caveats=CAVEATS,
        diagnostics=diagnostics,
    )
