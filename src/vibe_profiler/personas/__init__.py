"""Persona rule table and interpreter."""

from .engine import build_diagnostics, detect_persona, evaluate_rule, match_rule, nearest_change
from .models import AxisChange, NearestRule, Persona, PersonaDiagnostics, RuleEvaluation
from .rules import (
    FALLBACK_PERSONA,
    PERSONA_RULES,
    AtLeast,
    AtMost,
    Between,
    PersonaRule,
    ScoreTerm,
    load_rules,
    validate_rules,
)

__all__ = [
    "FALLBACK_PERSONA",
    "PERSONA_RULES",
    "AtLeast",
    "AtMost",
    "AxisChange",
    "Between",
    "NearestRule",
    "Persona",
    "PersonaDiagnostics",
    "PersonaRule",
    "RuleEvaluation",
    "ScoreTerm",
    "build_diagnostics",
    "detect_persona",
    "evaluate_rule",
    "load_rules",
    "match_rule",
    "nearest_change",
    "validate_rules",
]
