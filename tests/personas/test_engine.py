"""Tests for persona detection and fallback diagnostics."""

from vibe_profiler.personas import (
    AtLeast,
    AtMost,
    Persona,
    PersonaRule,
    build_diagnostics,
    detect_persona,
    match_rule,
    nearest_change,
)

A = "automation_heaviness"


class TestDetectPersona:
    """Rule selection."""

    def test_first_rule(self, flat_axes):
        """A deep sprinter vector matches with labels and score."""
        persona = detect_persona(flat_axes(A=80, C=75, B=20, D=30))
        assert persona.id == "prompt_sprinter"
        assert persona.matched_rules == ("A>=70", "C>=65", "B<=39", "D<=44")
        assert persona.score == 76
        assert persona.diagnostics is None

    def test_table_order_decides(self, flat_axes):
        """Matches both the guardrail and the spec-first rules; the earlier wins."""
        persona = detect_persona(flat_axes(A=70, B=70, D=80))
        assert persona.id == "guardrailed_viber"

    def test_why_only_cites_referenced_axes(self, flat_axes):
        """Evidence comes from the axes the rule reads."""
        persona = detect_persona(flat_axes(A=80, C=75, B=20, D=30))
        assert "Automation intensity score = 80" in persona.why
        assert "Change surface area score = 50" not in persona.why

    def test_deterministic(self, flat_axes):
        """Same axes and volume, same persona."""
        axes = flat_axes(A=66, B=30, D=40, F=70)
        assert detect_persona(axes, 120) == detect_persona(axes, 120)

    def test_custom_table(self, flat_axes):
        """A caller-supplied table replaces the shipped one."""
        rules = (PersonaRule("steady", "Steady", "", (AtLeast(A, 40), AtMost(A, 60))),)
        assert detect_persona(flat_axes(), rules=rules).id == "steady"


class TestConfidence:
    def test_deep_match_is_high(self, flat_axes):
        """Every predicate cleared by the margin gives high."""
        assert detect_persona(flat_axes(A=80, C=75, B=20, D=30)).confidence == "high"

    def test_shallow_match_is_low(self, flat_axes):
        """Predicates met exactly at their bounds give low."""
        assert detect_persona(flat_axes(A=70, C=65, B=39, D=44)).confidence == "low"

    def test_half_deep_is_medium(self, flat_axes):
        """Half the predicates cleared by the margin gives medium."""
        assert detect_persona(flat_axes(A=80, C=75, B=39, D=44)).confidence == "medium"

    def test_low_volume_caps_confidence(self, flat_axes):
        """Few commits cap a deep match at low."""
        assert detect_persona(flat_axes(A=80, C=75, B=20, D=30), commit_count=5).confidence == "low"

    def test_fallback_confidence_follows_volume(self, flat_axes):
        """Fallback confidence rises with commit volume."""
        axes = flat_axes()
        assert detect_persona(axes).confidence == "low"
        assert detect_persona(axes, 80).confidence == "medium"
        assert detect_persona(axes, 200).confidence == "high"


class TestFallback:
    """Vectors no rule covers."""

    def test_mid_range_falls_back(self, flat_axes):
        """A flat vector gets the fallback with no matched rules."""
        persona = detect_persona(flat_axes())
        assert persona.id == "balanced_builder"
        assert persona.is_fallback
        assert persona.score == 50
        assert persona.matched_rules == ()

    def test_diagnostics(self, flat_axes):
        """The nearest rule and the moves it needs are reported."""
        diagnostics = detect_persona(flat_axes()).diagnostics
        assert diagnostics.axes == {"A": 50, "B": 50, "C": 50, "D": 50, "E": 50, "F": 50}
        assert diagnostics.pattern == "all axes mid-range"
        assert diagnostics.nearest_rule.rule_id == "rapid_risk_taker"
        assert diagnostics.nearest_rule.points_needed == 22
        assert diagnostics.suggestion.startswith(
            "Closest rule is Rapid Risk-Taker (rapid_risk_taker), 22 points away"
        )
        assert len(diagnostics.rule_evaluations) == 6

    def test_near_misses(self, flat_axes):
        """Two of three guardrail predicates hold."""
        diagnostics = build_diagnostics(flat_axes(A=70, B=50, C=50).scores())
        assert "guardrailed_viber" in {e.rule_id for e in diagnostics.near_misses}

    def test_pattern_names_extremes(self, flat_axes):
        """High and low axes are called out."""
        diagnostics = detect_persona(flat_axes(E=90, F=10)).diagnostics
        assert diagnostics.pattern == "high: E=90; low: F=10"

    def test_contradictory_rule_is_unreachable(self, flat_axes):
        """A rule with contradicting bounds has no nearest change."""
        rule = PersonaRule("never", "Never", "", (AtLeast(A, 70), AtMost(A, 40)))
        assert nearest_change(rule, flat_axes().scores()) is None
        persona = detect_persona(flat_axes(), rules=(rule,))
        assert persona.diagnostics.nearest_rule is None
        assert "Consider adding a rule" in persona.diagnostics.suggestion

    def test_round_trip(self, flat_axes):
        """to_dict and from_dict agree, diagnostics included."""
        persona = detect_persona(flat_axes(), 90)
        assert Persona.from_dict(persona.to_dict()) == persona


class TestMatchRule:
    def test_none_when_uncovered(self, flat_axes):
        """No rule for a flat vector."""
        assert match_rule(flat_axes().scores()) is None
