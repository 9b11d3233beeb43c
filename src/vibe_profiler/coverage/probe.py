"""Exhaustive persona-rule coverage probe.

Runs every vector of an ``AxisGrid`` through the rule table and tallies
which persona it lands on. Only vectors that hit the fallback are kept,
and only up to the sample limit, so memory stays flat however large the
grid is. Diagnostics are built for the kept samples only.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from ..axes.models import AXIS_LETTERS, VibeAxes
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..math import Scales
from ..personas.engine import build_diagnostics, detect_persona, match_rule
from ..personas.rules import FALLBACK_PERSONA, PERSONA_RULES, PersonaRule
from .grid import AxisGrid
from .models import CoverageReport, FallbackSample, LiveProfile, UserFallback

logger = get_logger(__name__)


def check_live_profiles(
    profiles: Iterable[LiveProfile],
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> tuple[UserFallback, ...]:
    """Re-run persona detection for real users and keep those on the fallback."""
    fallbacks = []
    for profile in profiles:
        persona = detect_persona(profile.axes, profile.total_commits, rules, thresholds)
        if persona.diagnostics is None:
            continue
        fallbacks.append(
            UserFallback(
                user_id=profile.user_id,
                username=profile.username,
                total_commits=profile.total_commits,
                total_repos=profile.total_repos,
                axes=persona.diagnostics.axes,
                suggestion=persona.diagnostics.suggestion,
            )
        )
    return tuple(fallbacks)


def run_coverage_probe(
    step: int,
    axes: Optional[Sequence[str]] = None,
    fixed: Optional[Mapping[str, int]] = None,
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    live_profiles: Optional[Iterable[LiveProfile]] = None,
    sample_limit: Optional[int] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> CoverageReport:
    """Probe the rule table over a discretized axis grid.

    Args:
        step: Grid spacing in score points, 1-100. The caller owns the
            size trade-off: six axes at step 10 is 11**6 vectors.
        axes: Axes to vary (names or letters); all six by default
        fixed: Values for the axes not being varied (default 50)
        rules: Rule table under test
        live_profiles: Optional real users to cross-check
        sample_limit: Fallback vectors to keep; defaults to
            ``thresholds.coverage_sample_limit``
        thresholds: Confidence bands used when re-checking live profiles

    Raises:
        InvalidConfigError: If the step or axis selection is invalid
    """
    grid = AxisGrid(step, axes, fixed)
    limit = thresholds.coverage_sample_limit if sample_limit is None else sample_limit

    counts: dict[str, int] = {rule.id: 0 for rule in rules}
    counts[FALLBACK_PERSONA.id] = 0
    samples: list[FallbackSample] = []
    total = 0

    for scores in grid:
        total += 1
        rule = match_rule(scores, rules)
        if rule is not None:
            counts[rule.id] += 1
            continue
        counts[FALLBACK_PERSONA.id] += 1
        if len(samples) < limit:
            diagnostics = build_diagnostics(scores, rules)
            samples.append(FallbackSample(diagnostics.axes, diagnostics.suggestion))

    fallback_count = counts[FALLBACK_PERSONA.id]
    real_users = (
        check_live_profiles(live_profiles, rules, thresholds) if live_profiles is not None else None
    )

    report = CoverageReport(
        total_combinations=total,
        fallback_count=fallback_count,
        fallback_percentage=Scales.round_half_up(100 * fallback_count / total) if total else 0,
        persona_counts=counts,
        step_size=step,
        probed_axes=tuple(AXIS_LETTERS[k] for k in grid.axes),
        sample_fallbacks=tuple(samples),
        real_user_fallbacks=real_users,
    )
    logger.info(
        "Coverage probe: %d combinations, %d fallback (%d%%)",
        total,
        fallback_count,
        report.fallback_percentage,
    )
    return report


def probe_vector(scores: Mapping[str, int], rules: Sequence[PersonaRule] = PERSONA_RULES) -> str:
    """Persona id for one synthetic vector (names or letters as keys)."""
    return detect_persona(VibeAxes.from_scores(scores), None, rules).id
