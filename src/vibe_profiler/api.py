"""Public API for the Vibe Coding Profiler.

One call runs the whole per-repository pipeline: normalize, classify,
segment, score and match a persona.

Example:
    >>> from vibe_profiler import analyze_commits
    >>>
    >>> analysis = analyze_commits(records)
    >>> analysis.persona.id
    'guardrailed_viber'
    >>> analysis.axes.automation_heaviness.score
    72
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from .analysis.metrics import AnalysisMetrics, compute_analysis_metrics
from .attribution.metrics import AIToolMetrics, compute_ai_tool_metrics
from .axes.models import VibeAxes
from .axes.scoring import compute_axes
from .commits.models import sort_by_committer_date
from .commits.normalizer import normalize_commits
from .config import DEFAULT_THRESHOLDS, ThresholdConfig
from .logging_config import get_logger
from .personas.engine import detect_persona
from .personas.models import Persona
from .personas.rules import PERSONA_RULES, PersonaRule
from .profile.models import FullAxisRecord, RepoInsightSummary
from .temporal.episodes import build_episodes
from .temporal.models import Episode, TimingInsights
from .temporal.rhythm import compute_timing_insights

logger = get_logger(__name__)


@dataclass(frozen=True)
class RepoAnalysis:
    """Everything derived from one repository's commit history."""

    metrics: AnalysisMetrics
    episodes: tuple[Episode, ...]
    ai_tools: AIToolMetrics
    timing: TimingInsights
    axes: VibeAxes
    persona: Persona

    @property
    def commit_count(self) -> int:
        return self.metrics.total_commits

    def to_dict(self) -> dict[str, Any]:
        return {
            "commit_count": self.commit_count,
            "axes": self.axes.to_dict(),
            "persona": self.persona.to_dict(),
            "ai_tools": self.ai_tools.to_dict(),
            "timing": self.timing.to_dict(),
            "metrics": self.metrics.to_dict(),
            "episodes": [e.to_dict() for e in self.episodes],
        }


def analyze_commits(
    records: Iterable[Any],
    thresholds: Optional[ThresholdConfig] = None,
    rules: Sequence[PersonaRule] = PERSONA_RULES,
    total_commits: Optional[int] = None,
) -> RepoAnalysis:
    """Analyze one repository's commits.

    Args:
        records: Raw commit records of any supported host shape, or
            ``CommitEvent`` values
        thresholds: Policy constants (defaults to ``DEFAULT_THRESHOLDS``)
        rules: Persona rule table, in precedence order
        total_commits: Denominator for the AI collaboration rate when
            ``records`` is a subset of the repository

    Returns:
        RepoAnalysis with metrics, episodes, AI metrics, timing, axes and persona

    Raises:
        MalformedCommitError: If a record cannot be interpreted
        InvalidTimestampError: If a record's dates cannot be parsed
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    commits = sort_by_committer_date(normalize_commits(records))

    metrics = compute_analysis_metrics(commits)
    episodes = build_episodes(commits, thresholds=thresholds)
    ai_tools = compute_ai_tool_metrics(commits, total_commits, thresholds)
    timing = compute_timing_insights(commits, thresholds)
    axes = compute_axes(metrics, episodes, ai_tools, thresholds)
    persona = detect_persona(axes, metrics.total_commits, rules, thresholds)

    logger.info(
        "Analyzed %d commits in %d episodes: persona=%s (%s)",
        metrics.total_commits,
        len(episodes),
        persona.id,
        persona.confidence,
    )
    return RepoAnalysis(
        metrics=metrics,
        episodes=tuple(episodes),
        ai_tools=ai_tools,
        timing=timing,
        axes=axes,
        persona=persona,
    )


def summarize_analysis(
    analysis: RepoAnalysis, job_id: str, repo_name: str, analyzed_at: str
) -> RepoInsightSummary:
    """Freeze an analysis into the summary record that profiles aggregate."""
    return RepoInsightSummary(
        job_id=job_id,
        repo_name=repo_name,
        commit_count=analysis.commit_count,
        axes_record=FullAxisRecord(analysis.axes),
        persona=analysis.persona,
        analyzed_at=analyzed_at,
        ai_tools=analysis.ai_tools,
    )
