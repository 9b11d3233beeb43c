"""AI-collaboration metrics aggregated from commit trailers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ..commits.models import CommitEvent
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..math import Scales
from .tools import ai_tools_for_trailers, tool_name
from .trailers import parse_trailers

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolUsage:
    tool_id: str
    name: str
    commit_count: int
    percentage: float  # share of AI-assisted commits, 0-100

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_id": self.tool_id,
            "name": self.name,
            "commit_count": self.commit_count,
            "percentage": self.percentage,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolUsage:
        return cls(
            tool_id=data["tool_id"],
            name=data.get("name") or tool_name(data["tool_id"]),
            commit_count=int(data.get("commit_count", 0)),
            percentage=float(data.get("percentage", 0.0)),
        )


@dataclass(frozen=True)
class AIToolMetrics:
    detected: bool
    ai_assisted_commits: int
    ai_collaboration_rate: float  # 0-1 over total_commits
    tool_diversity: int
    tools: tuple[ToolUsage, ...] = field(default_factory=tuple)
    confidence: str = "low"
    total_commits: int = 0

    @property
    def primary_tool(self) -> Optional[ToolUsage]:
        return self.tools[0] if self.tools else None

    def to_dict(self) -> dict[str, Any]:
        primary = self.primary_tool
        return {
            "detected": self.detected,
            "ai_assisted_commits": self.ai_assisted_commits,
            "ai_collaboration_rate": self.ai_collaboration_rate,
            "tool_diversity": self.tool_diversity,
            "tools": [t.to_dict() for t in self.tools],
            "primary_tool": primary.to_dict() if primary else None,
            "confidence": self.confidence,
            "total_commits": self.total_commits,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AIToolMetrics:
        return cls(
            detected=bool(data.get("detected", False)),
            ai_assisted_commits=int(data.get("ai_assisted_commits", 0)),
            ai_collaboration_rate=float(data.get("ai_collaboration_rate", 0.0)),
            tool_diversity=int(data.get("tool_diversity", 0)),
            tools=tuple(ToolUsage.from_dict(t) for t in data.get("tools") or []),
            confidence=data.get("confidence", "low"),
            total_commits=int(data.get("total_commits", 0)),
        )


def ai_confidence(ai_assisted_commits: int, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    if ai_assisted_commits < thresholds.ai_confidence_medium_from:
        return "low"
    if ai_assisted_commits < thresholds.ai_confidence_high_from:
        return "medium"
    return "high"


def _build_metrics(
    tool_counts: Counter,
    order: Sequence[str],
    ai_assisted: int,
    total_commits: int,
    thresholds: ThresholdConfig,
) -> AIToolMetrics:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(order, key=lambda tool_id: -tool_counts[tool_id])
    tools = tuple(
        ToolUsage(
            tool_id=tool_id,
            name=tool_name(tool_id),
            commit_count=tool_counts[tool_id],
            percentage=Scales.share_pct(tool_counts[tool_id], ai_assisted),
        )
        for tool_id in ranked
    )
    rate = round(Scales.clamp01(ai_assisted / total_commits), 4) if total_commits > 0 else 0.0
    return AIToolMetrics(
        detected=ai_assisted > 0,
        ai_assisted_commits=ai_assisted,
        ai_collaboration_rate=rate,
        tool_diversity=len(tools),
        tools=tools,
        confidence=ai_confidence(ai_assisted, thresholds),
        total_commits=total_commits,
    )


def compute_ai_tool_metrics(
    commits: Iterable[Union[CommitEvent, str]],
    total_commits: Optional[int] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> AIToolMetrics:
    """Mine attribution trailers for AI-tool usage.

    Args:
        commits: Commit events or raw messages
        total_commits: Denominator for the collaboration rate; defaults to
            the number of commits given. Callers analyzing a subset pass the
            repository total here.
        thresholds: Confidence bands
    """
    tool_counts: Counter = Counter()
    order: list[str] = []
    seen = 0
    ai_assisted = 0

    for commit in commits:
        seen += 1
        message = commit.message if isinstance(commit, CommitEvent) else commit
        tools = ai_tools_for_trailers(parse_trailers(message))
        if not tools:
            continue
        ai_assisted += 1
        for tool_id in tools:
            if tool_id not in tool_counts:
                order.append(tool_id)
            tool_counts[tool_id] += 1

    denominator = seen if total_commits is None else total_commits
    metrics = _build_metrics(tool_counts, order, ai_assisted, denominator, thresholds)
    logger.debug(
        "AI attribution: %d/%d commits, tools=%s",
        ai_assisted,
        denominator,
        [t.tool_id for t in metrics.tools],
    )
    return metrics


def merge_ai_tool_metrics(
    metrics: Iterable[Union[AIToolMetrics, tuple[AIToolMetrics, int]]],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> AIToolMetrics:
    """Combine per-repository metrics by summing counts over summed denominators.

    Entries may be ``(metrics, commit_count)`` pairs. The count is the
    denominator for records stored without ``total_commits``.
    """
    tool_counts: Counter = Counter()
    order: list[str] = []
    ai_assisted = 0
    total = 0
    for entry in metrics:
        m, commit_count = entry if isinstance(entry, tuple) else (entry, 0)
        ai_assisted += m.ai_assisted_commits
        total += m.total_commits or commit_count
        for usage in m.tools:
            if usage.tool_id not in tool_counts:
                order.append(usage.tool_id)
            tool_counts[usage.tool_id] += usage.commit_count
    return _build_metrics(tool_counts, order, ai_assisted, total, thresholds)
