"""Trailer parsing and AI-tool attribution."""

from .metrics import AIToolMetrics, ToolUsage, compute_ai_tool_metrics, merge_ai_tool_metrics
from .tools import AI_TOOL_FINGERPRINTS, ai_tools_for_trailers, identify_ai_tool, identify_ai_tools
from .trailers import Trailer, parse_trailers

__all__ = [
    "AIToolMetrics",
    "AI_TOOL_FINGERPRINTS",
    "ToolUsage",
    "Trailer",
    "ai_tools_for_trailers",
    "compute_ai_tool_metrics",
    "identify_ai_tool",
    "identify_ai_tools",
    "merge_ai_tool_metrics",
    "parse_trailers",
]
