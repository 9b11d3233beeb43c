"""
Vibe Coding Profiler - behavioral profiles from commit history

Turns a developer's commits into six axis scores, a persona with evidence
and diagnostics, AI-collaboration metrics, a unified cross-repository
profile and a k-anonymous community rollup. Commit metadata only: no
source code, prompts or telemetry are read.
"""

__version__ = "0.1.0"

from .api import RepoAnalysis, analyze_commits, summarize_analysis
from .axes import AxisScore, VibeAxes
from .community import CommunitySnapshot, compute_community_rollup
from .coverage import CoverageReport, run_coverage_probe
from .personas import Persona, detect_persona
from .profile import RepoInsightSummary, UnifiedProfile, aggregate_profile

__all__ = [
    "analyze_commits",  # Main entry point
    "summarize_analysis",
    "aggregate_profile",
    "compute_community_rollup",
    "run_coverage_probe",
    "detect_persona",
    "RepoAnalysis",
    "AxisScore",
    "VibeAxes",
    "Persona",
    "RepoInsightSummary",
    "UnifiedProfile",
    "CommunitySnapshot",
    "CoverageReport",
]
