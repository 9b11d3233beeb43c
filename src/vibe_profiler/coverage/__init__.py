"""Offline coverage testing of the persona rule table."""

from .grid import AxisGrid
from .models import CoverageReport, FallbackSample, LiveProfile, UserFallback
from .probe import check_live_profiles, probe_vector, run_coverage_probe

__all__ = [
    "AxisGrid",
    "CoverageReport",
    "FallbackSample",
    "LiveProfile",
    "UserFallback",
    "check_live_profiles",
    "probe_vector",
    "run_coverage_probe",
]
