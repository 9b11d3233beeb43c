"""Exception hierarchy for the Vibe Coding Profiler."""

from .analysis import (
    AnalysisError,
    EmptyProfileError,
    InvalidTimestampError,
    MalformedCommitError,
)
from .base import VibeProfilerError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "VibeProfilerError",
    "AnalysisError",
    "MalformedCommitError",
    "InvalidTimestampError",
    "EmptyProfileError",
    "ConfigurationError",
    "InvalidConfigError",
]
