"""Analysis-related exceptions: malformed commits, bad timestamps, empty input."""

from typing import Any, Optional

from .base import VibeProfilerError


class AnalysisError(VibeProfilerError):
    """Base class for analysis-related errors."""
    pass


class MalformedCommitError(AnalysisError):
    """Raised when a commit record cannot be interpreted at all."""

    def __init__(self, field: str, reason: str, sha: Optional[str] = None):
        details = {"field": field, "reason": reason}
        if sha:
            details["sha"] = sha
        super().__init__(f"Malformed commit record: {field}", details=details)
        self.field = field
        self.reason = reason
        self.sha = sha


class InvalidTimestampError(MalformedCommitError):
    """Raised when a commit date is missing or cannot be parsed to an instant."""

    def __init__(self, field: str, value: Any, sha: Optional[str] = None):
        super().__init__(field, f"unparsable timestamp {value!r}", sha=sha)
        self.value = value


class EmptyProfileError(AnalysisError):
    """Raised when a profile is requested from zero repository summaries."""

    def __init__(self, reason: str = "no repository summaries to aggregate"):
        super().__init__(f"Cannot build profile: {reason}", details={"reason": reason})
        self.reason = reason
