"""Normalized commit record shared by every analysis stage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CommitEvent:
    """One commit in host-independent form.

    Size fields are 0 when the source host does not report diff stats, and
    ``file_paths`` is empty when it does not report paths. Downstream code
    treats all-zero sizes as "unknown", never as an error.
    """

    sha: str
    message: str
    author_date: datetime  # aware, UTC
    committer_date: datetime  # aware, UTC; drives ordering
    author_email: str = ""
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0
    parents: tuple[str, ...] = ()
    file_paths: tuple[str, ...] = ()

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0].strip()

    @property
    def body(self) -> str:
        parts = self.message.split("\n", 1)
        return parts[1].strip() if len(parts) > 1 else ""

    @property
    def changed_lines(self) -> int:
        return self.additions + self.deletions

    @property
    def has_stats(self) -> bool:
        return self.changed_lines > 0

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def timestamp(self) -> float:
        """Committer time as unix seconds."""
        return self.committer_date.timestamp()

    def to_dict(self) -> dict[str, Any]:
        return {
            "sha": self.sha,
            "message": self.message,
            "author_date": self.author_date.isoformat(),
            "committer_date": self.committer_date.isoformat(),
            "author_email": self.author_email,
            "additions": self.additions,
            "deletions": self.deletions,
            "files_changed": self.files_changed,
            "parents": list(self.parents),
            "file_paths": list(self.file_paths),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommitEvent:
        """Rebuild from ``to_dict`` output (or any canonical-shape record)."""
        from .normalizer import normalize_commit

        return normalize_commit(data)


def sort_by_committer_date(commits: list[CommitEvent]) -> list[CommitEvent]:
    """Stable ascending sort on committer date (ties keep input order)."""
    return sorted(commits, key=lambda c: c.committer_date)
