"""Normalize heterogeneous commit records into ``CommitEvent`` values.

Accepted shapes:
    canonical   sha / message / author_date / committer_date / ... (snake_case)
    client      authoredAt / committedAt / authorEmail / filesChanged / filePaths
    github      REST commit object: nested ``commit``, ``stats``, ``files``
    gitlab      authored_date / committed_date / parent_ids / stats
    bitbucket   hash / date / author.raw / parents[].hash (no diff stats)

Dates must parse; sizes default to 0 and paths to empty when the host
cannot supply them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from ..exceptions import InvalidTimestampError, MalformedCommitError
from ..logging_config import get_logger
from .models import CommitEvent

logger = get_logger(__name__)

_FRACTION_RE = re.compile(r"\.(\d+)")
_EMAIL_RE = re.compile(r"<([^>]+)>")


def parse_timestamp(value: Any, field: str, sha: Optional[str] = None) -> datetime:
    """Parse a timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (``Z`` suffix allowed), datetimes (naive ones
    are taken as UTC) and unix seconds.

    Raises:
        InvalidTimestampError: If the value is missing or unparsable
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidTimestampError(field, value, sha=sha)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # fromisoformat on 3.10 only takes 3 or 6 fractional digits
        text = _FRACTION_RE.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidTimestampError(field, value, sha=sha)
    else:
        raise InvalidTimestampError(field, value, sha=sha)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _count(value: Any, field: str, sha: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise MalformedCommitError(field, "expected a count, got a boolean", sha=sha)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise MalformedCommitError(field, f"expected a count, got {value!r}", sha=sha)
    if number < 0:
        raise MalformedCommitError(field, f"negative count {number}", sha=sha)
    return number


def _strings(values: Any, field: str, sha: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise MalformedCommitError(field, "expected a list of strings", sha=sha)
    return tuple(str(v) for v in values if v)


def _build(
    *,
    sha: Any,
    message: Any,
    author_date: Any,
    committer_date: Any,
    author_email: Any,
    additions: Any,
    deletions: Any,
    files_changed: Any,
    parents: Any,
    file_paths: Any,
) -> CommitEvent:
    if not isinstance(sha, str) or not sha.strip():
        raise MalformedCommitError("sha", "missing commit id")
    sha = sha.strip()

    if message is None:
        message = ""
    if not isinstance(message, str):
        raise MalformedCommitError("message", "expected a string", sha=sha)

    # A host that reports only one date gets it on both fields
    if author_date is None and committer_date is None:
        raise InvalidTimestampError("committer_date", None, sha=sha)
    authored = parse_timestamp(
        author_date if author_date is not None else committer_date, "author_date", sha
    )
    committed = parse_timestamp(
        committer_date if committer_date is not None else author_date, "committer_date", sha
    )

    paths = _strings(file_paths, "file_paths", sha)
    files = _count(files_changed, "files_changed", sha) if files_changed is not None else len(paths)

    return CommitEvent(
        sha=sha,
        message=message,
        author_date=authored,
        committer_date=committed,
        author_email=str(author_email or ""),
        additions=_count(additions, "additions", sha),
        deletions=_count(deletions, "deletions", sha),
        files_changed=files,
        parents=_strings(parents, "parents", sha),
        file_paths=paths,
    )


def _from_canonical(raw: Mapping[str, Any]) -> CommitEvent:
    return _build(
        sha=raw.get("sha"),
        message=raw.get("message"),
        author_date=raw.get("author_date"),
        committer_date=raw.get("committer_date"),
        author_email=raw.get("author_email"),
        additions=raw.get("additions"),
        deletions=raw.get("deletions"),
        files_changed=raw.get("files_changed"),
        parents=raw.get("parents"),
        file_paths=raw.get("file_paths"),
    )


def _from_client(raw: Mapping[str, Any]) -> CommitEvent:
    return _build(
        sha=raw.get("sha"),
        message=raw.get("message"),
        author_date=raw.get("authoredAt"),
        committer_date=raw.get("committedAt"),
        author_email=raw.get("authorEmail"),
        additions=raw.get("additions"),
        deletions=raw.get("deletions"),
        files_changed=raw.get("filesChanged"),
        parents=raw.get("parents"),
        file_paths=raw.get("filePaths"),
    )


def _from_github(raw: Mapping[str, Any]) -> CommitEvent:
    commit = raw.get("commit") or {}
    author = commit.get("author") or {}
    committer = commit.get("committer") or {}
    stats = raw.get("stats") or {}
    files = raw.get("files")
    paths = [f.get("filename") for f in files] if isinstance(files, list) else None
    return _build(
        sha=raw.get("sha"),
        message=commit.get("message"),
        author_date=author.get("date"),
        committer_date=committer.get("date"),
        author_email=author.get("email"),
        additions=stats.get("additions"),
        deletions=stats.get("deletions"),
        files_changed=None if paths is not None else raw.get("files_changed"),
        parents=[p.get("sha") for p in raw.get("parents") or []],
        file_paths=paths,
    )


def _from_gitlab(raw: Mapping[str, Any]) -> CommitEvent:
    stats = raw.get("stats") or {}
    return _build(
        sha=raw.get("id"),
        message=raw.get("message"),
        author_date=raw.get("authored_date"),
        committer_date=raw.get("committed_date"),
        author_email=raw.get("author_email"),
        additions=stats.get("additions"),
        deletions=stats.get("deletions"),
        files_changed=None,
        parents=raw.get("parent_ids"),
        file_paths=None,
    )


def _from_bitbucket(raw: Mapping[str, Any]) -> CommitEvent:
    author = raw.get("author") or {}
    email_match = _EMAIL_RE.search(author.get("raw") or "")
    return _build(
        sha=raw.get("hash"),
        message=raw.get("message"),
        author_date=raw.get("date"),
        committer_date=raw.get("date"),
        author_email=email_match.group(1) if email_match else "",
        additions=None,
        deletions=None,
        files_changed=None,
        parents=[p.get("hash") for p in raw.get("parents") or []],
        file_paths=None,
    )


def detect_shape(raw: Mapping[str, Any]) -> str:
    """Name the host shape of a raw commit record."""
    if isinstance(raw.get("commit"), Mapping):
        return "github"
    if "hash" in raw and "sha" not in raw:
        return "bitbucket"
    if "authored_date" in raw or "committed_date" in raw or "parent_ids" in raw:
        return "gitlab"
    if "committedAt" in raw or "authoredAt" in raw:
        return "client"
    return "canonical"


_READERS: dict[str, Callable[[Mapping[str, Any]], CommitEvent]] = {
    "canonical": _from_canonical,
    "client": _from_client,
    "github": _from_github,
    "gitlab": _from_gitlab,
    "bitbucket": _from_bitbucket,
}


def normalize_commit(raw: Any) -> CommitEvent:
    """Normalize one raw commit record of any supported shape.

    Raises:
        MalformedCommitError: If the record is not a mapping or lacks an id
        InvalidTimestampError: If its dates are missing or unparsable
    """
    if isinstance(raw, CommitEvent):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedCommitError("record", f"expected a mapping, got {type(raw).__name__}")
    return _READERS[detect_shape(raw)](raw)


def normalize_commits(records: Iterable[Any]) -> list[CommitEvent]:
    """Normalize a batch, preserving input order."""
    events = [normalize_commit(r) for r in records]
    logger.debug("Normalized %d commit records", len(events))
    return events
