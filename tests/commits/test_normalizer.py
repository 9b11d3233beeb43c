"""Tests for commit normalization across host shapes."""

from datetime import datetime, timezone

import pytest

from vibe_profiler.commits import CommitEvent, detect_shape, normalize_commit, normalize_commits
from vibe_profiler.commits.normalizer import parse_timestamp
from vibe_profiler.exceptions import InvalidTimestampError, MalformedCommitError


class TestParseTimestamp:
    """Timestamps become aware UTC datetimes or are rejected."""

    def test_z_suffix(self):
        """A trailing Z reads as UTC."""
        parsed = parse_timestamp("2025-01-02T03:04:05Z", "committer_date")
        assert parsed == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        """Offsets are converted, not dropped."""
        parsed = parse_timestamp("2025-01-02T05:04:05+02:00", "committer_date")
        assert parsed == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_odd_fraction_digits(self):
        """Fractions longer than microseconds are truncated."""
        parsed = parse_timestamp("2025-01-02T03:04:05.1234567Z", "committer_date")
        assert parsed.microsecond == 123456

    def test_naive_datetime_is_utc(self):
        """A naive datetime is taken as UTC."""
        parsed = parse_timestamp(datetime(2025, 1, 2, 3, 4, 5), "committer_date")
        assert parsed.tzinfo == timezone.utc

    def test_unix_seconds(self):
        """Numbers are unix seconds."""
        assert parse_timestamp(0, "committer_date") == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["yesterday", "", None, True, [2025]])
    def test_unparsable_rejected(self, value):
        """Invalid dates raise rather than being zeroed."""
        with pytest.raises(InvalidTimestampError):
            parse_timestamp(value, "committer_date", sha="abc")


class TestHostShapes:
    """Each supported host shape maps onto CommitEvent."""

    def test_canonical(self):
        """The snake_case shape maps field for field."""
        event = normalize_commit(
            {
                "sha": "abc",
                "message": "feat: x",
                "author_date": "2025-01-01T00:00:00Z",
                "committer_date": "2025-01-01T01:00:00Z",
                "additions": 5,
                "deletions": 1,
                "file_paths": ["a.py", "b.py"],
            }
        )
        assert event.sha == "abc"
        assert event.changed_lines == 6
        assert event.files_changed == 2  # falls back to len(file_paths)
        assert event.committer_date.hour == 1

    def test_client_shape(self):
        """camelCase client records are detected and mapped."""
        raw = {
            "sha": "abc",
            "message": "fix: y",
            "authoredAt": "2025-01-01T00:00:00Z",
            "committedAt": "2025-01-01T00:05:00Z",
            "authorEmail": "a@b.c",
            "filesChanged": 3,
            "filePaths": ["x.ts"],
        }
        assert detect_shape(raw) == "client"
        event = normalize_commit(raw)
        assert event.author_email == "a@b.c"
        assert event.files_changed == 3
        assert event.file_paths == ("x.ts",)

    def test_github_shape(self):
        """GitHub REST commits read the nested commit object."""
        raw = {
            "sha": "abc",
            "commit": {
                "message": "docs: readme",
                "author": {"date": "2025-01-01T00:00:00Z", "email": "dev@example.com"},
                "committer": {"date": "2025-01-01T00:10:00Z"},
            },
            "stats": {"additions": 4, "deletions": 2},
            "files": [{"filename": "README.md"}, {"filename": "docs/a.md"}],
            "parents": [{"sha": "p1"}],
        }
        assert detect_shape(raw) == "github"
        event = normalize_commit(raw)
        assert event.parents == ("p1",)
        assert event.files_changed == 2
        assert event.additions == 4

    def test_gitlab_shape(self):
        """GitLab parent ids mark merges."""
        raw = {
            "id": "abc",
            "message": "chore: bump",
            "authored_date": "2025-01-01T00:00:00Z",
            "committed_date": "2025-01-01T00:00:00Z",
            "parent_ids": ["p1", "p2"],
            "stats": {"additions": 1, "deletions": 1},
        }
        event = normalize_commit(raw)
        assert event.is_merge
        assert event.file_paths == ()

    def test_bitbucket_shape_has_no_stats(self):
        """A host without diff stats yields zero sizes, not an error."""
        raw = {
            "hash": "abc",
            "message": "feat: z",
            "date": "2025-01-01T00:00:00+00:00",
            "author": {"raw": "Dev <dev@example.com>"},
            "parents": [{"hash": "p1"}],
        }
        assert detect_shape(raw) == "bitbucket"
        event = normalize_commit(raw)
        assert event.author_email == "dev@example.com"
        assert (event.additions, event.deletions, event.files_changed) == (0, 0, 0)
        assert not event.has_stats

    def test_one_date_fills_both(self):
        """A single date is used for author and committer."""
        event = normalize_commit({"sha": "a", "message": "m", "committer_date": 1_700_000_000})
        assert event.author_date == event.committer_date


class TestMalformedRecords:
    """Records that cannot be interpreted are rejected."""

    def test_missing_sha(self):
        """A record without a sha is malformed."""
        with pytest.raises(MalformedCommitError):
            normalize_commit({"message": "x", "committer_date": "2025-01-01T00:00:00Z"})

    def test_missing_dates(self):
        """A record without any date is rejected."""
        with pytest.raises(InvalidTimestampError):
            normalize_commit({"sha": "a", "message": "x"})

    def test_negative_count(self):
        """Negative counts name the offending field."""
        with pytest.raises(MalformedCommitError, match="additions"):
            normalize_commit(
                {"sha": "a", "committer_date": "2025-01-01T00:00:00Z", "additions": -1}
            )

    def test_not_a_mapping(self):
        """Only mappings are commit records."""
        with pytest.raises(MalformedCommitError):
            normalize_commit("abc")

    def test_missing_message_reads_empty(self):
        """A missing message becomes the empty string."""
        event = normalize_commit({"sha": "a", "committer_date": "2025-01-01T00:00:00Z"})
        assert event.message == ""


class TestCommitEvent:
    """Tests for the CommitEvent record."""

    def test_subject_and_body(self, make_commit):
        """Subject is the first line, body the rest."""
        commit = make_commit(message="feat: x\n\nLonger body here.")
        assert commit.subject == "feat: x"
        assert commit.body == "Longer body here."

    def test_dict_round_trip(self, make_commit):
        """to_dict and from_dict agree."""
        commit = make_commit(3, paths=("a.py",))
        assert CommitEvent.from_dict(commit.to_dict()) == commit

    def test_normalize_commits_passes_events_through(self, make_commit):
        """Already-normalized events are returned unchanged."""
        commit = make_commit()
        assert normalize_commits([commit]) == [commit]
