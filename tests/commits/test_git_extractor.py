"""Tests for git log parsing (no git process is started)."""

from vibe_profiler.commits.git_extractor import GitExtractor, _resolve_rename

RS, FS = "\x1e", "\x1f"


def _record(sha, parents, message, numstat):
    return (
        f"{RS}{sha}{FS}{parents}{FS}dev@example.com{FS}2025-01-01T10:00:00+01:00"
        f"{FS}2025-01-01T10:05:00+01:00{FS}{message}\n{FS}\n{numstat}"
    )


class TestParseLog:
    """Tests for GitExtractor._parse_log."""

    def test_parses_records_and_numstat(self, tmp_path):
        """Fields, numstat sums and binary files are parsed."""
        raw = _record("a1", "p1", "feat: add\n\nCo-authored-by: Claude <noreply@anthropic.com>", "3\t1\tsrc/a.py\n-\t-\tlogo.png\n")
        records = GitExtractor(str(tmp_path))._parse_log(raw)
        assert len(records) == 1
        record = records[0]
        assert record["sha"] == "a1"
        assert record["parents"] == ["p1"]
        assert record["additions"] == 3
        assert record["deletions"] == 1
        assert record["file_paths"] == ["src/a.py", "logo.png"]
        assert record["files_changed"] == 2
        assert record["message"].endswith("Co-authored-by: Claude <noreply@anthropic.com>")

    def test_truncated_record_dropped(self, tmp_path):
        """A record cut off by the output cap is skipped."""
        raw = _record("a1", "", "feat: one", "1\t0\ta.py\n") + f"{RS}b2{FS}a1{FS}dev"
        records = GitExtractor(str(tmp_path))._parse_log(raw)
        assert [r["sha"] for r in records] == ["a1"]

    def test_root_commit_has_no_parents(self, tmp_path):
        """An empty parent field gives an empty list."""
        records = GitExtractor(str(tmp_path))._parse_log(_record("a1", "", "init", ""))
        assert records[0]["parents"] == []


class TestRenames:
    """numstat rename notation resolves to the new path."""

    def test_plain_rename(self):
        """old => new keeps the new path."""
        assert _resolve_rename("old.py => new.py") == "new.py"

    def test_brace_rename(self):
        """Brace notation expands to the new directory."""
        assert _resolve_rename("src/{a => b}/f.py") == "src/b/f.py"

    def test_brace_rename_into_parent(self):
        """An empty brace side drops the directory."""
        assert _resolve_rename("src/{lib => }/f.py") == "src/f.py"


class TestNotARepo:
    def test_extract_returns_none_outside_git(self, tmp_path):
        """A plain directory yields no commits."""
        assert GitExtractor(str(tmp_path)).extract() is None
