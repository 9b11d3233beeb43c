"""Tests for the vibe-profiler command line."""

import json
import os

import pytest
from typer.testing import CliRunner

from vibe_profiler import __version__
from vibe_profiler.axes.models import AXIS_KEYS
from vibe_profiler.cli import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Isolated cwd and home so no stray config is picked up."""
    for key in list(os.environ):
        if key.startswith("VIBE_PROFILER_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _snapshot_rows(count):
    return [
        {"persona_id": "balanced_builder", "total_commits": 100, "total_repos": 1, **{k: 50 for k in AXIS_KEYS}}
        for _ in range(count)
    ]


class TestGlobalOptions:
    def test_version(self):
        """--version prints the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_command(self, workdir):
        """No subcommand shows help and exits cleanly."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "analyze" in result.output


class TestAnalyzeCommand:
    """Analyze from a commits file."""

    def test_json_output(self, workdir, feature_fix_history):
        """--json prints the repo analysis as JSON."""
        commits = _write(workdir / "commits.json", {"commits": [c.to_dict() for c in feature_fix_history]})
        result = runner.invoke(app, ["-q", "analyze", "--commits", commits, "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["commit_count"] == 12
        assert payload["persona"]["id"] == "balanced_builder"

    def test_rich_output(self, workdir, feature_fix_history):
        """The table view names the persona."""
        commits = _write(workdir / "commits.json", [c.to_dict() for c in feature_fix_history])
        result = runner.invoke(app, ["-q", "analyze", "--commits", commits])
        assert result.exit_code == 0
        assert "Reflective Balancer" in result.stdout

    def test_summary_then_profile(self, workdir, feature_fix_history):
        """A written summary feeds the profile command."""
        commits = _write(workdir / "commits.json", [c.to_dict() for c in feature_fix_history])
        summary_path = workdir / "summary.json"
        result = runner.invoke(
            app,
            ["-q", "analyze", "--commits", commits, "--summary-out", str(summary_path), "--repo-name", "acme/app"],
        )
        assert result.exit_code == 0
        summary = json.loads(summary_path.read_text())
        assert summary["repoName"] == "acme/app"
        assert summary["jobId"].startswith("commits-")

        summaries = _write(workdir / "summaries.json", [summary])
        result = runner.invoke(app, ["-q", "profile", summaries, "--json"])
        assert result.exit_code == 0
        profile = json.loads(result.stdout)
        assert profile["totalRepos"] == 1
        assert profile["totalCommits"] == 12

    def test_bad_commit_record(self, workdir):
        """An unparsable timestamp exits with code 1."""
        commits = _write(workdir / "commits.json", [{"sha": "a1", "committer_date": "yesterday"}])
        result = runner.invoke(app, ["-q", "analyze", "--commits", commits])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_not_a_list(self, workdir):
        """A JSON object without the expected key is rejected."""
        commits = _write(workdir / "commits.json", {"rows": []})
        result = runner.invoke(app, ["-q", "analyze", "--commits", commits])
        assert result.exit_code == 1


class TestCoverageCommand:
    def test_json(self, workdir):
        """Coverage report as JSON, samples with suggestions."""
        result = runner.invoke(app, ["-q", "coverage", "--step", "50", "-a", "A", "-a", "B", "--json"])
        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["total_combinations"] == 9
        assert report["fallback_count"] == 8
        assert report["sample_fallbacks"][0]["suggestion"].startswith("Closest rule is")

    def test_table(self, workdir):
        """The table marks the fallback persona."""
        result = runner.invoke(app, ["-q", "coverage", "--step", "50", "-a", "A"])
        assert result.exit_code == 0
        assert "balanced_builder (fallback)" in result.stdout

    def test_invalid_step(self, workdir):
        """An invalid step is reported as an error."""
        result = runner.invoke(app, ["-q", "coverage", "--step", "0"])
        assert result.exit_code == 1
        assert "step" in result.stdout

    def test_live_users(self, workdir):
        """Live users on the fallback are listed."""
        users = _write(workdir / "users.json", [{"user_id": "u1", "axes": {k: 50 for k in "ABCDEF"}}])
        result = runner.invoke(app, ["-q", "coverage", "--step", "100", "--users", users, "--json"])
        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert [u["user_id"] for u in report["real_user_fallbacks"]] == ["u1"]


class TestProfileCommand:
    def test_empty_list(self, workdir):
        """No summaries cannot build a profile."""
        result = runner.invoke(app, ["-q", "profile", _write(workdir / "s.json", [])])
        assert result.exit_code == 1
        assert "Cannot build profile" in result.stdout


class TestCommunityCommand:
    def test_suppressed(self, workdir):
        """Below the threshold only the suppressed payload is printed."""
        rows = _write(workdir / "rows.json", {"snapshots": _snapshot_rows(9)})
        result = runner.invoke(app, ["-q", "community", rows, "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload == {"suppressed": True, "reason": "below_threshold", "eligible_profiles": 9, "threshold": 10}

    def test_published(self, workdir):
        """The caller's date is echoed and small persona rows fold into other."""
        rows = _write(workdir / "rows.json", _snapshot_rows(12))
        result = runner.invoke(app, ["-q", "community", rows, "--as-of", "2025-03-05", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["as_of"] == "2025-03-05"
        assert payload["personas"] == [{"id": "other", "name": "Other personas", "count": 12, "pct": 100.0}]

    def test_invalid_row(self, workdir):
        """A snapshot row without axes exits with code 1."""
        rows = _write(workdir / "rows.json", [{"persona_id": "x"}])
        result = runner.invoke(app, ["-q", "community", rows])
        assert result.exit_code == 1
