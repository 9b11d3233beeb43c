"""Tests for path-based subsystem classification."""

import pytest

from vibe_profiler.classification import classify_subsystem, is_ai_config_path, subsystems_for_paths


class TestAIConfigPaths:
    """AI assistant config files take precedence over every other bucket."""

    @pytest.mark.parametrize(
        "path",
        [
            ".cursorrules",
            "AGENTS.md",
            "packages/web/AGENTS.md",
            "CLAUDE.md",
            "CLAUDE.local.md",
            ".claude/CLAUDE.md",
            ".claude/settings.json",
            ".claude/rules/testing.md",
            ".cursor/rules/style.mdc",
            ".aider.conf.yml",
            ".clinerules",
            ".clinerules/01-style.md",
            ".github/copilot-instructions.md",
            ".github/instructions/python.instructions.md",
            ".github/prompts/review.prompt.md",
            ".github/agents/triage.md",
        ],
    )
    def test_ai_config(self, path):
        """Assistant config files for each tool are recognized."""
        assert classify_subsystem(path) == "ai_config"

    @pytest.mark.parametrize(
        "path",
        ["README.md", ".eslintrc.js", ".eslintrc", "docs/claude-notes.txt", ".github/workflows/ci.yml"],
    )
    def test_not_ai_config(self, path):
        """Ordinary docs and lint configs never read as AI config."""
        assert not is_ai_config_path(path)
        assert classify_subsystem(path) != "ai_config"


class TestGenericBuckets:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("README.md", "docs"),
            ("docs/guide.rst", "docs"),
            (".eslintrc.js", "infra"),
            ("Dockerfile", "infra"),
            (".github/workflows/ci.yml", "infra"),
            ("pyproject.toml", "infra"),
            ("src/app.test.ts", "tests"),
            ("tests/test_api.py", "tests"),
            ("db/migrations/001_init.sql", "db"),
            ("src/api/users.py", "api"),
            ("src/components/Button.tsx", "ui"),
            ("scripts/release.py", "tools"),
            ("src/main.rs", "other"),
        ],
    )
    def test_buckets(self, path, expected):
        """Paths land in the first matching bucket."""
        assert classify_subsystem(path) == expected

    def test_leading_dot_slash(self):
        """A leading ./ is ignored."""
        assert classify_subsystem("./AGENTS.md") == "ai_config"

    def test_subsystems_for_paths_sorted_distinct(self):
        """Subsystems are deduplicated and sorted."""
        paths = ["src/api/a.py", "src/api/b.py", "README.md"]
        assert subsystems_for_paths(paths) == ["api", "docs"]
