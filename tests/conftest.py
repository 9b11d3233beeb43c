"""Shared test fixtures for the Vibe Coding Profiler tests."""

from datetime import datetime, timedelta, timezone

import pytest

from vibe_profiler.axes.models import AXIS_KEYS, VibeAxes
from vibe_profiler.commits.models import CommitEvent

BASE_TIME = datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc)  # a Monday


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def build_commit(
    index=0,
    message="feat: add thing",
    hours=None,
    additions=10,
    deletions=2,
    files=None,
    paths=(),
    parents=None,
):
    """One CommitEvent, ``hours`` after BASE_TIME (defaults to ``index``)."""
    when = BASE_TIME + timedelta(hours=index if hours is None else hours)
    return CommitEvent(
        sha=f"c{index:04d}",
        message=message,
        author_date=when,
        committer_date=when,
        author_email="dev@example.com",
        additions=additions,
        deletions=deletions,
        files_changed=len(paths) if files is None else files,
        parents=(f"c{index - 1:04d}",) if parents is None and index > 0 else tuple(parents or ()),
        file_paths=tuple(paths),
    )


@pytest.fixture
def make_commit():
    """Factory fixture for CommitEvent values."""
    return build_commit


@pytest.fixture
def feature_fix_history():
    """Twelve commits over two working days, mixing features, fixes and tests."""
    messages = [
        "feat: scaffold api",
        "fix: handle empty payload",
        "test: cover payload parsing",
        "feat(ui): add dashboard",
        "fix: dashboard crash",
        "docs: describe setup",
        "feat: export csv",
        "chore: bump deps",
        "feat: add filters",
        "fix: filter off-by-one",
        "refactor: split module",
        "ci: add workflow",
    ]
    paths = [
        ("src/api/server.py",),
        ("src/api/server.py",),
        ("tests/test_server.py",),
        ("src/components/Dashboard.tsx", "src/api/stats.py"),
        ("src/components/Dashboard.tsx",),
        ("README.md", "docs/setup.md"),
        ("src/api/export.py",),
        ("package.json",),
        ("src/components/Filters.tsx",),
        ("src/components/Filters.tsx",),
        ("src/lib/util.py", "src/lib/core.py"),
        (".github/workflows/ci.yml",),
    ]
    # Six commits an hour apart on day one, six on day two
    hours = [0, 1, 2, 3, 4, 5, 24, 25, 26, 27, 28, 29]
    return [
        build_commit(i, message=m, hours=h, paths=p)
        for i, (m, h, p) in enumerate(zip(messages, hours, paths))
    ]


@pytest.fixture
def flat_axes():
    """Factory for VibeAxes with every axis at one score, overridable by letter."""

    def _make(default=50, **letters):
        scores = {key: default for key in AXIS_KEYS}
        for letter, value in letters.items():
            scores[AXIS_KEYS["ABCDEF".index(letter)]] = value
        return VibeAxes.from_scores(scores)

    return _make
