"""Path-based subsystem classification.

AI-tool configuration files win over every other bucket, exact filenames
first, then directory prefixes. Remaining paths fall through an ordered
list of generic buckets; the first match wins and ``other`` is the default.
"""

import re
from collections.abc import Iterable

AI_CONFIG = "ai_config"
TESTS = "tests"
DOCS = "docs"
INFRA = "infra"
DB = "db"
API = "api"
UI = "ui"
TOOLS = "tools"
OTHER = "other"

SUBSYSTEMS: tuple[str, ...] = (AI_CONFIG, TESTS, DOCS, INFRA, DB, API, UI, TOOLS, OTHER)

AI_CONFIG_FILENAMES = frozenset(
    {
        ".cursorrules",
        "claude.md",
        "claude.local.md",
        "agents.md",
        ".aider.conf",
        ".aider.conf.yml",
        ".aider.conf.yaml",
        ".clinerules",
    }
)

AI_CONFIG_PREFIXES: tuple[str, ...] = (
    ".cursor/rules/",
    ".claude/rules/",
    ".claude/",
    ".clinerules/",
    ".github/agents/",
    ".github/prompts/",
)

AI_CONFIG_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"(^|/)\.github/instructions/.+\.instructions\.md$", re.I),
    re.compile(r"(^|/)\.github/copilot-instructions\.md$", re.I),
)


def _rx(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.I) for p in patterns)


# Matched against "/" + path so top-level directories look like nested ones
SUBSYSTEM_RULES: tuple[tuple[str, tuple[re.Pattern, ...]], ...] = (
    (
        TESTS,
        _rx(
            r"\.(test|spec)\.[jt]sx?$",
            r"/__tests__/",
            r"/tests?/",
            r"\.cy\.[jt]sx?$",
            r"\.e2e\.[jt]sx?$",
            r"/e2e/",
            r"\.stories\.[jt]sx?$",
            r"/test_[^/]+\.py$",
            r"_test\.(py|go)$",
            r"/conftest\.py$",
        ),
    ),
    (
        DOCS,
        _rx(
            r"\.mdx?$",
            r"\.rst$",
            r"/docs?/",
            r"readme",
            r"changelog",
            r"license",
            r"contributing",
            r"\.txt$",
        ),
    ),
    (
        INFRA,
        _rx(
            r"dockerfile",
            r"docker-compose",
            r"\.ya?ml$",
            r"/\.github/",
            r"\.gitlab",
            r"terraform",
            r"\.tf$",
            r"kubernetes",
            r"k8s",
            r"helm",
            r"/\.env",
            r"\.config\.[jt]s$",
            r"eslint",
            r"prettier",
            r"tsconfig",
            r"package\.json$",
            r"package-lock\.json$",
            r"yarn\.lock$",
            r"pnpm-lock",
            r"bun\.lockb$",
            r"makefile$",
            r"\.sh$",
            r"\.toml$",
            r"setup\.(py|cfg)$",
            r"\.ini$",
        ),
    ),
    (
        DB,
        _rx(
            r"/migrations?/",
            r"/schema",
            r"\.sql$",
            r"/prisma/",
            r"/drizzle/",
            r"/supabase/",
            r"seed",
        ),
    ),
    (
        API,
        _rx(
            r"/api/",
            r"/routes?/",
            r"/controllers?/",
            r"/handlers?/",
            r"/middleware/",
            r"/server/",
            r"/functions?/",
            r"/graphql/",
            r"/trpc/",
        ),
    ),
    (
        UI,
        _rx(
            r"/components?/",
            r"/pages?/",
            r"/app/",
            r"/views?/",
            r"/layouts?/",
            r"/hooks?/",
            r"/context/",
            r"/store/",
            r"\.(css|scss|sass|less)$",
            r"\.[jt]sx$",
            r"\.(vue|svelte)$",
        ),
    ),
    (
        TOOLS,
        _rx(
            r"/cli/",
            r"/cli\.[jt]s$",
            r"/tools?/",
            r"/scripts?/",
            r"/bin/",
            r"/sdk/",
            r"/packages?/",
            r"/libs?/",
            r"/utils?/",
            r"/utilities/",
            r"/helpers?/",
            r"/commands?/",
            r"/plugins?/",
            r"/extensions?/",
        ),
    ),
)


def _normalize_path(path: str) -> str:
    path = path.replace("\\", "/").strip()
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


def is_ai_config_path(path: str) -> bool:
    """True when the path is an AI assistant instruction or config file."""
    normalized = _normalize_path(path)
    basename = normalized.rsplit("/", 1)[-1].lower()
    if basename in AI_CONFIG_FILENAMES:
        return True

    rooted = "/" + normalized.lower()
    if any(f"/{prefix}" in rooted for prefix in AI_CONFIG_PREFIXES):
        return True
    return any(p.search(normalized) for p in AI_CONFIG_PATTERNS)


def classify_subsystem(path: str) -> str:
    """Classify a repository-relative path into one of ``SUBSYSTEMS``."""
    if is_ai_config_path(path):
        return AI_CONFIG

    rooted = "/" + _normalize_path(path)
    for subsystem, patterns in SUBSYSTEM_RULES:
        if any(p.search(rooted) for p in patterns):
            return subsystem
    return OTHER


def subsystems_for_paths(paths: Iterable[str]) -> list[str]:
    """Sorted distinct subsystems touched by a set of paths."""
    return sorted({classify_subsystem(p) for p in paths})
