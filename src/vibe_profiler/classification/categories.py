"""Message-based commit categories.

Rules are tried in declared order against the lower-cased subject line and
the first match wins: conventional-commit prefixes, then scope overrides,
then keyword heuristics, then a feature default for additive verbs.
"""

import re

SETUP = "setup"
AUTH = "auth"
FEATURE = "feature"
TEST = "test"
INFRA = "infra"
DOCS = "docs"
REFACTOR = "refactor"
FIX = "fix"
STYLE = "style"
CHORE = "chore"
UNKNOWN = "unknown"

CATEGORIES: tuple[str, ...] = (
    SETUP,
    AUTH,
    FEATURE,
    TEST,
    INFRA,
    DOCS,
    REFACTOR,
    FIX,
    STYLE,
    CHORE,
    UNKNOWN,
)

# Categories that count as guardrail work (tests, docs, CI, upkeep)
GUARDRAIL_CATEGORIES = frozenset({TEST, DOCS, INFRA, CHORE})

_SCOPE = r"(\([^)]*\))?!?:"

CATEGORY_RULES: tuple[tuple[str, re.Pattern], ...] = (
    # Conventional prefixes
    (FEATURE, re.compile(rf"^feat{_SCOPE}")),
    (FIX, re.compile(rf"^fix{_SCOPE}")),
    (TEST, re.compile(rf"^test{_SCOPE}")),
    (DOCS, re.compile(rf"^docs{_SCOPE}")),
    (STYLE, re.compile(rf"^style{_SCOPE}")),
    (REFACTOR, re.compile(rf"^refactor{_SCOPE}")),
    (CHORE, re.compile(rf"^chore{_SCOPE}")),
    (INFRA, re.compile(rf"^(ci|build){_SCOPE}")),
    # Scope overrides on non-standard types
    (AUTH, re.compile(r"^\w+\(auth\)!?:")),
    (SETUP, re.compile(r"^\w+\((setup|init)\)!?:")),
    # Keywords
    (SETUP, re.compile(r"^initial|^init\b|^bootstrap|^scaffold|\bsetup\b|\bboilerplate\b")),
    (
        AUTH,
        re.compile(
            r"\bauth|\blogin\b|\blogout\b|\bsign.?in\b|\bsign.?up\b|\bsession\b|\boauth\b|\bjwt\b"
        ),
    ),
    (TEST, re.compile(r"\btest|\bspec\b")),
    (FIX, re.compile(r"\bfix|\bbug|\bpatch\b|\bhotfix\b|\bresolve\b")),
    (DOCS, re.compile(r"\breadme\b|\bdoc(s|umentation)?\b|\bchangelog\b")),
    (
        INFRA,
        re.compile(
            r"\bci\b|\bcd\b|\bdeploy|\bdocker|\bkubernetes\b|\bk8s\b|\bgithub.?action"
            r"|\bworkflow\b|\binfra"
        ),
    ),
    (REFACTOR, re.compile(r"\brefactor|\brestructure|\breorganize|\bcleanup\b|\bclean.?up\b")),
    (STYLE, re.compile(r"\blint|\bformat|\bprettier\b|\beslint\b")),
    (CHORE, re.compile(r"\bchore\b|\bdeps?\b|\bdependenc|\bbump\b|\bupgrade\b|\bupdate\b.*version")),
    # Additive verbs default to feature
    (FEATURE, re.compile(r"\badd|\bimplement|\bcreate\b|\bnew\b|\bintroduce\b")),
)

_CONVENTIONAL_RE = re.compile(r"^(feat|fix|docs|test|chore|refactor|style|ci|build|perf|revert)(\([^)]*\))?!?:\s+\S")


def classify_category(message: str) -> str:
    """Classify a commit message into one of ``CATEGORIES``."""
    subject = message.split("\n", 1)[0].strip().lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(subject):
            return category
    return UNKNOWN


def is_conventional_commit(message: str) -> bool:
    """True when the subject follows ``type(scope): description``."""
    subject = message.split("\n", 1)[0].strip()
    return bool(_CONVENTIONAL_RE.match(subject))
