"""AI-tool fingerprints for attribution trailers.

The table is ordered: a value is tested against each tool in turn and may
credit more than one tool (``Co-authored-by: Claude via Cursor``).
Short names that also occur inside ordinary words are matched on word
boundaries; vendor names and domains are plain substrings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .trailers import Trailer

AI_TRAILER_KEYS = frozenset({"co-authored-by", "generated-by", "ai-assisted-by"})


@dataclass(frozen=True)
class AIToolFingerprint:
    tool_id: str
    name: str
    patterns: tuple[re.Pattern, ...]

    def matches(self, value: str) -> bool:
        return any(p.search(value) for p in self.patterns)


def _substr(*needles: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(re.escape(n), re.I) for n in needles)


def _word(*words: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(rf"(?<![a-z0-9]){re.escape(w)}(?![a-z0-9])", re.I) for w in words)


AI_TOOL_FINGERPRINTS: tuple[AIToolFingerprint, ...] = (
    AIToolFingerprint("claude", "Claude", _substr("claude", "anthropic.com")),
    AIToolFingerprint("copilot", "GitHub Copilot", _substr("copilot")),
    AIToolFingerprint("cursor", "Cursor", _word("cursor") + _substr("cursor.com", "cursoragent")),
    AIToolFingerprint("aider", "Aider", _word("aider") + _substr("aider.chat")),
    AIToolFingerprint("cline", "Cline", _word("cline") + _substr("cline.bot")),
    AIToolFingerprint("roo", "Roo Code", _word("roo", "roo-code", "roocode")),
    AIToolFingerprint("windsurf", "Windsurf", _substr("codeium", "windsurf")),
    AIToolFingerprint(
        "devin", "Devin", _substr("cognition", "devin-ai", "devin.ai", "devin[bot]", "devin ai")
    ),
    AIToolFingerprint("gemini", "Gemini", _substr("gemini")),
    AIToolFingerprint("swe-agent", "SWE-agent", _substr("swe-agent", "sweagent", "swe_agent")),
)

_BY_ID = {fp.tool_id: fp for fp in AI_TOOL_FINGERPRINTS}


def tool_name(tool_id: str) -> str:
    fingerprint = _BY_ID.get(tool_id)
    return fingerprint.name if fingerprint else tool_id


def identify_ai_tools(value: str) -> list[str]:
    """All tool ids whose fingerprint matches a trailer value, in table order."""
    return [fp.tool_id for fp in AI_TOOL_FINGERPRINTS if fp.matches(value)]


def identify_ai_tool(value: str) -> Optional[str]:
    """First matching tool id, or None for a human co-author."""
    tools = identify_ai_tools(value)
    return tools[0] if tools else None


def ai_tools_for_trailers(trailers: list[Trailer]) -> list[str]:
    """Distinct tools credited by a commit's attribution trailers, first-seen order."""
    seen: list[str] = []
    for trailer in trailers:
        if trailer.key not in AI_TRAILER_KEYS:
            continue
        for tool_id in identify_ai_tools(trailer.value):
            if tool_id not in seen:
                seen.append(tool_id)
    return seen
