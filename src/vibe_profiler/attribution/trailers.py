"""Commit message trailer parsing.

Trailers are ``Name: value`` lines forming the final paragraph of a
message. The paragraph must be separated from the rest by a blank line,
so a subject-only message or a body that runs to the end has none.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_TRAILER_RE = re.compile(r"^([A-Za-z0-9][A-Za-z0-9-]*)\s*:\s*(\S.*)$")


@dataclass(frozen=True)
class Trailer:
    name: str  # as written; compare with ``key``
    value: str

    @property
    def key(self) -> str:
        return self.name.lower()


def parse_trailers(message: str) -> list[Trailer]:
    """Parse the trailer block at the end of a commit message.

    Every line of the final paragraph must be a trailer, otherwise the
    paragraph is ordinary body text and nothing is returned.
    """
    if not message:
        return []

    lines = message.replace("\r\n", "\n").rstrip().split("\n")

    blank_index = None
    for i in range(len(lines) - 1, -1, -1):
        if not lines[i].strip():
            blank_index = i
            break
    if blank_index is None:
        return []

    block = [line.strip() for line in lines[blank_index + 1 :]]
    trailers = []
    for line in block:
        match = _TRAILER_RE.match(line)
        if match is None:
            return []
        trailers.append(Trailer(name=match.group(1), value=match.group(2).strip()))
    return trailers
