"""Role markers that open each block of a transcript.

The marker set is derived from ``Role`` so the two can never drift apart.
"""

import re

from ..llm import Role


def role_pattern() -> str:
    """Alternation of every role marker, e.g. ``SYSTEM:|USER:|ASSISTANT:``."""
    return "|".join(re.escape(role.marker) for role in Role)


# A marker must fill the whole line; only the line terminator may follow it.
MARKER_RE = re.compile(rf"({role_pattern()})\r?\n?\Z")


def match_marker(line: str) -> Role | None:
    """Return the role a marker line opens, or None for a content line."""
    match = MARKER_RE.match(line)
    if match is None:
        return None
    return Role.parse(match.group(1))
