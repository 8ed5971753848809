import io
from collections.abc import Iterator
from typing import TextIO

from ..llm import Message, Role
from .errors import TranscriptError
from .markers import match_marker


def iter_messages(source: TextIO) -> Iterator[Message]:
    """Stream messages out of a transcript, one block at a time.

    The first line must be a role marker. Every later line is either content
    for the current block or a marker opening the next one; a line is only
    ever inspected once, when it is read, so a block is never split after the
    fact. Block content is right-trimmed, which also drops the blank line
    that terminates each block.

    Known limitation: there is no escaping, so a content line that is exactly
    a marker (e.g. ``USER:``) is read as the start of a new block.

    Args:
        source: Readable text stream

    Yields:
        Messages in transcript order

    Raises:
        TranscriptError: If the first line is not a role marker
    """
    first = source.readline()
    if not first:
        return

    try:
        role = Role.parse(first)
    except ValueError as exc:
        raise TranscriptError(
            f"Transcript must start with a role marker, got {first.rstrip()!r}"
        ) from exc

    lines: list[str] = []
    while line := source.readline():
        next_role = match_marker(line)
        if next_role is None:
            lines.append(line)
            continue

        yield Message(role=role, content="".join(lines).rstrip())
        role = next_role
        lines = []

    # EOF: the last block may be empty (a trailing marker with no body)
    yield Message(role=role, content="".join(lines).rstrip())


def load(source: TextIO) -> list[Message]:
    """Load a whole transcript from a readable text stream.

    An empty source yields an empty list. Malformed leading input fails the
    whole load; no partial result is returned.
    """
    return list(iter_messages(source))


def loads(text: str) -> list[Message]:
    """Load a transcript from a string."""
    return load(io.StringIO(text))
