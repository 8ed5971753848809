import io
from collections.abc import Iterable
from typing import TextIO

from ..llm import Message


def format_block(message: Message) -> str:
    """Render one message as a transcript block.

    The block is the marker line, each content line verbatim, then a blank
    terminator line.
    """
    lines = message.content.split("\n") if message.content else []
    body = "".join(f"{line}\n" for line in lines)
    return f"{message.role.marker}\n{body}\n"


class Transcript:
    """Records messages to an optional text sink.

    The sink is borrowed: the transcript writes and flushes it but never
    closes it. Without a sink, ``record`` does nothing, so callers need not
    check whether persistence was requested.
    """

    def __init__(self, sink: TextIO | None = None):
        self._sink = sink

    @property
    def enabled(self) -> bool:
        return self._sink is not None

    def record(self, message: Message) -> None:
        """Append a message to the sink, if there is one.

        Raises:
            OSError: If the sink cannot be written or flushed
        """
        if self._sink is None:
            return
        self._sink.write(format_block(message))
        self._sink.flush()

    def record_all(self, messages: Iterable[Message]) -> None:
        for message in messages:
            self.record(message)


def dump(messages: Iterable[Message], sink: TextIO) -> None:
    """Write messages to a text stream in transcript format."""
    Transcript(sink).record_all(messages)


def dumps(messages: Iterable[Message]) -> str:
    """Render messages in transcript format. No messages gives ``""``."""
    buffer = io.StringIO()
    dump(messages, buffer)
    return buffer.getvalue()
