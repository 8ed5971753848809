"""Transcript module for airchat.

Persists a conversation as plain text and reads it back:

    USER:
    Hello, assistant!

    ASSISTANT:
    Hello, user!

"""

from .errors import TranscriptError
from .markers import role_pattern
from .reader import iter_messages, load, loads
from .writer import Transcript, dump, dumps, format_block

__all__ = [
    "Transcript",
    "TranscriptError",
    "dump",
    "dumps",
    "format_block",
    "iter_messages",
    "load",
    "loads",
    "role_pattern",
]
