"""
airchat: a terminal client for conversational language models.

Each module hides one design decision: which backend answers (llm), how the
conversation is held (session), how it is persisted (transcript) and where
API keys come from (credentials).
"""

__version__ = "0.1.0"

from .llm import (
    EmptyResponse,
    HttpError,
    Message,
    ParsingError,
    Provider,
    ProviderError,
    Role,
    UnknownError,
    Usage,
    create_provider,
)
from .session import Client, ClientConfig
from .transcript import Transcript, TranscriptError, load, loads

__all__ = [
    "Client",
    "ClientConfig",
    "EmptyResponse",
    "HttpError",
    "Message",
    "ParsingError",
    "Provider",
    "ProviderError",
    "Role",
    "Transcript",
    "TranscriptError",
    "UnknownError",
    "Usage",
    "create_provider",
    "load",
    "loads",
]
