from .base import Provider, parse
from .errors import (
    EmptyResponse,
    HttpError,
    ParsingError,
    ProviderError,
    UnknownError,
    UnsupportedOperation,
)
from .factory import HOSTS, create_provider
from .models import Message, Role, Usage, fold_usage
from .providers import CustomProvider, OpenAIProvider

__all__ = [
    "Provider",
    "parse",
    "create_provider",
    "HOSTS",
    "Message",
    "Role",
    "Usage",
    "fold_usage",
    "ProviderError",
    "HttpError",
    "ParsingError",
    "EmptyResponse",
    "UnknownError",
    "UnsupportedOperation",
    "CustomProvider",
    "OpenAIProvider",
]
