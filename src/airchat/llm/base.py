from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from .errors import EmptyResponse, ParsingError, UnsupportedOperation
from .models import ChatCompletionPayload, Message, Usage


class Provider(ABC):
    """Abstract base class for model backends.

    This module hides the design decision of which backend answers the
    conversation. Implementations must handle:
    - HTTP client setup and authentication
    - Request/response format conversion
    - Mapping transport failures onto the ProviderError taxonomy

    No backend-side session state is assumed: every call carries the full
    conversation context.

    Supports the context manager protocol for resource cleanup:
        with provider:
            reply, usage = provider.send(context)
    """

    @abstractmethod
    def send(
        self,
        context: Sequence[Message],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> tuple[Message, Usage]:
        """Exchange a conversation context for a reply.

        Args:
            context: Full ordered conversation, oldest message first
            model: Model to use (None uses the provider's default)
            max_tokens: Maximum tokens to generate, if the backend supports it

        Returns:
            The assistant's reply and the usage reported for the exchange

        Raises:
            ProviderError: On any transport, HTTP status or decode failure
        """

    def models(self) -> list[str]:
        """List model identifiers offered by the backend.

        Raises:
            UnsupportedOperation: If the backend cannot enumerate models
            ProviderError: On transport or decode failure
        """
        raise UnsupportedOperation(f"{self} does not support listing models")

    def close(self) -> None:
        """Close any open connections or resources."""

    def __enter__(self) -> "Provider":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def parse(raw: Any) -> tuple[Message, Usage]:
    """Normalize a "candidate completions + usage" body into a reply.

    Takes the first candidate. Any backend whose responses follow the
    chat-completion shape can reuse this.

    Args:
        raw: Decoded JSON body

    Returns:
        The assistant message and the reported usage (all None if absent)

    Raises:
        ParsingError: If the body does not match the expected schema
        EmptyResponse: If there are no candidates or the first has no content
    """
    if not isinstance(raw, dict):
        raise ParsingError(f"expected a JSON object, got {type(raw).__name__}")

    try:
        payload = ChatCompletionPayload.model_validate(raw)
    except ValidationError as exc:
        raise ParsingError(str(exc)) from exc

    if not payload.choices:
        raise EmptyResponse("choice list is empty")

    first = payload.choices[0]
    if first.message is None or first.message.content is None:
        raise EmptyResponse("first choice has no content")

    return Message.assistant(first.message.content), payload.usage or Usage()
