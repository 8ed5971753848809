"""Conversation session.

The client owns the ordered context and the cumulative token count, and is
the only thing that mutates either.
"""

import logging
from collections.abc import Iterable
from typing import Any

from ..llm import Message, Provider, fold_usage
from .models import ClientConfig

logger = logging.getLogger(__name__)


class Client:
    """A conversation with one model provider.

    Every call to ``send`` ships the whole context to the provider; the
    backend is assumed to keep no session state of its own.

    Example:
        provider = OpenAIProvider(api_key="sk-...")
        with Client(provider) as client:
            reply = client.send(Message.user("What is the meaning of life?"))
    """

    def __init__(
        self,
        provider: Provider,
        config: ClientConfig | None = None,
        context: Iterable[Message] | None = None,
    ):
        """Initialize a session.

        Args:
            provider: Backend to talk to; the client takes ownership of it
            config: Session options (defaults apply if None)
            context: Optional messages to seed the conversation with
        """
        self._provider = provider
        self._config = config or ClientConfig()
        self.context: list[Message] = list(context or [])
        self.tokens_used: int | None = 0

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def provider(self) -> Provider:
        return self._provider

    def __str__(self) -> str:
        return str(self._provider)

    def send(self, message: Message) -> Message:
        """Send a message alongside the existing context.

        The message is appended before the provider is called and stays in
        the context even if the call fails, so a failed turn remains part of
        the history.

        Args:
            message: Message to add to the conversation

        Returns:
            The reply, which is now the last entry of the context

        Raises:
            ProviderError: Whatever the provider raised
        """
        self.context.append(message)
        reply, usage = self._provider.send(
            self.context,
            model=self._config.model_name,
            max_tokens=self._config.max_tokens
        )
        self.context.append(reply)
        self.tokens_used = fold_usage(self.tokens_used, usage.total_tokens)

        logger.log(
            logging.INFO if self._config.verbose else logging.DEBUG,
            "Turn usage: prompt=%s completion=%s total=%s (session total: %s)",
            usage.prompt_tokens,
            usage.completion_tokens,
            usage.total_tokens,
            self.tokens_used
        )
        return reply

    def clear(self) -> None:
        """Forget the conversation. The token count is kept."""
        self.context.clear()

    def close(self) -> None:
        """Close the underlying provider."""
        self._provider.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
