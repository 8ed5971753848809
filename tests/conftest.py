"""Pytest configuration and shared fixtures."""
import os
from collections.abc import Callable, Sequence

import httpx
import pytest

from airchat.llm import Message, Provider, Usage
from airchat.llm.providers import CustomProvider, OpenAIProvider


class StubProvider(Provider):
    """Provider that replays canned replies without touching the network.

    Each entry of ``replies`` is either a ``(Message, Usage)`` pair or an
    exception to raise. Every call's context is copied into ``calls``.
    """

    def __init__(self, replies: list | None = None, available: list[str] | None = None):
        self._replies = list(replies or [])
        self._available = available
        self.calls: list[dict] = []
        self.closed = False

    def __str__(self) -> str:
        return "Stub model"

    def send(
        self,
        context: Sequence[Message],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> tuple[Message, Usage]:
        self.calls.append({"context": list(context), "model": model, "max_tokens": max_tokens})
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def models(self) -> list[str]:
        if self._available is None:
            return super().models()
        return list(self._available)

    def close(self) -> None:
        self.closed = True


def completion(content: str | None = "Hello, user!", total_tokens: int | None = 12) -> dict:
    """Build a chat-completion response body."""
    usage = None
    if total_tokens is not None:
        usage = {"prompt_tokens": 4, "completion_tokens": total_tokens - 4, "total_tokens": total_tokens}
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
                "logprobs": None,
            }
        ],
        "usage": usage,
    }


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def openai_provider() -> Callable[[Handler], OpenAIProvider]:
    """Build an OpenAIProvider whose HTTP traffic goes to ``handler``."""
    created: list[OpenAIProvider] = []

    def _make(handler: Handler, **kwargs) -> OpenAIProvider:
        provider = OpenAIProvider(
            api_key="sk-test",
            base_url="https://api.openai.com/v1",
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
            **kwargs
        )
        created.append(provider)
        return provider

    yield _make
    for provider in created:
        provider.close()


@pytest.fixture
def custom_provider() -> Callable[[Handler], CustomProvider]:
    """Build a CustomProvider whose HTTP traffic goes to ``handler``."""
    created: list[CustomProvider] = []

    def _make(handler: Handler, **kwargs) -> CustomProvider:
        provider = CustomProvider(
            url="http://localhost:8000/chat",
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
            **kwargs
        )
        created.append(provider)
        return provider

    yield _make
    for provider in created:
        provider.close()


@pytest.fixture
def stub_provider() -> Callable[..., StubProvider]:
    return StubProvider


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
    }
