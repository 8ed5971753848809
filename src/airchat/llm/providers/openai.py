import logging
from collections.abc import Sequence
from typing import Any

import httpx
import openai
from openai import OpenAI
from pydantic import ValidationError

from ..base import Provider, parse
from ..errors import HttpError, ParsingError, UnknownError
from ..models import Message, ModelList, Usage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


class OpenAIProvider(Provider):
    """OpenAI chat-completions provider.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Mapping SDK exceptions onto the ProviderError taxonomy
    - Authentication mechanism (bearer token, set by the SDK)

    The SDK's built-in retries are disabled; every failure surfaces once.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        organization: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL (OpenAI-compatible servers)
            organization: Optional organization ID
            timeout: Request timeout in seconds (None uses the SDK default)
            http_client: Optional pre-configured httpx client
            **client_kwargs: Additional kwargs for the OpenAI client
        """
        self._model = model
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            max_retries=0,
            http_client=http_client,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def __str__(self) -> str:
        return f"OpenAI ({self._model})"

    def send(
        self,
        context: Sequence[Message],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> tuple[Message, Usage]:
        """Send the conversation to the chat completions endpoint.

        Args:
            context: Full conversation history
            model: Model to use (overrides default)
            max_tokens: Maximum tokens to generate

        Returns:
            The assistant reply and reported usage
        """
        request_params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [msg.to_wire() for msg in context],
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        logger.debug(
            "POST chat completion: model=%s messages=%d",
            request_params["model"],
            len(context)
        )
        body = self._request(self._client.chat.completions.with_raw_response.create, **request_params)
        return parse(body)

    def models(self) -> list[str]:
        """List the models available to this API key."""
        body = self._request(self._client.models.with_raw_response.list)
        try:
            return ModelList.model_validate(body).available()
        except ValidationError as exc:
            raise ParsingError(str(exc)) from exc

    def _request(self, call: Any, **params: Any) -> Any:
        """Perform a raw SDK call and return the decoded JSON body."""
        try:
            raw = call(**params)
        except openai.APIStatusError as exc:
            raise HttpError(exc.status_code) from exc
        except openai.APIConnectionError as exc:
            raise UnknownError(str(exc)) from exc
        except openai.APIResponseValidationError as exc:
            raise ParsingError(str(exc)) from exc

        try:
            return raw.http_response.json()
        except ValueError as exc:
            raise ParsingError(f"body is not valid JSON: {exc}") from exc

    def close(self) -> None:
        """Close the OpenAI client."""
        self._client.close()
