import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..base import Provider, parse
from ..errors import HttpError, ParsingError, UnknownError
from ..models import Message, Usage

logger = logging.getLogger(__name__)


class CustomProvider(Provider):
    """Provider for a user-supplied HTTP endpoint.

    The endpoint receives the conversation as a JSON array of
    ``{"role", "content"}`` objects. A reply in chat-completion shape is
    normalized like any other backend; any other body is taken verbatim as
    the assistant's text, with unknown usage. A body labelled as JSON that
    cannot be decoded is a ``ParsingError``.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ):
        """Initialize custom endpoint provider.

        Args:
            url: Endpoint URL that accepts POSTed conversations
            api_key: Optional bearer token sent with each request
            timeout: Request timeout in seconds
            http_client: Optional pre-configured httpx client
        """
        self._url = httpx.URL(url)
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        if http_client is None:
            http_client = httpx.Client(timeout=timeout)
        http_client.headers.update(headers)
        self._client = http_client

    @property
    def url(self) -> str:
        return str(self._url)

    def __str__(self) -> str:
        return f"Custom model at {self._url.host or 'unknown location'}"

    def send(
        self,
        context: Sequence[Message],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> tuple[Message, Usage]:
        """POST the conversation to the endpoint.

        ``model`` and ``max_tokens`` are ignored; the endpoint decides both.
        """
        payload = [msg.to_wire() for msg in context]
        logger.debug("POST %s: messages=%d", self._url, len(payload))

        try:
            response = self._client.post(self._url, json=payload)
        except httpx.RequestError as exc:
            raise UnknownError(str(exc)) from exc

        if not response.is_success:
            raise HttpError(response.status_code)

        body = _decode_json(response)
        if isinstance(body, dict) and "choices" in body:
            return parse(body)
        return Message.assistant(response.text), Usage()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()


def _decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, or None if the body is not labelled as JSON.

    Raises:
        ParsingError: If a body labelled as JSON cannot be decoded
    """
    if "json" not in response.headers.get("content-type", ""):
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ParsingError(f"body is not valid JSON: {exc}") from exc
