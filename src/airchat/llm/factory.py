from typing import Any

from .base import Provider
from .providers import CustomProvider, OpenAIProvider

HOSTS = ("openai", "custom")


def create_provider(host: str, **config: Any) -> Provider:
    """Create a provider instance.

    This factory function hides the instantiation logic for different hosts.

    Args:
        host: Host type ('openai' or 'custom')
        **config: Provider-specific configuration
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-3.5-turbo')
                - base_url: str | None
                - organization: str | None
                - timeout: float | None
            For Custom:
                - url: str (required)
                - api_key: str | None
                - timeout: float (default: 30.0)

    Returns:
        Initialized provider instance

    Raises:
        ValueError: If host type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_provider(
        ...     "openai",
        ...     api_key="sk-...",
        ...     model="gpt-4o-mini"
        ... )

        >>> provider = create_provider("custom", url="http://localhost:8000")
    """
    host_lower = host.lower()

    if host_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIProvider(**config)

    if host_lower == "custom":
        if "url" not in config:
            raise TypeError("Custom provider requires 'url' in config")
        return CustomProvider(**config)

    raise ValueError(
        f"Unsupported host: {host}. "
        f"Supported hosts: {', '.join(repr(h) for h in HOSTS)}"
    )
