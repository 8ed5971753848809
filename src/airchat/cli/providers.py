"""Provider factory functions for CLI.

Centralizes creation of credential stores and providers from environment
variables. Hides configuration details from command implementations.
"""

import os
from enum import Enum

import typer
from rich.console import Console
from rich.markup import escape

from ..credentials import DEFAULT_PROFILE, CredentialStore, create_credential_store
from ..llm import Provider, create_provider
from ..llm.providers.openai import DEFAULT_MODEL

DEFAULT_URL = "http://localhost:8000"

# Default console for output
_console = Console(stderr=True)


class Host(str, Enum):
    """Backend hosting the model."""

    OPENAI = "openai"
    CUSTOM = "custom"


def get_credentials() -> CredentialStore:
    """Create the credential store used to resolve API keys.

    Stored profiles come first; the environment answers for the rest.

    Environment variables:
        AIRCHAT_CREDENTIALS_FILE: Credential file (default: ~/.airchat/credentials.json)
    """
    return create_credential_store(
        "file",
        path=os.getenv("AIRCHAT_CREDENTIALS_FILE") or None,
        fallback=create_credential_store("env")
    )


def resolve_host(host: Host | None) -> Host:
    """Pick the host from the command line, then ``AIRCHAT_HOST``.

    Raises:
        typer.BadParameter: If ``AIRCHAT_HOST`` names an unknown host
    """
    if host is not None:
        return host
    value = os.getenv("AIRCHAT_HOST", Host.OPENAI.value).lower()
    try:
        return Host(value)
    except ValueError:
        raise typer.BadParameter(f"Unknown host in AIRCHAT_HOST: {value!r}") from None


def get_provider(
    host: Host | None = None,
    name: str | None = None,
    url: str | None = None,
    profile: str | None = None,
    console: Console | None = None,
) -> Provider:
    """Create a provider from command-line values and environment variables.

    Args:
        host: Backend to use (None reads AIRCHAT_HOST, default openai)
        name: Model name (None reads AIRCHAT_MODEL)
        url: Custom endpoint URL (None reads AIRCHAT_URL)
        profile: Credential profile (None reads AIRCHAT_PROFILE)
        console: Optional Rich console for output

    Returns:
        Provider instance

    Raises:
        SystemExit: If the OpenAI host is selected and no API key is found

    Environment variables:
        AIRCHAT_HOST: openai or custom (default: openai)
        AIRCHAT_MODEL: Model name (default: gpt-3.5-turbo)
        AIRCHAT_URL: Custom endpoint (default: http://localhost:8000)
        AIRCHAT_PROFILE: Credential profile (default: default)
        AIRCHAT_TIMEOUT: Request timeout in seconds
        OPENAI_BASE_URL: Alternative OpenAI-compatible base URL
    """
    con = console or _console
    host = resolve_host(host)
    profile = profile or os.getenv("AIRCHAT_PROFILE", DEFAULT_PROFILE)
    timeout_env = os.getenv("AIRCHAT_TIMEOUT")
    timeout = float(timeout_env) if timeout_env else None

    if host == Host.CUSTOM:
        config: dict = {"url": url or os.getenv("AIRCHAT_URL", DEFAULT_URL)}
        try:
            config["api_key"] = get_credentials().get(profile)
        except KeyError:
            pass  # custom endpoints may be unauthenticated
        except ValueError as e:
            con.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)
        if timeout is not None:
            config["timeout"] = timeout
        return create_provider("custom", **config)

    try:
        api_key = get_credentials().get(profile)
    except KeyError as e:
        con.print(f"[red]Error: {escape(str(e.args[0]))}[/red]")
        raise typer.Exit(code=1)
    except ValueError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    return create_provider(
        "openai",
        api_key=api_key,
        model=name or os.getenv("AIRCHAT_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("OPENAI_BASE_URL") or None,
        timeout=timeout
    )
