"""Factory for creating credential stores."""

from typing import Any

from .base import CredentialStore


def create_credential_store(
    backend: str = "env",
    **kwargs: Any
) -> CredentialStore:
    """Create a credential store.

    Args:
        backend: Backend type ("env" or "file")
        **kwargs: Backend-specific configuration

    Returns:
        CredentialStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "env":
        from .env import EnvCredentialStore
        return EnvCredentialStore(**kwargs)

    if backend == "file":
        from .file import FileCredentialStore
        return FileCredentialStore(**kwargs)

    raise ValueError(
        f"Unsupported credential backend: {backend}. "
        f"Supported backends: env, file"
    )
