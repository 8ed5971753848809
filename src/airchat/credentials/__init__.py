"""Credential storage for airchat.

Resolves the bearer token used to authenticate with a backend.
"""

from .base import DEFAULT_PROFILE, CredentialStore
from .env import EnvCredentialStore
from .file import FileCredentialStore
from .factory import create_credential_store

__all__ = [
    "DEFAULT_PROFILE",
    "CredentialStore",
    "EnvCredentialStore",
    "FileCredentialStore",
    "create_credential_store",
]
