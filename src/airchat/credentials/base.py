"""Abstract base class for credential stores.

The abstraction hides:
- Where API tokens live (environment, keyring, file, etc.)
- How profiles are named in that storage
"""

from abc import ABC, abstractmethod

DEFAULT_PROFILE = "default"


class CredentialStore(ABC):
    """Named bearer tokens, one per profile."""

    @abstractmethod
    def get(self, name: str = DEFAULT_PROFILE) -> str:
        """Return the token stored for a profile.

        Raises:
            KeyError: If the profile has no token
        """

    @abstractmethod
    def set(self, name: str, token: str) -> None:
        """Store a token for a profile, replacing any previous one."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove a profile.

        Raises:
            KeyError: If the profile has no token
        """

    @abstractmethod
    def list(self) -> list[str]:
        """Names of all profiles with a stored token, sorted."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
