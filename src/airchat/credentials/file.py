"""File-backed credential store.

Profiles live in one JSON object mapping profile names to tokens, by default
``~/.airchat/credentials.json``. The file is written with owner-only
permissions. A fallback store (usually the environment) answers lookups for
profiles the file does not hold.
"""

import json
import logging
import os
from pathlib import Path

from .base import DEFAULT_PROFILE, CredentialStore

logger = logging.getLogger(__name__)

FILE_MODE = 0o600


def default_path() -> Path:
    """Location of the credential file when none is configured."""
    return Path.home() / ".airchat" / "credentials.json"


class FileCredentialStore(CredentialStore):
    """Credential store persisted to a JSON file."""

    def __init__(
        self,
        path: str | Path | None = None,
        fallback: CredentialStore | None = None,
    ):
        """Initialize file credential store.

        Args:
            path: Credential file (default: ~/.airchat/credentials.json)
            fallback: Store consulted by ``get`` for profiles not in the file
        """
        self.path = Path(path) if path else default_path()
        self._fallback = fallback

    @staticmethod
    def normalize(name: str) -> str:
        """Canonical profile name: stripped and lowercased."""
        normalized = name.strip().lower()
        if not normalized:
            raise ValueError("Profile name must not be empty")
        return normalized

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Credential file {self.path} does not hold a JSON object")
        return {str(name): str(token) for name, token in data.items() if token}

    def _write(self, profiles: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(profiles, f, indent=2, sort_keys=True)
            f.write("\n")
        # O_CREAT's mode only applies to new files
        self.path.chmod(FILE_MODE)

    def get(self, name: str = DEFAULT_PROFILE) -> str:
        token = self._read().get(self.normalize(name))
        if token:
            return token
        if self._fallback is not None:
            return self._fallback.get(name)
        raise KeyError(f"No API key stored for profile {name!r}")

    def set(self, name: str, token: str) -> None:
        if not token:
            raise ValueError("Token must not be empty")
        profiles = self._read()
        profiles[self.normalize(name)] = token
        self._write(profiles)
        logger.debug("Stored API key for profile %r in %s", name, self.path)

    def delete(self, name: str) -> None:
        profiles = self._read()
        if profiles.pop(self.normalize(name), None) is None:
            raise KeyError(f"No API key stored for profile {name!r}")
        self._write(profiles)

    def list(self) -> list[str]:
        return sorted(self._read())

    @property
    def backend_type(self) -> str:
        return "file"
