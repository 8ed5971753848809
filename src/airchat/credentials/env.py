"""Environment-backed credential store.

Profiles map onto variables named ``AIRCHAT_<NAME>_API_KEY``. The default
profile also falls back to a plain ``API_KEY`` and then ``OPENAI_API_KEY``.
"""

import os
from collections.abc import MutableMapping

from .base import DEFAULT_PROFILE, CredentialStore

PREFIX = "AIRCHAT_"
SUFFIX = "_API_KEY"
FALLBACK_VARS = ("API_KEY", "OPENAI_API_KEY")


class EnvCredentialStore(CredentialStore):
    """Credential store over an environment mapping.

    Changes made through ``set``/``delete`` only affect the mapping (and thus
    the current process when it is ``os.environ``).
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    @staticmethod
    def variable(name: str) -> str:
        """Environment variable that holds a profile's token."""
        normalized = name.strip().upper().replace("-", "_")
        if not normalized:
            raise ValueError("Profile name must not be empty")
        return f"{PREFIX}{normalized}{SUFFIX}"

    def get(self, name: str = DEFAULT_PROFILE) -> str:
        token = self._environ.get(self.variable(name))
        if token:
            return token

        if name == DEFAULT_PROFILE:
            for var in FALLBACK_VARS:
                token = self._environ.get(var)
                if token:
                    return token

        raise KeyError(f"No API key stored for profile {name!r} (set {self.variable(name)})")

    def set(self, name: str, token: str) -> None:
        if not token:
            raise ValueError("Token must not be empty")
        self._environ[self.variable(name)] = token

    def delete(self, name: str) -> None:
        var = self.variable(name)
        if var not in self._environ:
            raise KeyError(f"No API key stored for profile {name!r}")
        del self._environ[var]

    def list(self) -> list[str]:
        names = []
        for key, value in self._environ.items():
            if not value or not (key.startswith(PREFIX) and key.endswith(SUFFIX)):
                continue
            name = key[len(PREFIX):-len(SUFFIX)]
            if name:
                names.append(name.lower().replace("_", "-"))
        return sorted(names)

    @property
    def backend_type(self) -> str:
        return "env"
