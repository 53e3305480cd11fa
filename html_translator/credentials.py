"""
API key storage.

The translator only ever reads the key, right before each remote call.
Writing is for whatever collects the key from the user (the command line
script, a settings dialog, a test).
"""

import os
from abc import ABC, abstractmethod
from typing import Optional


API_KEY_ENV_VAR = "HTML_TRANSLATOR_API_KEY"


def _normalize(key: Optional[str]) -> Optional[str]:
    # Keys pasted into a form usually carry a trailing newline
    if key is None:
        return None
    key = key.strip()
    return key or None


class CredentialStore(ABC):
    """Read/write access to a single API key."""

    @property
    @abstractmethod
    def api_key(self) -> Optional[str]:
        pass

    @api_key.setter
    @abstractmethod
    def api_key(self, value: Optional[str]) -> None:
        pass

    @property
    def has_api_key(self) -> bool:
        return bool(_normalize(self.api_key))


class InMemoryCredentialStore(CredentialStore):
    """Keeps the key for the lifetime of the process."""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = _normalize(api_key)

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @api_key.setter
    def api_key(self, value: Optional[str]) -> None:
        self._api_key = _normalize(value)


class EnvCredentialStore(CredentialStore):
    """Reads the key from an environment variable on every access."""

    def __init__(self, env_var: str = API_KEY_ENV_VAR):
        self.env_var = env_var

    @property
    def api_key(self) -> Optional[str]:
        return _normalize(os.getenv(self.env_var))

    @api_key.setter
    def api_key(self, value: Optional[str]) -> None:
        value = _normalize(value)
        if value is None:
            os.environ.pop(self.env_var, None)
        else:
            os.environ[self.env_var] = value
