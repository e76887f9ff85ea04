"""
Credential lookup.

Resolution logic never reads ``os.environ`` directly; it asks a :class:`CredentialProvider`.  This
keeps the router and preflight checks pure and lets tests hand in a plain mapping.
"""

import os
from typing import (
    Mapping,
    Optional,
    Protocol,
    runtime_checkable,
)

from q8core.config import (
    Settings,
    settings as default_settings,
)

_PLACEHOLDER_VALUES = {"placeholder"}


def is_valid_credential(value: Optional[str]) -> bool:
    """Return True if *value* is a usable secret (not empty, whitespace or a placeholder)."""
    if not value:
        return False
    trimmed = value.strip()
    return bool(trimmed) and trimmed not in _PLACEHOLDER_VALUES


@runtime_checkable
class CredentialProvider(Protocol):
    """Anything that can look up a credential by environment-variable name."""

    def lookup(self, env_key: str) -> Optional[str]:
        """Return the usable value for *env_key*, or None if it is absent."""


class EnvironmentCredentials:
    """Read credentials from the settings object first, then the process environment."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    def lookup(self, env_key: str) -> Optional[str]:
        value = getattr(self._settings, env_key, None)
        if not isinstance(value, str):
            value = os.environ.get(env_key)
        return value if is_valid_credential(value) else None


class StaticCredentials:
    """Credentials held in memory; used by tests and by embedding applications."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def lookup(self, env_key: str) -> Optional[str]:
        value = self._values.get(env_key)
        return value if is_valid_credential(value) else None
