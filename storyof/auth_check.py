"""Credential-presence check across auth storage and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Protocol

from storyof.constants import ENV_VAR_MAP, PROVIDER_PRIORITY


class AuthStorage(Protocol):
    """The read side of the agent runtime's credential store."""

    def get(self, provider: str) -> Any: ...


@dataclass(frozen=True)
class AuthCheckResult:
    has_auth: bool
    provider: str | None = None
    source: Literal["storage", "env"] | None = None


def check_auth(storage: AuthStorage, environ: Mapping[str, str] | None = None) -> AuthCheckResult:
    """Return the first provider with credentials.

    Storage is consulted first in ``PROVIDER_PRIORITY`` order; then the
    environment in ``ENV_VAR_MAP`` order, with the ``STORYOF_`` variable taking
    precedence over the standard provider variables.
    """
    env = os.environ if environ is None else environ

    for provider in PROVIDER_PRIORITY:
        if storage.get(provider):
            return AuthCheckResult(has_auth=True, provider=provider, source="storage")

    for provider in ENV_VAR_MAP:
        if resolve_env_credential(provider, env):
            return AuthCheckResult(has_auth=True, provider=provider, source="env")

    return AuthCheckResult(has_auth=False)


def resolve_env_credential(provider: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Environment credential for ``provider``, STORYOF_ variable first."""
    env = os.environ if environ is None else environ
    mapping = ENV_VAR_MAP.get(provider)
    if mapping is None:
        return None
    primary, fallbacks = mapping
    for name in (primary, *fallbacks):
        value = env.get(name)
        if value:
            return value
    return None
