"""
Provider authentication helpers.

Resolves the token from provider options:
1. Explicit ``token`` option
2. Environment variable named by the ``token_env`` option

and turns an ``auth_type`` into the header the upstream expects.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Any

from llm_agents.errors import ValidationError


class AuthType(str, Enum):
    """Supported authentication schemes."""

    BEARER = "bearer"
    API_KEY = "api_key"


DEFAULT_API_KEY_HEADER = "X-API-Key"


def resolve_token(options: Mapping[str, Any]) -> str | None:
    """Resolve the auth token from provider options.

    Args:
        options: Provider options

    Returns:
        The token, or None if neither ``token`` nor ``token_env`` yields one
    """
    token = options.get("token")
    if isinstance(token, str) and token:
        return token

    env_var = options.get("token_env")
    if isinstance(env_var, str) and env_var:
        value = os.getenv(env_var)
        if value:
            return value

    return None


def parse_auth_type(value: Any, *, provider: str) -> AuthType | None:
    """Read the ``auth_type`` option.

    Raises:
        ValidationError: If the value is not a supported scheme
    """
    if value is None or value == "":
        return None
    try:
        return AuthType(value)
    except ValueError:
        raise ValidationError(
            f"provider '{provider}': unsupported auth_type '{value}'",
            field="options.auth_type",
            expected=[a.value for a in AuthType],
            actual=value,
        ) from None


def get_auth_header(
    auth_type: AuthType | None,
    token: str | None,
    api_key_header: str = DEFAULT_API_KEY_HEADER,
) -> dict[str, str]:
    """Build the authentication header.

    Args:
        auth_type: Scheme, or None for unauthenticated services
        token: Credential
        api_key_header: Header name used for the api_key scheme

    Returns:
        Dictionary with the authentication header, empty when not configured
    """
    if auth_type is None or not token:
        return {}
    if auth_type is AuthType.BEARER:
        return {"Authorization": f"Bearer {token}"}
    return {api_key_header: token}
