"""
Cloud-hosted deployment provider (Azure OpenAI).

Requires ``deployment``, ``auth_type``, ``token`` (or ``token_env``) and
``api_version`` options. Endpoints have the form
``<base>/deployments/<deployment>/<path>?api-version=<version>``.
Streaming frames must carry the ``data:`` prefix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from llm_agents.errors import ValidationError
from llm_agents.models.model import Model
from llm_agents.providers.auth import get_auth_header, parse_auth_type, resolve_token
from llm_agents.providers.base import SSE_PREFIX, Provider
from llm_agents.types.protocol import Protocol

if TYPE_CHECKING:
    from llm_agents.capabilities.registry import CapabilityRegistry
    from llm_agents.config.core import ProviderConfig

API_KEY_HEADER = "api-key"


class AzureProvider(Provider):
    """Provider for Azure OpenAI deployments."""

    def __init__(
        self,
        config: ProviderConfig,
        registry: CapabilityRegistry | None = None,
    ) -> None:
        options = config.options
        self._deployment = _require(options, "deployment", config.name)
        auth_type = parse_auth_type(_require(options, "auth_type", config.name), provider=config.name)
        token = resolve_token(options)
        if not token:
            raise ValidationError(
                f"provider '{config.name}': token is required",
                field="options.token",
            ).with_hint("set 'token' or name an environment variable in 'token_env'")
        self._api_version = _require(options, "api_version", config.name)

        model = Model.from_config(config.model, registry)
        super().__init__(config.name, config.base_url.rstrip("/"), model, options)
        self._auth_type = auth_type
        self._token = token

    @property
    def deployment(self) -> str:
        return self._deployment

    @property
    def api_version(self) -> str:
        return self._api_version

    def endpoint(self, protocol: Protocol) -> str:
        path = self._path(protocol)
        return (
            f"{self._base_url}/deployments/{self._deployment}{path}"
            f"?api-version={self._api_version}"
        )

    def auth_headers(self) -> dict[str, str]:
        return get_auth_header(self._auth_type, self._token, API_KEY_HEADER)

    def frame_payload(self, line: str) -> str | None:
        if not line.startswith(SSE_PREFIX):
            return None
        return line[len(SSE_PREFIX) :].strip()


def _require(options: dict[str, Any], key: str, provider: str) -> str:
    value = options.get(key)
    if not isinstance(value, str) or not value:
        raise ValidationError(
            f"provider '{provider}': {key} is required",
            field=f"options.{key}",
        )
    return value
