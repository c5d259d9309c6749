"""
Local / generic OpenAI-compatible provider (Ollama, vLLM, LM Studio, ...).

The base URL always ends in ``/v1``. Auth is optional: ``auth_type``
``bearer`` sends ``Authorization: Bearer <token>``; ``api_key`` sends the
token in ``X-API-Key`` or the header named by ``auth_header``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llm_agents.models.model import Model
from llm_agents.providers.auth import (
    DEFAULT_API_KEY_HEADER,
    get_auth_header,
    parse_auth_type,
    resolve_token,
)
from llm_agents.providers.base import Provider
from llm_agents.types.protocol import Protocol

if TYPE_CHECKING:
    from llm_agents.capabilities.registry import CapabilityRegistry
    from llm_agents.config.core import ProviderConfig


def normalize_base_url(base_url: str) -> str:
    """Ensure the base URL ends in ``/v1`` without a trailing slash."""
    url = base_url.rstrip("/")
    if not url.endswith("/v1"):
        url += "/v1"
    return url


class OllamaProvider(Provider):
    """Provider for local or self-hosted OpenAI-compatible servers."""

    def __init__(
        self,
        config: ProviderConfig,
        registry: CapabilityRegistry | None = None,
    ) -> None:
        model = Model.from_config(config.model, registry)
        super().__init__(config.name, normalize_base_url(config.base_url), model, config.options)
        self._auth_type = parse_auth_type(self._options.get("auth_type"), provider=config.name)
        self._token = resolve_token(self._options)
        header = self._options.get("auth_header")
        self._auth_header = header if isinstance(header, str) and header else DEFAULT_API_KEY_HEADER

    def endpoint(self, protocol: Protocol) -> str:
        return f"{self._base_url}{self._path(protocol)}"

    def auth_headers(self) -> dict[str, str]:
        return get_auth_header(self._auth_type, self._token, self._auth_header)
