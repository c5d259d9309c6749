"""提供方模块：本地与云端 OpenAI 兼容服务。

Providers: endpoint routing, auth and response handling.
"""

from llm_agents.providers.auth import AuthType, get_auth_header, resolve_token
from llm_agents.providers.azure import AzureProvider
from llm_agents.providers.base import Provider, ProviderRequest
from llm_agents.providers.ollama import OllamaProvider, normalize_base_url
from llm_agents.providers.registry import (
    ProviderFactory,
    ProviderRegistry,
    create_provider,
    default_registry,
    list_providers,
    register_builtin_providers,
    register_provider,
)

__all__ = [
    "AuthType",
    "AzureProvider",
    "OllamaProvider",
    "Provider",
    "ProviderFactory",
    "ProviderRegistry",
    "ProviderRequest",
    "create_provider",
    "default_registry",
    "get_auth_header",
    "list_providers",
    "normalize_base_url",
    "register_builtin_providers",
    "register_provider",
    "resolve_token",
]
