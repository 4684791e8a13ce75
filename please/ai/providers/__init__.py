"""Provider registry: maps a provider name to its implementation."""

from typing import Dict, Type

from .base import Provider
from .anthropic import AnthropicProvider
from .ollama import OllamaProvider
from .openai import OpenAIProvider
from ..types import UnsupportedProvider
from ...config import Config

PROVIDERS: Dict[str, Type[Provider]] = {
    provider.name: provider
    for provider in (OllamaProvider, OpenAIProvider, AnthropicProvider)
}


def get_provider(name: str, config: Config) -> Provider:
    provider_class = PROVIDERS.get((name or "").strip().lower())
    if provider_class is None:
        raise UnsupportedProvider(f"unsupported provider: {name}")
    return provider_class(config)


__all__ = [
    "PROVIDERS",
    "Provider",
    "AnthropicProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "get_provider",
]
