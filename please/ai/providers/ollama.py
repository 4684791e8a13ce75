import os

from typing import Dict
from urllib.parse import urlparse

from .base import Provider
from ...config import Config, DEFAULT_OLLAMA_URL


class OllamaProvider(Provider):
    """Local models served by an Ollama daemon."""

    name = "ollama"
    display_name = "Ollama"

    def _api_url(self, config: Config) -> str:
        return (
            config.provider_config(self.name).get("api_url")
            or os.getenv("OLLAMA_HOST")
            or DEFAULT_OLLAMA_URL
        )

    def is_configured(self, config: Config) -> bool:
        parsed = urlparse(self._api_url(config))
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def client_settings(self) -> Dict:
        return {"api_url": self._api_url(self.config).rstrip("/")}
