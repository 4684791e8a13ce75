import os

from typing import Dict

from .base import Provider
from ...config import Config


class OpenAIProvider(Provider):
    name = "openai"
    display_name = "OpenAI"

    def _api_key(self, config: Config) -> str:
        return config.provider_config(self.name).get("api_key") or os.getenv("OPENAI_API_KEY", "")

    def is_configured(self, config: Config) -> bool:
        return bool(self._api_key(config).strip())

    def client_settings(self) -> Dict:
        settings = dict(self.config.provider_config(self.name))
        settings["api_key"] = self._api_key(self.config)
        return settings

    def completion_options(self) -> Dict:
        return {"temperature": 0.2}
