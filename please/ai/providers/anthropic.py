import os

from typing import Dict

from .base import Provider
from ...config import Config

# The Messages API rejects requests without an explicit output limit.
MAX_TOKENS = 4096


class AnthropicProvider(Provider):
    name = "anthropic"
    display_name = "Anthropic"

    def _api_key(self, config: Config) -> str:
        return config.provider_config(self.name).get("api_key") or os.getenv("ANTHROPIC_API_KEY", "")

    def is_configured(self, config: Config) -> bool:
        return bool(self._api_key(config).strip())

    def client_settings(self) -> Dict:
        settings = dict(self.config.provider_config(self.name))
        settings["api_key"] = self._api_key(self.config)
        return settings

    def completion_options(self) -> Dict:
        return {"temperature": 0.2, "max_tokens": MAX_TOKENS}
