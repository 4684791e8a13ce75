import logging

from abc import ABC, abstractmethod
from typing import Dict

from ..llm import LLMClient
from ..prompts import build_messages, parse_reply
from ..types import ProviderError, ScriptRequest, ScriptResponse
from ...config import Config

logger = logging.getLogger(__name__)


class Provider(ABC):
    """
    One LLM backend able to turn a ScriptRequest into a ScriptResponse.

    Subclasses only describe how they are configured and which extra options
    they send; the request/response flow is shared.
    """

    name: str = ""
    display_name: str = ""

    def __init__(self, config: Config):
        self.config = config

    @abstractmethod
    def is_configured(self, config: Config) -> bool:
        """Pure precondition check, must not touch the network."""

    @abstractmethod
    def client_settings(self) -> Dict:
        """Settings handed to aisuite for this provider."""

    def completion_options(self) -> Dict:
        return {}

    def _create_client(self) -> LLMClient:
        return LLMClient({self.name: self.client_settings()})

    def generate_script(self, request: ScriptRequest) -> ScriptResponse:
        if request.provider != self.name:
            raise ProviderError(
                f"{self.display_name} cannot serve a request for provider '{request.provider}'."
            )

        logger.info("Generating %s script with %s:%s", request.script_type, self.name, request.model)
        try:
            response = self._create_client().completion(
                model=f"{self.name}:{request.model}",
                messages=build_messages(request),
                **self.completion_options(),
            )
        except Exception as e:
            raise ProviderError(f"{self.display_name} request failed: {e}") from e

        script, explanation = parse_reply(response.content or "")
        return ScriptResponse.from_request(request, script, explanation)
