import logging
from dataclasses import dataclass

import aisuite

from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class LLMCompletionResponse:
    """Wraps the assistant message returned by the LLM API."""

    assistant_message: Dict

    @property
    def content(self) -> Optional[str]:
        """The text content of the message, if any."""
        return self.assistant_message.get("content")


class LLMClient:
    """
    A wrapper for the LLM client to abstract away the specific provider library.
    Every provider goes through the same `provider:model` completion call.
    """

    def __init__(self, provider_configs: Dict):
        """
        Initializes the LLM client.

        Args:
            provider_configs: Settings keyed by provider name, e.g.
                {"openai": {"api_key": "..."}}.
        """
        self.client = aisuite.Client(provider_configs)

    @staticmethod
    def format_system_message(content: str) -> Dict:
        return {"role": "system", "content": content}

    @staticmethod
    def format_user_message(content: str) -> Dict:
        return {"role": "user", "content": content}

    def completion(
        self, model: str, messages: List[Dict], **kwargs
    ) -> LLMCompletionResponse:
        logger.debug("Sending %d messages to %s", len(messages), model)
        response = self.client.chat.completions.create(
            model=model, messages=messages, **kwargs
        )

        message = response.choices[0].message
        return LLMCompletionResponse(
            assistant_message={
                "role": "assistant",
                "content": getattr(message, "content", None),
            }
        )
