import logging
import re

from typing import Dict

from .types import ModelSelectionError
from ..config import Config

logger = logging.getLogger(__name__)

FALLBACK_MODELS = {
    "openai": "gpt-3.5-turbo",
    "anthropic": "claude-3-haiku-20240307",
}
DEFAULT_FALLBACK_MODEL = "llama3.2"

# "fast" for everyday one-liners, "capable" for multi-step work.
MODEL_TIERS: Dict[str, Dict[str, str]] = {
    "ollama": {"fast": "llama3.2", "capable": "llama3.1"},
    "openai": {"fast": "gpt-4o-mini", "capable": "gpt-4o"},
    "anthropic": {"fast": "claude-3-5-haiku-latest", "capable": "claude-3-5-sonnet-latest"},
}

COMPLEX_KEYWORDS = {
    "backup",
    "cron",
    "database",
    "deploy",
    "docker",
    "kubernetes",
    "migrate",
    "monitor",
    "parse",
    "schedule",
    "service",
    "sync",
}

LONG_TASK_WORDS = 25


def is_complex_task(task_description: str) -> bool:
    words = re.findall(r"[a-z0-9]+", task_description.lower())
    if len(words) > LONG_TASK_WORDS:
        return True
    return any(word in COMPLEX_KEYWORDS for word in words)


def select_best_model(config: Config, task_description: str, provider: str) -> str:
    if config.model:
        return config.model

    preferred = config.models.get(provider)
    if preferred:
        return preferred

    tiers = MODEL_TIERS.get(provider)
    if not tiers:
        raise ModelSelectionError(f"no model known for provider '{provider}'")

    tier = "capable" if is_complex_task(task_description) else "fast"
    logger.debug("Picked the %s tier for %s", tier, provider)
    return tiers[tier]


def fallback_model(provider: str) -> str:
    return FALLBACK_MODELS.get(provider, DEFAULT_FALLBACK_MODEL)
