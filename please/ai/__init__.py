"""
The `ai` package turns a task description into a script: the request/response
types, the LLM client, prompting and the provider implementations.
"""

from .types import (
    ConfigInvalid,
    FileIOError,
    ModelSelectionError,
    PleaseError,
    ProviderError,
    ScriptRequest,
    ScriptResponse,
    UnsupportedProvider,
)

__all__ = [
    "ConfigInvalid",
    "FileIOError",
    "ModelSelectionError",
    "PleaseError",
    "ProviderError",
    "ScriptRequest",
    "ScriptResponse",
    "UnsupportedProvider",
]
