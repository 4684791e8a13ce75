from dataclasses import dataclass


SCRIPT_TYPES = ("bash", "zsh", "sh", "powershell", "batch")


class PleaseError(Exception):
    """Base class for every error surfaced to the user."""


class ConfigInvalid(PleaseError):
    """Missing or malformed configuration (credentials, endpoints, config file)."""


class UnsupportedProvider(PleaseError):
    """The requested provider has no registered implementation."""


class ProviderError(PleaseError):
    """The provider call failed or its reply could not be understood."""


class FileIOError(PleaseError):
    """Creating or removing an alias shim failed."""


class ModelSelectionError(PleaseError):
    """No model could be picked automatically for the provider."""


@dataclass(frozen=True)
class ScriptRequest:
    """Everything a provider needs to generate a script."""

    task_description: str
    script_type: str
    provider: str
    model: str


@dataclass(frozen=True)
class ScriptResponse:
    """A generated script plus the metadata of the request that produced it."""

    task_description: str
    model: str
    provider: str
    script_type: str
    script: str
    explanation: str = ""

    @classmethod
    def from_request(
        cls, request: ScriptRequest, script: str, explanation: str = ""
    ) -> "ScriptResponse":
        return cls(
            task_description=request.task_description,
            model=request.model,
            provider=request.provider,
            script_type=request.script_type,
            script=script,
            explanation=explanation,
        )
