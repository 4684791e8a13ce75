import logging

from .providers import get_provider
from .types import ConfigInvalid, ScriptRequest, ScriptResponse
from ..config import Config

logger = logging.getLogger(__name__)


def generate_script(config: Config, request: ScriptRequest) -> ScriptResponse:
    """
    Generates a script with the provider named in the request.

    Raises:
        UnsupportedProvider: if no implementation is registered for the name.
        ConfigInvalid: if the provider lacks the settings it needs.
        ProviderError: if the provider call fails.
    """
    provider = get_provider(request.provider, config)

    if not provider.is_configured(config):
        raise ConfigInvalid(f"provider {request.provider} is not properly configured")

    logger.debug("Dispatching request to %s", provider.display_name)
    return provider.generate_script(request)
