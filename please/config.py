import json
import logging
import os
import platform

from dataclasses import asdict, dataclass, field, fields
from typing import Dict, Optional

from .ai.types import SCRIPT_TYPES, ConfigInvalid

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "ollama"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
CONFIG_ENV_VAR = "PLEASE_CONFIG"
PROVIDER_ENV_VAR = "PLEASE_PROVIDER"


@dataclass
class Config:
    provider: str = DEFAULT_PROVIDER
    # Forces a model for every provider; empty means "pick one automatically".
    model: str = ""
    # Empty means "use the host platform's default shell".
    script_type: str = ""
    provider_configs: Dict[str, Dict] = field(default_factory=dict)
    models: Dict[str, str] = field(default_factory=dict)

    def provider_config(self, provider: str) -> Dict:
        return self.provider_configs.get(provider) or {}

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Config":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


def config_path() -> str:
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return os.path.expanduser(override)
    return os.path.join(os.path.expanduser("~"), ".please", "config.json")


def create_default_config() -> Config:
    return Config(
        provider=DEFAULT_PROVIDER,
        provider_configs={
            "ollama": {"api_url": DEFAULT_OLLAMA_URL},
            "openai": {"api_key": ""},
            "anthropic": {"api_key": ""},
        },
    )


def _validate(data: Dict, path: str):
    for key in ("provider", "model", "script_type"):
        if not isinstance(data.get(key, ""), str):
            raise ConfigInvalid(f"'{key}' in {path} must be a string.")

    for key in ("provider_configs", "models"):
        if not isinstance(data.get(key, {}), dict):
            raise ConfigInvalid(f"'{key}' in {path} must be a JSON object.")

    for provider, settings in data.get("provider_configs", {}).items():
        if not isinstance(settings, dict):
            raise ConfigInvalid(f"'provider_configs.{provider}' in {path} must be a JSON object.")
        for name in ("api_key", "api_url"):
            if not isinstance(settings.get(name, ""), str):
                raise ConfigInvalid(f"'provider_configs.{provider}.{name}' in {path} must be a string.")

    for provider, model in data.get("models", {}).items():
        if not isinstance(model, str):
            raise ConfigInvalid(f"'models.{provider}' in {path} must be a string.")


def load_config(path: Optional[str] = None) -> Config:
    """
    Reads the JSON config file.

    Raises:
        FileNotFoundError: if the file does not exist.
        ConfigInvalid: if the file cannot be read, is not valid JSON, or holds
            values of the wrong type.
    """
    path = path or config_path()
    try:
        with open(path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except FileNotFoundError:
        raise
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise ConfigInvalid(f"Error reading or parsing {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigInvalid(f"Error reading or parsing {path}: expected a JSON object.")

    _validate(data, path)

    logger.debug("Loaded configuration from %s", path)
    return Config.from_dict(data)


def save_config(config: Config, path: Optional[str] = None):
    path = path or config_path()
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as config_file:
        json.dump(config.to_dict(), config_file, indent=2)
    logger.debug("Saved configuration to %s", path)


def determine_provider(config: Config) -> str:
    env_provider = (os.getenv(PROVIDER_ENV_VAR) or "").strip()
    provider = env_provider or config.provider.strip() or DEFAULT_PROVIDER
    return provider.lower()


def default_script_type() -> str:
    system = platform.system()
    if system == "Windows":
        return "powershell"
    if system == "Darwin" and os.getenv("SHELL", "").endswith("zsh"):
        return "zsh"
    return "bash"


def determine_script_type(config: Config) -> str:
    if not config.script_type:
        return default_script_type()

    script_type = config.script_type.strip().lower()
    if script_type not in SCRIPT_TYPES:
        raise ConfigInvalid(
            f"unknown script_type '{config.script_type}', expected one of: {', '.join(SCRIPT_TYPES)}"
        )
    return script_type
