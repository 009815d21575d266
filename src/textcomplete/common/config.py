"""Runtime settings: built-in defaults, optional YAML file, then environment."""
from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

import yaml

from textcomplete.common.errors import ConfigError

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "text-davinci-002"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TIMEOUT = 120.0

CONFIG_PATH_ENV = "TEXTCOMPLETE_CONFIG"

# setting name -> environment variable
ENV_VARS = {
    "api_key": "OPENAI_API_KEY",
    "base_url": "OPENAI_BASE_URL",
    "model": "OPENAI_MODEL",
    "max_tokens": "MAX_TOKENS",
    "timeout": "REQUEST_TIMEOUT",
}

@dataclass(frozen=True)
class Settings:
    api_key: str | None = field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/completions"

    def require_api_key(self) -> str:
        """Return the credential or raise ``ConfigError`` if none is set."""
        if not self.api_key:
            raise ConfigError(
                f"{ENV_VARS['api_key']} environment variable is not set "
                "and no api_key was found in the config file"
            )
        return self.api_key


def load_cfg(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _coerce(name: str, value: Any) -> Any:
    if name in ("max_tokens", "timeout") and isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if name == "max_tokens":
        if isinstance(value, float) and not value.is_integer():
            raise ConfigError(f"max_tokens must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"max_tokens must be an integer, got {value!r}") from None
    if name == "timeout":
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"timeout must be a number, got {value!r}") from None
    return str(value)


def load_settings(cfg_path: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings for one invocation.

    Args:
        cfg_path: Optional YAML file. Falls back to ``$TEXTCOMPLETE_CONFIG``.
        environ: Environment mapping, ``os.environ`` when omitted.

    Returns:
        Settings with environment values taking precedence over the file.
    """
    env = os.environ if environ is None else environ
    cfg_path = cfg_path or env.get(CONFIG_PATH_ENV)

    values: dict[str, Any] = {}
    if cfg_path:
        for key, value in load_cfg(cfg_path).items():
            if key in ENV_VARS and value is not None:
                values[key] = _coerce(key, value)

    for key, var in ENV_VARS.items():
        raw = env.get(var)
        if raw:
            values[key] = _coerce(key, raw)

    return replace(Settings(), **values)
