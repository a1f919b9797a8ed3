"""Provider/runtime configuration for promptgate.

Architectural role:
    Centralizes provider credentials, endpoints, model names, gateway settings
    and the log level consumed by `promptgate.llm.selector` and
    `promptgate.api.main`.

Resolution:
    Values come from the process environment after `.env` has been loaded with
    python-dotenv. Empty variables count as unset and fall back to defaults.

Determinism:
    `Settings.from_env` is a pure function of the mapping it is given. Only
    `load_settings` touches the filesystem (`.env`) and `os.environ`.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

OPENAI_CHAT_MODEL = "OpenAI"

DEFAULT_OPENAI_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_GROQ_URL = "https://api.groq.com/openai/v1/responses"
DEFAULT_CHAT_MODEL = "openai/gpt-oss-20b"
DEFAULT_GATEWAY_URL = "http://anyway:9889"
DEFAULT_REQUEST_TIMEOUT = 120.0

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d - %(funcName)s] %(message)s"


def _get(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key, "")
    if value:
        logger.debug("ENV %s is set", key)
        return value
    return default


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key, "")
    if value:
        return value.strip().lower() == "true"
    return default


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key, "")
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", key, value, default)
        return default


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    value = env.get(key, "")
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", key, value, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Immutable process configuration.

    `chat_model` doubles as the provider switch: the literal `"OpenAI"`
    selects the OpenAI adapter (which then uses `openai_model`), any other
    value is the model name sent to Groq.
    """

    port: int = 8080
    log_level: str = "info"

    openai_api_key: str = ""
    openai_url: str = DEFAULT_OPENAI_URL
    openai_model: str = DEFAULT_OPENAI_MODEL

    groq_api_key: str = ""
    groq_url: str = DEFAULT_GROQ_URL
    chat_model: str = DEFAULT_CHAT_MODEL

    gateway_api_url: str = DEFAULT_GATEWAY_URL
    gateway_api_key: str = ""
    gateway_enabled: bool = True

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        source = os.environ if env is None else env
        return cls(
            port=_get_int(source, "PORT", 8080),
            log_level=_get(source, "LOG_LEVEL", "info"),
            openai_api_key=_get(source, "OPENAI_API_KEY", ""),
            openai_url=_get(source, "OPENAI_URL", DEFAULT_OPENAI_URL),
            openai_model=_get(source, "OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
            groq_api_key=_get(source, "GROQ_API_KEY", ""),
            groq_url=_get(source, "GROQ_URL", DEFAULT_GROQ_URL),
            chat_model=_get(source, "CHAT_MODEL", DEFAULT_CHAT_MODEL),
            gateway_api_url=_get(source, "GATEWAY_API_URL", DEFAULT_GATEWAY_URL),
            gateway_api_key=_get(source, "GATEWAY_API_KEY", ""),
            gateway_enabled=_get_bool(source, "GATEWAY_ENABLED", True),
            request_timeout=_get_float(
                source, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT
            ),
        )


def load_settings(dotenv_path: str | None = None) -> Settings:
    """Load `.env` (if present) and build settings from the environment.

    Args:
        dotenv_path: Explicit `.env` location. Defaults to python-dotenv's
            search from the current working directory.

    Returns:
        Frozen `Settings` snapshot.

    Edge cases:
        - A missing `.env` file is not an error; only a debug line is logged.
        - Variables already present in the environment win over `.env`.
    """
    if not load_dotenv(dotenv_path):
        logger.debug("No .env file found, using process environment only")
    return Settings.from_env()


def resolve_log_level(name: str) -> int:
    """Map a LOG_LEVEL string to a `logging` level, defaulting to INFO."""
    return LOG_LEVELS.get(name.strip().lower(), logging.INFO)


def configure_logging(level: str) -> None:
    """Apply the configured log level once at process start."""
    logging.basicConfig(
        level=resolve_log_level(level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
