"""Bootstrap-time construction of the provider adapter and publisher.

Selection precedence is fixed: OpenAI (when `CHAT_MODEL == "OpenAI"` and a key
is present), then Groq (when its key is present), otherwise startup fails.
"""

import logging

from promptgate.config import OPENAI_CHAT_MODEL, Settings
from promptgate.core.errors import ConfigurationError
from promptgate.events.publisher import GatewayPublisher
from promptgate.llm.base import ProviderAdapter
from promptgate.llm.groq_provider import GroqProvider
from promptgate.llm.openai_provider import OpenAIProvider
from promptgate.transport import BearerTokenClient

logger = logging.getLogger(__name__)


def select_provider(
    settings: Settings, client: BearerTokenClient | None = None
) -> ProviderAdapter:
    """Return exactly one adapter for the configured backend.

    Raises:
        ConfigurationError: Neither an OpenAI nor a Groq backend is usable.
    """
    client = client or BearerTokenClient()

    if settings.chat_model == OPENAI_CHAT_MODEL and settings.openai_api_key:
        logger.info("Starting with OpenAI API (model=%s)", settings.openai_model)
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            client=client,
            model=settings.openai_model,
            base_url=settings.openai_url,
            timeout=settings.request_timeout,
        )

    if settings.groq_api_key:
        logger.info("Starting with Groq API (model=%s)", settings.chat_model)
        return GroqProvider(
            api_key=settings.groq_api_key,
            client=client,
            model=settings.chat_model,
            base_url=settings.groq_url,
            timeout=settings.request_timeout,
        )

    raise ConfigurationError("no valid LLM provider configuration found")


def build_publisher(
    settings: Settings, client: BearerTokenClient | None = None
) -> GatewayPublisher | None:
    if not settings.gateway_enabled or not settings.gateway_api_url:
        logger.info("Gateway publishing disabled")
        return None
    logger.info("Publishing responses to gateway %s", settings.gateway_api_url)
    return GatewayPublisher(
        url=settings.gateway_api_url,
        client=client or BearerTokenClient(),
        token=settings.gateway_api_key,
        timeout=settings.request_timeout,
    )
