"""LLM access package.

Architectural role:
    Provides the provider adapters, response extraction and the
    bootstrap-time provider selection used by `promptgate.core.orchestrator`.

Module split:
    - `base`: `ProviderAdapter` protocol.
    - `openai_provider` / `groq_provider`: backend-specific adapters.
    - `extractors`: response-shape normalization.
    - `selector`: configuration-driven adapter/publisher construction.
"""

from promptgate.llm.base import ProviderAdapter
from promptgate.llm.groq_provider import GroqProvider
from promptgate.llm.openai_provider import OpenAIProvider

__all__ = [
    "GroqProvider",
    "OpenAIProvider",
    "ProviderAdapter",
]
