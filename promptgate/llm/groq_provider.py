"""Groq-style responses-API adapter.

Wire format:
    Request:  `{"model": <model>, "input": <prompt>}`
    Response: `output[]` entries; see `extractors.extract_groq_text`.

Failure handling:
    - Transport errors raise `ProviderInvocationError`.
    - The HTTP status is logged only; the body always goes to the extractor,
      so a JSON error body with no `output` yields an empty answer.
    - Undecodable bodies raise `ProviderParseError`.
"""

import logging

from promptgate.config import DEFAULT_CHAT_MODEL, DEFAULT_GROQ_URL, DEFAULT_REQUEST_TIMEOUT
from promptgate.core.types import PromptRequest, RequestContext
from promptgate.llm.base import post_payload
from promptgate.llm.extractors import decode_provider_body, extract_groq_text
from promptgate.transport import BearerTokenClient

logger = logging.getLogger(__name__)


class GroqProvider:
    name = "groq"

    def __init__(
        self,
        api_key: str,
        client: BearerTokenClient,
        model: str = DEFAULT_CHAT_MODEL,
        base_url: str = DEFAULT_GROQ_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.client = client
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

    def build_payload(self, request: PromptRequest) -> dict:
        return {"model": self.model, "input": request.prompt}

    def send(self, ctx: RequestContext, request: PromptRequest) -> str:
        response = post_payload(
            self.client,
            ctx,
            provider=self.name,
            url=self.base_url,
            token=self.api_key,
            payload=self.build_payload(request),
            timeout=self.timeout,
        )
        logger.info("Groq API response status: %s", response.status_code)
        logger.debug("Groq API response: %s", response.text)
        return extract_groq_text(decode_provider_body(response.content))
