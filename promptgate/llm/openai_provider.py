"""OpenAI-style chat-completions adapter.

Wire format:
    Request:  `{"model": <model>, "messages": [{"role": "user", "content": <prompt>}]}`
    Response: `choices[0].message.content`

Failure handling:
    - Transport errors and non-2xx statuses raise `ProviderInvocationError`.
    - Undecodable bodies raise `ProviderParseError`.
    - An empty `choices` list raises `NoResponseError`.
"""

import logging

import requests

from promptgate.config import DEFAULT_OPENAI_MODEL, DEFAULT_OPENAI_URL, DEFAULT_REQUEST_TIMEOUT
from promptgate.core.errors import ProviderInvocationError
from promptgate.core.types import PromptRequest, RequestContext
from promptgate.llm.base import post_payload
from promptgate.llm.extractors import decode_provider_body, extract_openai_text
from promptgate.transport import BearerTokenClient

logger = logging.getLogger(__name__)


class OpenAIProvider:
    name = "openai"

    def __init__(
        self,
        api_key: str,
        client: BearerTokenClient,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str = DEFAULT_OPENAI_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.client = client
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

    def build_payload(self, request: PromptRequest) -> dict:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": request.prompt}],
        }

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
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise ProviderInvocationError(f"error calling openai API: {err}") from err

        logger.info("OpenAI API response status: %s", response.status_code)
        return extract_openai_text(decode_provider_body(response.content))
