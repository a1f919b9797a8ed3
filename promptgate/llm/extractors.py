"""Backend-specific reduction of raw provider payloads to one plain-text answer.

Architectural role:
    Pure functions used by the provider adapters after a successful HTTP call.
    Response shapes are declared as pydantic models so that a body with the
    wrong structure is reported as a parse failure instead of a KeyError deep
    inside the adapter.

Extraction policies:
    - OpenAI-style: first choice only; an empty `choices` list is an error.
    - Groq-style: last `output_text` of the last `message` entry wins; no
      qualifying item yields an empty string without error.

    The two policies are intentionally left asymmetric.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from promptgate.core.errors import NoResponseError, ProviderParseError

logger = logging.getLogger(__name__)

GROQ_MESSAGE_TYPE = "message"
GROQ_OUTPUT_TEXT_TYPE = "output_text"


# ============================================================
# OpenAI-style chat completion
# ============================================================

class OpenAIMessage(BaseModel):
    role: str | None = None
    content: str | None = None


class OpenAIChoice(BaseModel):
    index: int | None = None
    message: OpenAIMessage = OpenAIMessage()


class OpenAIChatCompletion(BaseModel):
    id: str | None = None
    choices: list[OpenAIChoice] | None = None


# ============================================================
# Groq-style responses API
# ============================================================

class GroqContent(BaseModel):
    type: str = ""
    text: str | None = None


class GroqEntry(BaseModel):
    type: str = ""
    id: str | None = None
    status: str | None = None
    content: list[GroqContent] | None = None
    summary: list[Any] | None = None


class GroqResponse(BaseModel):
    id: str | None = None
    output: list[GroqEntry] | None = None


def decode_provider_body(raw: bytes | str) -> Any:
    """Decode a provider response body as JSON.

    Raises:
        ProviderParseError: The body is not valid JSON (including empty bodies).
    """
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as err:
        raise ProviderParseError(f"failed to decode provider response: {err}") from err


def _validate(model: type[BaseModel], payload: Any) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as err:
        raise ProviderParseError(
            f"unexpected provider response shape: {err.error_count()} validation error(s)"
        ) from err


def extract_openai_text(payload: Any) -> str:
    """Return the content of the first choice of a chat completion.

    Raises:
        ProviderParseError: `payload` does not look like a chat completion.
        NoResponseError: The completion carries no choices.
    """
    completion = _validate(OpenAIChatCompletion, payload)
    if not completion.choices:
        raise NoResponseError("no response from provider")
    return completion.choices[0].message.content or ""


def extract_groq_text(payload: Any) -> str:
    """Fold every `output_text` of every `message` entry, keeping the last one.

    Returns:
        The last captured text in array order, or `""` when nothing qualifies.

    Raises:
        ProviderParseError: `payload` does not look like a responses-API body.
    """
    result = _validate(GroqResponse, payload)
    output_text = ""
    for entry in result.output or []:
        if entry.type != GROQ_MESSAGE_TYPE:
            continue
        for item in entry.content or []:
            if item.type == GROQ_OUTPUT_TEXT_TYPE:
                output_text = item.text or ""
                logger.debug("captured output_text (%d chars)", len(output_text))
    return output_text
