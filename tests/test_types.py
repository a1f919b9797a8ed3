import time

import pytest
from pydantic import ValidationError

from promptgate.core.types import ChatResponse, PromptRequest, RequestContext


@pytest.mark.parametrize(
    "text",
    ["", "plain answer", "héllo wörld", "日本語の応答 🚀", 'quotes " and \\ and\nnewlines'],
)
def test_chat_response_survives_serialization(text):
    restored = ChatResponse.from_bytes(ChatResponse(response=text).to_bytes())
    assert restored.response == text


def test_chat_response_canonical_shape():
    assert ChatResponse(response="ok").to_bytes() == b'{"response":"ok"}'


def test_chat_response_is_immutable():
    response = ChatResponse(response="a")
    with pytest.raises(ValidationError):
        response.response = "b"


def test_prompt_request_accepts_empty_prompt():
    assert PromptRequest(prompt="").prompt == ""
def test_context_without_deadline_never_expires():
    ctx = RequestContext(correlation_id="c")
    assert ctx.remaining(30.0) == 30.0
    assert ctx.call_timeout(30.0) == 30.0


def test_context_remaining_is_capped_by_deadline():
    ctx = RequestContext.with_timeout(2.0, request_id="r")
    assert ctx.request_id == "r"
    assert 0.0 < ctx.call_timeout(120.0) <= 2.0
    assert ctx.call_timeout(0.5) == 0.5


def test_context_past_deadline_has_no_call_timeout():
    ctx = RequestContext(deadline=time.monotonic() - 1)
    assert ctx.remaining(10.0) < 0
    assert ctx.call_timeout(10.0) is None


def test_context_with_deadline_now_never_yields_zero_timeout():
    ctx = RequestContext(deadline=time.monotonic())
    assert ctx.call_timeout(10.0) is None


def test_context_cancellation_is_shared_but_not_compared():
    ctx = RequestContext(correlation_id="c")
    assert not ctx.cancelled
    ctx.cancel()
    assert ctx.cancelled
    assert ctx == RequestContext(correlation_id="c")
