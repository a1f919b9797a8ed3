"""Core request orchestration for provider invocation and downstream publishing.

Architectural role:
    Provides the single entry point used by the HTTP layer to turn one prompt
    into a canonical `ChatResponse`.

Control-flow model:
    1. Invoke the configured provider adapter (single attempt, no retry).
    2. Wrap the extracted text into `ChatResponse`.
    3. If a publisher is configured, relay the canonical bytes downstream.
    4. Return the response to the caller.

Error handling strategy:
    Failures are raised, never converted into response strings. Provider
    failures surface as `ProviderInvocationError` (or a subclass) and never
    trigger a publish. Publish failures surface as `PublishError` even though
    the provider call already succeeded, so a request is never half-successful.

Side effects:
    Outbound provider call and optional outbound publish call only. The
    orchestrator holds no per-request state and is safe to share across
    concurrent requests.
"""

import logging

from promptgate.core.errors import ProviderInvocationError, PublishError
from promptgate.core.types import ChatResponse, PromptRequest, RequestContext
from promptgate.events.publisher import EventPublisher
from promptgate.llm.base import ProviderAdapter

logger = logging.getLogger(__name__)


class ChatOrchestrator:
    """Delegates a prompt to one provider and optionally relays the answer."""

    def __init__(self, provider: ProviderAdapter, publisher: EventPublisher | None = None):
        self.provider = provider
        self.publisher = publisher

    def process_chat(self, ctx: RequestContext, request: PromptRequest) -> ChatResponse:
        """Run one prompt through the provider and the optional publisher.

        Args:
            ctx: Correlation metadata and deadline for this request.
            request: Prompt to forward.

        Returns:
            The canonical response.

        Raises:
            ProviderInvocationError: The provider call, decoding or extraction
                failed. Subclasses keep the exact cause distinguishable.
            PublishError: The downstream relay failed.
        """
        try:
            text = self.provider.send(ctx, request)
        except ProviderInvocationError:
            logger.exception("Failed to send message (request_id=%s)", ctx.request_id)
            raise
        except Exception as err:
            logger.exception("Failed to send message (request_id=%s)", ctx.request_id)
            raise ProviderInvocationError(f"provider call failed: {err}") from err

        response = ChatResponse(response=text)
        self._publish(ctx, response)
        return response

    def _publish(self, ctx: RequestContext, response: ChatResponse) -> None:
        if self.publisher is None:
            logger.debug("No publisher configured, skipping publish")
            return
        try:
            self.publisher.publish(ctx, response.to_bytes())
        except PublishError:
            logger.exception("Failed to publish message (request_id=%s)", ctx.request_id)
            raise
        except Exception as err:
            logger.exception("Failed to publish message (request_id=%s)", ctx.request_id)
            raise PublishError(f"publish failed: {err}") from err
