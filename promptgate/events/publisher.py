"""HTTP gateway publisher for canonical chat responses.

Architectural role:
    Forwards the serialized `ChatResponse` produced by the orchestrator to a
    downstream HTTP sink, propagating the caller's correlation and routing ids.

Failure handling model:
    Publishing is failure-fatal for the request. Missing metadata, a caller
    that already disconnected, a spent deadline, transport
    errors and non-2xx statuses all raise `PublishError` with the cause
    chained. There is no retry and no batching.
"""

import logging
from typing import Protocol

import requests

from promptgate.config import DEFAULT_REQUEST_TIMEOUT
from promptgate.core.errors import MissingMetadataError, PublishError
from promptgate.core.types import RequestContext
from promptgate.transport import BearerTokenClient

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
ROUTING_HEADER = "X-Routing-ID"


class EventPublisher(Protocol):
    def publish(self, ctx: RequestContext, body: bytes) -> None:
        ...


class GatewayPublisher:
    """Single-POST relay to the gateway URL."""

    def __init__(
        self,
        url: str,
        client: BearerTokenClient,
        token: str = "",
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.url = url
        self.client = client
        self.token = token
        self.timeout = timeout

    def _headers(self, ctx: RequestContext) -> dict[str, str]:
        missing = [
            header
            for header, value in (
                (CORRELATION_HEADER, ctx.correlation_id),
                (ROUTING_HEADER, ctx.routing_id),
            )
            if not value
        ]
        if missing:
            raise MissingMetadataError(
                f"missing required request metadata: {', '.join(missing)}"
            )
        return {
            CORRELATION_HEADER: ctx.correlation_id,
            ROUTING_HEADER: ctx.routing_id,
        }

    def publish(self, ctx: RequestContext, body: bytes) -> None:
        headers = self._headers(ctx)
        if ctx.cancelled:
            raise PublishError("request cancelled by caller before publish")
        timeout = ctx.call_timeout(self.timeout)
        if timeout is None:
            raise PublishError("request deadline exceeded before publish")

        try:
            response = self.client.post(
                self.url,
                body,
                token=self.token,
                headers=headers,
                timeout=timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as err:
            raise PublishError(f"failed to publish to gateway: {err}") from err

        logger.debug(
            "Published response to %s correlation_id=%s routing_id=%s",
            self.url,
            ctx.correlation_id,
            ctx.routing_id,
        )
