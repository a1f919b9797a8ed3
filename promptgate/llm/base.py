"""Provider adapter protocol and the shared invocation helper."""

import json
import logging
from typing import Any, Protocol

import requests

from promptgate.core.errors import ProviderInvocationError
from promptgate.core.types import PromptRequest, RequestContext
from promptgate.transport import BearerTokenClient

logger = logging.getLogger(__name__)


class ProviderAdapter(Protocol):
    """One LLM backend: build its payload, call it, extract the answer."""

    name: str

    def send(self, ctx: RequestContext, request: PromptRequest) -> str:
        """Return the backend's plain-text answer for `request`.

        Raises:
            ProviderInvocationError: Transport failure, or a subclass for
                undecodable (`ProviderParseError`) or empty
                (`NoResponseError`) responses.
        """
        ...


def post_payload(
    client: BearerTokenClient,
    ctx: RequestContext,
    *,
    provider: str,
    url: str,
    token: str,
    payload: dict[str, Any],
    timeout: float,
) -> requests.Response:
    """Serialize `payload` and POST it to a provider within the request budget.

    Args:
        client: Shared transport.
        ctx: Request context; its deadline caps `timeout`.
        provider: Provider label used in error messages.
        url: Provider endpoint.
        token: Provider API key sent as bearer token.
        payload: Provider-specific request body.
        timeout: Per-call timeout in seconds.

    Returns:
        Raw response, status code not inspected.

    Raises:
        ProviderInvocationError: Caller gone, deadline spent, or transport failure.
    """
    if ctx.cancelled:
        raise ProviderInvocationError(f"{provider}: request cancelled by caller")
    call_timeout = ctx.call_timeout(timeout)
    if call_timeout is None:
        raise ProviderInvocationError(f"{provider}: request deadline exceeded before call")

    body = json.dumps(payload).encode("utf-8")
    try:
        return client.post(url, body, token=token, timeout=call_timeout)
    except requests.exceptions.RequestException as err:
        logger.warning("%s request failed: %s", provider, err)
        raise ProviderInvocationError(f"error calling {provider} API: {err}") from err
