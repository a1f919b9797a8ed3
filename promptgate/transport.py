"""Bearer-token HTTP transport shared by provider adapters and the publisher.

Architectural role:
    Wraps one `requests.Session` (connection pooling) behind a single `post`
    operation that attaches JSON content type, caller headers and the
    `Authorization: Bearer` header.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with the timeout
    supplied by the caller.

Failure handling model:
    `requests.exceptions.RequestException` propagates unchanged. Callers map it
    to their own error type (`ProviderInvocationError`, `PublishError`).
"""

import logging
from collections.abc import Mapping

import requests

logger = logging.getLogger(__name__)


class BearerTokenClient:
    """POST-with-bearer-token client over a reusable session."""

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()

    def post(
        self,
        url: str,
        content: bytes,
        token: str = "",
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        """Send `content` to `url` and return the raw response.

        Args:
            url: Target endpoint.
            content: Already-serialized request body.
            token: Bearer token. An empty token sends no Authorization header.
            headers: Extra headers applied after the JSON content type.
            timeout: Seconds for connect and read, as accepted by `requests`.

        Returns:
            The `requests.Response`; status codes are not inspected here.
        """
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        logger.debug("POST %s (%d bytes)", url, len(content))
        response = self.session.post(
            url,
            data=content,
            headers=request_headers,
            timeout=timeout,
        )
        logger.debug("POST %s -> %s", url, response.status_code)
        return response

    def close(self) -> None:
        self.session.close()
