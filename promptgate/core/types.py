"""Canonical data contracts shared by the HTTP boundary, orchestrator and adapters.

Architectural role:
    Defines the provider-agnostic prompt/response shapes and the typed
    per-request context threaded from the HTTP layer down to the publisher.

Serialization:
    `ChatResponse.to_bytes()` is the canonical encoding relayed downstream and
    returned to callers: UTF-8 JSON of the form `{"response": "..."}`.

Determinism:
    Prompt/response types are immutable value objects. `RequestContext` is
    frozen apart from its cancellation event, and only reads the monotonic
    clock when asked for the remaining time budget.
"""

import threading
import time
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict


class PromptRequest(BaseModel):
    """Single-turn prompt forwarded to the configured provider."""

    model_config = ConfigDict(frozen=True)

    prompt: str


class ChatResponse(BaseModel):
    """Canonical answer returned regardless of which backend produced it."""

    model_config = ConfigDict(frozen=True)

    response: str

    def to_bytes(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes | str) -> "ChatResponse":
        return cls.model_validate_json(raw)


@dataclass(frozen=True)
class RequestContext:
    """Correlation metadata, time budget and cancellation flag for one request.

    Attributes:
        correlation_id: Caller-supplied `X-Correlation-ID`, if any.
        routing_id: Caller-supplied `X-Routing-ID`, if any.
        request_id: `X-Request-Id` or a boundary-generated identifier.
        deadline: Absolute `time.monotonic()` value after which no outbound
            call may start. `None` means no deadline.
        cancel_event: Set by the boundary when the caller goes away. Shared
            with the worker thread running the orchestrator.
    """

    correlation_id: str | None = None
    routing_id: str | None = None
    request_id: str | None = None
    deadline: float | None = field(default=None, compare=False)
    cancel_event: threading.Event = field(
        default_factory=threading.Event, compare=False, repr=False
    )

    @classmethod
    def with_timeout(cls, timeout: float | None, **metadata) -> "RequestContext":
        deadline = None if timeout is None else time.monotonic() + timeout
        return cls(deadline=deadline, **metadata)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()

    def remaining(self, default: float) -> float:
        """Return the timeout to use for the next outbound call.

        Args:
            default: Per-call timeout used when it is tighter than the deadline.

        Returns:
            `default` capped by the time left before `deadline`. A value of
            `0.0` or less means the budget is spent and no call may start.
        """
        if self.deadline is None:
            return default
        return min(default, self.deadline - time.monotonic())

    def call_timeout(self, default: float) -> float | None:
        """Return a usable timeout for the next call, or `None` if none is left."""
        timeout = self.remaining(default)
        return timeout if timeout > 0 else None
