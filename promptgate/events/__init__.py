"""Downstream relay of canonical chat responses."""

from promptgate.events.publisher import EventPublisher, GatewayPublisher

__all__ = ["EventPublisher", "GatewayPublisher"]
