"""Core orchestration package.

Architectural role:
    Exposes the request-orchestration layer that sits between the HTTP
    boundary and the provider adapters / downstream publisher.

Composition:
    - `orchestrator`: `ChatOrchestrator.process_chat` control flow.
    - `types`: canonical request/response models and the request context.
    - `errors`: typed failures surfaced to the HTTP boundary.
"""
