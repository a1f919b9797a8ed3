"""promptgate: single-turn prompt relay over interchangeable LLM backends.

Architectural role:
    Accepts a prompt over HTTP, forwards it to the configured provider
    (OpenAI-style or Groq-style), normalizes the answer into one canonical
    response and optionally relays it to a downstream gateway.

Package split:
    - `config`: environment-driven settings and logging setup.
    - `core`: request orchestration, canonical types and the error taxonomy.
    - `llm`: transport, provider adapters, response extraction, selection.
    - `events`: downstream publisher.
    - `api`: FastAPI surface and process bootstrap.
"""

__version__ = "0.1.0"
