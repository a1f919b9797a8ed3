"""API adapters package.

Architectural role:
    Hosts the HTTP interface layer and the process entrypoint that wire the
    core orchestrator to external callers.

Modules:
    - `http_api`: FastAPI routes and middleware.
    - `main`: settings/logging bootstrap, provider selection and uvicorn run.
"""
