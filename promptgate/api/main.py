"""
Process entrypoint for the promptgate HTTP service.

Startup sequence:
1. Load `.env` and environment settings.
2. Apply the configured log level (once, for the process lifetime).
3. Select the provider adapter; no usable backend is fatal.
4. Build the optional gateway publisher on the same HTTP session.
5. Serve the FastAPI application with uvicorn, closing the HTTP session on
   shutdown.
"""

import argparse
import logging
import sys

import uvicorn
from fastapi import FastAPI

from promptgate.api.http_api import create_app
from promptgate.config import Settings, configure_logging, load_settings
from promptgate.core.errors import ConfigurationError
from promptgate.core.orchestrator import ChatOrchestrator
from promptgate.llm.selector import build_publisher, select_provider
from promptgate.transport import BearerTokenClient

logger = logging.getLogger(__name__)


def build_app(settings: Settings, client: BearerTokenClient | None = None) -> FastAPI:
    """
    Construct the orchestrator and HTTP app for `settings`.

    Raises `ConfigurationError` when no provider can be selected.
    """
    client = client or BearerTokenClient()
    provider = select_provider(settings, client)
    publisher = build_publisher(settings, client)
    orchestrator = ChatOrchestrator(provider=provider, publisher=publisher)
    return create_app(orchestrator, settings)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the promptgate HTTP service.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=None, help="Overrides PORT.")
    parser.add_argument("--env-file", default=None, help="Path to a .env file.")
    args = parser.parse_args(argv)

    settings = load_settings(args.env_file)
    configure_logging(settings.log_level)

    client = BearerTokenClient()
    try:
        try:
            app = build_app(settings, client)
        except ConfigurationError as err:
            logger.critical("Cannot start: %s", err)
            return 1

        port = args.port or settings.port
        logger.info("Listening on %s:%s", args.host, port)
        uvicorn.run(app, host=args.host, port=port, log_config=None)
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
