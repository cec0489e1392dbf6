"""CLI entry point for swarmgate.

This module provides the command-line interface for starting the gateway.
It can be invoked as `swarmgate` (via the script entry point) or
`python -m swarmgate`.
"""

import argparse
import logging
import sys

import uvicorn

from swarmgate import __version__, create_app
from swarmgate.config import SwarmGateSettings


def main() -> None:
    """Main entry point for the swarmgate CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="swarmgate",
        description="Multi-agent gateway routing chat channels and agent-to-agent calls",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"swarmgate {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via SWARMGATE_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via SWARMGATE_PORT)",
    )

    parser.add_argument(
        "--public-url",
        type=str,
        default=None,
        help="URL other agents use to reach this server (can be set via SWARMGATE_PUBLIC_URL)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via SWARMGATE_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Base directory for all data (default: ., can be set via SWARMGATE_DATA_DIR)",
    )

    parser.add_argument(
        "--no-local-agent",
        action="store_true",
        help="Do not start the built-in Ollama agent",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via SWARMGATE_LOG_LEVEL)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.public_url is not None:
        settings_kwargs["public_url"] = args.public_url
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.data_dir is not None:
        settings_kwargs["data_dir"] = args.data_dir
    if args.no_local_agent:
        settings_kwargs["local_agent_enabled"] = False
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = SwarmGateSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
