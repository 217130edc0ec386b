"""CLI entry point serving the demo application."""

import argparse
import logging
import sys

from aiohttp import web

from tier_harness.server.app import create_app
from tier_harness.server.config import DEFAULT_FACTS_URL, ServerConfig


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Serve the demo server under test")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8080, help="Port to bind")
    parser.add_argument(
        "--fact-source",
        choices=["http", "random"],
        default="http",
        help="Where /data gets its facts from",
    )
    parser.add_argument(
        "--facts-url",
        default=DEFAULT_FACTS_URL,
        help="External facts API used by the http fact source",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = ServerConfig(
        host=args.host,
        port=args.port,
        fact_source=args.fact_source,
        facts_url=args.facts_url,
    )
    web.run_app(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":  # pragma: no cover
    main()
