"""Demo web application used as the server under test."""

import logging
from collections.abc import AsyncIterator
from typing import Any

from aiohttp import web

from tier_harness.server.config import ServerConfig
from tier_harness.server.facts import (
    FactSource,
    FactSourceError,
    HttpFactSource,
    RandomFactSource,
)

log = logging.getLogger(__name__)

GREETING = "Hello World"

FACT_SOURCE = web.AppKey("fact_source", FactSource)

routes = web.RouteTableDef()


@routes.get("/hello")
async def hello(request: web.Request) -> web.Response:
    """Fixed greeting."""
    return web.Response(text=GREETING)


@routes.get("/data")
async def data(request: web.Request) -> web.Response:
    """A fresh fact on every call."""
    source = request.app[FACT_SOURCE]
    try:
        fact = await source.next_fact()
    except FactSourceError as exc:
        log.warning("Fact source failed: %s", exc)
        raise web.HTTPBadGateway(text=str(exc)) from exc
    return web.Response(text=fact)


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    return web.Response(text="ok")


def create_app(config: ServerConfig | None = None) -> web.Application:
    """Create the demo application.

    The fact source lives for the lifetime of the application and is opened
    on startup.
    """
    config = config or ServerConfig()

    async def fact_source_ctx(app: web.Application) -> AsyncIterator[None]:
        if config.fact_source == "random":
            app[FACT_SOURCE] = RandomFactSource()
            yield
            return

        async with HttpFactSource.from_config(config) as source:
            app[FACT_SOURCE] = source
            yield

    app = web.Application()
    app.add_routes(routes)
    app.cleanup_ctx.append(fact_source_ctx)
    return app


def build_app(**settings: Any) -> web.Application:
    """Create the demo application from keyword settings.

    Entry point for the in-process client, e.g. ``fact_source="random"``.
    """
    return create_app(ServerConfig(**settings))
