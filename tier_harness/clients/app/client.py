"""Endpoint client serving an application in-process."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from tier_harness.clients.app.config import AppClientConfig
from tier_harness.clients.base import EndpointClient
from tier_harness.importing import resolve_import_path
from tier_harness.models.result import CONNECTION_ERROR_STATUS, Result

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class AppEndpointClient(EndpointClient):
    """Client for an application built and served by the harness itself.

    The application is created from an import path so its factory can swap
    external dependencies for local substitutes.
    """

    config: AppClientConfig
    client: TestClient = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: AppClientConfig
    ) -> AsyncGenerator["AppEndpointClient", None]:
        """Build the application and serve it for the client lifetime."""
        factory = resolve_import_path(config.app)
        app = factory(**config.factory_kwargs)
        if not isinstance(app, web.Application):
            raise TypeError(
                f"'{config.app}' returned {type(app).__name__}, expected Application"
            )

        log.info("Serving in-process application from %s", config.app)
        async with TestServer(app) as server, TestClient(server) as client:
            yield cls(config=config, client=client, ready_path=config.ready_path)

    async def send(self, method: str, path: str) -> Result:
        """Issue a request to the in-process server."""
        start = time.perf_counter()
        try:
            async with self.client.request(
                method,
                path,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            ) as response:
                body = await response.text(errors="replace")
                status = response.status
                headers = dict(response.headers)
        except (aiohttp.ClientError, TimeoutError) as exc:
            elapsed_ms = (time.perf_counter() - start) * 1000
            log.warning("In-process request failed: %s %s: %r", method, path, exc)
            return Result(
                status_code=CONNECTION_ERROR_STATUS,
                body="",
                elapsed_ms=elapsed_ms,
                error=f"{type(exc).__name__}: {exc}",
            )

        return Result(
            status_code=status,
            body=body,
            headers=headers,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
