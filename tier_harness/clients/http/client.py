"""Endpoint client issuing real requests against a running server."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import ClassVar

import aiohttp

from tier_harness.clients.base import EndpointClient
from tier_harness.clients.http.config import HttpClientConfig
from tier_harness.models.result import CONNECTION_ERROR_STATUS, Result

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class HttpEndpointClient(EndpointClient):
    """Client for a server reachable over the network."""

    full_stack: ClassVar[bool] = True

    config: HttpClientConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: HttpClientConfig
    ) -> AsyncGenerator["HttpEndpointClient", None]:
        """Create client with managed session lifecycle."""
        async with aiohttp.ClientSession(
            base_url=config.base_url,
            headers=dict(config.headers),
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as session:
            yield cls(config=config, session=session, ready_path=config.ready_path)

    async def send(self, method: str, path: str) -> Result:
        """Issue a request and capture status, body and headers."""
        start = time.perf_counter()
        try:
            async with self.session.request(method, path) as response:
                body = await response.text(errors="replace")
                status = response.status
                headers = dict(response.headers)
        except (aiohttp.ClientError, TimeoutError) as exc:
            elapsed_ms = (time.perf_counter() - start) * 1000
            error = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
            log.warning(
                "Request failed: method=%s base_url=%s path=%s error=%s",
                method,
                self.config.base_url,
                path,
                error,
            )
            return Result(
                status_code=CONNECTION_ERROR_STATUS,
                body="",
                elapsed_ms=elapsed_ms,
                error=error,
            )

        elapsed_ms = (time.perf_counter() - start) * 1000
        log.debug(
            "Request completed: method=%s path=%s status=%d elapsed=%.1fms",
            method,
            path,
            status,
            elapsed_ms,
        )
        return Result(
            status_code=status,
            body=body,
            headers=headers,
            elapsed_ms=elapsed_ms,
        )
