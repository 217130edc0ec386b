"""Sources of the variable payload served by the data endpoint."""

import logging
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Protocol

import aiohttp
from pydantic import BaseModel, ValidationError

from tier_harness.server.config import ServerConfig

log = logging.getLogger(__name__)


class FactSourceError(Exception):
    """Raised when a fact cannot be produced."""


class FactSource(Protocol):
    """Anything able to produce a fresh fact per call."""

    async def next_fact(self) -> str:
        """Return a new fact."""
        ...


class FactPayload(BaseModel):
    """Response body of the external facts API."""

    fact: str
    length: int | None = None


@dataclass(frozen=True, kw_only=True)
class RandomFactSource:
    """Local stand-in for the external facts API."""

    prefix: str = "Fact"

    async def next_fact(self) -> str:
        return f"{self.prefix} {uuid.uuid4().hex}"


@dataclass(frozen=True, kw_only=True)
class HttpFactSource:
    """Fetches facts from an external HTTP API."""

    url: str
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ServerConfig
    ) -> AsyncGenerator["HttpFactSource", None]:
        """Create source with managed session lifecycle."""
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=config.facts_timeout),
            headers={"Accept": "application/json"},
        ) as session:
            yield cls(url=config.facts_url, session=session)

    async def next_fact(self) -> str:
        """Fetch a single fact.

        Raises:
            FactSourceError: If the API is unreachable or answers unexpectedly

        """
        try:
            async with self.session.get(self.url) as response:
                if response.status != 200:
                    text = await response.text()
                    raise FactSourceError(
                        f"Facts API returned {response.status}: {text}"
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise FactSourceError(f"Facts API unreachable: {exc!r}") from exc

        try:
            payload = FactPayload.model_validate(data)
        except ValidationError as exc:
            raise FactSourceError(f"Unexpected facts API payload: {data!r}") from exc

        log.debug("Fetched fact of length %d", len(payload.fact))
        return payload.fact
