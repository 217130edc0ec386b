"""Integration tests for fact sources."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls

from tier_harness.server.config import ServerConfig
from tier_harness.server.facts import FactSourceError, HttpFactSource, RandomFactSource
from tier_harness.testing.payloads import fact_payload

FACTS_URL = "http://facts.test/fact"


@pytest.fixture
async def source(
    aioresponses: aioresponses_cls,
) -> AsyncGenerator[HttpFactSource, None]:
    """Create source with managed session."""
    config = ServerConfig(facts_url=FACTS_URL, facts_timeout=1)
    async with HttpFactSource.from_config(config) as impl:
        yield impl


class TestHttpFactSource:
    """Tests for HttpFactSource."""

    async def test_returns_fact(
        self, source: HttpFactSource, aioresponses: aioresponses_cls
    ) -> None:
        """Returns the fact field of the API response."""
        aioresponses.get(FACTS_URL, status=200, payload=fact_payload("Cats purr."))

        assert await source.next_fact() == "Cats purr."

    async def test_raises_on_error_status(
        self, source: HttpFactSource, aioresponses: aioresponses_cls
    ) -> None:
        """Non-200 answers raise FactSourceError."""
        aioresponses.get(FACTS_URL, status=503, body="maintenance")

        with pytest.raises(FactSourceError, match="503: maintenance"):
            await source.next_fact()

    async def test_raises_when_unreachable(self, source: HttpFactSource) -> None:
        """Connection failures raise FactSourceError."""
        with pytest.raises(FactSourceError, match="unreachable"):
            await source.next_fact()

    async def test_raises_on_timeout(
        self, source: HttpFactSource, aioresponses: aioresponses_cls
    ) -> None:
        """Timeouts raise FactSourceError."""
        aioresponses.get(FACTS_URL, exception=TimeoutError())

        with pytest.raises(FactSourceError, match="unreachable"):
            await source.next_fact()

    async def test_raises_on_unexpected_payload(
        self, source: HttpFactSource, aioresponses: aioresponses_cls
    ) -> None:
        """Payloads without a fact raise FactSourceError."""
        aioresponses.get(FACTS_URL, status=200, payload={"joke": "no"})

        with pytest.raises(FactSourceError, match="Unexpected facts API payload"):
            await source.next_fact()


async def test_random_fact_source_varies() -> None:
    """Consecutive random facts differ."""
    source = RandomFactSource()

    first = await source.next_fact()
    second = await source.next_fact()

    assert first.startswith("Fact ")
    assert first != second
