"""Ready-made case actions for suites and tests."""

from tier_harness.assertions import AssertionSet
from tier_harness.clients.base import EndpointClient
from tier_harness.models.result import Result
from tier_harness.server.app import GREETING


async def greeting_is_stable(client: EndpointClient, checks: AssertionSet) -> Result:
    """Two greetings in a row are identical."""
    first = await client.request("GET", "/hello")
    second = await client.request("GET", "/hello")
    checks.expect_status(first, 200)
    checks.expect_body_equals(first, GREETING)
    checks.expect_body_equals(second, first.body)
    return second


async def data_changes(client: EndpointClient, checks: AssertionSet) -> Result:
    """Two data fetches in a row return different non-empty payloads."""
    first = await client.request("GET", "/data")
    second = await client.request("GET", "/data")
    checks.expect_status(first, 200)
    checks.expect_status(second, 200)
    checks.expect_not_null(first.body)
    checks.expect_not_null(second.body)
    checks.expect_distinct(first.body, second.body)
    return second
