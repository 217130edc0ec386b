"""Tests for tier orchestrator."""

from unittest.mock import patch

import pytest

from tier_harness.models.definition import (
    CaseDefinition,
    ClientSpec,
    Expectation,
    Step,
    SuiteDefinition,
)
from tier_harness.orchestrator import TierOrchestrator
from tier_harness.testing.clients import StubEndpointClient, ok, stub_manifest

HELLO = Step(path="/hello", expect=Expectation(status=200, body="Hello World"))


def hello_case(name: str, tier: str) -> CaseDefinition:
    return CaseDefinition(name=name, tier=tier, steps=[HELLO])  # type: ignore[arg-type]


@pytest.fixture
def suite() -> SuiteDefinition:
    """Suite with one case per tier, declared out of tier order."""
    return SuiteDefinition(
        version="1.0",
        clients={
            "unit": ClientSpec(provider="stub"),
            "integration": ClientSpec(provider="stub"),
            "acceptance": ClientSpec(provider="stub"),
        },
        cases=[
            hello_case("acceptance hello", "acceptance"),
            hello_case("unit hello", "unit"),
            hello_case("integration hello", "integration"),
        ],
    )


@pytest.fixture
def client() -> StubEndpointClient:
    """Client serving the greeting."""
    return StubEndpointClient(routes={"/hello": [ok("Hello World")]})


@pytest.fixture
def orchestrator() -> TierOrchestrator:
    """Orchestrator with short readiness timeouts."""
    return TierOrchestrator(ready_timeout=0.05, ready_poll_interval=0.01)


async def test_runs_all_tiers_in_order(
    orchestrator: TierOrchestrator,
    suite: SuiteDefinition,
    client: StubEndpointClient,
) -> None:
    """Reports come back unit, integration, acceptance."""
    with patch(
        "tier_harness.orchestrator.load_client_manifest",
        return_value=stub_manifest(client),
    ):
        reports = await orchestrator.run_tiers(suite)

    assert [r.tier for r in reports] == ["unit", "integration", "acceptance"]
    assert all(r.state == "completed" and r.pass_count == 1 for r in reports)


async def test_runs_selected_tier_only(
    orchestrator: TierOrchestrator,
    suite: SuiteDefinition,
    client: StubEndpointClient,
) -> None:
    """Only the requested tier runs."""
    with patch(
        "tier_harness.orchestrator.load_client_manifest",
        return_value=stub_manifest(client),
    ):
        reports = await orchestrator.run_tiers(suite, ["integration"])

    assert [r.tier for r in reports] == ["integration"]
    assert reports[0].outcomes[0].name == "integration hello"


async def test_parallel_keeps_tier_order(
    suite: SuiteDefinition, client: StubEndpointClient
) -> None:
    """Parallel runs still report in tier order."""
    orchestrator = TierOrchestrator(
        ready_timeout=0.05, ready_poll_interval=0.01, parallel=True
    )
    with patch(
        "tier_harness.orchestrator.load_client_manifest",
        return_value=stub_manifest(client),
    ):
        reports = await orchestrator.run_tiers(suite, ["acceptance", "unit"])

    assert [r.tier for r in reports] == ["unit", "acceptance"]


async def test_unready_server_aborts_tier(
    orchestrator: TierOrchestrator, suite: SuiteDefinition
) -> None:
    """A server that never becomes ready aborts its tier."""
    with patch(
        "tier_harness.orchestrator.load_client_manifest",
        return_value=stub_manifest(StubEndpointClient(unreachable=True)),
    ):
        reports = await orchestrator.run_tiers(suite, ["unit"])

    [report] = reports
    assert report.state == "aborted"
    assert "did not become ready" in (report.abort_reason or "")


async def test_acceptance_requires_full_stack_client(
    orchestrator: TierOrchestrator,
    suite: SuiteDefinition,
    client: StubEndpointClient,
) -> None:
    """Acceptance tier refuses a client that substitutes components."""
    with patch(
        "tier_harness.orchestrator.load_client_manifest",
        return_value=stub_manifest(client, full_stack=False),
    ):
        reports = await orchestrator.run_tiers(suite)

    unit, integration, acceptance = reports
    assert unit.state == integration.state == "completed"
    assert acceptance.state == "aborted"
    assert "full stack" in (acceptance.abort_reason or "")


async def test_missing_client_aborts_tier(orchestrator: TierOrchestrator) -> None:
    """A tier with cases but no client is aborted."""
    suite = SuiteDefinition(version="1.0", cases=[hello_case("hello", "unit")])

    reports = await orchestrator.run_tiers(suite, ["unit"])

    assert reports[0].state == "aborted"
    assert reports[0].abort_reason == "no client configured"


async def test_tier_without_cases_completes_empty(
    orchestrator: TierOrchestrator,
) -> None:
    """A selected tier without cases yields an empty completed report."""
    suite = SuiteDefinition(version="1.0")

    reports = await orchestrator.run_tiers(suite, ["acceptance"])

    assert reports[0].state == "completed"
    assert reports[0].total_count == 0


async def test_unknown_client_aborts_tier_and_continues(
    orchestrator: TierOrchestrator,
    suite: SuiteDefinition,
    client: StubEndpointClient,
) -> None:
    """An exception while setting up one tier does not stop the others."""
    with patch(
        "tier_harness.orchestrator.load_client_manifest",
        side_effect=[RuntimeError("no such client"), stub_manifest(client)],
    ):
        reports = await orchestrator.run_tiers(suite, ["unit", "integration"])

    unit, integration = reports
    assert unit.state == "aborted"
    assert unit.abort_reason == "no such client"
    assert integration.state == "completed"


async def test_unresolvable_action_aborts_tier(
    orchestrator: TierOrchestrator,
) -> None:
    """A case pointing at a missing action aborts its tier."""
    suite = SuiteDefinition(
        version="1.0",
        clients={"unit": ClientSpec(provider="stub")},
        cases=[CaseDefinition(name="x", tier="unit", action="tier_harness:missing")],
    )

    reports = await orchestrator.run_tiers(suite, ["unit"])

    assert reports[0].state == "aborted"
    assert "cannot build cases" in (reports[0].abort_reason or "")
