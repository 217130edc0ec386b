"""Build runnable test cases from suite definitions."""

import logging
from collections.abc import Sequence
from typing import Any

from tier_harness.assertions import AssertionSet
from tier_harness.clients.base import EndpointClient
from tier_harness.importing import resolve_import_path
from tier_harness.models.case import CaseAction, TestCase
from tier_harness.models.definition import (
    CaseDefinition,
    DistinctCheck,
    Expectation,
    Step,
    SuiteDefinition,
    Tier,
)
from tier_harness.models.result import Result

log = logging.getLogger(__name__)


def build_cases(suite: SuiteDefinition, tier: Tier) -> Sequence[TestCase]:
    """Build the runnable cases of a tier in declared order."""
    return [build_case(definition) for definition in suite.cases_for(tier)]


def build_case(definition: CaseDefinition) -> TestCase:
    """Build a runnable case from its definition.

    Raises:
        ValueError: If an action import path cannot be resolved to a callable

    """
    if definition.action:
        action: CaseAction = resolve_import_path(definition.action)
        if not callable(action):
            raise ValueError(f"Action '{definition.action}' is not callable")
    else:
        action = steps_action(definition.steps, definition.distinct)

    log.debug("Built case %s (tier=%s)", definition.name, definition.tier)
    return TestCase(name=definition.name, tier=definition.tier, action=action)


def steps_action(steps: Sequence[Step], distinct: DistinctCheck | None) -> CaseAction:
    """Create an action issuing declarative steps and checking their responses.

    With a distinct check, each sample runs the whole step sequence and
    compares consecutive response bodies.
    """
    samples = distinct.samples if distinct else 1

    async def _action(client: EndpointClient, checks: AssertionSet) -> Result | None:
        last: Result | None = None
        pairs: list[tuple[Any, Any]] = []

        for _ in range(samples):
            bodies: list[str] = []
            for step in steps:
                last = await client.request(step.method, step.path)
                check_expectation(checks, step.expect, last)
                bodies.append(last.body)
            pairs.extend(zip(bodies, bodies[1:], strict=False))

        if distinct is None:
            return last

        if distinct.samples == 1 and distinct.min_ratio == 1.0:
            for a, b in pairs:
                checks.expect_distinct(a, b)
        else:
            checks.expect_distinct_ratio(pairs, distinct.min_ratio)
        return last

    return _action


def check_expectation(
    checks: AssertionSet, expect: Expectation, result: Result
) -> None:
    """Apply the checks of a step to its response."""
    if result.unreachable:
        checks.expect_reachable(result)
        return
    if expect.status is not None:
        checks.expect_status(result, expect.status)
    if expect.body is not None:
        checks.expect_body_equals(result, expect.body)
    if expect.not_null:
        checks.expect_not_null(result.body)
