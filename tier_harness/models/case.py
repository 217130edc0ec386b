"""Runnable test case model."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeAlias

from tier_harness.assertions import AssertionSet
from tier_harness.clients.base import EndpointClient
from tier_harness.models.definition import Tier
from tier_harness.models.result import Result

CaseAction: TypeAlias = Callable[[EndpointClient, AssertionSet], Awaitable[Result | None]]


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """A named action belonging to exactly one tier."""

    __test__ = False

    name: str
    tier: Tier
    action: CaseAction
