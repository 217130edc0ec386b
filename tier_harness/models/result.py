"""Models for request results and tier execution reports."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from tier_harness.errors import AssertionFailed
from tier_harness.models.definition import Tier

CONNECTION_ERROR_STATUS = 0


@dataclass(frozen=True, kw_only=True)
class Result:
    """Captured response of a single request.

    A status code of zero together with ``error`` marks a request that never
    got a response (refused connection, DNS failure, timeout).
    """

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)
    elapsed_ms: float
    error: str | None = None

    @property
    def unreachable(self) -> bool:
        return self.status_code == CONNECTION_ERROR_STATUS


@dataclass(frozen=True, kw_only=True)
class CaseOutcome:
    """Outcome of a single test case run."""

    name: str
    tier: Tier
    status: Literal["passed", "failed", "error"]
    elapsed_ms: float
    failures: Sequence[AssertionFailed] = ()
    message: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == "passed"


@dataclass(frozen=True, kw_only=True)
class TierReport:
    """Aggregated outcome of a tier.

    Counts are derived from ``outcomes`` on access so a report can never
    drift from the cases it describes.
    """

    tier: Tier
    state: Literal["completed", "aborted"]
    outcomes: Sequence[CaseOutcome] = ()
    abort_reason: str | None = None

    @property
    def total_count(self) -> int:
        return len(self.outcomes)

    @property
    def pass_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def fail_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.passed)

    @property
    def error_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == "error")

    @property
    def total_elapsed_ms(self) -> float:
        return sum(outcome.elapsed_ms for outcome in self.outcomes)
