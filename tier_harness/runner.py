"""Sequential execution of the cases of a single tier."""

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal, TypeAlias

from tier_harness.assertions import AssertionSet
from tier_harness.clients.base import EndpointClient
from tier_harness.errors import AssertionFailed, SetupAbort
from tier_harness.models.case import TestCase
from tier_harness.models.definition import Tier
from tier_harness.models.result import CaseOutcome, Result, TierReport

log = logging.getLogger(__name__)

TierState: TypeAlias = Literal["idle", "running", "completed", "aborted"]

TRANSITIONS: Mapping[TierState, frozenset[TierState]] = {
    "idle": frozenset({"running"}),
    "running": frozenset({"completed", "aborted"}),
    "completed": frozenset(),
    "aborted": frozenset(),
}


@dataclass(kw_only=True)
class TestTierRunner:
    """Runs the cases of one tier in declared order.

    A runner is single use: it moves from ``idle`` to ``running`` and ends
    either ``completed`` or ``aborted``. Only a setup failure aborts the
    tier; failing cases are recorded and the run continues.
    """

    __test__ = False

    tier: Tier
    client: EndpointClient
    stop_on_first_failure: bool = False
    ready_timeout: float = 30
    ready_poll_interval: float = 0.5
    state: TierState = field(default="idle", init=False)

    async def run(self, cases: Sequence[TestCase]) -> TierReport:
        """Run all cases of the tier.

        Args:
            cases: Cases of this tier, in the order they should run

        Returns:
            Report of the completed tier

        Raises:
            SetupAbort: If the server under test never becomes ready or the
                readiness check itself fails
            ValueError: If a case belongs to another tier

        """
        foreign = [case.name for case in cases if case.tier != self.tier]
        if foreign:
            raise ValueError(
                f"Cases {foreign} do not belong to the {self.tier} tier"
            )

        self._transition("running")
        log.info("Running %s tier (%d case(s))", self.tier, len(cases))

        try:
            await self.client.wait_until_ready(
                timeout=self.ready_timeout, poll_interval=self.ready_poll_interval
            )
        except Exception as exc:
            self._transition("aborted")
            if isinstance(exc, TimeoutError):
                reason = str(exc)
            else:
                reason = f"{type(exc).__name__}: {exc}"
            raise SetupAbort(self.tier, reason) from exc

        outcomes = [await self._run_case(case) for case in cases]

        self._transition("completed")
        report = TierReport(tier=self.tier, state="completed", outcomes=outcomes)
        log.info(
            "Completed %s tier: passed=%d failed=%d elapsed=%.1fms",
            self.tier,
            report.pass_count,
            report.fail_count,
            report.total_elapsed_ms,
        )
        return report

    async def _run_case(self, case: TestCase) -> CaseOutcome:
        """Run a single case and classify its outcome."""
        checks = AssertionSet(stop_on_first_failure=self.stop_on_first_failure)
        message: str | None = None
        errored = False

        start = time.perf_counter()
        try:
            result = await case.action(self.client, checks)
        except AssertionFailed as exc:
            # Raised by the assertion set, or directly by a custom action
            if exc not in checks.failures:
                checks.failures.append(exc)
            result = None
        except Exception as exc:
            log.error("Case %s raised: %s", case.name, exc, exc_info=exc)
            errored = True
            message = f"{type(exc).__name__}: {exc}"
            result = None
        elapsed_ms = (time.perf_counter() - start) * 1000

        if isinstance(result, Result) and result.unreachable:
            checks.unreachable = True

        status: Literal["passed", "failed", "error"]
        if errored or checks.unreachable:
            status = "error"
            message = message or _first_error(checks, result)
        elif checks.passed:
            status = "passed"
        else:
            status = "failed"
            message = str(checks.failures[0])

        log.info(
            "Case completed: tier=%s case=%s status=%s elapsed=%.1fms",
            self.tier,
            case.name,
            status,
            elapsed_ms,
        )
        return CaseOutcome(
            name=case.name,
            tier=self.tier,
            status=status,
            elapsed_ms=elapsed_ms,
            failures=tuple(checks.failures),
            message=message,
        )

    def _transition(self, target: TierState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid tier state transition: {self.state} -> {target}"
            )
        log.debug("Tier %s: %s -> %s", self.tier, self.state, target)
        self.state = target


def _first_error(checks: AssertionSet, result: Result | None) -> str | None:
    for failure in checks.failures:
        if failure.check == "reachable":
            return str(failure)
    if result is not None:
        return result.error
    return None
