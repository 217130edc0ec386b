"""Declarative checks evaluated against captured responses."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from tier_harness.errors import AssertionFailed
from tier_harness.models.result import Result

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class AssertionSet:
    """Collects expectation failures for a single test case.

    Failing checks are recorded and return ``False`` so the remaining checks
    of the case still run. With ``stop_on_first_failure`` the recorded
    failure is raised as well.
    """

    stop_on_first_failure: bool = False
    failures: list[AssertionFailed] = field(default_factory=list)
    unreachable: bool = False

    @property
    def passed(self) -> bool:
        return not self.failures

    def expect_status(self, result: Result, code: int) -> bool:
        """Check the status code of a response."""
        if not self.expect_reachable(result):
            return False
        if result.status_code != code:
            return self._fail("status", code, result.status_code)
        return True

    def expect_body_equals(self, result: Result, text: str) -> bool:
        """Check the exact body of a response."""
        if not self.expect_reachable(result):
            return False
        if result.body != text:
            return self._fail("body", text, result.body)
        return True

    def expect_not_null(self, value: Any) -> bool:
        """Check that a value is neither None nor empty text."""
        if value is None or value == "":
            return self._fail("not_null", "a value", value)
        return True

    def expect_distinct(self, a: Any, b: Any) -> bool:
        """Check that two consecutive values differ."""
        if a == b:
            return self._fail("distinct", f"a value other than {a!r}", b)
        return True

    def expect_distinct_ratio(
        self, pairs: Sequence[tuple[Any, Any]], min_ratio: float
    ) -> bool:
        """Check that at least ``min_ratio`` of the sampled pairs differ."""
        if not pairs:
            return self._fail("distinct_ratio", f">= {min_ratio:.2f}", "no samples")
        distinct = sum(1 for a, b in pairs if a != b)
        ratio = distinct / len(pairs)
        if ratio < min_ratio:
            return self._fail(
                "distinct_ratio",
                f">= {min_ratio:.2f}",
                f"{ratio:.2f} ({distinct}/{len(pairs)})",
            )
        return True

    def expect_reachable(self, result: Result) -> bool:
        """Check that a request got a response at all."""
        if result.unreachable:
            self.unreachable = True
            return self._fail("reachable", "a response", result.error)
        return True

    def _fail(self, check: str, expected: Any, actual: Any) -> bool:
        failure = AssertionFailed(check, expected, actual)
        log.debug("Expectation failed: %s", failure)
        self.failures.append(failure)
        if self.stop_on_first_failure:
            raise failure
        return False
