"""Error kinds raised and recorded by the harness."""

from typing import Any


class HarnessError(Exception):
    """Base class for harness errors."""


class AssertionFailed(HarnessError):
    """An expectation did not match the observed value."""

    def __init__(self, check: str, expected: Any, actual: Any) -> None:
        super().__init__(f"{check}: expected {expected!r}, got {actual!r}")
        self.check = check
        self.expected = expected
        self.actual = actual


class SetupAbort(HarnessError):
    """A tier-level precondition was not met, the tier cannot run."""

    def __init__(self, tier: str, reason: str) -> None:
        super().__init__(f"{tier} tier aborted: {reason}")
        self.tier = tier
        self.reason = reason


class ClientNotFoundError(HarnessError):
    """No endpoint client is registered under the requested key."""
