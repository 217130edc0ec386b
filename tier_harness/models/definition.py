"""Models for suite definitions loaded from YAML files."""

from collections.abc import Mapping, Sequence
from typing import Any, Literal, Self

from pydantic import Field, field_validator, model_validator

from tier_harness.models.base import Model

Tier = Literal["unit", "integration", "acceptance"]

TIER_ORDER: Sequence[Tier] = ("unit", "integration", "acceptance")

HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}
)


class Expectation(Model):
    """Checks applied to the response of a single step."""

    status: int | None = Field(default=None, description="Expected status code")
    body: str | None = Field(default=None, description="Expected exact body")
    not_null: bool = Field(default=False, description="Body must not be empty")


class Step(Model):
    """A single request issued by a declarative test case."""

    method: str = Field(default="GET", description="HTTP method")
    path: str = Field(..., description="Absolute route on the server under test")
    expect: Expectation = Field(default_factory=Expectation)

    @field_validator("method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        method = value.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method '{value}'")
        return method

    @field_validator("path")
    @classmethod
    def require_absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Path must start with '/': '{value}'")
        return value


class DistinctCheck(Model):
    """Consecutive step bodies must differ.

    With ``samples`` above one the step sequence is repeated and only
    ``min_ratio`` of the sampled pairs have to differ, which tolerates the
    occasional collision of a random source.
    """

    samples: int = Field(default=1, ge=1)
    min_ratio: float = Field(default=1.0, gt=0.0, le=1.0)


class CaseDefinition(Model):
    """A test case, either declarative steps or an importable action."""

    name: str = Field(..., description="Human-readable case name")
    tier: Tier = Field(..., description="Tier the case belongs to")
    steps: Sequence[Step] = Field(default_factory=list)
    distinct: DistinctCheck | None = None
    action: str | None = Field(
        default=None, description="Import path of an action ('module:function')"
    )

    @model_validator(mode="after")
    def check_steps_or_action(self) -> Self:
        if bool(self.steps) == bool(self.action):
            raise ValueError(
                f"Case '{self.name}' must define exactly one of 'steps' or 'action'"
            )
        if self.distinct is not None and len(self.steps) < 2:
            raise ValueError(
                f"Case '{self.name}' needs at least two steps to check distinctness"
            )
        return self


class ClientSpec(Model):
    """Client plugin key and its raw configuration."""

    provider: str = Field(..., description="Client key (http, app)")
    config: Mapping[str, Any] = Field(default_factory=dict)


class SuiteDefinition(Model):
    """Complete suite definition loaded from a YAML file."""

    version: str = Field(..., description="Suite definition schema version")
    clients: Mapping[Tier, ClientSpec] = Field(default_factory=dict)
    cases: Sequence[CaseDefinition] = Field(default_factory=list)

    def cases_for(self, tier: Tier) -> Sequence[CaseDefinition]:
        """Return the cases of a tier in declared order."""
        return [case for case in self.cases if case.tier == tier]
