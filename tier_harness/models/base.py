"""Base model configuration for suite definitions."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model rejecting unknown keys, so typos in suites surface."""

    model_config = ConfigDict(frozen=True, extra="forbid")
