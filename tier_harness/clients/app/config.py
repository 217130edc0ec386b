"""Configuration for the in-process application client."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator


class AppClientConfig(BaseModel):
    """Configuration for the in-process application client."""

    # Import path of a callable returning an aiohttp.web.Application
    app: str
    # Passed to the factory, e.g. to substitute external dependencies
    factory_kwargs: Mapping[str, Any] = Field(default_factory=dict)
    timeout: float = Field(default=10.0, gt=0)
    ready_path: str = "/"

    @field_validator("ready_path")
    @classmethod
    def require_absolute_ready_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"ready_path must start with '/': '{value}'")
        return value
