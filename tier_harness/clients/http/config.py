"""Configuration for the real network client."""

from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator


class HttpClientConfig(BaseModel):
    """Configuration for the real network client."""

    base_url: str
    timeout: float = Field(default=10.0, gt=0)
    headers: Mapping[str, str] = Field(default_factory=dict)
    ready_path: str = "/"

    @field_validator("ready_path")
    @classmethod
    def require_absolute_ready_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"ready_path must start with '/': '{value}'")
        return value
