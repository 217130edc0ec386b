"""Configuration for the demo server under test."""

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_FACTS_URL = "https://catfact.ninja/fact"


class ServerConfig(BaseModel):
    """Configuration for the demo server."""

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=0, le=65535)
    # "random" substitutes the external facts API with a local generator
    fact_source: Literal["http", "random"] = "http"
    facts_url: str = DEFAULT_FACTS_URL
    facts_timeout: float = Field(default=5.0, gt=0)
