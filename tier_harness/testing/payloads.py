"""Payload builders for the external facts API."""

from typing import Any


def fact_payload(fact: str = "Cats sleep 70% of their lives.") -> dict[str, Any]:
    """Build a facts API response body."""
    return {"fact": fact, "length": len(fact)}
