"""Tests for client loading module."""

import pytest

from tier_harness.clients.app import app_manifest
from tier_harness.clients.http import http_manifest
from tier_harness.clients.loading import load_client_manifest
from tier_harness.errors import ClientNotFoundError, HarnessError


def test_load_client_manifest_returns_http_manifest() -> None:
    """Loads the http client manifest by key."""
    manifest = load_client_manifest("http")

    assert manifest is http_manifest
    assert manifest.full_stack is True


def test_load_client_manifest_returns_app_manifest() -> None:
    """Loads the in-process client manifest by key."""
    manifest = load_client_manifest("app")

    assert manifest is app_manifest
    assert manifest.full_stack is False


def test_load_client_manifest_raises_for_unknown_client() -> None:
    """Raises ClientNotFoundError for unknown client key."""
    with pytest.raises(ClientNotFoundError) as exc_info:
        load_client_manifest("unknown-client")

    assert "unknown-client" in str(exc_info.value)
    assert "Available clients" in str(exc_info.value)


def test_client_not_found_is_a_harness_error() -> None:
    """Unknown client keys surface as harness errors."""
    with pytest.raises(HarnessError):
        load_client_manifest("unknown-client")

    assert issubclass(ClientNotFoundError, HarnessError)
