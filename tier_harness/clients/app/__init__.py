"""In-process application client module."""

from tier_harness.clients.app.client import AppEndpointClient
from tier_harness.clients.app.config import AppClientConfig
from tier_harness.clients.app.manifest import app_manifest

__all__ = ["AppClientConfig", "AppEndpointClient", "app_manifest"]
