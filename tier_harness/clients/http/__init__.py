"""Real network client module."""

from tier_harness.clients.http.client import HttpEndpointClient
from tier_harness.clients.http.config import HttpClientConfig
from tier_harness.clients.http.manifest import http_manifest

__all__ = ["HttpClientConfig", "HttpEndpointClient", "http_manifest"]
