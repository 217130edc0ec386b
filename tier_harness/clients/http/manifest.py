"""Real network client manifest."""

from tier_harness.clients.http.client import HttpEndpointClient
from tier_harness.clients.http.config import HttpClientConfig
from tier_harness.clients.manifest import ClientManifest

http_manifest = ClientManifest(
    config_cls=HttpClientConfig,
    client_factory=HttpEndpointClient.from_config,
    full_stack=HttpEndpointClient.full_stack,
)
