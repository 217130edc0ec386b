"""In-process application client manifest."""

from tier_harness.clients.app.client import AppEndpointClient
from tier_harness.clients.app.config import AppClientConfig
from tier_harness.clients.manifest import ClientManifest

app_manifest = ClientManifest(
    config_cls=AppClientConfig,
    client_factory=AppEndpointClient.from_config,
    full_stack=AppEndpointClient.full_stack,
)
