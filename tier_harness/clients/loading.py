"""Loading of endpoint clients from entry points."""

from importlib.metadata import entry_points
from typing import Any

from tier_harness.clients.manifest import ClientManifest
from tier_harness.errors import ClientNotFoundError

ENTRY_POINT_GROUP = "tier_harness.clients"


def load_client_manifest(key: str) -> ClientManifest[Any]:
    """Load a client manifest by key.

    Args:
        key: The client key as registered in pyproject.toml
             (e.g., "http", "app")

    Returns:
        The client manifest instance

    Raises:
        ClientNotFoundError: If no client with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: ClientManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise ClientNotFoundError(
        f"Client '{key}' not found. Available clients: {available}"
    )
