"""Client manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from tier_harness.clients.base import EndpointClient

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class ClientManifest(Generic[ConfigT]):
    """Manifest describing an endpoint client plugin.

    The manifest contains references to the configuration class and the
    client factory function for lazy loading of clients based on their key.
    """

    config_cls: type[ConfigT]
    client_factory: Callable[[ConfigT], AbstractAsyncContextManager[EndpointClient]]
    full_stack: bool
