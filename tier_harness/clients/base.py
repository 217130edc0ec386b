"""Abstract base class for endpoint clients."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from tier_harness.models.definition import HTTP_METHODS
from tier_harness.models.result import Result


@dataclass(frozen=True, kw_only=True)
class EndpointClient(ABC):
    """Abstract base for clients talking to the server under test.

    Implementations never raise on connection problems: a request that gets
    no response comes back as a ``Result`` with status code zero and an
    error marker, so assertions can treat it like any other response.
    """

    # Whether requests exercise the complete deployed stack. Only full-stack
    # clients may serve the acceptance tier.
    full_stack: ClassVar[bool] = False

    ready_path: str = "/"

    @abstractmethod
    async def send(self, method: str, path: str) -> Result:
        """Issue a validated request and capture the response.

        Args:
            method: Upper-case HTTP method
            path: Absolute route on the server under test

        Returns:
            Captured result, with status code zero on connection failure

        """

    async def request(self, method: str, path: str) -> Result:
        """Issue a request against the server under test.

        Raises:
            ValueError: If the method is unknown or the path is not absolute

        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method '{method}'")
        if not path.startswith("/"):
            raise ValueError(f"Path must start with '/': '{path}'")
        return await self.send(method, path)

    async def is_ready(self) -> bool:
        """Check whether the server answers at all."""
        result = await self.request("GET", self.ready_path)
        return not result.unreachable

    async def wait_until_ready(
        self,
        timeout: float = 30,
        poll_interval: float = 0.5,
    ) -> None:
        """Wait for the server under test to accept requests.

        Args:
            timeout: Maximum wait time in seconds
            poll_interval: Seconds between readiness checks

        Raises:
            TimeoutError: If the server is not ready within timeout

        """
        deadline = asyncio.get_event_loop().time() + timeout

        while True:
            if await self.is_ready():
                return

            if asyncio.get_event_loop().time() >= deadline:
                raise TimeoutError(
                    f"Server did not become ready within {timeout} seconds"
                )

            await asyncio.sleep(poll_interval)
