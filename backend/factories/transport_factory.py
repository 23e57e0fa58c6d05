"""
Transport factory with a simulated remote peer.
"""
import asyncio
from typing import Dict, List
from urllib.parse import urlparse

from config.logging_config import get_factory_logger
from factories.base import Transport, TransportFactory, TransportResponse

logger = get_factory_logger()


class SimulatedTransport(Transport):
    """
    Transport that answers from the last path segment of the URL.

    offline -> connection refused, private -> 401, error -> 500,
    missing -> 404, slow -> sleeps for slow_delay, crash -> RuntimeError,
    anything else -> 200 with a small payload.
    """

    STATUS_ROUTES: Dict[str, int] = {
        "private": 401,
        "forbidden": 403,
        "missing": 404,
        "error": 500,
        "unavailable": 503,
    }

    def __init__(self, latency: float = 0.0, slow_delay: float = 30.0):
        self.latency = latency
        self.slow_delay = slow_delay

    async def send(self, url: str) -> TransportResponse:
        segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]

        if self.latency:
            await asyncio.sleep(self.latency)

        if segment == "offline":
            raise ConnectionError(f"Connection refused by {urlparse(url).netloc or url}")
        if segment == "crash":
            raise RuntimeError("Transport crashed while decoding the response")
        if segment == "slow":
            await asyncio.sleep(self.slow_delay)

        status_code = self.STATUS_ROUTES.get(segment, 200)
        if status_code != 200:
            return TransportResponse(status_code=status_code, body={"error": segment})

        return TransportResponse(
            status_code=200,
            body={"status": "success", "resource": segment or "/", "items": []}
        )


class DefaultTransportFactory(TransportFactory):
    """Default factory for transports."""

    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self._transports = {
            "simulated": lambda: SimulatedTransport(latency=self.latency),
        }

    def create_transport(self, transport_type: str = "simulated") -> Transport:
        """Create a transport of the specified type."""
        if transport_type not in self._transports:
            raise ValueError(f"Unsupported transport type: {transport_type}")
        logger.debug(f"Creating transport: {transport_type}")
        return self._transports[transport_type]()

    def get_supported_transports(self) -> List[str]:
        """Get list of supported transport types."""
        return list(self._transports.keys())
