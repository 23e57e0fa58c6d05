"""
Base factory interfaces for remote transports.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, List


@dataclass(frozen=True)
class TransportResponse:
    """Raw answer from a transport."""
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)


class Transport(ABC):
    """Abstract base class for transports that reach a remote resource."""

    @abstractmethod
    async def send(self, url: str) -> TransportResponse:
        """Send a request for the URL and return the raw response.

        Raises builtin ConnectionError when no connection can be made.
        """
        pass


class TransportFactory(ABC):
    """Abstract factory for transports."""

    @abstractmethod
    def create_transport(self, transport_type: str) -> Transport:
        """Create a transport of the specified type."""
        pass

    @abstractmethod
    def get_supported_transports(self) -> List[str]:
        """Get list of supported transport types."""
        pass
