"""
Data Fetch Service for retrieving remote resources.

Every transport outcome is translated into the failure taxonomy here, so
callers only ever see known failure kinds.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

from config import FetchSettings
from core.exceptions import (
    AuthException,
    ConnectionException,
    NetworkException,
    ServerException,
    TimeoutException,
    ValidationException
)
from core.propagation import propagation_boundary
from factories.base import Transport, TransportResponse
from schema.fetch import FetchResult

logger = logging.getLogger('fetch')

AUTH_STATUSES = (401, 403)


class DataFetchService:
    """Service that fetches remote data and owns its failure boundary."""

    def __init__(self, transport: Transport, settings: Optional[FetchSettings] = None):
        self.transport = transport
        self.settings = settings or FetchSettings()

    def validate_url(self, url: str) -> str:
        """Check the URL before any transport work."""
        if not url or not url.strip():
            raise ValidationException(
                "URL cannot be empty",
                field_errors={"url": "required"}
            )

        url = url.strip()
        parsed = urlparse(url)
        if self.settings.require_https and parsed.scheme != "https":
            raise ValidationException(
                "URL must use HTTPS protocol",
                field_errors={"url": "must start with https://"}
            )
        if not parsed.netloc:
            raise ValidationException(
                "URL must include a host",
                field_errors={"url": "missing host"}
            )
        return url

    async def fetch_data(self, url: str) -> FetchResult:
        """
        Fetch a remote resource.

        Args:
            url: Absolute URL of the resource

        Returns:
            FetchResult with status "success"

        Raises:
            ValidationException: URL empty, not HTTPS or without a host
            ConnectionException: No connection could be made
            TimeoutException: Transport did not answer in time
            AuthException: Remote refused the caller (401/403)
            ServerException: Remote answered with a 5xx status
            NetworkException: Any other non-success status
            ApplicationException: Anything else raised along the way
        """
        with propagation_boundary("fetch_data"):
            url = self.validate_url(url)
            response = await self._send(url)
            return self._to_result(url, response)

    async def fetch_with_retry(self, url: str) -> FetchResult:
        """Fetch, retrying retryable server failures before re-raising the last one."""
        attempts = self.settings.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                result = await self.fetch_data(url)
                return result.model_copy(update={"attempts": attempt})
            except ServerException as e:
                if e.status_code not in self.settings.retry_status_codes or attempt == attempts:
                    raise
                logger.info(f"Retrying {url} after {e.status_code} (attempt {attempt}/{attempts})")
                if self.settings.retry_delay:
                    await asyncio.sleep(self.settings.retry_delay)

    async def _send(self, url: str) -> TransportResponse:
        timeout = self.settings.request_timeout
        try:
            return await asyncio.wait_for(self.transport.send(url), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutException(
                f"No response from {url} within {timeout}s",
                timeout_seconds=timeout
            ) from e
        except ConnectionError as e:
            raise ConnectionException(f"Could not connect to {url}: {e}") from e

    def _to_result(self, url: str, response: TransportResponse) -> FetchResult:
        status = response.status_code
        if status in AUTH_STATUSES:
            raise AuthException(f"Not authorized to access {url}")
        if status >= 500:
            raise ServerException(f"Server error while fetching {url}", status_code=status)
        if status >= 400:
            raise NetworkException(f"Request for {url} failed", status_code=status)

        logger.debug(f"Fetched {url} with status {status}")
        return FetchResult(
            status="success",
            url=url,
            status_code=status,
            payload=dict(response.body)
        )
