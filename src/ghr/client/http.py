"""Async HTTP client for a GHR report collection service."""

import logging
from typing import Any

import httpx

from ghr.errors import DecodeError, TransportError

from .config import ReportServiceConfig

logger = logging.getLogger(__name__)


class ReportServiceClient:
    """Reads the report collection over HTTP.

    One request per call; no retries, no pagination, no authentication.
    """

    def __init__(
        self,
        config: ReportServiceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.url.rstrip("/")
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        """Create an httpx client with configured defaults."""
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout or self._config.timeout,
            transport=self._transport,
        )

    async def _get(self, path: str, timeout: float | None = None) -> httpx.Response:
        async with self._client(timeout=timeout) as client:
            try:
                resp = await client.get(path)
                resp.raise_for_status()
                return resp
            except httpx.HTTPStatusError as e:
                raise TransportError(
                    f"{self._base_url}{path}",
                    f"HTTP {e.response.status_code}",
                ) from e
            except httpx.HTTPError as e:
                raise TransportError(
                    f"{self._base_url}{path}",
                    str(e) or type(e).__name__,
                ) from e

    async def ping(self) -> str:
        """Fetch the service greeting from ``GET /``.

        Raises:
            TransportError: If the service is unreachable.
        """
        resp = await self._get("/", timeout=5.0)
        return resp.text

    async def fetch(self) -> Any:
        """Fetch the raw report collection.

        Returns:
            The parsed JSON body; decoding is left to the caller.

        Raises:
            TransportError: On connection failure, timeout or error status.
            DecodeError: If the body is not JSON.
        """
        path = self._config.reports_path
        logger.debug(f"GET {self._base_url}{path}")
        resp = await self._get(path)
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(
                f"Response from {self._base_url}{path} is not JSON: {e}"
            ) from e

    def describe(self) -> str:
        """Where reports are read from, for logs and output."""
        return f"{self._base_url}{self._config.reports_path}"
