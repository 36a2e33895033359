"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction.
"""

import asyncio
import json
from typing import Any

import aiohttp

from extdata.infrastructure.observability import get_ingestion_logger
from extdata.ingestion.config.value_objects import HttpClientConfig
from extdata.ingestion.exceptions import ConnectivityError, DecodeError
from extdata.ingestion.ports.http import HttpResponse, IHttpClient

log = get_ingestion_logger("http-client")


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig | None = None):
        """Initialize HTTP client.

        Args:
            config: HTTP client configuration
        """
        self.config = config or HttpClientConfig()
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute GET request and decode the JSON body.

        Args:
            url: Full URL
            params: Query parameters
            timeout: Request timeout override

        Returns:
            HttpResponse with status, decoded body and final URL

        Raises:
            ConnectivityError: On connection errors, timeouts or non-200 status
            DecodeError: If the body is not valid JSON
        """
        session = await self._get_session()
        timeout_obj = aiohttp.ClientTimeout(total=timeout or self.config.timeout)

        try:
            async with session.get(
                url,
                params=params,
                timeout=timeout_obj,
                ssl=None if self.config.verify_ssl else False,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise ConnectivityError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                    )
                final_url = str(resp.url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ConnectivityError(f"GET {url} failed: {e!r}") from e

        try:
            body = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON from {url}: {e}") from e

        log.debug("http_get_completed", url=final_url, bytes=len(text))
        return HttpResponse(status_code=200, body=body, url=final_url)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
