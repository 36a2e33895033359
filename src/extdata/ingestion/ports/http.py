"""HTTP communication abstractions for source adapters.

Separates HTTP transport from normalization so adapters can be tested with
canned payloads.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded response body (object or array)
    url: str


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute GET requests and decode JSON.
    Does NOT handle:
    - Normalization
    - Retry logic
    """

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute GET request and decode the JSON body.

        Raises:
            ConnectivityError: On network errors, timeouts or non-200 status
            DecodeError: If the body is not valid JSON
        """
        ...

    async def close(self) -> None:
        """Release the underlying session."""
        ...
