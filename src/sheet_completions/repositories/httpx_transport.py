"""httpx-based transport.

Synchronous request/response over a single lazily created ``httpx.Client``.
The client's timeout is the only timeout applied to completion calls.
"""

import logging
from typing import Any

import httpx

from sheet_completions.config import Settings, settings
from sheet_completions.errors import TransportError

logger = logging.getLogger(__name__)


class HttpxTransport:
    """httpx implementation of the Transport protocol.

    Example:
        ```python
        transport = HttpxTransport.create()
        raw = transport.execute(
            "GET",
            "https://api.openai.com/v1/models",
            {"Authorization": "Bearer sk-..."},
            None,
        )
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.
            client: Preconfigured client (e.g. with a MockTransport in tests).
        """
        self._timeout = timeout or settings.http_timeout
        self._client = client

    @classmethod
    def create(cls, config: Settings | None = None) -> "HttpxTransport":
        config = config or settings
        return cls(timeout=config.http_timeout)

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client.

        Returns:
            The httpx.Client instance
        """
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
    ) -> str:
        """Send a request and return the raw response body.

        Raises:
            TransportError: On network failure or a non-2xx status
        """
        try:
            response = self.client.request(method, url, headers=headers, json=json_body)
            response.raise_for_status()
            return response.text

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            error_msg = f"API error {status_code} for {method} {url}"
            if status_code == 401:
                error_msg += '\n  → API key rejected. Set a valid one with =CHATGPTKEY("YOUR_API_KEY")'
            elif status_code == 429:
                error_msg += "\n  → Rate limited or out of quota."
            raise TransportError(error_msg, status_code=status_code) from e

        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
