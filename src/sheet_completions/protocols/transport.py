"""HTTP transport protocol."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Protocol for a synchronous request/response HTTP transport.

    Example:
        ```python
        transport: Transport = HttpxTransport.create()
        raw = transport.execute("GET", url, headers, None)
        ```
    """

    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
    ) -> str:
        """Send a request and return the raw response body.

        Args:
            method: HTTP method ("GET" or "POST")
            url: Absolute URL
            headers: Request headers
            json_body: JSON-serializable body, or None for no body

        Returns:
            The response body as text

        Raises:
            TransportError: On network failure or a non-2xx status
        """
        ...
