"""Error hierarchy for the completion pipeline.

Only these errors are fatal to a formula call. Empty input and empty
upstream content are ordinary results (see ``entities.result``).
"""

API_KEYS_URL = "https://platform.openai.com/api-keys"


class CompletionError(Exception):
    """Base class for fatal completion failures."""


class ConfigurationError(CompletionError):
    """Raised when no API key is available for the caller."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or f'Use =CHATGPTKEY("YOUR_API_KEY") first. Get it from {API_KEYS_URL}'
        )


class TransportError(CompletionError):
    """Raised when the outbound HTTP call fails or returns an unusable body.

    Attributes:
        status_code: HTTP status of the failed response, if one was received
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
