"""Exceptions raised by the HTTP client.

Configuration errors are not listed here: invalid configuration values are
rejected by pydantic at construction time and surface as
``pydantic.ValidationError``.
"""


class TransientException(Exception):
    """Base class for errors that may succeed if the request is retried."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class RequestTimeoutException(TransientException):
    """Raised when the server does not answer within the configured timeout.

    Attributes:
        url: The URL that timed out.
        timeout_seconds: The timeout that was exceeded.
    """

    def __init__(self, url: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Request to {url} timed out after {timeout_seconds}s", url=url
        )
        self.timeout_seconds = timeout_seconds
