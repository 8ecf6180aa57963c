"""Data types exchanged between SyncClient and its interceptors.

These types are designed to be:

1. Immutable - Requests are frozen dataclasses; interceptors return modified
   copies instead of mutating what they were given
2. Self-describing - Every request carries the ClientConfig that applies to
   it, so interceptors need no side channel to find their settings
3. Library agnostic - Interceptors never see httpx objects, only these types
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from csrf_relay.config import ClientConfig


class HttpMethod(Enum):
    """HTTP methods supported by the client."""

    GET = "GET"
    OPTIONS = "OPTIONS"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"


# Type aliases for complex parameter types
QueryParams = dict[str, Any] | list[tuple[str, Any]] | None
RequestData = dict[str, Any] | bytes | None
HeadersType = dict[str, str]
CookiesType = dict[str, str]
TimeoutType = float | None


def _find_header(headers: HeadersType, name: str) -> str | None:
    """Case-insensitive header lookup.

    Returns:
        The matching header name as stored in headers, or None.
    """
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


@dataclass(frozen=True)
class HTTPRequestParams:
    """Parameters for an HTTP request, mirroring the httpx interface.

    :param method: HTTP method for the request.
    :param url: URL for the request, absolute or relative to the client's
        base URL.
    :param params: (optional) Dictionary or list of tuples to send in the
        query string.
    :param data: (optional) Dictionary of form fields, or bytes to send in
        the body of the request.
    :param json: (optional) A JSON serializable Python object to send in the
        body of the request.
    :param headers: Headers to send with the request.
    :param cookies: Cookies to send with the request, by name.
    :param timeout: (optional) Seconds to wait for the server before giving
        up. None uses the client's timeout.
    :param follow_redirects: Whether redirects are followed.
    """

    method: HttpMethod
    url: str
    params: QueryParams = None
    data: RequestData = None
    json: Any = None
    headers: HeadersType = field(default_factory=dict)
    cookies: CookiesType = field(default_factory=dict)
    timeout: TimeoutType = None
    follow_redirects: bool = True


@dataclass(frozen=True)
class Request:
    """A request travelling through the interceptor chain.

    Attributes:
        request: HTTP request parameters (URL, method, headers, cookies, etc.).
        config: Configuration that applies to this request.
    """

    request: HTTPRequestParams
    config: ClientConfig = field(default_factory=ClientConfig)

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def method(self) -> HttpMethod:
        return self.request.method

    def cookie(self, name: str) -> str | None:
        """Value of the request cookie called name, or None if it is not set."""
        return self.request.cookies.get(name)

    def header(self, name: str) -> str | None:
        """Value of the request header called name (any case), or None."""
        key = _find_header(self.request.headers, name)
        return None if key is None else self.request.headers[key]

    def with_cookie(self, name: str, value: str) -> Request:
        cookies = {**self.request.cookies, name: value}
        return replace(self, request=replace(self.request, cookies=cookies))

    def with_header(self, name: str, value: str) -> Request:
        """Return a copy with the header set, replacing any same-named header."""
        headers = dict(self.request.headers)
        existing = _find_header(headers, name)
        if existing is not None:
            del headers[existing]
        headers[name] = value
        return replace(self, request=replace(self.request, headers=headers))

    def with_config(self, config: ClientConfig) -> Request:
        return replace(self, config=config)


@dataclass
class Response:
    """HTTP response returned through the interceptor chain.

    Modeled after httpx.Response to provide a familiar interface.

    Attributes:
        status_code: HTTP status code (200, 401, etc.).
        headers: Response headers.
        cookies: Cookies set by this response (from its Set-Cookie headers).
        content: Raw response bytes.
        text: Decoded response text.
        url: Final URL after any redirects.
        request: The Request that was dispatched for this response.
    """

    status_code: int
    headers: dict[str, str]
    cookies: dict[str, str]
    content: bytes
    text: str
    url: str
    request: Request

    def cookie(self, name: str) -> str | None:
        return self.cookies.get(name)

    def header(self, name: str) -> str | None:
        key = _find_header(self.headers, name)
        return None if key is None else self.headers[key]


# The remainder of a call chain: dispatches a request and returns its response.
NextStage = Callable[[Request], Response]
