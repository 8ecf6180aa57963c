"""Synchronous HTTP client that runs requests through an interceptor chain.

SyncClient is the host for interceptors such as CSRFCookieToHeaderInterceptor:
it builds a Request from the call arguments, applies the request chain,
dispatches with httpx, and applies the response chain in reverse.

The client keeps no cookie jar. Cookies sent with a request are exactly the
ones on the Request after the interceptor chain has run, and the cookies on a
Response are exactly the ones its Set-Cookie headers carry. State that should
survive between calls belongs to an interceptor.
"""

import logging
from collections.abc import Iterable
from http.cookies import CookieError, SimpleCookie
from typing import Any
from urllib.parse import urljoin

import httpx
from typing_extensions import Self, assert_never

from csrf_relay.common.exceptions import RequestTimeoutException
from csrf_relay.common.interceptors import SyncInterceptor
from csrf_relay.config import ClientConfig
from csrf_relay.data_types import (
    CookiesType,
    HeadersType,
    HttpMethod,
    HTTPRequestParams,
    QueryParams,
    Request,
    RequestData,
    Response,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def _cookie_header(cookies: CookiesType) -> str:
    return "; ".join(f"{name}={value}" for name, value in cookies.items())


def _response_cookies(http_response: httpx.Response) -> dict[str, str]:
    """Cookies named in the response's Set-Cookie headers, by name.

    Values are taken as sent. Expiry, Domain and Path attributes are not
    applied, so a cookie sent with Max-Age=0 or a foreign Domain is still
    reported with its value.
    """
    cookies: dict[str, str] = {}
    for set_cookie in http_response.headers.get_list("set-cookie"):
        parsed: SimpleCookie = SimpleCookie()
        try:
            parsed.load(set_cookie)
        except CookieError:
            logger.warning(
                f"Ignoring malformed Set-Cookie header from {http_response.url}"
            )
            continue
        for name, morsel in parsed.items():
            cookies[name] = morsel.value
    return cookies


class SyncClient:
    """Synchronous HTTP client with interceptor support.

    Example usage:
        csrf = CSRFCookieToHeaderInterceptor()
        with SyncClient("http://localhost:8080", interceptors=[csrf]) as client:
            client.get("/csrfCookie")
            response = client.post("/login", data={"j_username": "john"})
    """

    def __init__(
        self,
        base_url: str = "",
        interceptors: Iterable[SyncInterceptor] | None = None,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: URL that relative request URLs are resolved against.
                Interceptors always see the resolved, absolute URL.
            interceptors: Interceptors to apply to requests and responses. They
                are applied in order for requests, and in reverse order for
                responses.
            config: Client-wide configuration. Per-request configuration is
                merged on top of it with ClientConfig.merge.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
            timeout: Default timeout in seconds for requests without their own.
        """
        self.base_url = base_url
        self.interceptors: list[SyncInterceptor] = list(interceptors or [])
        self.config = config or ClientConfig()
        self.timeout = timeout
        self._client = httpx.Client(
            base_url=base_url, transport=transport, timeout=timeout
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: HttpMethod | str,
        url: str,
        *,
        params: QueryParams = None,
        headers: HeadersType | None = None,
        cookies: CookiesType | None = None,
        data: RequestData = None,
        json: object = None,
        timeout: float | None = None,
        follow_redirects: bool = True,
        config: ClientConfig | None = None,
    ) -> Response:
        """Build a Request from the arguments and resolve it.

        Args:
            method: HTTP method, as HttpMethod or its name.
            url: Absolute URL, or a URL resolved against base_url with
                urljoin before any interceptor sees the request.
            params: Query string parameters.
            headers: Headers set explicitly by the caller.
            cookies: Cookies set explicitly by the caller.
            data: Form data or raw body bytes.
            json: JSON body.
            timeout: Timeout in seconds for this request.
            follow_redirects: Whether redirects are followed.
            config: Configuration for this request, merged over the client's.

        Returns:
            The Response after the interceptor chain has run.
        """
        request = Request(
            request=HTTPRequestParams(
                method=HttpMethod(method.upper())
                if isinstance(method, str)
                else method,
                url=urljoin(self.base_url, url) if self.base_url else url,
                params=params,
                data=data,
                json=json,
                headers=dict(headers or {}),
                cookies=dict(cookies or {}),
                timeout=timeout,
                follow_redirects=follow_redirects,
            ),
            config=self.config.merge(config),
        )
        return self.resolve_request(request)

    def get(self, url: str, **kwargs: Any) -> Response:
        return self.request(HttpMethod.GET, url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Response:
        return self.request(HttpMethod.POST, url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> Response:
        return self.request(HttpMethod.PUT, url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> Response:
        return self.request(HttpMethod.PATCH, url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Response:
        return self.request(HttpMethod.DELETE, url, **kwargs)

    def resolve_request(self, request: Request) -> Response:
        """Run request through the interceptor chain and return the Response.

        Args:
            request: The Request to resolve.

        Returns:
            Response after the response chain has been applied.

        Raises:
            RequestTimeoutException: If the request times out.
        """
        modified_request = request
        for interceptor in self.interceptors:
            result = interceptor.modify_request(modified_request)
            match result:
                case Response():
                    # Short-circuit! Skip HTTP and remaining request interceptors
                    logger.debug(
                        f"{type(interceptor).__name__} short-circuited "
                        f"{request.method.value} {request.url}"
                    )
                    return self._apply_response_chain(result, request)
                case Request():
                    modified_request = result
                case _:
                    assert_never(result)

        response = self.send(modified_request)
        return self._apply_response_chain(response, request)

    def _apply_response_chain(
        self, response: Response, request: Request
    ) -> Response:
        for interceptor in reversed(self.interceptors):
            response = interceptor.modify_response(response, request)
        return response

    def send(self, request: Request) -> Response:
        """Dispatch request over HTTP without running any interceptors.

        This is the final stage of the call chain.

        Args:
            request: The Request to send.

        Returns:
            Response built from the HTTP response.

        Raises:
            RequestTimeoutException: If the request times out.
        """
        if request.request.cookies:
            existing = request.header("Cookie")
            cookie_header = _cookie_header(request.request.cookies)
            request = request.with_header(
                "Cookie",
                f"{existing}; {cookie_header}" if existing else cookie_header,
            )
        http_params = request.request

        timeout = (
            http_params.timeout
            if http_params.timeout is not None
            else self.timeout
        )
        http_request = self._client.build_request(
            method=http_params.method.value,
            url=http_params.url,
            params=http_params.params,
            headers=http_params.headers,
            content=http_params.data
            if isinstance(http_params.data, bytes)
            else None,
            data=http_params.data
            if isinstance(http_params.data, dict)
            else None,
            json=http_params.json,
            timeout=timeout,
        )

        try:
            http_response = self._client.send(
                http_request, follow_redirects=http_params.follow_redirects
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutException(
                url=str(http_request.url),
                timeout_seconds=timeout,
            ) from e
        finally:
            # httpx stores Set-Cookie values in the client jar; drop them so
            # they are never replayed on later requests
            self._client.cookies.clear()

        logger.debug(
            f"{http_params.method.value} {http_request.url} -> "
            f"{http_response.status_code}"
        )

        return Response(
            status_code=http_response.status_code,
            headers=dict(http_response.headers),
            cookies=_response_cookies(http_response),
            content=http_response.content,
            text=http_response.text,
            url=str(http_response.url),
            request=request,
        )
