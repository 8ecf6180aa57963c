"""Interceptor that carries a CSRF token from response cookies to requests.

Servers using the cookie-to-header pattern send the anti-forgery token in a
cookie (XSRF-TOKEN by default) and reject state-changing requests unless the
same value comes back in a header (X-XSRF-TOKEN by default). A browser does
this with a few lines of JavaScript; a test client needs this interceptor.

The cookie and header names are read from the
ClientConfig.csrf_cookie_to_header section attached to each request.
"""

import logging
from threading import Lock

from csrf_relay.data_types import NextStage, Request, Response

logger = logging.getLogger(__name__)


class CSRFCookieToHeaderInterceptor:
    """Captures the CSRF cookie from responses and replays it on requests.

    For every request, in order:
    1. If a token has been captured and the request carries no CSRF cookie,
       the cookie is set to the captured token.
    2. If the request now carries a CSRF cookie (explicit or injected) and no
       CSRF header, the header is set to the cookie value.
    3. The request is dispatched.
    4. If the response sets a non-blank CSRF cookie, it replaces the captured
       token, whatever the response status.

    Values set explicitly on a request always win over the captured token. A
    response without the cookie never clears the captured token.

    One instance can be shared by concurrent requests. Reads and writes of the
    token are atomic; when responses race, the last one stored wins.

    Example:
        csrf = CSRFCookieToHeaderInterceptor()
        with SyncClient(base_url, interceptors=[csrf]) as client:
            client.get("/login")  # captures XSRF-TOKEN
            client.post("/login", data=form)  # sends cookie and header
    """

    def __init__(self) -> None:
        self._token: str | None = None
        self._lock = Lock()

    def intercept(self, request: Request, call_next: NextStage) -> Response:
        """Apply the CSRF token to request, dispatch it, and capture a new token.

        Args:
            request: The outgoing request.
            call_next: The remainder of the call chain.

        Returns:
            The response from call_next, unchanged.
        """
        prepared = self.modify_request(request)
        return self.modify_response(call_next(prepared), prepared)

    def modify_request(self, request: Request) -> Request:
        csrf_config = request.config.csrf_cookie_to_header
        cookie_name = csrf_config.cookie_name
        header_name = csrf_config.header_name
        cookie_value = request.cookie(cookie_name)

        if cookie_value is None:
            token = self.get_token()
            if _is_not_blank(token):
                cookie_value = token
                request = request.with_cookie(cookie_name, cookie_value)
                logger.debug(
                    f"Added captured CSRF cookie {cookie_name} to "
                    f"{request.method.value} {request.url}"
                )

        if cookie_value is not None and request.header(header_name) is None:
            request = request.with_header(header_name, cookie_value)
            logger.debug(
                f"Added CSRF header {header_name} to "
                f"{request.method.value} {request.url}"
            )

        return request

    def modify_response(self, response: Response, request: Request) -> Response:
        cookie_name = request.config.csrf_cookie_to_header.cookie_name
        token = response.cookie(cookie_name)
        if _is_not_blank(token):
            with self._lock:
                self._token = token
            logger.debug(
                f"Captured CSRF token from cookie {cookie_name} "
                f"(status {response.status_code}, {response.url})"
            )
        return response

    def get_token(self) -> str | None:
        """The last CSRF token captured, or None if none has been seen."""
        with self._lock:
            return self._token

    def has_token(self) -> bool:
        return _is_not_blank(self.get_token())


def _is_not_blank(value: str | None) -> bool:
    return value is not None and bool(value.strip())
