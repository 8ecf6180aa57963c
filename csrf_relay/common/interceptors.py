"""Interceptor protocol used by SyncClient.

An interceptor sees every Request before it is dispatched and every Response
on the way back. CSRFCookieToHeaderInterceptor is the main implementation;
LoggingInterceptor and MockInterceptor in example_interceptors are the others.
"""

from typing import Protocol

from csrf_relay.data_types import Request, Response


class SyncInterceptor(Protocol):
    """Protocol for synchronous interceptors.

    SyncClient calls modify_request on each interceptor in list order, sends
    the last returned Request, then calls modify_response in reverse order.

    How the chain behaves:
    - Requests are immutable. Interceptors hand on a modified copy, and later
      interceptors see the copy (cookies and headers injected by the CSRF
      interceptor are visible to a LoggingInterceptor placed after it)
    - Returning a Response from modify_request answers the call without HTTP;
      interceptors later in the list never see that request
    - Every interceptor still sees the Response, answered or dispatched, so a
      CSRF interceptor captures tokens from mocked responses wherever it is
      listed. Only when listed before the MockInterceptor does it also inject
      the token into requests for mocked URLs
    - URLs are already absolute by the time any interceptor runs
    """

    def modify_request(self, request: Request) -> Request | Response:
        """Return the request to send on, or a Response that answers it.

        Args:
            request: The request as left by the previous interceptor.
        """
        return request

    def modify_response(self, response: Response, request: Request) -> Response:
        """Return the response to hand back towards the caller.

        Args:
            response: The dispatched or short-circuited response.
            request: The request as SyncClient built it, before any
                interceptor changed it. Its config is the one every
                interceptor saw.
        """
        return response
