"""Example interceptor implementations.

These interceptors demonstrate the interceptor pattern and are useful for
testing and debugging alongside CSRFCookieToHeaderInterceptor.
"""

import logging
from dataclasses import replace

from csrf_relay.data_types import Request, Response

logger = logging.getLogger(__name__)


class LoggingInterceptor:
    """Interceptor that logs requests and responses without modifying them."""

    def __init__(self, prefix: str = "") -> None:
        """Initialize the logging interceptor.

        Args:
            prefix: Optional prefix for log messages.
        """
        self.prefix = prefix
        self.request_count = 0
        self.response_count = 0

    def modify_request(self, request: Request) -> Request | Response:
        self.request_count += 1
        logger.info(
            f"{self.prefix}Request #{self.request_count}: "
            f"{request.method.value} {request.url}"
        )
        return request

    def modify_response(self, response: Response, request: Request) -> Response:
        self.response_count += 1
        logger.info(
            f"{self.prefix}Response #{self.response_count}: "
            f"{response.status_code} from {response.url}"
        )
        return response


class MockInterceptor:
    """Interceptor that answers requests with canned responses.

    Requests whose URL is a key of mock_responses are short-circuited; the
    canned response is returned re-bound to the live request. Other requests
    pass through to the network.
    """

    def __init__(self, mock_responses: dict[str, Response]) -> None:
        """Initialize the mock interceptor.

        Args:
            mock_responses: Map of request URLs to mock Response objects.
        """
        self.mock_responses = mock_responses
        self.mock_hits = 0
        self.mock_misses = 0

    def modify_request(self, request: Request) -> Request | Response:
        mock_response = self.mock_responses.get(request.url)
        if mock_response is None:
            self.mock_misses += 1
            return request
        self.mock_hits += 1
        return replace(mock_response, request=request)

    def modify_response(self, response: Response, request: Request) -> Response:
        return response
