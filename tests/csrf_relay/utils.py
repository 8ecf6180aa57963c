"""Helpers for building requests and responses without a server."""

from csrf_relay.config import ClientConfig
from csrf_relay.data_types import (
    HttpMethod,
    HTTPRequestParams,
    NextStage,
    Request,
    Response,
)


def make_request(
    url: str = "http://testserver/login",
    method: HttpMethod = HttpMethod.POST,
    headers: dict[str, str] | None = None,
    cookies: dict[str, str] | None = None,
    config: ClientConfig | None = None,
) -> Request:
    return Request(
        request=HTTPRequestParams(
            method=method,
            url=url,
            headers=headers or {},
            cookies=cookies or {},
        ),
        config=config or ClientConfig(),
    )


def make_response(
    request: Request,
    cookies: dict[str, str] | None = None,
    status_code: int = 200,
    text: str = "",
) -> Response:
    return Response(
        status_code=status_code,
        headers={},
        cookies=cookies or {},
        content=text.encode("utf-8"),
        text=text,
        url=request.url,
        request=request,
    )


def recording_stage(
    sent: list[Request],
    cookies: dict[str, str] | None = None,
    status_code: int = 200,
) -> NextStage:
    """Build a next stage that records each request and answers with cookies."""

    def call_next(request: Request) -> Response:
        sent.append(request)
        return make_response(request, cookies=cookies, status_code=status_code)

    return call_next
