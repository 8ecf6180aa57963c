import httpx
import pytest

from tests.csrf_relay.server import CsrfProtectedServer


@pytest.fixture
def csrf_server() -> CsrfProtectedServer:
    return CsrfProtectedServer()


@pytest.fixture
def transport(csrf_server: CsrfProtectedServer) -> httpx.MockTransport:
    return httpx.MockTransport(csrf_server)
