"""Carry CSRF tokens from response cookies into request cookies and headers."""

from csrf_relay.common.csrf_interceptor import CSRFCookieToHeaderInterceptor
from csrf_relay.config import (
    ClientConfig,
    CSRFCookieToHeaderConfig,
    csrf_cookie_to_header_config,
)
from csrf_relay.driver.sync_driver import SyncClient

__all__ = [
    "CSRFCookieToHeaderConfig",
    "CSRFCookieToHeaderInterceptor",
    "ClientConfig",
    "SyncClient",
    "csrf_cookie_to_header_config",
]
