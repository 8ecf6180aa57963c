"""Configuration for the CSRF cookie-to-header pattern.

Many web frameworks deliver an anti-forgery token to the browser in a cookie
and expect it to be echoed back in a request header. CSRFCookieToHeaderConfig
names that cookie and header; CSRFCookieToHeaderInterceptor reads the names
from the configuration attached to each request.

ClientConfig aggregates configuration sections for SyncClient. Sections are
immutable, and each one knows whether a caller set it explicitly so that
layered configurations (client defaults, per-request overrides) can be merged
without a default silently replacing a customized value.
"""

from dataclasses import dataclass, field, replace

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_COOKIE_NAME = "XSRF-TOKEN"
DEFAULT_HEADER_NAME = "X-" + DEFAULT_COOKIE_NAME


class CSRFCookieToHeaderConfig(BaseModel):
    """Names of the cookie that delivers the CSRF token and the header that returns it.

    Example:
        # Defaults: XSRF-TOKEN cookie, X-XSRF-TOKEN header
        config = CSRFCookieToHeaderConfig()

        # Django naming
        config = CSRFCookieToHeaderConfig(
            cookie_name="csrftoken", header_name="X-CSRFToken"
        )

        # Withers return new instances
        config = CSRFCookieToHeaderConfig().with_header_name("X-CSRF-TOKEN")

    Attributes:
        cookie_name: Name of the cookie that contains the CSRF token.
        header_name: Name of the header the token is sent back in.
    """

    model_config = ConfigDict(frozen=True)

    cookie_name: str = DEFAULT_COOKIE_NAME
    header_name: str = DEFAULT_HEADER_NAME

    @field_validator("cookie_name")
    @classmethod
    def _cookie_name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Cookie name cannot be empty.")
        return value

    @field_validator("header_name")
    @classmethod
    def _header_name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Header name cannot be empty.")
        return value

    def with_cookie_name(self, cookie_name: str) -> "CSRFCookieToHeaderConfig":
        """Return a copy using cookie_name. The copy counts as user configured."""
        return CSRFCookieToHeaderConfig(
            cookie_name=cookie_name, header_name=self.header_name
        )

    def with_header_name(self, header_name: str) -> "CSRFCookieToHeaderConfig":
        """Return a copy using header_name. The copy counts as user configured."""
        return CSRFCookieToHeaderConfig(
            cookie_name=self.cookie_name, header_name=header_name
        )

    def is_user_configured(self) -> bool:
        """Whether any name was given explicitly rather than defaulted."""
        return bool(self.model_fields_set)


def csrf_cookie_to_header_config() -> CSRFCookieToHeaderConfig:
    return CSRFCookieToHeaderConfig()


@dataclass(frozen=True)
class ClientConfig:
    """Configuration sections shared by SyncClient and the requests it builds.

    Attributes:
        csrf_cookie_to_header: Cookie and header names used by
            CSRFCookieToHeaderInterceptor.
    """

    csrf_cookie_to_header: CSRFCookieToHeaderConfig = field(
        default_factory=CSRFCookieToHeaderConfig
    )

    def with_csrf_cookie_to_header(
        self, config: CSRFCookieToHeaderConfig
    ) -> "ClientConfig":
        return replace(self, csrf_cookie_to_header=config)

    def merge(self, override: "ClientConfig | None") -> "ClientConfig":
        """Layer override on top of this configuration.

        A section from override is only taken when the caller configured it
        explicitly; defaulted sections never replace this configuration's.

        Args:
            override: The more specific configuration, or None.

        Returns:
            A new ClientConfig.
        """
        if override is None:
            return self
        csrf = (
            override.csrf_cookie_to_header
            if override.csrf_cookie_to_header.is_user_configured()
            else self.csrf_cookie_to_header
        )
        return replace(self, csrf_cookie_to_header=csrf)
