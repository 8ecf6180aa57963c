"""Tests for CSRF cookie-to-header configuration.

Key behaviors tested:
- Default names are XSRF-TOKEN / X-XSRF-TOKEN
- Explicit names are preserved exactly and mark the config user configured
- Empty names are rejected, naming the offending argument
- Withers return new instances and leave the receiver unchanged
- ClientConfig.merge only takes user-configured sections
"""

import pytest
from pydantic import ValidationError

from csrf_relay.config import (
    DEFAULT_COOKIE_NAME,
    DEFAULT_HEADER_NAME,
    ClientConfig,
    CSRFCookieToHeaderConfig,
    csrf_cookie_to_header_config,
)


class TestCSRFCookieToHeaderConfig:
    """Tests for construction and validation."""

    def test_defaults(self) -> None:
        """The default config shall use XSRF-TOKEN and X-XSRF-TOKEN."""
        config = CSRFCookieToHeaderConfig()

        assert DEFAULT_COOKIE_NAME == "XSRF-TOKEN"
        assert DEFAULT_HEADER_NAME == "X-XSRF-TOKEN"
        assert config.cookie_name == DEFAULT_COOKIE_NAME
        assert config.header_name == DEFAULT_HEADER_NAME
        assert not config.is_user_configured()

    def test_factory_returns_defaults(self) -> None:
        """csrf_cookie_to_header_config() shall return a default config."""
        config = csrf_cookie_to_header_config()

        assert config == CSRFCookieToHeaderConfig()
        assert not config.is_user_configured()

    @pytest.mark.parametrize(
        ("cookie_name", "header_name"),
        [
            ("csrftoken", "X-CSRFToken"),
            ("XSRF-TOKEN", "X-XSRF-TOKEN"),
            (" spaced ", "x-lower-case"),
        ],
    )
    def test_explicit_names_are_preserved(
        self, cookie_name: str, header_name: str
    ) -> None:
        """Explicit names shall be kept exactly and mark the config user configured."""
        config = CSRFCookieToHeaderConfig(
            cookie_name=cookie_name, header_name=header_name
        )

        assert config.cookie_name == cookie_name
        assert config.header_name == header_name
        assert config.is_user_configured()

    def test_single_explicit_name_keeps_other_default(self) -> None:
        """Giving only one name shall default the other and still count as configured."""
        config = CSRFCookieToHeaderConfig(cookie_name="csrftoken")

        assert config.cookie_name == "csrftoken"
        assert config.header_name == DEFAULT_HEADER_NAME
        assert config.is_user_configured()

    def test_empty_cookie_name_is_rejected(self) -> None:
        """An empty cookie name shall fail validation on cookie_name."""
        with pytest.raises(
            ValidationError, match="Cookie name cannot be empty"
        ) as exc_info:
            CSRFCookieToHeaderConfig(cookie_name="", header_name="X-XSRF-TOKEN")

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["loc"] == ("cookie_name",)

    def test_empty_header_name_is_rejected(self) -> None:
        """An empty header name shall fail validation on header_name."""
        with pytest.raises(
            ValidationError, match="Header name cannot be empty"
        ) as exc_info:
            CSRFCookieToHeaderConfig(cookie_name="XSRF-TOKEN", header_name="")

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["loc"] == ("header_name",)

    def test_config_is_immutable(self) -> None:
        """Assigning to a field shall raise."""
        config = CSRFCookieToHeaderConfig()

        with pytest.raises(ValidationError):
            config.cookie_name = "other"  # type: ignore[misc]

        assert config.cookie_name == DEFAULT_COOKIE_NAME


class TestCSRFCookieToHeaderConfigWithers:
    """Tests for with_cookie_name / with_header_name."""

    def test_with_cookie_name_returns_new_instance(self) -> None:
        """with_cookie_name shall return a user-configured copy."""
        original = CSRFCookieToHeaderConfig()
        updated = original.with_cookie_name("csrftoken")

        assert updated is not original
        assert updated.cookie_name == "csrftoken"
        assert updated.header_name == DEFAULT_HEADER_NAME
        assert updated.is_user_configured()
        assert original.cookie_name == DEFAULT_COOKIE_NAME
        assert not original.is_user_configured()

    def test_with_header_name_returns_new_instance(self) -> None:
        """with_header_name shall return a user-configured copy."""
        original = CSRFCookieToHeaderConfig(cookie_name="csrftoken")
        updated = original.with_header_name("X-CSRFToken")

        assert updated.cookie_name == "csrftoken"
        assert updated.header_name == "X-CSRFToken"
        assert updated.is_user_configured()
        assert original.header_name == DEFAULT_HEADER_NAME

    def test_withers_validate(self) -> None:
        """Withers shall reject empty names too."""
        config = CSRFCookieToHeaderConfig()

        with pytest.raises(ValidationError, match="Cookie name cannot be empty"):
            config.with_cookie_name("")
        with pytest.raises(ValidationError, match="Header name cannot be empty"):
            config.with_header_name("")


class TestClientConfigMerge:
    """Tests for layering client and request configuration."""

    def test_merge_with_none_keeps_base(self) -> None:
        """Merging None shall return the base config."""
        base = ClientConfig()

        assert base.merge(None) is base

    def test_user_configured_section_overrides(self) -> None:
        """A user-configured section in the override shall win."""
        base = ClientConfig()
        custom = CSRFCookieToHeaderConfig(
            cookie_name="csrftoken", header_name="X-CSRFToken"
        )

        merged = base.merge(ClientConfig(csrf_cookie_to_header=custom))

        assert merged.csrf_cookie_to_header == custom

    def test_default_section_does_not_override(self) -> None:
        """A defaulted section in the override shall not replace a customized base."""
        custom = CSRFCookieToHeaderConfig(cookie_name="csrftoken")
        base = ClientConfig().with_csrf_cookie_to_header(custom)

        merged = base.merge(ClientConfig())

        assert merged.csrf_cookie_to_header.cookie_name == "csrftoken"
