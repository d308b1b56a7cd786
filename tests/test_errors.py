# ABOUTME: Tests for error handling and error display functionality.
# ABOUTME: Covers the exception hierarchy and the error, login help and crawl failure panels.

import pytest
from rich.console import Console
from rich.panel import Panel

from linkedin_networker.database import InvalidRecordError, SessionNotFoundError
from linkedin_networker.display.errors import (
    display_crawl_failure,
    display_error,
    display_login_help,
)
from linkedin_networker.errors import LinkedInNetworkerError
from linkedin_networker.linkedin.exceptions import (
    LinkedInAuthError,
    LinkedInChallengeError,
    LinkedInError,
    LinkedInTimeoutError,
)


def _text(panel: Panel) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(panel)
    return console.export_text()


class TestLinkedInNetworkerError:
    """Tests for the base LinkedInNetworkerError exception."""

    def test_base_exception_can_be_raised_and_caught(self) -> None:
        """Test that LinkedInNetworkerError can be raised and caught."""
        with pytest.raises(LinkedInNetworkerError) as exc_info:
            raise LinkedInNetworkerError("Test error")
        assert "Test error" in str(exc_info.value)

    @pytest.mark.parametrize(
        "error_class",
        [LinkedInError, LinkedInTimeoutError, SessionNotFoundError, InvalidRecordError],
    )
    def test_subsystem_errors_share_base(self, error_class: type[Exception]) -> None:
        """Test that browser and store errors derive from the application base."""
        assert issubclass(error_class, LinkedInNetworkerError)

    def test_challenge_is_auth_error(self) -> None:
        """Test that a security challenge is a kind of login failure."""
        assert issubclass(LinkedInChallengeError, LinkedInAuthError)


class TestDisplayError:
    """Tests for the display_error function."""

    def test_display_error_returns_panel(self) -> None:
        """Test that display_error returns a Rich Panel with the message."""
        result = display_error(LinkedInAuthError("Login failed"))
        assert isinstance(result, Panel)
        assert "LinkedInAuthError: Login failed" in _text(result)

    def test_display_error_includes_traceback_when_verbose(self) -> None:
        """Test that verbose mode includes the traceback."""
        try:
            raise ValueError("boom")
        except ValueError as e:
            result = display_error(e, verbose=True)
        assert "Traceback" in _text(result)

    def test_display_error_uses_red_border(self) -> None:
        """Test that error panels use a red border."""
        assert display_error(ValueError("x")).border_style == "red"


class TestDisplayLoginHelp:
    """Tests for the display_login_help function."""

    def test_mentions_login_command(self) -> None:
        """Test that the help points at the login command and keyring storage."""
        text = _text(display_login_help())
        assert "linkedin-networker login" in text
        assert "keyring" in text


class TestDisplayCrawlFailure:
    """Tests for the display_crawl_failure function."""

    def test_shows_first_line_only(self) -> None:
        """Test that non-verbose output hides everything after the first line."""
        text = _text(display_crawl_failure("Timeout exceeded\nCall log:\n  navigating"))
        assert "Timeout exceeded" in text
        assert "Call log" not in text
        assert "--verbose" in text

    def test_verbose_shows_everything(self) -> None:
        """Test that verbose output includes the full error text."""
        text = _text(display_crawl_failure("Timeout exceeded\nCall log:", verbose=True))
        assert "Call log" in text
