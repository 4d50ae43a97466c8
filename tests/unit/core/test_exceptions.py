"""Unit tests for exceptions."""

from __future__ import annotations

import pytest

from nsregistry.core.exceptions import (
    Forbidden,
    InvalidTransition,
    NotFound,
    NsRegistryError,
    Unauthenticated,
)


class TestNsRegistryError:
    """Tests for NsRegistryError."""

    def test_is_exception(self) -> None:
        """Test that NsRegistryError is an Exception."""
        assert issubclass(NsRegistryError, Exception)

    def test_keeps_message(self) -> None:
        """Test that the message is available as an attribute."""
        error = NsRegistryError("boom")

        assert error.message == "boom"
        assert str(error) == "boom"


class TestUnauthenticated:
    """Tests for Unauthenticated."""

    def test_default_message(self) -> None:
        """Test the standard login message."""
        error = Unauthenticated()

        assert error.message == "You must be logged in to perform this action"

    def test_reports_403(self) -> None:
        """Test that anonymous callers get the same status as forbidden ones."""
        assert Unauthenticated.status_code == 403
        assert Unauthenticated.status_code == Forbidden.status_code

    def test_can_be_caught_as_base(self) -> None:
        """Test that Unauthenticated can be caught as NsRegistryError."""
        with pytest.raises(NsRegistryError):
            raise Unauthenticated()


class TestForbidden:
    """Tests for Forbidden."""

    def test_for_namespace_message(self) -> None:
        """Test the namespace message format."""
        error = Forbidden.for_namespace("acme", "npmjs")

        assert error.message == "You cannot act on behalf of acme@npmjs"
        assert error.status_code == 403


class TestNotFound:
    """Tests for NotFound."""

    def test_reports_404(self) -> None:
        """Test the status code."""
        assert NotFound("bob not found.").status_code == 404


class TestInvalidTransition:
    """Tests for InvalidTransition."""

    def test_records_states(self) -> None:
        """Test that both states are kept on the error."""
        error = InvalidTransition("removed", "active")

        assert error.current == "removed"
        assert error.target == "active"
        assert "removed" in error.message
        assert "active" in error.message
