"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from schoolperms.exceptions import (
    ConfigurationError,
    PayloadError,
    SchoolPermsError,
    TemplateError,
)


class TestExceptionHierarchy:
    """Tests for error codes and inheritance."""

    def test_default_message_and_code(self) -> None:
        error = SchoolPermsError()
        assert error.code == "INTERNAL_ERROR"
        assert str(error) == "An internal error occurred"

    def test_details_kept(self) -> None:
        error = TemplateError("bad pattern", pattern="(")
        assert error.code == "TEMPLATE_ERROR"
        assert error.message == "bad pattern"
        assert error.details == {"pattern": "("}

    def test_template_error_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            raise TemplateError("x")

    def test_code_override(self) -> None:
        assert PayloadError("x", code="HIERARCHY_PAYLOAD").code == "HIERARCHY_PAYLOAD"

    def test_unknown_regex_flag_carries_flags(self) -> None:
        from schoolperms.permissions import RegexMatcher

        with pytest.raises(TemplateError) as exc_info:
            RegexMatcher(pattern="students\\..*", flags="iq")
        assert exc_info.value.details == {"flags": "iq"}
