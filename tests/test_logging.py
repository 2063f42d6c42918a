"""Tests for schoolperms.logging module."""

from __future__ import annotations

import json
import logging

import pytest

from schoolperms import (
    LogLevel,
    PermissionLogFormatter,
    SchoolContextFilter,
    SchoolPermsConfig,
    get_school_logger,
    safe_preview,
    setup_logging,
)


def _record(msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSafePreview:
    """Tests for safe_preview function."""

    def test_none_value(self) -> None:
        assert safe_preview(None) == ""

    def test_string_with_whitespace(self) -> None:
        assert safe_preview("hello\n\tworld  test") == "hello world test"

    def test_truncation(self) -> None:
        result = safe_preview("a" * 300, limit=100)
        assert len(result) == 100
        assert result.endswith("…")

    def test_set_sorted(self) -> None:
        assert safe_preview({"students.view", "fees.view"}) == '["fees.view", "students.view"]'

    def test_list_value(self) -> None:
        assert "sessions.manage" in safe_preview(["sessions.manage"])


class TestPermissionLogFormatter:
    """Tests for PermissionLogFormatter."""

    def test_json_format(self) -> None:
        formatter = PermissionLogFormatter(json_format=True)
        record = _record()
        record.school_id = "greenfield"
        record.granted = {"b", "a"}

        data = json.loads(formatter.format(record))
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["school_id"] == "greenfield"
        assert data["granted"] == '["a", "b"]'

    def test_plain_format(self) -> None:
        formatter = PermissionLogFormatter(json_format=False)
        record = _record()
        record.user_id = 42

        result = formatter.format(record)
        assert "INFO" in result
        assert "Test message" in result
        assert "user_id=42" in result

    def test_context_disabled(self) -> None:
        formatter = PermissionLogFormatter(include_context=False, json_format=True)
        record = _record()
        record.school_id = "greenfield"
        assert "school_id" not in json.loads(formatter.format(record))


class TestSchoolLogger:
    """Tests for get_school_logger."""

    def test_adapter_adds_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_school_logger("schoolperms.test", school_id="greenfield")
        with caplog.at_level(logging.INFO):
            logger.info("Role saved", user_id=7)

        record = caplog.records[-1]
        assert record.school_id == "greenfield"
        assert record.user_id == 7

    def test_adapter_without_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_school_logger("schoolperms.test")
        with caplog.at_level(logging.INFO):
            logger.info("Plain message")

        record = caplog.records[-1]
        assert not hasattr(record, "school_id")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_root_logger(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(SchoolPermsConfig(log_level=LogLevel.DEBUG, log_json=True))
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            formatter = root.handlers[0].formatter
            assert isinstance(formatter, PermissionLogFormatter)
            assert formatter.json_format is True
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_json_override(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(SchoolPermsConfig(log_json=True), json_format=False)
            assert root.handlers[0].formatter.json_format is False
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_school_id_stamped_on_records(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(SchoolPermsConfig(school_id="greenfield", log_json=True))
            handler = root.handlers[0]
            record = logging.getLogger("schoolperms.x").makeRecord(
                "schoolperms.x", logging.INFO, "", 0, "Classified", (), None
            )
            assert handler.filter(record)

            data = json.loads(handler.format(record))
            assert data["school_id"] == "greenfield"
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_no_filter_without_school_id(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(SchoolPermsConfig())
            assert root.handlers[0].filters == []
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestSchoolContextFilter:
    """Tests for SchoolContextFilter."""

    def test_fills_missing_school_id(self) -> None:
        record = _record()
        assert SchoolContextFilter("greenfield").filter(record) is True
        assert record.school_id == "greenfield"

    def test_keeps_explicit_school_id(self) -> None:
        record = _record()
        record.school_id = "riverside"
        SchoolContextFilter("greenfield").filter(record)
        assert record.school_id == "riverside"
