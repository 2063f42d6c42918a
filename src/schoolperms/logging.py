"""Logging utilities for schoolperms.

This module provides:
- Logging configuration from SchoolPermsConfig
- Safe, length-bounded previews of permission lists and payloads
- A formatter that carries tenant context (school_id, user_id)
- A logger adapter that injects tenant context into every record
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, SchoolPermsConfig

_CONTEXT_KEYS = ("school_id", "user_id")

_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", *_CONTEXT_KEYS,
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Sets and frozensets are sorted first so permission sets log stably.
    """
    if value is None:
        return ""

    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class PermissionLogFormatter(logging.Formatter):
    """Formatter emitting JSON or plain text with tenant context.

    Extra record attributes are previewed with :func:`safe_preview` so a
    whole permission list never floods the log line.
    """

    def __init__(
        self,
        include_context: bool = True,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.include_context = include_context
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            for key in _CONTEXT_KEYS:
                value = getattr(record, key, None)
                if value:
                    log_data[key] = str(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        for key in _CONTEXT_KEYS:
            if key in log_data:
                parts.append(f"{key}={log_data[key]}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class SchoolContextFilter(logging.Filter):
    """Stamp a default school_id on records that do not carry one."""

    def __init__(self, school_id: str) -> None:
        super().__init__()
        self.school_id = school_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "school_id", None):
            record.school_id = self.school_id
        return True


class SchoolLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds school_id and user_id to log records.

    Usage:
        logger = get_school_logger(__name__, school_id="greenfield")
        logger.info("Role saved", user_id=42)
    """

    def __init__(
        self,
        logger: logging.Logger,
        school_id: Optional[str] = None,
        user_id: Optional[str | int] = None,
    ):
        super().__init__(logger, {})
        self.school_id = school_id
        self.user_id = user_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        school_id = kwargs.pop("school_id", self.school_id)
        user_id = kwargs.pop("user_id", self.user_id)

        extra = kwargs.get("extra", {})
        if school_id:
            extra["school_id"] = school_id
        if user_id:
            extra["user_id"] = user_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[SchoolPermsConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger from SchoolPermsConfig.

    Args:
        config: SchoolPermsConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        PermissionLogFormatter(
            include_context=True,
            json_format=config.log_json if json_format is None else json_format,
        )
    )
    if config.school_id:
        console_handler.addFilter(SchoolContextFilter(config.school_id))
    root_logger.addHandler(console_handler)


def get_school_logger(
    name: str,
    school_id: Optional[str] = None,
    user_id: Optional[str | int] = None,
) -> SchoolLoggerAdapter:
    """Get a logger adapter bound to a tenant.

    Example:
        logger = get_school_logger(__name__, school_id=config.school_id)
        logger.info("Classified %d permissions", count)
    """
    return SchoolLoggerAdapter(logging.getLogger(name), school_id=school_id, user_id=user_id)


__all__ = [
    "safe_preview",
    "SchoolContextFilter",
    "PermissionLogFormatter",
    "SchoolLoggerAdapter",
    "setup_logging",
    "get_school_logger",
]
