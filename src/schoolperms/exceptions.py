"""Exception hierarchy for schoolperms.

The evaluator and classifier are total over their inputs and never raise.
Errors come only from the edges of the library:
- configuration and template loading (``ConfigurationError``, ``TemplateError``)
- parsing backend payloads (``PayloadError``)

Usage:
    from schoolperms.exceptions import SchoolPermsError, TemplateError

    try:
        templates = load_templates(path)
    except TemplateError as e:
        logger.error("[%s] %s", e.code, e.message)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "SchoolPermsError",
    "ConfigurationError",
    "TemplateError",
    "PayloadError",
]


# ---- Exception Hierarchy ----------------------------------------------------


class SchoolPermsError(Exception):
    """Base exception for schoolperms.

    Attributes:
        code: Stable error code string (e.g. "TEMPLATE_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(SchoolPermsError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class TemplateError(ConfigurationError):
    """Permission group template could not be built or loaded."""

    code: str = "TEMPLATE_ERROR"


class PayloadError(SchoolPermsError):
    """Backend payload has an unexpected shape."""

    code: str = "PAYLOAD_ERROR"

