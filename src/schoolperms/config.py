"""Configuration for schoolperms.

Pydantic-validated settings shared by every consumer of the permission core
(dashboards, role editor, menu gating). ``load_config_from_env()`` is the
only place that reads the environment; everything else takes a
``SchoolPermsConfig`` instance.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from .permissions.models import PermissionGroupTemplate

DEFAULT_ADMIN_ROLES = ("admin", "superadmin", "administrator")


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SchoolPermsConfig(BaseModel):
    """Settings for the permission core.

    Environment variables (see :func:`load_config_from_env`):
        SCHOOLPERMS_LOG_LEVEL       — DEBUG | INFO | WARNING | ERROR | CRITICAL
        SCHOOLPERMS_LOG_JSON        — JSON log format (true/false)
        SCHOOLPERMS_TEMPLATES_PATH  — JSON file overriding the built-in group templates
        SCHOOLPERMS_ADMIN_ROLES     — comma-separated admin-like role names
        SCHOOLPERMS_SCHOOL_ID       — tenant identifier attached to log records
    """

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    templates_path: Optional[Path] = Field(
        default=None,
        description="Permission group template file. None = built-in school templates.",
    )
    admin_roles: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ADMIN_ROLES),
        description="Role names that still see permission-gated menu links",
    )
    school_id: Optional[str] = Field(
        default=None,
        description="Tenant (school) identifier for log context",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @field_validator("admin_roles")
    @classmethod
    def normalize_admin_roles(cls, v: list[str]) -> list[str]:
        return [role.strip().lower() for role in v if role.strip()]

    def load_templates(self) -> tuple[PermissionGroupTemplate, ...]:
        """Return the configured permission group templates.

        Reads ``templates_path`` when set, otherwise returns the built-in
        school table.
        """
        from .permissions.templates import SCHOOL_PERMISSION_GROUPS, load_templates

        if self.templates_path is None:
            return SCHOOL_PERMISSION_GROUPS
        return load_templates(self.templates_path)

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_config_from_env() -> SchoolPermsConfig:
    """Load configuration from environment variables.

    Returns:
        SchoolPermsConfig with values from environment or defaults.
    """
    import os

    admin_roles_raw = os.getenv("SCHOOLPERMS_ADMIN_ROLES")
    kwargs = {}
    if admin_roles_raw is not None:
        kwargs["admin_roles"] = [r.strip() for r in admin_roles_raw.split(",") if r.strip()]

    return SchoolPermsConfig(
        log_level=os.getenv("SCHOOLPERMS_LOG_LEVEL", "INFO"),
        log_json=os.getenv("SCHOOLPERMS_LOG_JSON", "false").lower() in ("true", "1", "yes"),
        templates_path=os.getenv("SCHOOLPERMS_TEMPLATES_PATH") or None,
        school_id=os.getenv("SCHOOLPERMS_SCHOOL_ID") or None,
        **kwargs,
    )


__all__ = [
    "DEFAULT_ADMIN_ROLES",
    "LogLevel",
    "SchoolPermsConfig",
    "load_config_from_env",
]
