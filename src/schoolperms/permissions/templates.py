"""Permission group templates for the role editor.

Provides:
- ``SCHOOL_PERMISSION_GROUPS`` — the built-in school taxonomy.
- ``load_templates()`` — read a deployment-specific taxonomy from JSON.

Template file format (regex patterns are written as ``{"regex": ...}``)::

    [
      {"key": "management", "title": "Management", "patterns": [],
       "sections": [{"label": "Sessions", "patterns": ["sessions."]}]},
      {"key": "rbac", "title": "RBAC",
       "patterns": ["roles.", {"regex": "users\\\\.assignRoles"}]}
    ]
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter, ValidationError

from ..exceptions import TemplateError
from .models import PermissionGroupTemplate

logger = logging.getLogger(__name__)

_TEMPLATE_LIST = TypeAdapter(list[PermissionGroupTemplate])


def _template(key: str, title: str, patterns=(), sections=()) -> PermissionGroupTemplate:
    return PermissionGroupTemplate.model_validate(
        {"key": key, "title": title, "patterns": list(patterns), "sections": list(sections)}
    )


# ── School Taxonomy ─────────────────────────────────────
# Order matters: the first template that matches a permission claims it.

SCHOOL_PERMISSION_GROUPS: tuple[PermissionGroupTemplate, ...] = (
    _template(
        "management",
        "Management",
        sections=(
            {"label": "Sessions", "patterns": ["sessions."]},
            {"label": "Terms", "patterns": ["terms."]},
            {"label": "Subjects", "patterns": ["subjects."]},
            {"label": "Result Pin", "patterns": ["result.pin."]},
        ),
    ),
    _template("parent", "Parent", ["parents."]),
    _template("staff", "Staff", ["staff."]),
    _template("classes", "Classes", ["classes.", "class-arms."]),
    _template("assign", "Assign", ["subject.assignments", "class-teachers."]),
    _template("student", "Student", ["students."]),
    _template("attendance", "Attendance", ["attendance."]),
    _template("settings", "Settings", ["assessment.", "skills.", "settings."]),
    _template("fees", "Fee Management", ["fees."]),
    _template("rbac", "RBAC", ["permissions.", "roles.", re.compile(r"users\.assignRoles")]),
    _template("analytics", "Analytics", ["analytics."]),
)


def load_templates(path: Union[str, Path]) -> tuple[PermissionGroupTemplate, ...]:
    """Load permission group templates from a JSON file.

    Args:
        path: JSON file containing a list of template objects.

    Returns:
        Immutable tuple of templates in file order.

    Raises:
        TemplateError: File missing, unreadable, or not a valid template list.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read permission templates from {path}: {e}", path=str(path))

    try:
        templates = tuple(_TEMPLATE_LIST.validate_json(raw))
    except ValidationError as e:
        raise TemplateError(f"Invalid permission templates in {path}: {e}", path=str(path))

    keys = [template.key for template in templates]
    duplicates = sorted({key for key in keys if keys.count(key) > 1})
    if duplicates:
        raise TemplateError(f"Duplicate template keys in {path}: {', '.join(duplicates)}", path=str(path))

    logger.info("Loaded %d permission group template(s) from %s", len(templates), path)
    return templates


__all__ = [
    "SCHOOL_PERMISSION_GROUPS",
    "load_templates",
]
