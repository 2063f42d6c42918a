"""Readable labels derived from dotted permission names.

``subject.assignments.update`` → label ``"Edit"``, subtitle
``"Subject Assignments"``; ``dashboard.view`` → ``"View"`` / ``"Dashboard"``.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

GENERAL = "general"

# Action names shown under a friendlier verb
ACTION_ALIASES: dict[str, str] = {
    "update": "edit",
    "enter": "entry",
}

_SEPARATORS = re.compile(r"[-_.]")
_WORD_START = re.compile(r"\b\w", re.ASCII)


class PermissionLabels(NamedTuple):
    group_key: str
    group_title: str
    primary_label: str
    subtitle: Optional[str]


def normalize_label(value: str) -> str:
    """Replace ``-``, ``_`` and ``.`` with spaces and collapse whitespace."""
    return " ".join(_SEPARATORS.sub(" ", value).split())


def to_title(value: str) -> str:
    """Upper-case the first letter of every word; leave the rest alone.

    >>> to_title("bank-details")
    'Bank Details'
    >>> to_title("assignRoles")
    'AssignRoles'
    """
    return _WORD_START.sub(lambda m: m.group(0).upper(), normalize_label(value))


def format_permission_labels(name: str) -> PermissionLabels:
    """Derive group key, group title, label and subtitle for a permission name.

    Segments are split on ``.``; blank segments are dropped. With more than
    one segment the last is the action and the rest are the context.
    """
    parts = [part for part in name.split(".") if part.strip()]
    group_part = parts[0] if parts else GENERAL
    context_parts = parts[:-1] if len(parts) > 1 else []
    action = parts[-1] if parts else GENERAL
    action = ACTION_ALIASES.get(action, action)

    if context_parts:
        subtitle: Optional[str] = to_title(" ".join(context_parts))
    elif group_part != GENERAL:
        subtitle = to_title(group_part)
    else:
        subtitle = None

    return PermissionLabels(
        group_key=group_part,
        group_title=re.sub(r"[-_]", " ", group_part),
        primary_label=to_title(action),
        subtitle=subtitle,
    )


__all__ = [
    "ACTION_ALIASES",
    "GENERAL",
    "PermissionLabels",
    "format_permission_labels",
    "normalize_label",
    "to_title",
]
