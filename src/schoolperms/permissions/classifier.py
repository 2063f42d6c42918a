"""Group a flat permission list into labelled blocks for the role editor.

The backend stores no grouping metadata, so classification runs purely on
the dotted naming convention:

1. Templates are tried in declaration order; within a template, sections
   come before the template's own patterns. First match wins.
2. Whatever no template claims lands in a fallback group named after the
   permission's first segment, so every permission is always shown.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Iterable, Sequence
from typing import Optional

from .labels import GENERAL, format_permission_labels
from .matchers import matches_any
from .models import Permission, PermissionGroup, PermissionGroupItem, PermissionGroupTemplate

logger = logging.getLogger(__name__)

OTHER_TITLE = "Other"


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(value: str) -> tuple[str, str, str]:
    """Locale-style sort key.

    Base letters first (accents and case ignored), then accents, then
    lowercase before uppercase.
    """
    folded = value.casefold()
    return _strip_accents(folded), folded, value.swapcase()


def slugify(label: str) -> str:
    return re.sub(r"\s+", "-", label.lower())


def filter_permissions(permissions: Sequence[Permission], term: Optional[str]) -> list[Permission]:
    """Keep permissions whose name or description contains ``term``.

    Matching is case-insensitive. A blank term returns the input unchanged.
    """
    normalized = (term or "").strip().lower()
    if not normalized:
        return list(permissions)

    return [
        permission
        for permission in permissions
        if normalized in permission.name.lower() or normalized in (permission.description or "").lower()
    ]


def to_item(permission: Permission) -> PermissionGroupItem:
    labels = format_permission_labels(permission.name)
    return PermissionGroupItem(
        id=str(permission.id),
        permission=permission,
        display_name=labels.primary_label,
        subtitle=labels.subtitle,
    )


def _sorted_items(permissions: Iterable[Permission]) -> list[PermissionGroupItem]:
    return sorted((to_item(p) for p in permissions), key=lambda item: collation_key(item.display_name))


def _partition(permissions: list[Permission], patterns) -> tuple[list[Permission], list[Permission]]:
    matched: list[Permission] = []
    rest: list[Permission] = []
    for permission in permissions:
        (matched if matches_any(permission.name, patterns) else rest).append(permission)
    return matched, rest


def classify(
    permissions: Sequence[Permission],
    templates: Sequence[PermissionGroupTemplate],
    term: Optional[str] = "",
) -> list[PermissionGroup]:
    """Classify permissions into ordered display groups.

    Args:
        permissions: Permissions as listed by the backend.
        templates: Group templates, usually ``SCHOOL_PERMISSION_GROUPS``.
        term: Optional free-text filter (see :func:`filter_permissions`).

    Returns:
        Templated groups in template order, then fallback groups sorted by
        title. Every filtered permission appears in exactly one group.

    Example::

        groups = classify(perms, SCHOOL_PERMISSION_GROUPS)
        [(g.key, g.title) for g in groups]
        # [("management-sessions", "Sessions"), ("student", "Student"), ("other-foo", "foo")]
    """
    remaining = filter_permissions(permissions, term)
    groups: list[PermissionGroup] = []

    for template in templates:
        for section in template.sections:
            matched, remaining = _partition(remaining, section.patterns)
            if matched:
                groups.append(
                    PermissionGroup(
                        key=f"{template.key}-{slugify(section.label)}",
                        title=section.label,
                        items=_sorted_items(matched),
                    )
                )

        if template.patterns:
            matched, remaining = _partition(remaining, template.patterns)
            if matched:
                if template.sections:
                    key, title = f"{template.key}-{slugify(OTHER_TITLE)}", OTHER_TITLE
                else:
                    key, title = template.key, template.title
                groups.append(PermissionGroup(key=key, title=title, items=_sorted_items(matched)))

    if remaining:
        logger.debug("%d permission(s) matched no template, using fallback groups", len(remaining))
        groups.extend(_fallback_groups(remaining))

    return groups


def _fallback_groups(permissions: list[Permission]) -> list[PermissionGroup]:
    buckets: dict[str, tuple[str, list[Permission]]] = {}
    for permission in permissions:
        labels = format_permission_labels(permission.name)
        buckets.setdefault(labels.group_key, (labels.group_title, []))[1].append(permission)

    fallback = [
        PermissionGroup(
            key=f"other-{group_key}",
            title=OTHER_TITLE if group_key == GENERAL else group_title,
            items=_sorted_items(members),
        )
        for group_key, (group_title, members) in buckets.items()
    ]
    return sorted(fallback, key=lambda group: collation_key(group.title))


__all__ = [
    "OTHER_TITLE",
    "classify",
    "collation_key",
    "filter_permissions",
    "slugify",
    "to_item",
]
