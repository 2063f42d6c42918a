"""Helpers for the role list and role editor."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .permissions.models import PermissionGroup, Role


def summarize_role_permissions(role: Role, limit: int = 3) -> str:
    """Short preview of a role's permissions for the role table.

    >>> summarize_role_permissions(Role(name="Bursar", permissions=[
    ...     {"id": 1, "name": "fees.view"}, {"id": 2, "name": "fees.structures"},
    ...     {"id": 3, "name": "fees.bank-details"}, {"id": 4, "name": "students.view"},
    ... ]))
    'fees.view, fees.structures, fees.bank-details (+1 more)'
    """
    names = [permission.name for permission in role.permissions if permission.name.strip()]
    if not names:
        return "None"

    preview = ", ".join(names[:limit])
    remaining = len(names) - limit
    if remaining > 0:
        return f"{preview} (+{remaining} more)"
    return preview


def selected_permission_ids(groups: Sequence[PermissionGroup], selected: Iterable[str | int]) -> list[str]:
    """Selected permission ids in display order, as submitted with a role."""
    wanted = {str(value) for value in selected}
    seen: set[str] = set()
    ids: list[str] = []
    for group in groups:
        for item in group.items:
            if item.id in wanted and item.id not in seen:
                seen.add(item.id)
                ids.append(item.id)
    return ids


__all__ = [
    "selected_permission_ids",
    "summarize_role_permissions",
]
