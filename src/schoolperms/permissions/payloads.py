"""Parse backend JSON responses into permission-core inputs.

Shapes accepted (decoded JSON):
- current user: ``{"permissions": [...]}`` or ``{"user": {"permissions": [...]}}``
- hierarchy:    ``[{"name": ..., "children": [...]}, ...]`` or ``{"data": [...]}``
- permissions:  ``[{"id": ..., "name": ..., "description": ...}, ...]`` or a
  paginated ``{"data": [...], ...}`` envelope

Missing pieces degrade to empty results; a payload of the wrong type raises
:class:`~schoolperms.exceptions.PayloadError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..exceptions import PayloadError
from .models import Permission, PermissionHierarchyNode

logger = logging.getLogger(__name__)


def _unwrap_list(payload: Any, what: str) -> list[Any]:
    if payload is None:
        return []
    if isinstance(payload, Mapping):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        raise PayloadError(f"Expected a list of {what}, got {type(payload).__name__}", kind=what)
    return payload


def granted_from_user_payload(payload: Any) -> frozenset[str]:
    """Extract granted permission names from the current-user response."""
    if payload is None:
        return frozenset()
    if not isinstance(payload, Mapping):
        raise PayloadError(f"Expected a current-user object, got {type(payload).__name__}")

    permissions = payload.get("permissions")
    if not isinstance(permissions, list):
        user = payload.get("user")
        permissions = user.get("permissions") if isinstance(user, Mapping) else None
    if not isinstance(permissions, list):
        return frozenset()

    return frozenset(name for name in permissions if isinstance(name, str))


def hierarchy_from_payload(payload: Any) -> list[PermissionHierarchyNode]:
    """Build hierarchy nodes from the permission-hierarchy response.

    Entries without a usable ``name`` are skipped.
    """
    nodes: list[PermissionHierarchyNode] = []
    for entry in _unwrap_list(payload, "hierarchy nodes"):
        if not isinstance(entry, Mapping) or not isinstance(entry.get("name"), str) or not entry["name"]:
            logger.debug("Skipping malformed hierarchy entry: %r", entry)
            continue
        try:
            nodes.append(PermissionHierarchyNode.model_validate(entry))
        except ValidationError as e:
            raise PayloadError(f"Invalid hierarchy node {entry.get('name')!r}: {e}")
    return nodes


def permissions_from_payload(payload: Any) -> list[Permission]:
    """Build permissions from a list-permissions response."""
    try:
        return [Permission.model_validate(entry) for entry in _unwrap_list(payload, "permissions")]
    except ValidationError as e:
        raise PayloadError(f"Invalid permission in payload: {e}")


__all__ = [
    "granted_from_user_payload",
    "hierarchy_from_payload",
    "permissions_from_payload",
]
