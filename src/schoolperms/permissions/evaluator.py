"""Permission evaluation over a permission hierarchy.

Provides:
- ``PermissionHierarchy`` — indexed view of ``{name, children}`` nodes.
- ``has_permission()`` — does a granted set satisfy a requirement?
- ``expand_permissions()`` — resolve implied permissions.
- ``Authorizer`` — granted set + hierarchy bound together for repeated checks.

A requirement is satisfied when one of its candidate names is:

1. granted directly,
2. implied by a granted ancestor (holding ``sessions.manage`` satisfies
   ``sessions.view`` when the hierarchy lists it as a child), or
3. backed by a granted descendant (holding ``sessions.view`` satisfies a
   ``sessions.manage`` gate on a menu section).

The hierarchy comes from the backend and carries no acyclicity guarantee,
so traversal uses an explicit worklist with a visited set that lives for
one call only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Union

from .models import PermissionHierarchyNode

logger = logging.getLogger(__name__)

HierarchyInput = Union["PermissionHierarchy", Iterable[Union[PermissionHierarchyNode, Mapping[str, Any]]], None]
Requirement = Union[str, Iterable[str], None]


class PermissionHierarchy:
    """Parent → children implication graph keyed by permission name.

    When the same name appears twice, the first node wins.

    Example::

        hierarchy = PermissionHierarchy([
            {"name": "sessions.manage", "children": ["sessions.view"]},
        ])
        hierarchy.children_of("sessions.manage")  # ("sessions.view",)
        hierarchy.parents_of("sessions.view")     # ("sessions.manage",)
    """

    __slots__ = ("_children", "_parents")

    def __init__(self, nodes: Iterable[Union[PermissionHierarchyNode, Mapping[str, Any]]] = ()) -> None:
        children: dict[str, tuple[str, ...]] = {}
        parents: dict[str, list[str]] = {}

        for raw in nodes:
            node = raw if isinstance(raw, PermissionHierarchyNode) else PermissionHierarchyNode.model_validate(raw)
            if node.name in children:
                continue
            children[node.name] = node.children
            for child in node.children:
                parents.setdefault(child, []).append(node.name)

        self._children = children
        self._parents = {name: tuple(names) for name, names in parents.items()}

    @classmethod
    def from_nodes(cls, hierarchy: HierarchyInput) -> PermissionHierarchy:
        """Build a hierarchy from ``None``, nodes, dicts, or an existing hierarchy."""
        if hierarchy is None:
            return cls()
        if isinstance(hierarchy, PermissionHierarchy):
            return hierarchy
        return cls(hierarchy)

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def children_of(self, name: str) -> tuple[str, ...]:
        return self._children.get(name, ())

    def parents_of(self, name: str) -> tuple[str, ...]:
        return self._parents.get(name, ())

    def descendants(self, name: str) -> frozenset[str]:
        """All names transitively implied by ``name``, excluding ``name`` itself."""
        return frozenset(_walk(name, self.children_of))

    def ancestors(self, name: str) -> frozenset[str]:
        """All names that transitively imply ``name``."""
        return frozenset(_walk(name, self.parents_of))

    def __repr__(self) -> str:
        return f"PermissionHierarchy(nodes={len(self._children)})"


def _walk(start: str, edges: Callable[[str], tuple[str, ...]]):
    """Yield every name reachable from ``start`` once, stopping at revisits."""
    visited = {start}
    queue = list(edges(start))

    while queue:
        name = queue.pop()
        if name in visited:
            if name == start:
                logger.debug("Permission hierarchy cycle through '%s'", start)
            continue
        visited.add(name)
        yield name
        queue.extend(edges(name))


def _candidates(required: Requirement) -> list[str]:
    if not required:
        return []
    if isinstance(required, str):
        return [required]
    return list(required)


def _is_satisfied(name: str, granted: frozenset[str] | set[str], hierarchy: PermissionHierarchy) -> bool:
    if name in granted:
        return True
    if any(parent in granted for parent in _walk(name, hierarchy.parents_of)):
        return True
    return any(child in granted for child in _walk(name, hierarchy.children_of))


def has_permission(
    required: Requirement,
    granted: Iterable[str] | None,
    hierarchy: HierarchyInput = None,
) -> bool:
    """Check whether ``granted`` satisfies ``required``.

    Args:
        required: A permission name, a list of alternatives (any one is
            enough), or ``None``/empty for "no restriction".
        granted: Permission names held by the current user.
        hierarchy: Hierarchy nodes, dicts, a :class:`PermissionHierarchy`,
            or ``None`` for no implications.

    Returns:
        True if any candidate is granted directly or through the hierarchy.

    Example::

        hierarchy = [{"name": "sessions.manage", "children": ["sessions.view"]}]
        has_permission("sessions.view", {"sessions.manage"}, hierarchy)  # True
        has_permission(None, set(), hierarchy)                           # True
        has_permission(["fees.view", "fees.manage"], set(), hierarchy)   # False
    """
    candidates = _candidates(required)
    if not candidates:
        return True

    granted_set = granted if isinstance(granted, (set, frozenset)) else frozenset(granted or ())
    index = PermissionHierarchy.from_nodes(hierarchy)
    return any(_is_satisfied(name, granted_set, index) for name in candidates)


def expand_permissions(granted: Iterable[str], hierarchy: HierarchyInput = None) -> tuple[str, ...]:
    """Expand granted permissions with everything they imply.

    Returns:
        Deduplicated, sorted tuple with all implied permissions.

    Example::

        >>> expand_permissions(
        ...     ("sessions.manage",),
        ...     [{"name": "sessions.manage", "children": ["sessions.view", "terms.view"]}],
        ... )
        ('sessions.manage', 'sessions.view', 'terms.view')
    """
    index = PermissionHierarchy.from_nodes(hierarchy)
    expanded: set[str] = set(granted)
    queue = list(expanded)

    while queue:
        perm = queue.pop()
        for child in index.children_of(perm):
            if child not in expanded:
                expanded.add(child)
                queue.append(child)

    return tuple(sorted(expanded))


class Authorizer:
    """A user's granted permissions bound to the school's hierarchy.

    Example::

        auth = Authorizer.from_payloads(current_user_json, hierarchy_json)
        auth.can("students.view")
        auth.can(["fees.structures", "fees.bank-details"])
    """

    __slots__ = ("granted", "hierarchy")

    def __init__(self, granted: Iterable[str] = (), hierarchy: HierarchyInput = None) -> None:
        self.granted = frozenset(granted)
        self.hierarchy = PermissionHierarchy.from_nodes(hierarchy)

    @classmethod
    def from_payloads(cls, user_payload: Any, hierarchy_payload: Any = None) -> Authorizer:
        """Build from the backend "current user" and "permission hierarchy" responses."""
        from .payloads import granted_from_user_payload, hierarchy_from_payload

        return cls(granted_from_user_payload(user_payload), hierarchy_from_payload(hierarchy_payload))

    def can(self, required: Requirement) -> bool:
        return has_permission(required, self.granted, self.hierarchy)

    def effective_permissions(self) -> tuple[str, ...]:
        return expand_permissions(self.granted, self.hierarchy)

    def __repr__(self) -> str:
        return f"Authorizer(granted={len(self.granted)}, hierarchy={self.hierarchy!r})"


__all__ = [
    "Authorizer",
    "PermissionHierarchy",
    "expand_permissions",
    "has_permission",
]
