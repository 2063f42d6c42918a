"""Permission-gated menu links for dashboards, sidebar and menubar.

A link is shown when:
1. its required permissions are satisfied (admin-like roles bypass this),
2. the user holds none of its excluded roles, and
3. it has no role restriction (``required_roles`` is None), or the user
   holds at least one required role. An empty list hides the link.

Role names compare case-insensitively. Admin-like roles come from
``SchoolPermsConfig.admin_roles``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from .config import SchoolPermsConfig
from .permissions.evaluator import Authorizer

RoleSpec = Union[str, list[str], None]


def _as_list(v: RoleSpec) -> list[str]:
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    return list(v)


class MenuLink(BaseModel):
    """A navigable entry gated by permissions and roles."""

    label: str
    href: str
    id: Optional[str] = None
    required_permissions: Union[str, list[str], None] = None
    required_roles: Optional[list[str]] = None
    exclude_roles: list[str] = Field(default_factory=list)

    @field_validator("required_roles", mode="before")
    @classmethod
    def coerce_required_roles(cls, v: RoleSpec) -> Optional[list[str]]:
        if v is None:
            return None
        return [str(role).lower() for role in _as_list(v)]

    @field_validator("exclude_roles", mode="before")
    @classmethod
    def coerce_exclude_roles(cls, v: RoleSpec) -> list[str]:
        return [str(role).lower() for role in _as_list(v)]


class MenuSection(BaseModel):
    """A titled block of links."""

    label: str
    icon: str = ""
    links: list[MenuLink] = Field(default_factory=list)


def normalize_roles(roles: Iterable[str]) -> frozenset[str]:
    return frozenset(str(role).lower() for role in roles if role)


def link_visible(
    link: MenuLink,
    authorizer: Authorizer,
    roles: Iterable[str] = (),
    config: Optional[SchoolPermsConfig] = None,
) -> bool:
    """Decide whether a user sees ``link``.

    ``config`` supplies the admin-like roles; defaults apply when omitted.
    """
    config = config or SchoolPermsConfig()
    role_set = normalize_roles(roles)

    if link.required_permissions and not authorizer.can(link.required_permissions):
        if role_set.isdisjoint(config.admin_roles):
            return False

    if any(role in role_set for role in link.exclude_roles):
        return False

    if link.required_roles is None:
        return True
    return any(role in role_set for role in link.required_roles)


def filter_menu_sections(
    sections: Iterable[MenuSection],
    authorizer: Authorizer,
    roles: Iterable[str] = (),
    config: Optional[SchoolPermsConfig] = None,
) -> list[MenuSection]:
    """Drop invisible links, then drop sections left with no links."""
    config = config or SchoolPermsConfig()
    role_set = normalize_roles(roles)
    visible: list[MenuSection] = []
    for section in sections:
        links = [link for link in section.links if link_visible(link, authorizer, role_set, config)]
        if links:
            visible.append(section.model_copy(update={"links": links}))
    return visible


__all__ = [
    "MenuLink",
    "MenuSection",
    "filter_menu_sections",
    "link_visible",
    "normalize_roles",
]
