"""Data models for the permission core.

Pydantic models for permissions as the backend returns them, the
permission hierarchy, and the display taxonomy used by the role editor.

Matchers are a tagged variant:

- :class:`ExactOrPrefix` — ``"students."`` matches anything under ``students``;
  ``"subject.assignments"`` matches that path or anything nested under it.
- :class:`RegexMatcher` — whole-name regular expression.

Template ``patterns`` accept plain strings, compiled ``re.Pattern`` objects
and ``{"regex": "...", "flags": "i"}`` mappings; they are coerced to matchers.
"""

from __future__ import annotations

import re
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from ..exceptions import TemplateError


class Permission(BaseModel):
    """One grantable capability, e.g. ``students.view``."""

    model_config = {"frozen": True, "extra": "ignore"}

    id: Union[int, str]
    name: str = ""
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return "" if v is None else str(v)


class PermissionHierarchyNode(BaseModel):
    """A permission and the permission names its grant implies."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: str
    children: tuple[str, ...] = ()

    @field_validator("children", mode="before")
    @classmethod
    def coerce_children(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, (list, tuple)):
            return tuple(str(child) for child in v if child is not None)
        return v


# ── Matchers ────────────────────────────────────────────


class ExactOrPrefix(BaseModel):
    """Segment-path matcher.

    A trailing ``.`` means a literal prefix match; otherwise the value
    matches itself or anything nested under it.
    """

    model_config = {"frozen": True}

    kind: Literal["exact"] = "exact"
    value: str


# JavaScript-style flag letters accepted in template files
REGEX_FLAG_LETTERS: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


class RegexMatcher(BaseModel):
    """Whole-name regular expression matcher.

    ``flags`` takes ``re`` flag bits or letters (``"i"``, ``"ms"``). The
    pattern is compiled once, when the matcher is built.
    """

    model_config = {"frozen": True}

    kind: Literal["regex"] = "regex"
    pattern: str
    flags: int = 0

    _compiled: re.Pattern[str] = PrivateAttr()

    @field_validator("flags", mode="before")
    @classmethod
    def coerce_flags(cls, v: Any) -> Any:
        if v is None:
            return 0
        if isinstance(v, str):
            bits = 0
            for letter in v:
                if letter not in REGEX_FLAG_LETTERS:
                    raise TemplateError(f"Unknown regex flag {letter!r}", flags=v)
                bits |= REGEX_FLAG_LETTERS[letter]
            return bits
        return int(v)

    def model_post_init(self, __context: Any) -> None:
        try:
            self._compiled = re.compile(self.pattern, self.flags)
        except re.error as e:
            raise TemplateError(f"Invalid permission pattern {self.pattern!r}: {e}", pattern=self.pattern)

    @property
    def compiled(self) -> re.Pattern[str]:
        return self._compiled

    def fullmatch(self, name: str) -> bool:
        return self._compiled.fullmatch(name) is not None


Matcher = Union[ExactOrPrefix, RegexMatcher]


def _coerce_matcher(item: Any) -> Any:
    if isinstance(item, (ExactOrPrefix, RegexMatcher)):
        return item
    if isinstance(item, str):
        return ExactOrPrefix(value=item)
    if isinstance(item, re.Pattern):
        return RegexMatcher(pattern=item.pattern, flags=item.flags & ~re.UNICODE)
    if isinstance(item, dict) and "kind" not in item:
        if "regex" in item:
            return RegexMatcher(pattern=item["regex"], flags=item.get("flags", 0))
        if "value" in item:
            return ExactOrPrefix(value=item["value"])
    return item


def _coerce_matchers(v: Any) -> Any:
    if v is None:
        return ()
    if isinstance(v, (list, tuple)):
        return tuple(_coerce_matcher(item) for item in v)
    return v


# ── Templates ───────────────────────────────────────────


class PermissionSection(BaseModel):
    """A labelled sub-grouping inside a template."""

    model_config = {"frozen": True}

    label: str
    patterns: tuple[Matcher, ...] = ()

    @field_validator("patterns", mode="before")
    @classmethod
    def coerce_patterns(cls, v: Any) -> Any:
        return _coerce_matchers(v)


class PermissionGroupTemplate(BaseModel):
    """Static classification rule for the role editor.

    ``sections`` are evaluated before the template's own ``patterns``.
    """

    model_config = {"frozen": True}

    key: str
    title: str
    patterns: tuple[Matcher, ...] = ()
    sections: tuple[PermissionSection, ...] = ()

    @field_validator("patterns", mode="before")
    @classmethod
    def coerce_patterns(cls, v: Any) -> Any:
        return _coerce_matchers(v)

    @field_validator("sections", mode="before")
    @classmethod
    def coerce_sections(cls, v: Any) -> Any:
        return () if v is None else v


# ── Display ─────────────────────────────────────────────


class PermissionGroupItem(BaseModel):
    """A checkbox in the role editor."""

    id: str
    permission: Permission
    display_name: str
    subtitle: Optional[str] = None


class PermissionGroup(BaseModel):
    """A titled block of checkboxes."""

    key: str
    title: str
    items: list[PermissionGroupItem] = Field(default_factory=list)


class Role(BaseModel):
    """A named bundle of permissions owned by the backend."""

    model_config = {"extra": "ignore"}

    id: Optional[Union[int, str]] = None
    name: str
    description: Optional[str] = None
    permissions: list[Permission] = Field(default_factory=list)

    @field_validator("permissions", mode="before")
    @classmethod
    def coerce_permissions(cls, v: Any) -> Any:
        return [] if v is None else v


__all__ = [
    "ExactOrPrefix",
    "Matcher",
    "Permission",
    "PermissionGroup",
    "PermissionGroupItem",
    "PermissionGroupTemplate",
    "PermissionHierarchyNode",
    "PermissionSection",
    "RegexMatcher",
    "Role",
]
