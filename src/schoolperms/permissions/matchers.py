"""Permission name matching for group templates."""

from __future__ import annotations

import re
from typing import Union

from .models import ExactOrPrefix, RegexMatcher

PatternLike = Union[ExactOrPrefix, RegexMatcher, str, "re.Pattern[str]"]


def matches_pattern(name: str, pattern: PatternLike) -> bool:
    """Test a permission name against one template pattern.

    - Regex: whole-name match.
    - ``"students."`` (trailing dot): literal prefix.
    - ``"subject.assignments"``: the exact path or anything nested under it.

    Example::

        matches_pattern("students.view", "students.")                        # True
        matches_pattern("subject.assignments", "subject.assignments")        # True
        matches_pattern("subject.assignments.update", "subject.assignments") # True
        matches_pattern("subject.assignmentsx", "subject.assignments")       # False
    """
    if isinstance(pattern, RegexMatcher):
        return pattern.fullmatch(name)
    if isinstance(pattern, re.Pattern):
        return pattern.fullmatch(name) is not None

    value = pattern.value if isinstance(pattern, ExactOrPrefix) else pattern
    if value.endswith("."):
        return name.startswith(value)
    return name == value or name.startswith(f"{value}.")


def matches_any(name: str, patterns) -> bool:
    return any(matches_pattern(name, pattern) for pattern in patterns)


__all__ = ["matches_any", "matches_pattern"]
