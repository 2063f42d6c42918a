"""Permission evaluation and classification for school role management.

Defines:
- has_permission(): does a granted set satisfy a requirement, via the hierarchy?
- PermissionHierarchy / Authorizer: hierarchy index and bound checker
- expand_permissions(): resolve implied permissions
- classify() / filter_permissions(): role-editor display groups
- SCHOOL_PERMISSION_GROUPS: built-in group templates
"""

from .classifier import classify, filter_permissions
from .evaluator import Authorizer, PermissionHierarchy, expand_permissions, has_permission
from .labels import format_permission_labels, to_title
from .matchers import matches_pattern
from .models import (
    ExactOrPrefix,
    Matcher,
    Permission,
    PermissionGroup,
    PermissionGroupItem,
    PermissionGroupTemplate,
    PermissionHierarchyNode,
    PermissionSection,
    RegexMatcher,
    Role,
)
from .payloads import (
    granted_from_user_payload,
    hierarchy_from_payload,
    permissions_from_payload,
)
from .templates import SCHOOL_PERMISSION_GROUPS, load_templates

__all__ = [
    "SCHOOL_PERMISSION_GROUPS",
    "Authorizer",
    "ExactOrPrefix",
    "Matcher",
    "Permission",
    "PermissionGroup",
    "PermissionGroupItem",
    "PermissionGroupTemplate",
    "PermissionHierarchy",
    "PermissionHierarchyNode",
    "PermissionSection",
    "RegexMatcher",
    "Role",
    "classify",
    "expand_permissions",
    "filter_permissions",
    "format_permission_labels",
    "granted_from_user_payload",
    "has_permission",
    "hierarchy_from_payload",
    "load_templates",
    "matches_pattern",
    "permissions_from_payload",
    "to_title",
]
