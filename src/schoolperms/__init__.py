from .config import LogLevel, SchoolPermsConfig, load_config_from_env
from .exceptions import ConfigurationError, PayloadError, SchoolPermsError, TemplateError
from .logging import (
    PermissionLogFormatter,
    SchoolContextFilter,
    SchoolLoggerAdapter,
    get_school_logger,
    safe_preview,
    setup_logging,
)
from .navigation import MenuLink, MenuSection, filter_menu_sections, link_visible
from .permissions import (
    SCHOOL_PERMISSION_GROUPS,
    Authorizer,
    ExactOrPrefix,
    Permission,
    PermissionGroup,
    PermissionGroupItem,
    PermissionGroupTemplate,
    PermissionHierarchy,
    PermissionHierarchyNode,
    PermissionSection,
    RegexMatcher,
    Role,
    classify,
    expand_permissions,
    filter_permissions,
    format_permission_labels,
    granted_from_user_payload,
    has_permission,
    hierarchy_from_payload,
    load_templates,
    matches_pattern,
    permissions_from_payload,
    to_title,
)
from .roles import selected_permission_ids, summarize_role_permissions

__version__ = "0.1.0"

__all__ = [
    'SCHOOL_PERMISSION_GROUPS',
    'Authorizer',
    'ConfigurationError',
    'ExactOrPrefix',
    'LogLevel',
    'MenuLink',
    'MenuSection',
    'PayloadError',
    'Permission',
    'PermissionGroup',
    'PermissionGroupItem',
    'PermissionGroupTemplate',
    'PermissionHierarchy',
    'PermissionHierarchyNode',
    'PermissionLogFormatter',
    'SchoolContextFilter',
    'PermissionSection',
    'RegexMatcher',
    'Role',
    'SchoolLoggerAdapter',
    'SchoolPermsConfig',
    'SchoolPermsError',
    'TemplateError',
    'classify',
    'expand_permissions',
    'filter_menu_sections',
    'filter_permissions',
    'format_permission_labels',
    'get_school_logger',
    'granted_from_user_payload',
    'has_permission',
    'hierarchy_from_payload',
    'link_visible',
    'load_config_from_env',
    'load_templates',
    'matches_pattern',
    'permissions_from_payload',
    'safe_preview',
    'selected_permission_ids',
    'setup_logging',
    'summarize_role_permissions',
    'to_title',
]
