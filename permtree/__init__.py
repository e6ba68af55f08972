"""permtree package providing hierarchical, resource-scoped permission rules."""

from .audit import ChangeAuditLogger
from .changes import Changes
from .config import DEFAULT_CONFIG, PermissionsConfig, load_config
from .exceptions import BadConfig, InvalidArgument, InvalidPrivilegeValue, InvalidRuleSpec, PermissionsError
from .permission_list import PermissionList
from .resource import Resource
from .rule import Rule
from .types import Effect, PrivilegeValue

__all__ = [
    "BadConfig",
    "ChangeAuditLogger",
    "Changes",
    "DEFAULT_CONFIG",
    "Effect",
    "InvalidArgument",
    "InvalidPrivilegeValue",
    "InvalidRuleSpec",
    "PermissionList",
    "PermissionsConfig",
    "PermissionsError",
    "PrivilegeValue",
    "Resource",
    "Rule",
    "load_config",
]
