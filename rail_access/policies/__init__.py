"""
Role policies: declaration, loading and resolution.

Exports:
    - RolePolicy, RoleResolution, CheckMode, WILDCARD: data model
    - PolicyResolver, build_permission_index: inheritance flattening
    - define_policies: typed declaration helper
    - get_configured_policies: policies from settings, files and apps
"""

from .define import define_policies
from .loader import (
    get_configured_policies,
    load_app_policy_files,
    load_policy_file,
    normalize_policies,
)
from .resolver import PolicyResolver, build_permission_index
from .types import (
    WILDCARD,
    CheckMode,
    Permission,
    PolicyConfig,
    RoleName,
    RolePolicy,
    RoleResolution,
    normalize_permissions,
    normalize_roles,
)

__all__ = [
    # Types
    "Permission",
    "RoleName",
    "WILDCARD",
    "RolePolicy",
    "PolicyConfig",
    "RoleResolution",
    "CheckMode",
    "normalize_permissions",
    "normalize_roles",
    # Resolution
    "PolicyResolver",
    "build_permission_index",
    # Declaration and loading
    "define_policies",
    "load_policy_file",
    "load_app_policy_files",
    "get_configured_policies",
    "normalize_policies",
]
