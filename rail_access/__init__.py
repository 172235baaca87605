"""
rail-access: role-based authorization decisions for Django projects.

This package provides:
- Declarative role policies with inheritance and a "*" wildcard
- Cycle-safe resolution into per-role effective permissions
- Per-principal decision predicates with "all" / "any" checks
- Request middleware, view/resolver decorators and template tags

Quick Start:
    >>> from rail_access import AccessProvider, define_policies
    >>>
    >>> POLICIES = define_policies({
    ...     "viewer": {"can": ["doc.read"]},
    ...     "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
    ...     "admin": {"can": "*"},
    ... })
    >>> access = AccessProvider(POLICIES).for_roles(["editor"])
    >>> access.can("doc.read")
    True
    >>> access.can(["doc.read", "doc.delete"], mode="any")
    True
"""

from .access import (
    AccessContext,
    AccessProvider,
    DecisionPredicate,
    access_scope,
    build_decision,
    can_gate,
    get_access_provider,
    reset_access_provider,
    resolve_gate,
    use_access,
    use_can,
)
from .exceptions import AccessContextError, AccessError, InvalidCheckModeError
from .policies import (
    WILDCARD,
    CheckMode,
    PolicyResolver,
    RolePolicy,
    RoleResolution,
    build_permission_index,
    define_policies,
)

__version__ = "0.1.0"

__all__ = [
    # Policies
    "WILDCARD",
    "CheckMode",
    "RolePolicy",
    "RoleResolution",
    "PolicyResolver",
    "build_permission_index",
    "define_policies",
    # Decisions
    "DecisionPredicate",
    "build_decision",
    "AccessContext",
    "AccessProvider",
    "access_scope",
    "use_access",
    "use_can",
    "get_access_provider",
    "reset_access_provider",
    "resolve_gate",
    "can_gate",
    # Errors
    "AccessError",
    "AccessContextError",
    "InvalidCheckModeError",
]
