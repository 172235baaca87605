"""
Policy resolution: flatten role inheritance into effective permission sets.

Resolution is lenient. Cyclic inheritance and parents that are never
declared resolve to an empty grant for the offending role instead of
raising, so one bad role under-grants rather than breaking every check.
"""

import logging
from typing import Optional

from .types import PolicyConfig, RoleName, RolePolicy, RoleResolution

logger = logging.getLogger(__name__)


class PolicyResolver:
    """
    Resolve a policy configuration into a per-role index.

    Results are memoized for the lifetime of the resolver, so every
    inheritance edge is followed once.
    """

    def __init__(self, policies: PolicyConfig):
        self.policies = policies
        self._cache: dict[RoleName, RoleResolution] = {}
        self._stack: set[RoleName] = set()

    def _get_policy(self, role: RoleName) -> Optional[RolePolicy]:
        value = self.policies.get(role)
        if value is None:
            return None
        return RolePolicy.from_value(value)

    def resolve_role(self, role: RoleName) -> RoleResolution:
        """Return the effective permissions of ``role``."""
        cached = self._cache.get(role)
        if cached is not None:
            return cached

        if role in self._stack:
            logger.warning("Cycle detected in role inheritance: %s", role)
            empty = RoleResolution()
            self._cache[role] = empty
            return empty

        policy = self._get_policy(role)
        if policy is None:
            logger.debug("Role '%s' is not declared; it grants nothing", role)
            empty = RoleResolution()
            self._cache[role] = empty
            return empty

        self._stack.add(role)
        try:
            if policy.is_wildcard:
                resolution = RoleResolution(wildcard=True)
            else:
                resolution = RoleResolution(permissions=set(policy.can))
                for parent in policy.inherits:
                    parent_resolution = self.resolve_role(parent)
                    if parent_resolution.wildcard:
                        resolution.wildcard = True
                    # Named grants of wildcard parents are kept as well.
                    resolution.permissions.update(parent_resolution.permissions)
        finally:
            self._stack.discard(role)

        self._cache[role] = resolution
        return resolution

    def build_index(self) -> dict[RoleName, RoleResolution]:
        """Resolve every declared role and return the whole index."""
        for role in self.policies:
            self.resolve_role(role)
        logger.debug(
            "Resolved %d roles (%d declared)", len(self._cache), len(self.policies)
        )
        return dict(self._cache)


def build_permission_index(policies: PolicyConfig) -> dict[RoleName, RoleResolution]:
    """
    Build a map from role name to resolved permissions, inheritance included.

    Args:
        policies: Mapping of role name to policy (RolePolicy or mapping with
            ``can`` and optional ``inherits``).

    Returns:
        One RoleResolution per declared role and per referenced parent.
    """
    return PolicyResolver(policies).build_index()


__all__ = ["PolicyResolver", "build_permission_index"]
