"""
Authorization evaluation for one principal.

``build_decision`` folds a principal's roles into a single wildcard flag and
permission set; the resulting DecisionPredicate answers every later query
for that principal without touching the policy index again.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Union

from ..policies.types import (
    CheckMode,
    Permission,
    RoleName,
    RoleResolution,
    normalize_permissions,
    normalize_roles,
)


class DecisionPredicate:
    """Immutable permission check for a fixed set of roles."""

    __slots__ = ("_wildcard", "_allowed")

    def __init__(self, wildcard: bool, allowed: Iterable[Permission]):
        self._wildcard = bool(wildcard)
        self._allowed = frozenset(allowed)

    @property
    def wildcard(self) -> bool:
        return self._wildcard

    @property
    def allowed(self) -> frozenset[Permission]:
        return self._allowed

    def check(
        self,
        requested: Sequence[Permission],
        mode: Union[CheckMode, str, None] = CheckMode.ALL,
    ) -> bool:
        """
        Decide a sequence of requested permissions.

        A wildcard predicate allows everything without looking at ``mode``.
        Otherwise ``all`` is vacuously true for an empty request and ``any``
        is false.
        """
        if self._wildcard:
            return True
        mode = CheckMode.coerce(mode)
        if mode is CheckMode.ALL:
            return all(permission in self._allowed for permission in requested)
        return any(permission in self._allowed for permission in requested)

    def __call__(
        self,
        permissions: Union[Permission, Iterable[Permission]],
        mode: Union[CheckMode, str, None] = CheckMode.ALL,
    ) -> bool:
        return self.check(normalize_permissions(permissions), mode)

    def __repr__(self) -> str:
        if self._wildcard:
            return "DecisionPredicate(wildcard=True)"
        return f"DecisionPredicate(allowed={sorted(self._allowed)!r})"


def build_decision(
    index: Mapping[RoleName, RoleResolution],
    roles: Union[RoleName, Iterable[RoleName]],
) -> DecisionPredicate:
    """
    Create the decision predicate for a principal's roles.

    A single role name counts as one role. Roles missing from ``index``
    contribute nothing. The first wildcard role ends the scan.
    """
    wildcard = False
    allowed: set[Permission] = set()

    for role in normalize_roles(roles):
        resolution = index.get(role)
        if resolution is None:
            continue
        if resolution.wildcard:
            wildcard = True
            break
        allowed.update(resolution.permissions)

    return DecisionPredicate(wildcard, allowed)


__all__ = ["DecisionPredicate", "build_decision"]
