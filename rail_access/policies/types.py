"""
Type definitions for role policies.

This module contains the data model shared by the resolver and evaluator:
- RolePolicy: direct grants and parent roles of a single role
- RoleResolution: effective (inherited) permission state of a role
- CheckMode: how several requested permissions are combined
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..exceptions import InvalidCheckModeError

Permission = str
RoleName = str

# Marker granting every permission, including undeclared ones.
WILDCARD = "*"


@dataclass(frozen=True)
class RolePolicy:
    """Direct grants of one role and the roles it inherits from."""

    can: Union[frozenset[Permission], str] = frozenset()
    inherits: tuple[RoleName, ...] = ()

    @property
    def is_wildcard(self) -> bool:
        return self.can == WILDCARD

    @classmethod
    def from_value(cls, value: Any) -> "RolePolicy":
        """
        Coerce a policy value into a RolePolicy.

        Accepts a RolePolicy or a mapping with ``can`` and ``inherits`` keys.
        A missing ``can`` grants nothing; ``inherits`` keeps its declared order.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            can = value.get("can")
            inherits = value.get("inherits")
        else:
            can = getattr(value, "can", None)
            inherits = getattr(value, "inherits", None)

        if can == WILDCARD:
            grants: Union[frozenset[Permission], str] = WILDCARD
        elif can is None:
            grants = frozenset()
        elif isinstance(can, str):
            grants = frozenset([can])
        else:
            grants = frozenset(can)

        if inherits is None:
            parents: tuple[RoleName, ...] = ()
        elif isinstance(inherits, str):
            parents = (inherits,)
        else:
            parents = tuple(inherits)

        return cls(can=grants, inherits=parents)


PolicyConfig = Mapping[RoleName, Union[RolePolicy, Mapping[str, Any]]]


@dataclass
class RoleResolution:
    """
    Effective permission state of a role after inheritance.

    When ``wildcard`` is set, ``permissions`` is informational only: the role
    is allowed everything.
    """

    wildcard: bool = False
    permissions: set[Permission] = field(default_factory=set)


class CheckMode(str, Enum):
    """How multiple requested permissions are combined."""

    ALL = "all"
    ANY = "any"

    @classmethod
    def coerce(cls, value: Union["CheckMode", str, None]) -> "CheckMode":
        if value is None:
            return cls.ALL
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidCheckModeError(value) from None


def normalize_permissions(permissions: Any) -> list[Permission]:
    """
    Turn a single permission or an iterable of permissions into a list.

    Anything that is not an iterable (``None`` included) is one requested
    permission, which no named grant matches.
    """
    if isinstance(permissions, str) or not isinstance(permissions, Iterable):
        return [permissions]
    return list(permissions)


def normalize_roles(roles: Any) -> tuple[RoleName, ...]:
    """Turn a single role name or an iterable of role names into a tuple."""
    if roles is None:
        return ()
    if isinstance(roles, str):
        return (roles,)
    return tuple(roles)


__all__ = [
    "Permission",
    "RoleName",
    "WILDCARD",
    "RolePolicy",
    "PolicyConfig",
    "RoleResolution",
    "CheckMode",
    "normalize_permissions",
    "normalize_roles",
]
