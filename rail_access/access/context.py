"""
Access contexts and providers.

An AccessProvider owns one policy configuration and hands out AccessContext
values, one per principal role set. A context can be bound to the current
execution context with ``access_scope`` and retrieved with ``use_access``.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Optional, Union

from django.core.signals import setting_changed
from django.dispatch import receiver

from ..config_proxy import settings_proxy
from ..defaults import SETTINGS_NAME
from ..exceptions import AccessContextError
from ..policies.loader import get_configured_policies
from ..policies.resolver import build_permission_index
from ..policies.types import (
    CheckMode,
    Permission,
    PolicyConfig,
    RoleName,
    RoleResolution,
    normalize_roles,
)
from .evaluator import DecisionPredicate, build_decision

logger = logging.getLogger(__name__)

_current_access: ContextVar[Optional["AccessContext"]] = ContextVar(
    "rail_access_context", default=None
)


@dataclass(frozen=True)
class AccessContext:
    """Roles of one principal together with their decision predicate."""

    roles: tuple[RoleName, ...]
    decide: DecisionPredicate

    @classmethod
    def from_index(
        cls,
        index: Optional[Mapping[RoleName, RoleResolution]],
        roles: Union[RoleName, Iterable[RoleName]],
    ) -> "AccessContext":
        roles = normalize_roles(roles)
        if index is None:
            raise AccessContextError(
                "An access context needs a resolved policy index", roles=roles
            )
        return cls(roles=roles, decide=build_decision(index, roles))

    def can(
        self,
        permissions: Union[Permission, Iterable[Permission]],
        mode: Union[CheckMode, str, None] = None,
    ) -> bool:
        """
        Check one permission or a list of permissions.

        Example:
            access.can("user.edit")
            access.can(["user.view", "user.edit"], mode="any")
        """
        return self.decide(permissions, mode)


class AccessProvider:
    """
    Build access contexts from a policy configuration.

    The resolved index is cached until ``policies`` is replaced with a
    different object. Contexts are cached per role tuple, keeping at most
    ``max_contexts`` of them; the oldest entry is evicted first.
    """

    DEFAULT_MAX_CONTEXTS = 1024

    def __init__(
        self, policies: PolicyConfig, max_contexts: int = DEFAULT_MAX_CONTEXTS
    ):
        self._policies = policies
        self._index: Optional[dict[RoleName, RoleResolution]] = None
        self._contexts: dict[tuple[RoleName, ...], AccessContext] = {}
        self.max_contexts = max_contexts

    @property
    def policies(self) -> PolicyConfig:
        return self._policies

    @policies.setter
    def policies(self, value: PolicyConfig) -> None:
        if value is self._policies:
            return
        self._policies = value
        self._index = None
        self._contexts.clear()

    @property
    def index(self) -> dict[RoleName, RoleResolution]:
        if self._index is None:
            self._index = build_permission_index(self._policies)
        return self._index

    def for_roles(self, roles: Union[RoleName, Iterable[RoleName]]) -> AccessContext:
        """Return the access context of a principal holding ``roles``."""
        key = normalize_roles(roles)
        context = self._contexts.get(key)
        if context is None:
            context = AccessContext.from_index(self.index, key)
            while self._contexts and len(self._contexts) >= self.max_contexts:
                del self._contexts[next(iter(self._contexts))]
            self._contexts[key] = context
        return context


@contextmanager
def access_scope(context: AccessContext) -> Iterator[AccessContext]:
    """Bind ``context`` as the current access context inside the block."""
    token = _current_access.set(context)
    try:
        yield context
    finally:
        _current_access.reset(token)


def bind_access(context: Optional[AccessContext]) -> Token:
    """Bind ``context`` until the returned token is passed to ``unbind_access``."""
    return _current_access.set(context)


def unbind_access(token: Token) -> None:
    _current_access.reset(token)


def get_current_access() -> Optional[AccessContext]:
    return _current_access.get()


def use_access() -> AccessContext:
    """
    Return the access context bound by ``access_scope``.

    Raises:
        AccessContextError: If no access context is bound.
    """
    context = _current_access.get()
    if context is None:
        raise AccessContextError("use_access must be used within an access scope")
    return context


def use_can(
    permissions: Union[Permission, Iterable[Permission]],
    mode: Union[CheckMode, str, None] = None,
) -> bool:
    """
    Check permissions against the bound access context.

    Example:
        can_edit = use_can("user.edit")
        can_view_or_edit = use_can(["user.view", "user.edit"], "any")
    """
    return use_access().can(permissions, mode)


# --- Global provider ---

_provider: Optional[AccessProvider] = None


def get_access_provider() -> AccessProvider:
    """Return the provider built from the configured policies."""
    global _provider
    if _provider is None:
        _provider = AccessProvider(get_configured_policies())
    return _provider


def reset_access_provider() -> None:
    """Drop the global provider; the next lookup reloads the policies."""
    global _provider
    _provider = None


@receiver(setting_changed)
def _on_setting_changed(sender, setting, **kwargs):
    if setting == SETTINGS_NAME:
        settings_proxy.clear_cache()
        reset_access_provider()
        logger.debug("%s changed; access provider reset", SETTINGS_NAME)


__all__ = [
    "AccessContext",
    "AccessProvider",
    "access_scope",
    "bind_access",
    "unbind_access",
    "get_current_access",
    "use_access",
    "use_can",
    "get_access_provider",
    "reset_access_provider",
]
