"""
Declarative permission gate.

The gate picks what to render from a decision:

    can_gate("user.edit", edit_button)
    can_gate(["user.edit", "user.view"], edit_button, mode="any")
    can_gate("user.delete", danger_zone, fallback=locked_notice)
    can_gate("user.edit", lambda allowed: render_toolbar(editable=allowed))
"""

from collections.abc import Iterable
from typing import Any, Optional, Union

from ..policies.types import CheckMode, Permission
from .context import AccessContext, use_access


def resolve_gate(allowed: bool, children: Any, fallback: Any = None) -> Any:
    """
    Select the gate output for a decision.

    A callable ``children`` is always called with ``allowed``; its result is
    replaced by ``fallback`` only when access is denied and a fallback is set.
    """
    if callable(children):
        rendered = children(allowed)
        if not allowed and fallback is not None:
            return fallback
        return rendered

    if not allowed:
        return fallback
    return children


def can_gate(
    permissions: Union[Permission, Iterable[Permission]],
    children: Any,
    mode: Union[CheckMode, str, None] = None,
    fallback: Any = None,
    access: Optional[AccessContext] = None,
) -> Any:
    """Decide ``permissions`` and return the matching gate output."""
    if access is None:
        access = use_access()
    return resolve_gate(access.can(permissions, mode), children, fallback)


__all__ = ["resolve_gate", "can_gate"]
