"""
Authorization decisions for a principal's roles.

Quick Start:
    >>> from rail_access.access import AccessProvider, access_scope, use_can
    >>>
    >>> provider = AccessProvider(POLICIES)
    >>> access = provider.for_roles(["editor"])
    >>> access.can("doc.write")
    True
    >>> with access_scope(access):
    ...     use_can(["doc.read", "doc.delete"], mode="any")
    True
"""

from .context import (
    AccessContext,
    AccessProvider,
    access_scope,
    get_access_provider,
    get_current_access,
    reset_access_provider,
    use_access,
    use_can,
)
from .evaluator import DecisionPredicate, build_decision
from .gate import can_gate, resolve_gate

__all__ = [
    # Evaluation
    "DecisionPredicate",
    "build_decision",
    # Contexts
    "AccessContext",
    "AccessProvider",
    "access_scope",
    "get_current_access",
    "use_access",
    "use_can",
    "get_access_provider",
    "reset_access_provider",
    # Gate
    "resolve_gate",
    "can_gate",
]
