"""
Permission decorators for GraphQL resolvers and Django views.

Both decorators read the principal's AccessContext from the request (set by
AccessContextMiddleware) and fall back to the context bound with
``access_scope``.
"""

from collections.abc import Iterable
from functools import wraps
from typing import Any, Callable, Optional, Union

from django.core.exceptions import PermissionDenied
from graphql import GraphQLError

from .access.context import AccessContext, get_current_access
from .config_proxy import get_setting
from .policies.types import CheckMode, Permission, normalize_permissions


def _describe(permissions: list[Permission]) -> str:
    return ", ".join(map(str, permissions)) if permissions else "(none)"


def _context_from_request(request: Any) -> Optional[AccessContext]:
    attribute = get_setting("access_settings.request_attribute", "access")
    context = getattr(request, attribute, None)
    if isinstance(context, AccessContext):
        return context
    return get_current_access()


def require_permission(
    permissions: Union[Permission, Iterable[Permission]],
    mode: Union[CheckMode, str] = CheckMode.ALL,
):
    """
    Decorator to require permissions for a GraphQL resolver.

    Args:
        permissions: Permission or list of permissions (e.g., "project.update").
        mode: "all" (default) requires every permission, "any" at least one.

    Raises:
        GraphQLError: If no access context is available or access is denied.
    """
    required = normalize_permissions(permissions)
    mode = CheckMode.coerce(mode)

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            info = None
            for arg in args:
                if hasattr(arg, "context"):
                    info = arg
                    break

            request = getattr(info, "context", None) if info is not None else None
            access = _context_from_request(request)
            if access is None:
                raise GraphQLError("Contexte d'acces non disponible")

            if not access.decide.check(required, mode):
                raise GraphQLError(f"Permission requise: {_describe(required)}")

            return func(*args, **kwargs)
        return wrapper
    return decorator


def permission_required(
    permissions: Union[Permission, Iterable[Permission]],
    mode: Union[CheckMode, str] = CheckMode.ALL,
):
    """
    Decorator to require permissions for a Django view.

    Raises:
        PermissionDenied: If no access context is available or access is denied.
    """
    required = normalize_permissions(permissions)
    mode = CheckMode.coerce(mode)

    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            access = _context_from_request(request)
            if access is None or not access.decide.check(required, mode):
                raise PermissionDenied(f"Permission requise: {_describe(required)}")
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


__all__ = ["require_permission", "permission_required"]
