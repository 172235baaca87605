"""
Request middleware attaching the principal's access context.

The principal's roles come from the request user: Django group names plus
the configured superuser and staff roles.
"""

import logging
from contextvars import Token
from typing import TYPE_CHECKING, Optional

from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

from .access.context import (
    AccessContext,
    bind_access,
    get_access_provider,
    unbind_access,
)
from .config_proxy import get_setting

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser

logger = logging.getLogger(__name__)

_SCOPE_TOKEN_ATTR = "_rail_access_token"


def get_request_attribute() -> str:
    return get_setting("access_settings.request_attribute", "access")


def get_principal_roles(user: Optional["AbstractUser"]) -> list[str]:
    """Get role names of a user from Django groups and system flags."""
    if not user or not getattr(user, "is_authenticated", False):
        return []

    roles: list[str] = []
    if get_setting("access_settings.include_group_roles", True) and getattr(
        user, "pk", None
    ) is not None:
        roles.extend(user.groups.values_list("name", flat=True))
    if getattr(user, "is_superuser", False):
        roles.extend(get_setting("access_settings.superuser_roles", []) or [])
    if getattr(user, "is_staff", False):
        roles.extend(get_setting("access_settings.staff_roles", []) or [])

    # Keep first occurrence order
    return list(dict.fromkeys(roles))


def build_access_context(request: HttpRequest) -> AccessContext:
    roles = get_principal_roles(getattr(request, "user", None))
    return get_access_provider().for_roles(roles)


class AccessContextMiddleware(MiddlewareMixin):
    """Injects the AccessContext into every request and binds it."""

    def process_request(self, request: HttpRequest) -> None:
        context = build_access_context(request)
        setattr(request, get_request_attribute(), context)
        setattr(request, _SCOPE_TOKEN_ATTR, bind_access(context))
        logger.debug("Access context for %s: roles=%s", request.path, context.roles)

    def process_response(
        self, request: HttpRequest, response: HttpResponse
    ) -> HttpResponse:
        self._release(request)
        return response

    def _release(self, request: HttpRequest) -> None:
        token: Optional[Token] = getattr(request, _SCOPE_TOKEN_ATTR, None)
        if token is None:
            return
        delattr(request, _SCOPE_TOKEN_ATTR)
        try:
            unbind_access(token)
        except ValueError:
            # Token created in another context (async handlers); drop the binding.
            bind_access(None)


def get_access_context(request: HttpRequest) -> AccessContext:
    """Retrieve the access context from a request."""
    attribute = get_request_attribute()
    context = getattr(request, attribute, None)
    if context is None:
        # Fallback: create context if middleware wasn't applied
        context = build_access_context(request)
        setattr(request, attribute, context)
    return context


__all__ = [
    "AccessContextMiddleware",
    "get_access_context",
    "get_principal_roles",
    "build_access_context",
]
