"""
Public test utilities for rail-access.
"""

from contextlib import contextmanager
from typing import Any, Iterable, Optional, Union

from django.test import override_settings

from .access.context import (
    AccessContext,
    AccessProvider,
    access_scope,
)
from .defaults import SETTINGS_NAME
from .policies.types import PolicyConfig


@contextmanager
def override_access_settings(**access_settings: Any):
    """
    Override ``RAIL_ACCESS["access_settings"]`` inside the block.

    The settings cache and the global provider are reset on entry and exit
    through the ``setting_changed`` signal.
    """
    with override_settings(**{SETTINGS_NAME: {"access_settings": access_settings}}):
        yield


@contextmanager
def access_for(
    policies: PolicyConfig, roles: Optional[Union[str, Iterable[str]]] = None
):
    """Bind an access context built from ``policies`` and ``roles``."""
    context: AccessContext = AccessProvider(policies).for_roles(roles or [])
    with access_scope(context):
        yield context


__all__ = ["override_access_settings", "access_for"]
