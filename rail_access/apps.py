"""
Django app configuration for the rail-access library.

On startup the configured policies are loaded and resolved once, so that
policy problems show up in the logs before the first request.
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.conf import settings as django_settings

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-access."""

    name = "rail_access"
    verbose_name = "Rail Access"
    label = "rail_access"

    def ready(self):
        """Initialize the application after Django has loaded."""
        # Registers the setting_changed receiver.
        from .access import context  # noqa: F401
        from .config_proxy import get_setting

        try:
            if get_setting("access_settings.validate_on_startup", True):
                self._build_access_provider()
        except Exception as e:
            logger.error("Error initializing rail-access policies: %s", e)
            # Don't raise in production to avoid breaking the app
            if getattr(django_settings, "DEBUG", False):
                raise

    def _build_access_provider(self):
        from .access.context import get_access_provider

        provider = get_access_provider()
        index = provider.index
        wildcard_roles = sorted(
            role for role, resolution in index.items() if resolution.wildcard
        )
        logger.info(
            "rail-access ready: %d roles resolved, wildcard roles: %s",
            len(index),
            ", ".join(wildcard_roles) or "none",
        )
