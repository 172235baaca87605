"""
Configuration management for rail-access.

Settings are resolved from the Django ``RAIL_ACCESS`` setting first and fall
back to the library defaults.
"""

from typing import Any

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS, SETTINGS_NAME


class SettingsProxy:
    """
    Proxy for accessing rail-access settings with hierarchical resolution.

    Settings are resolved in the following order:
    1. Global Django settings (RAIL_ACCESS)
    2. Library defaults (LIBRARY_DEFAULTS)
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution and caching.

        Args:
            key: Setting key to retrieve, dotted for nested sections
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        django_value = self._get_django_setting(key)
        if django_value is not None:
            self._cache[key] = django_value
            return django_value

        library_value = self._get_library_default(key)
        if library_value is not None:
            self._cache[key] = library_value
            return library_value

        # Caller defaults are not cached.
        return default

    def _get_django_setting(self, key: str) -> Any:
        return self._get_nested_value(getattr(settings, SETTINGS_NAME, {}), key)

    def _get_library_default(self, key: str) -> Any:
        return self._get_nested_value(LIBRARY_DEFAULTS, key)

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Returns:
            The value or None if not found
        """
        if not isinstance(data, dict):
            return None

        current = data
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return None
            current = current[k]

        return current

    def clear_cache(self) -> None:
        """Clear the settings cache."""
        self._cache.clear()


# Global settings proxy instance
settings_proxy = SettingsProxy()


def get_settings_proxy() -> SettingsProxy:
    return settings_proxy


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a setting value using the hierarchical settings system.

    Args:
        key: Setting key to retrieve
        default: Default value if setting is not found

    Returns:
        The setting value from the highest priority source
    """
    return settings_proxy.get(key, default)


__all__ = ["SettingsProxy", "settings_proxy", "get_settings_proxy", "get_setting"]
