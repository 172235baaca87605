"""
Default configuration for the rail-access library.

Every setting the library reads lives here. Projects override them through
the ``RAIL_ACCESS`` Django setting using the same section layout.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-access"

SETTINGS_NAME = "RAIL_ACCESS"


# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "access_settings": {
        # Mapping of role name -> policy, or a dotted path to one.
        "policies": None,
        # Extra JSON policy files, merged after ``policies``.
        "policy_files": [],
        # Merge ``policies.json`` files found in installed apps.
        "load_app_policies": True,
        # Principal roles derived from the request user.
        "include_group_roles": True,
        "superuser_roles": [],
        "staff_roles": [],
        # Attribute set on the request by AccessContextMiddleware.
        "request_attribute": "access",
        # Build the global provider in AppConfig.ready().
        "validate_on_startup": True,
    },
}


__all__ = ["LIBRARY_DEFAULTS", "LIBRARY_NAME", "LIBRARY_VERSION", "SETTINGS_NAME"]
