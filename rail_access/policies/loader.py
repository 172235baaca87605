"""
Policy configuration loaders.

Policies may come from the ``access_settings.policies`` setting (a mapping
or a dotted path to one), from JSON files listed in
``access_settings.policy_files``, and from ``policies.json`` files shipped by
installed apps. Later sources override earlier ones role by role.

A JSON policy file holds either a ``{role: policy}`` object or an object with
a ``policies`` key::

    {
        "policies": {
            "viewer": {"can": ["doc.read"]},
            "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
            "admin": {"can": "*"}
        }
    }

Unreadable files and malformed entries are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from ..config_proxy import get_setting
from .types import WILDCARD, RolePolicy

logger = logging.getLogger(__name__)

POLICY_FILE_NAME = "policies.json"


def load_policy_file(path: Union[str, Path]) -> dict[str, dict[str, Any]]:
    """
    Read one JSON policy file.

    Returns:
        Normalized ``{role: {"can": ..., "inherits": [...]}}`` mapping, empty
        when the file cannot be used.
    """
    policy_path = Path(path)
    if not policy_path.exists():
        logger.warning("Policy file %s does not exist", policy_path)
        return {}
    try:
        content = policy_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning("Could not read policy file %s: %s", policy_path, exc)
        return {}
    if not content:
        logger.debug("Skipping empty policy file %s", policy_path)
        return {}
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON in policy file %s: %s", policy_path, exc)
        return {}

    return normalize_policies(_extract_policies(payload), policy_path)


def load_app_policy_files(
    app_configs: Optional[Iterable[object]] = None,
) -> dict[str, dict[str, Any]]:
    """
    Load ``policies.json`` files from installed apps.

    Args:
        app_configs: Optional iterable of Django app configs. Defaults to all
            installed apps.
    """
    if app_configs is None:
        app_configs = apps.get_app_configs()

    policies: dict[str, dict[str, Any]] = {}
    for app_config in app_configs:
        app_path = getattr(app_config, "path", None)
        if not app_path:
            continue
        policy_path = Path(app_path) / POLICY_FILE_NAME
        if not policy_path.exists():
            continue
        loaded = load_policy_file(policy_path)
        logger.debug("Loaded %d policies from %s", len(loaded), policy_path)
        policies.update(loaded)
    return policies


def get_configured_policies() -> dict[str, dict[str, Any]]:
    """Merge every configured policy source into one configuration."""
    policies: dict[str, dict[str, Any]] = {}

    configured = get_setting("access_settings.policies")
    if isinstance(configured, str):
        try:
            configured = import_string(configured)
        except ImportError as exc:
            raise ImproperlyConfigured(
                f"Could not import access policies '{configured}': {exc}"
            ) from exc
    if configured is not None:
        policies.update(normalize_policies(configured, "settings"))

    for path in get_setting("access_settings.policy_files", []) or []:
        policies.update(load_policy_file(path))

    if get_setting("access_settings.load_app_policies", True):
        policies.update(load_app_policy_files())

    logger.info("Loaded %d access policies", len(policies))
    return policies


def normalize_policies(
    payload: object, source: object
) -> dict[str, dict[str, Any]]:
    """Validate raw policy data, dropping entries that cannot be used."""
    if not isinstance(payload, Mapping):
        logger.warning("Policies from %s must be an object of roles", source)
        return {}

    normalized: dict[str, dict[str, Any]] = {}
    for role, entry in payload.items():
        if not isinstance(role, str) or not role:
            logger.warning("Invalid role name %r in %s", role, source)
            continue
        if isinstance(entry, RolePolicy):
            entry = {"can": entry.can, "inherits": entry.inherits}
        if not isinstance(entry, Mapping):
            logger.warning("Policy for role '%s' in %s must be an object", role, source)
            continue
        can = entry.get("can")
        normalized[role] = {
            "can": WILDCARD if can == WILDCARD else _coerce_list(can),
            "inherits": _coerce_list(entry.get("inherits")),
        }
    return normalized


def _extract_policies(payload: object) -> object:
    if isinstance(payload, dict) and "policies" in payload:
        return payload["policies"]
    return payload


def _coerce_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


__all__ = [
    "POLICY_FILE_NAME",
    "load_policy_file",
    "load_app_policy_files",
    "get_configured_policies",
    "normalize_policies",
]
