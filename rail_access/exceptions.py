"""
Custom exceptions for rail-access.

Malformed policy data never raises: the resolver and loaders degrade to
"grants nothing". The exceptions below cover caller mistakes only.
"""

from typing import Optional, Sequence


class AccessError(Exception):
    """Base exception for rail-access errors."""

    def __init__(self, message: str, roles: Optional[Sequence[str]] = None):
        self.roles = tuple(roles) if roles is not None else None
        super().__init__(message)


class AccessContextError(AccessError):
    """Raised when a decision is requested before an access context exists."""


class InvalidCheckModeError(AccessError, ValueError):
    """Raised when a check mode other than "all" or "any" is requested."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"Invalid check mode {mode!r}; expected 'all' or 'any'")


__all__ = ["AccessError", "AccessContextError", "InvalidCheckModeError"]
