from typing import TypeVar

from .types import PolicyConfig

PolicyConfigT = TypeVar("PolicyConfigT", bound=PolicyConfig)


def define_policies(config: PolicyConfigT) -> PolicyConfigT:
    """
    Declare a policy configuration.

    Returns ``config`` unchanged; it only gives type checkers a single
    place to infer the configuration type from.

    Example:
        POLICIES = define_policies({
            "admin": {"can": "*"},
            "viewer": {"can": ["user.view"]},
        })
    """
    return config


__all__ = ["define_policies"]
