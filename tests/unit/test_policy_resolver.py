"""
Unit tests for policy resolution.
"""

import logging

import pytest

from rail_access.policies import (
    WILDCARD,
    PolicyResolver,
    RolePolicy,
    RoleResolution,
    build_permission_index,
    define_policies,
)

pytestmark = pytest.mark.unit


POLICIES = define_policies(
    {
        "viewer": {"can": ["doc.read"]},
        "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
        "admin": {"can": "*"},
    }
)


def test_define_policies_returns_same_object():
    config = {"viewer": {"can": ["doc.read"]}}
    assert define_policies(config) is config


def test_inherited_permissions_are_flattened():
    index = build_permission_index(POLICIES)

    assert index["viewer"] == RoleResolution(wildcard=False, permissions={"doc.read"})
    assert index["editor"] == RoleResolution(
        wildcard=False, permissions={"doc.read", "doc.write"}
    )
    assert index["admin"].wildcard is True
    assert index["admin"].permissions == set()


def test_transitive_inheritance_includes_every_ancestor():
    index = build_permission_index(
        {
            "reader": {"can": ["a"]},
            "writer": {"can": ["b"], "inherits": ["reader"]},
            "publisher": {"can": ["c"], "inherits": ["writer"]},
            "chief": {"can": ["d"], "inherits": ["publisher", "reader"]},
        }
    )

    assert index["chief"].permissions == {"a", "b", "c", "d"}
    assert index["chief"].wildcard is False


def test_wildcard_ancestor_makes_descendants_wildcard():
    index = build_permission_index(
        {
            "root": {"can": WILDCARD},
            "ops": {"can": ["ops.run"], "inherits": ["root"]},
            "oncall": {"can": ["pager.ack"], "inherits": ["viewer", "ops"]},
            "viewer": {"can": ["doc.read"]},
        }
    )

    assert index["ops"].wildcard is True
    assert index["oncall"].wildcard is True
    # Named grants are still collected alongside the wildcard flag.
    assert index["oncall"].permissions == {"pager.ack", "doc.read", "ops.run"}


def test_wildcard_role_does_not_follow_its_parents():
    index = build_permission_index(
        {
            "admin": {"can": "*", "inherits": ["ghost"]},
        }
    )

    assert index["admin"].wildcard is True
    assert "ghost" not in index


def test_mutual_inheritance_resolves_without_error(caplog):
    with caplog.at_level(logging.WARNING, logger="rail_access.policies.resolver"):
        index = build_permission_index(
            {
                "a": {"can": [], "inherits": ["b"]},
                "b": {"can": [], "inherits": ["a"]},
            }
        )

    assert index["a"].permissions == set()
    assert index["b"].permissions == set()
    assert index["a"].wildcard is False
    assert "Cycle detected" in caplog.text


def test_cycle_keeps_direct_grants_of_the_outer_role():
    index = build_permission_index(
        {
            "a": {"can": ["x"], "inherits": ["b"]},
            "b": {"can": ["y"], "inherits": ["a"]},
        }
    )

    # "b" sees "a" as an empty placeholder while "a" is being resolved.
    assert index["b"].permissions == {"y"}
    assert index["a"].permissions == {"x", "y"}


def test_self_inheritance_grants_own_permissions():
    index = build_permission_index({"loop": {"can": ["x"], "inherits": ["loop"]}})

    assert index["loop"].permissions == {"x"}


def test_dangling_parent_grants_nothing():
    index = build_permission_index(
        {"editor": {"can": ["doc.write"], "inherits": ["ghost"]}}
    )

    assert index["editor"].permissions == {"doc.write"}
    assert index["ghost"] == RoleResolution()


def test_missing_can_grants_nothing():
    index = build_permission_index(
        {"base": {"can": ["x"]}, "child": {"inherits": ["base"]}}
    )

    assert index["child"].permissions == {"x"}


def test_role_policy_objects_are_accepted():
    index = build_permission_index(
        {
            "viewer": RolePolicy(can=frozenset({"doc.read"})),
            "editor": RolePolicy(can=frozenset({"doc.write"}), inherits=("viewer",)),
        }
    )

    assert index["editor"].permissions == {"doc.read", "doc.write"}


def test_resolution_does_not_mutate_configuration():
    config = {
        "viewer": {"can": ["doc.read"]},
        "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
    }
    build_permission_index(config)

    assert config == {
        "viewer": {"can": ["doc.read"]},
        "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
    }


def test_resolving_twice_gives_identical_indexes():
    assert build_permission_index(POLICIES) == build_permission_index(POLICIES)


def test_resolver_memoizes_roles():
    resolver = PolicyResolver(POLICIES)
    first = resolver.resolve_role("editor")

    assert resolver.resolve_role("editor") is first


def test_inherited_set_contains_union_of_parents():
    config = {
        "p1": {"can": ["a", "b"]},
        "p2": {"can": ["c"], "inherits": ["p1"]},
        "r": {"can": ["d"], "inherits": ["p1", "p2"]},
    }
    index = build_permission_index(config)

    assert index["r"].permissions >= (
        index["p1"].permissions | index["p2"].permissions | {"d"}
    )


def test_role_policy_from_value_coerces_shapes():
    assert RolePolicy.from_value({"can": "*"}).is_wildcard is True
    assert RolePolicy.from_value({"can": "doc.read"}).can == frozenset({"doc.read"})
    assert RolePolicy.from_value({"can": None, "inherits": "base"}) == RolePolicy(
        can=frozenset(), inherits=("base",)
    )
    assert RolePolicy.from_value(
        {"can": ["a"], "inherits": ["x", "y"]}
    ).inherits == ("x", "y")
