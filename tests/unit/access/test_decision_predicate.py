"""
Unit tests for decision predicates.
"""

import pytest

from rail_access.access import DecisionPredicate, build_decision
from rail_access.exceptions import InvalidCheckModeError
from rail_access.policies import CheckMode, build_permission_index

pytestmark = pytest.mark.unit


POLICIES = {
    "viewer": {"can": ["doc.read"]},
    "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
    "admin": {"can": "*"},
    "auditor": {"can": ["audit.read"]},
}


@pytest.fixture
def index():
    return build_permission_index(POLICIES)


def test_editor_scenario(index):
    decide = build_decision(index, ["editor"])

    assert decide("doc.read") is True
    assert decide("doc.write") is True
    assert decide("doc.delete") is False


def test_admin_can_do_anything(index):
    decide = build_decision(index, ["admin"])

    assert decide("anything.at.all") is True
    assert decide(["x", "y"], "all") is True
    assert decide([], "any") is True


def test_unknown_role_grants_nothing(index):
    decide = build_decision(index, ["unknown_role"])

    assert decide("doc.read") is False
    assert decide.allowed == frozenset()


def test_roles_are_unioned(index):
    decide = build_decision(index, ["viewer", "auditor"])

    assert decide(["doc.read", "audit.read"]) is True
    assert decide.allowed == frozenset({"doc.read", "audit.read"})


def test_wildcard_role_stops_scan(index):
    decide = build_decision(index, ["viewer", "admin", "auditor"])

    assert decide.wildcard is True
    assert decide.allowed == frozenset({"doc.read"})


def test_mode_semantics():
    decide = DecisionPredicate(False, {"user.view"})

    assert decide(["user.view", "user.edit"], "all") is False
    assert decide(["user.view", "user.edit"], "any") is True
    assert decide([], "all") is True
    assert decide([], "any") is False


def test_default_mode_is_all():
    decide = DecisionPredicate(False, {"user.view"})

    assert decide(["user.view", "user.edit"]) is False
    assert decide(["user.view", "user.edit"], None) is False


def test_check_mode_enum_is_accepted():
    decide = DecisionPredicate(False, {"user.view"})

    assert decide.check(["user.edit", "user.view"], CheckMode.ANY) is True


def test_tuple_and_generator_requests():
    decide = DecisionPredicate(False, {"a", "b"})

    assert decide(("a", "b")) is True
    assert decide(p for p in ["a", "c"]) is False


def test_invalid_mode_raises():
    decide = DecisionPredicate(False, {"a"})

    with pytest.raises(InvalidCheckModeError):
        decide("a", "some")

    with pytest.raises(ValueError):
        decide("a", "most")


def test_rebuilt_predicates_behave_the_same(index):
    first = build_decision(index, ["editor", "auditor"])
    second = build_decision(index, ["editor", "auditor"])
    queries = ["doc.read", "doc.delete", ["doc.write", "audit.read"], []]

    for query in queries:
        for mode in ("all", "any"):
            assert first(query, mode) == second(query, mode)


def test_predicate_is_immutable():
    decide = DecisionPredicate(False, {"a"})

    with pytest.raises(AttributeError):
        decide.wildcard = True


def test_none_permission_is_denied():
    decide = DecisionPredicate(False, {"a"})

    assert decide(None) is False
    assert decide(None, "any") is False


def test_single_role_name_is_one_role(index):
    decide = build_decision(index, "editor")

    assert decide.allowed == frozenset({"doc.read", "doc.write"})
    assert build_decision(index, "admin").wildcard is True


def test_wildcard_allows_before_mode_is_checked():
    decide = DecisionPredicate(True, ())

    assert decide("anything", "ALL") is True
    assert decide(None, "most") is True
