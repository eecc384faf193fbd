import pytest
from storefront.application.access import AccessPolicy, Rule
from storefront.application.errors import Forbidden
from conftest import BUYER, OTHER, MANAGER, ADMIN


@pytest.fixture
def policy(db, staff):
    return AccessPolicy(db)


def test_role_defaults_to_user_for_unknown_principal(policy):
    assert policy.role_of("nobody@example.com") == "user"
    assert policy.role_of(MANAGER) == "manager"


def test_self_or_admin(policy):
    assert policy.authorize(BUYER, Rule.SELF_OR_ADMIN, BUYER)
    assert policy.authorize(ADMIN, Rule.SELF_OR_ADMIN, BUYER)
    decision = policy.authorize(OTHER, Rule.SELF_OR_ADMIN, BUYER)
    assert not decision
    assert decision.reason == "forbidden"
    # No owner given: only an admin passes
    assert not policy.authorize(BUYER, Rule.SELF_OR_ADMIN)


def test_manager_and_admin_rules_are_exact(policy):
    assert policy.authorize(MANAGER, Rule.MANAGER_ONLY)
    assert not policy.authorize(ADMIN, Rule.MANAGER_ONLY)
    assert policy.authorize(ADMIN, Rule.ADMIN_ONLY)
    assert not policy.authorize(MANAGER, Rule.ADMIN_ONLY)


def test_enforce_raises_forbidden(policy):
    with pytest.raises(Forbidden):
        policy.enforce(BUYER, Rule.ADMIN_ONLY)


def test_enforce_role_from_configuration(policy):
    policy.enforce_role(BUYER, "user")
    policy.enforce_role(MANAGER, "manager")
    with pytest.raises(Forbidden):
        policy.enforce_role(BUYER, "manager")
    with pytest.raises(ValueError):
        policy.enforce_role(BUYER, "owner")
