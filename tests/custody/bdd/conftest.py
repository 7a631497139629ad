"""Shared BDD fixtures and step definitions for the Custody domain."""

import pytest
from custody.errors import CustodyError
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured custody errors."""
    return {"exc": None}


@pytest.fixture()
def shipment():
    """Container for the asset id of the shipment under test."""
    return {"asset_id": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an administrator "{admin}"'))
def an_administrator(service, admin):
    service.seed_admin(admin)


@given(parsers.cfparse('"{actor}" is onboarded as a "{role}"'))
def actor_is_onboarded(service, actor, role):
    admin = "0xAdmin"
    service.onboard_user(admin, actor, role)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{admin}" assigns the role "{role}" to "{actor}"'))
def assign_role(service, error, admin, role, actor):
    try:
        service.onboard_user(admin, actor, role)
    except CustodyError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the operation fails with "{code}"'))
def operation_fails_with(error, code):
    assert error["exc"] is not None, f"Expected {code} but the operation succeeded"
    assert error["exc"].code == code


@then(parsers.cfparse('"{actor}" has the role "{role}"'))
def actor_has_role(service, actor, role):
    assert service.view_role(actor) == role
