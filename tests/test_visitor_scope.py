import pytest

from shared.core.schemas import UserToken
from shared.utils.exceptions import AccessDeniedError
from visitor_service.app.crud.visitor_scope import (
    VisitorScope,
    ensure_location_filter,
    ensure_visitor_in_scope,
    resolve_scope,
)


def _token(**claims):
    claims.setdefault("user_id", "1")
    claims.setdefault("role", "reception")
    return UserToken(**claims)


def test_admin_is_unrestricted(db):
    scope = resolve_scope(db, _token(role="Admin"))

    assert scope.is_admin
    assert ensure_location_filter(scope, None) is None
    assert ensure_location_filter(scope, 5) == 5


def test_staff_login_resolves_by_staff_id(db, make_location, make_staff):
    main = make_location("Main Office")
    lab = make_location("Research Lab")
    staff = make_staff(lab, email="kim@company.com")
    make_staff(main, first_name="Other", email="other@company.com")

    scope = resolve_scope(db, _token(
        user_id=str(staff.id), email="nobody@company.com", account_type="staff"))

    assert scope == VisitorScope(is_admin=False, location_id=lab.id)


def test_user_account_resolves_by_email(db, make_location, make_staff):
    make_location("Main Office")
    lab = make_location("Research Lab")
    make_staff(lab, email="Sarah@Company.com")

    scope = resolve_scope(db, _token(user_id="99", email="sarah@company.com"))

    assert scope.location_id == lab.id


def test_location_claim_is_the_last_fallback(db):
    scope = resolve_scope(db, _token(email="ghost@company.com", location_id=3))

    assert scope.location_id == 3


def test_caller_without_location_is_denied(db):
    with pytest.raises(AccessDeniedError) as exc:
        resolve_scope(db, _token(email="ghost@company.com"))

    assert "No location assignment" in exc.value.message


def test_filter_is_pinned_to_own_location():
    scope = VisitorScope(is_admin=False, location_id=2)

    assert ensure_location_filter(scope, None) == 2
    assert ensure_location_filter(scope, 2) == 2
    with pytest.raises(AccessDeniedError):
        ensure_location_filter(scope, 3)


def test_visitor_outside_scope_is_denied(db, make_location, make_visitor):
    main = make_location("Main Office")
    lab = make_location("Research Lab")
    scope = VisitorScope(is_admin=False, location_id=main.id)

    ensure_visitor_in_scope(scope, make_visitor(main))
    with pytest.raises(AccessDeniedError):
        ensure_visitor_in_scope(scope, make_visitor(lab))
