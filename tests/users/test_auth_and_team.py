from __future__ import annotations

import pytest

from src.salon_suite.salon_suite.core.enums import Role
from src.salon_suite.salon_suite.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from src.salon_suite.salon_suite.users.service import AuthService, SessionUser, UserService
from tests.fakes import InMemoryUsers, make_user

ADMIN = SessionUser(user_id=1, organization_id=1, name="Avery", role=Role.ADMIN)
MANAGER = SessionUser(user_id=2, organization_id=1, name="Morgan", role=Role.MANAGER)


@pytest.fixture
def users():
    return InMemoryUsers(
        [
            make_user(1, Role.ADMIN, name="Avery", username="owner"),
            make_user(2, Role.MANAGER, name="Morgan", username="manager", display_name="Mo"),
            make_user(3, name="Sam", username="stylist"),
            make_user(4, name="Left", username="left", is_active=False),
            make_user(5, Role.SUPER_ADMIN, name="Root", username="root"),
            make_user(6, name="Elsewhere", username="elsewhere", org=2),
            make_user(7, name="Legacy", username="legacy", password_hash="CHANGE_ME"),
        ]
    )


def test_login_returns_session_user(users):
    s_user = AuthService(users).authenticate(" manager ", "secret123")
    assert s_user == SessionUser(user_id=2, organization_id=1, name="Mo", role=Role.MANAGER)


@pytest.mark.parametrize(
    "username, password",
    [("manager", "wrong"), ("nobody", "secret123"), ("left", "secret123"), ("legacy", "CHANGE_ME")],
)
def test_login_failures(users, username, password):
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate(username, password)


def test_admin_adds_team_member(users):
    svc = UserService(users)
    user_id = svc.create_account(
        current=ADMIN, full_name=" Jamie Lee ", username="jamie", password="hunter22", role=Role.STAFF
    )
    created = users.get_by_id(user_id)
    assert created.full_name == "Jamie Lee"
    assert created.role == Role.STAFF
    assert AuthService(users).authenticate("jamie", "hunter22").user_id == user_id


def test_create_account_rules(users):
    svc = UserService(users)
    with pytest.raises(AuthorizationError):
        svc.create_account(current=MANAGER, full_name="X", username="x", password="secret1", role=Role.STAFF)
    with pytest.raises(AuthorizationError):
        svc.create_account(current=ADMIN, full_name="X", username="x", password="secret1", role=Role.SUPER_ADMIN)
    with pytest.raises(ValidationError):
        svc.create_account(current=ADMIN, full_name="X", username="x", password="123", role=Role.STAFF)
    with pytest.raises(ValidationError):
        svc.create_account(current=ADMIN, full_name="X", username="stylist", password="secret1", role=Role.STAFF)


def test_deactivate(users):
    svc = UserService(users)
    svc.deactivate(current=ADMIN, user_id=3)
    assert not users.get_by_id(3).is_active
    assert [u.user_id for u in svc.list_team(1)] == [1, 2, 5, 7]

    with pytest.raises(ValidationError):
        svc.deactivate(current=ADMIN, user_id=1)
    with pytest.raises(AuthorizationError):
        svc.deactivate(current=ADMIN, user_id=5)
    with pytest.raises(NotFoundError):
        svc.deactivate(current=ADMIN, user_id=6)


def test_role_rank_ordering():
    assert Role.SUPER_ADMIN.at_least(Role.ADMIN)
    assert Role.MANAGER.at_least(Role.MANAGER)
    assert not Role.STAFF.at_least(Role.MANAGER)
