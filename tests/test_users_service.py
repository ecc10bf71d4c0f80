from __future__ import annotations

import pytest

from timeos.core.enums import Role
from timeos.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from timeos.users.service import AuthService, SessionUser, UserService


def test_login_with_employee_code(users_repo):
    user = AuthService(users_repo, admin_access_code="admin123").login(" 123456 ")

    assert user.user_id == 1
    assert user.role == Role.EMPLOYEE
    assert user.assigned_company_ids == ("1",)


def test_login_with_admin_code(users_repo):
    user = AuthService(users_repo, admin_access_code="admin123").login("admin123")

    assert user.is_admin
    assert user.user_id == 0
    assert user.name == "Super Admin"
    assert user.title == "System Administrator"


def test_admin_code_disabled_when_not_configured(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo, admin_access_code="").login("admin123")


def test_login_rejects_blank_and_unknown_codes(users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(ValidationError, match="Please enter your access code"):
        auth.login("   ")
    with pytest.raises(AuthenticationError, match="Invalid access code"):
        auth.login("999999")


def test_blocked_employee_cannot_log_in(users_repo):
    users_repo.update_user(1, is_blocked=True)

    with pytest.raises(AuthenticationError, match="blocked"):
        AuthService(users_repo).login("123456")


def test_session_round_trip(employee):
    assert SessionUser.from_session(employee.to_session()) == employee


def test_create_employee_validates_fields(users_repo, admin):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError, match="Name is required"):
        svc.create_employee(admin, name=" ", title="Dev", access_code="111111")
    with pytest.raises(ValidationError, match="Title is required"):
        svc.create_employee(admin, name="Bob", title="", access_code="111111")
    with pytest.raises(ValidationError, match="6 digits"):
        svc.create_employee(admin, name="Bob", title="Dev", access_code="12a456")
    with pytest.raises(ValidationError, match="6 digits"):
        svc.create_employee(admin, name="Bob", title="Dev", access_code="12345")
    with pytest.raises(ValidationError, match="already in use"):
        svc.create_employee(admin, name="Bob", title="Dev", access_code="123456")


def test_create_employee(users_repo, admin):
    user_id = UserService(users_repo).create_employee(
        admin, name="Bob", title="Designer", access_code="654321", assigned_company_ids=[1, "2"]
    )

    bob = users_repo.get_by_id(user_id)
    assert bob.role == Role.EMPLOYEE
    assert bob.assigned_company_ids == ("1", "2")


def test_employee_cannot_manage_users(users_repo, employee):
    svc = UserService(users_repo)

    with pytest.raises(AuthorizationError):
        svc.list_users(employee)
    with pytest.raises(AuthorizationError):
        svc.create_employee(employee, name="Bob", title="Dev", access_code="111111")


def test_update_keeps_own_access_code(users_repo, admin):
    UserService(users_repo).update_employee(
        admin, 1, name="Alice B.", title="Lead", access_code="123456", assigned_company_ids=["2"]
    )

    alice = users_repo.get_by_id(1)
    assert alice.name == "Alice B."
    assert alice.assigned_company_ids == ("2",)


def test_toggle_block_flips_flag(users_repo, admin):
    svc = UserService(users_repo)

    assert svc.toggle_block(admin, 1) is True
    assert users_repo.get_by_id(1).is_blocked is True
    assert svc.toggle_block(admin, 1) is False


def test_delete_missing_user(users_repo, admin):
    with pytest.raises(NotFoundError):
        UserService(users_repo).delete_user(admin, 42)
