from __future__ import annotations

import pytest

from timeos.companies.service import CompanyService
from timeos.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_employee_sees_only_assigned_companies(companies_repo, employee, admin):
    svc = CompanyService(companies_repo)

    assert [c.name for c in svc.list_for_user(employee)] == ["Acme Corp"]
    assert len(svc.list_for_user(admin)) == 2


def test_create_company_blank_optional_fields_become_none(companies_repo, admin):
    svc = CompanyService(companies_repo)

    company_id = svc.create_company(admin, name=" Initech ", client_reference=" ", client_email="")

    company = svc.get(company_id)
    assert company.name == "Initech"
    assert company.client_reference is None
    assert company.client_email is None


def test_create_company_requires_name_and_valid_email(companies_repo, admin):
    svc = CompanyService(companies_repo)

    with pytest.raises(ValidationError, match="Company name is required"):
        svc.create_company(admin, name="")
    with pytest.raises(ValidationError, match="not a valid address"):
        svc.create_company(admin, name="Initech", client_email="nobody")


def test_only_admin_changes_companies(companies_repo, employee):
    svc = CompanyService(companies_repo)

    with pytest.raises(AuthorizationError):
        svc.create_company(employee, name="Initech")
    with pytest.raises(AuthorizationError):
        svc.delete_company(employee, "1")


def test_update_and_delete(companies_repo, admin):
    svc = CompanyService(companies_repo)

    svc.update_company(admin, "2", name="Globex Corporation", client_email="ap@globex.example")
    assert svc.get("2").client_email == "ap@globex.example"

    svc.delete_company(admin, "2")
    with pytest.raises(NotFoundError):
        svc.get("2")

