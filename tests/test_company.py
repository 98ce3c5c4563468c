"""Tests for company and industry services."""

from decimal import Decimal

import pytest

from finboard.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_industry_with_parent(industry_service):
    parent_id = industry_service.create_industry("Manufacturing")
    child_id = industry_service.create_industry("Food Processing", parent_id=parent_id)

    child = industry_service.get_industry(child_id)
    assert child.parent_id == parent_id
    assert industry_service.get_industry_by_name("Manufacturing").id == parent_id


def test_create_industry_validation(industry_service):
    industry_service.create_industry("Retail")

    with pytest.raises(ValidationError):
        industry_service.create_industry("  ")
    with pytest.raises(ConflictError):
        industry_service.create_industry("Retail")
    with pytest.raises(NotFoundError):
        industry_service.create_industry("Orphan", parent_id=42)


def test_create_company(company_service, industry_service):
    industry_id = industry_service.create_industry("Retail")
    company_id = company_service.create_company(
        name="  Corner Shop ",
        industry_id=industry_id,
        turnover_actual=Decimal("250000"),
        permanent_employees=4,
        temporary_employees=2,
    )

    company = company_service.get_company(company_id)
    assert company.name == "Corner Shop"
    assert company.industry_id == industry_id
    assert company.turnover_actual == Decimal("250000")
    assert company.permanent_employees == 4
    assert company_service.get_company_by_name("Corner Shop").id == company_id


def test_create_company_validation(company_service, sample_company):
    with pytest.raises(ValidationError):
        company_service.create_company(name="")
    with pytest.raises(ValidationError):
        company_service.create_company(name="Negative", permanent_employees=-1)
    with pytest.raises(ConflictError):
        company_service.create_company(name="Acme Manufacturing")
    with pytest.raises(NotFoundError):
        company_service.create_company(name="Lost", industry_id=99)


def test_list_companies_by_industry(company_service, industry_service):
    retail = industry_service.create_industry("Retail")
    company_service.create_company(name="Shop A", industry_id=retail)
    company_service.create_company(name="Factory B")

    assert len(company_service.list_companies()) == 2
    assert [c.name for c in company_service.list_companies(industry_id=retail)] == ["Shop A"]
