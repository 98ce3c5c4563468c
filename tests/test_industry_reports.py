"""Tests for industry reports."""

from decimal import Decimal

import pytest

from finboard.domain.industry_reports import IndustryReportService


@pytest.fixture
def report_service(temp_db):
    return IndustryReportService(temp_db)


@pytest.fixture
def industries(industry_service, company_service):
    manufacturing = industry_service.create_industry("Manufacturing")
    food = industry_service.create_industry("Food Processing", parent_id=manufacturing)
    retail = industry_service.create_industry("Retail")
    industry_service.create_industry("Mining")

    company_service.create_company(
        name="Bakery", industry_id=food, turnover_actual=Decimal("100000"), permanent_employees=5
    )
    company_service.create_company(
        name="Cannery",
        industry_id=food,
        turnover_actual=Decimal("300000"),
        permanent_employees=10,
        temporary_employees=4,
    )
    company_service.create_company(name="Corner Shop", industry_id=retail, permanent_employees=2)
    return {"manufacturing": manufacturing, "food": food, "retail": retail}


def test_companies_per_industry(report_service, industries):
    rows = report_service.companies_per_industry()

    assert rows[0] == {
        "industry_id": industries["food"],
        "industry": "Food Processing",
        "parent_industry": "Manufacturing",
        "total_companies": 2,
    }
    assert rows[1]["industry"] == "Retail"
    assert {r["industry"] for r in rows[2:]} == {"Manufacturing", "Mining"}


def test_financial_by_industry(report_service, industries):
    rows = {r["industry"]: r for r in report_service.financial_by_industry()}

    assert rows["Food Processing"]["total_turnover"] == Decimal("400000.00")
    assert rows["Food Processing"]["avg_turnover"] == Decimal("200000.00")
    assert rows["Retail"]["avg_turnover"] is None
    assert rows["Retail"]["total_companies"] == 1


def test_employment_by_industry(report_service, industries):
    rows = report_service.employment_by_industry()

    assert rows[0]["industry"] == "Food Processing"
    assert rows[0]["permanent"] == 15
    assert rows[0]["temporary"] == 4
    assert rows[0]["total_employees"] == 19


def test_top_industries(report_service, industries):
    top = report_service.top_industries(limit=5)

    assert [r["industry"] for r in top] == ["Food Processing", "Retail"]
    assert report_service.top_industries(limit=1) == [
        {"industry_id": industries["food"], "industry": "Food Processing", "total": 2}
    ]
    assert report_service.top_industries(limit=0) == []
