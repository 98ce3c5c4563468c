"""End-to-end flows across services sharing one database."""

from decimal import Decimal

from finboard.domain.autosave import DebouncedSaver, MonthlyGridEditor
from finboard.domain.entities import CostType


def test_capture_year_and_report(
    financial_year_service,
    revenue_service,
    costing_service,
    cost_category_service,
    sample_company,
    sample_accounts,
):
    fy_id = financial_year_service.create_financial_year(
        fy_start_year=2024, fy_end_year=2025, start_month=7, end_month=6, is_active=True
    )
    materials = cost_category_service.create_category("Raw Materials", cost_type="direct")
    salaries = cost_category_service.create_category("Salaries", cost_type="operational")

    # July..June; a grid edits months then auto-saves on close
    def save(account_id, months):
        revenue_service.upsert(sample_company.id, account_id, fy_id, months)

    with DebouncedSaver(save, delay=60) as saver:
        grid = MonthlyGridEditor(saver)
        for index in range(12):
            grid.set_value(sample_accounts["domestic"], index, 1000)
        grid.set_value(sample_accounts["export"], 0, 600)
        grid.set_value(sample_accounts["export"], 11, 400)

    assert saver.save_count == 2

    costing_service.create_stats(sample_company.id, fy_id, category_id=materials, months=[500] * 12)
    costing_service.create_stats(sample_company.id, fy_id, category_id=salaries, months=[250] * 12)

    quarterly = revenue_service.quarterly_revenue(sample_company.id, fy_id)
    assert quarterly.revenue.q1 == Decimal("3600")
    assert quarterly.revenue.q4 == Decimal("3400")
    assert quarterly.export.total == Decimal("1000")
    assert list(quarterly.quarter_months[0]) == ["July", "August", "September"]

    structure = costing_service.cost_structure(sample_company.id, fy_id)
    assert structure.revenue_total == Decimal("13000")
    assert structure.direct_total == Decimal("6000")
    assert structure.operational_total == Decimal("3000")
    assert structure.net_profit == Decimal("4000")
    assert structure.month_labels[0] == "Jul"

    summary = costing_service.summary(sample_company.id, fy_id)
    assert summary[CostType.DIRECT].record_count == 1
    assert summary[CostType.OPERATIONAL].total_cost == Decimal("3000")


def test_roll_costs_forward(financial_year_service, costing_service, cost_category_service, sample_company, sample_fy):
    next_id = financial_year_service.create_financial_year(fy_start_year=2025, fy_end_year=2026)
    rent = cost_category_service.create_category("Rent", cost_type="operational")
    costing_service.create_stats(sample_company.id, sample_fy.id, category_id=rent, months=[900] * 12)

    created = costing_service.copy_to_new_year(sample_company.id, sample_fy.id, next_id)
    costing_service.upsert(sample_company.id, next_id, category_id=rent, months=[950] * 12)

    rows = costing_service.list_stats(company_id=sample_company.id, financial_year_id=next_id)
    assert [r.id for r in rows] == created
    assert rows[0].total_amount == Decimal("11400")
    assert rows[0].cost_type == CostType.OPERATIONAL

    comparison = costing_service.comparison(sample_company.id, [sample_fy.id, next_id])
    assert [c["costs"]["operational"] for c in comparison] == [Decimal("10800"), Decimal("11400")]
