"""Tests for revenue commands."""

import pytest


@pytest.fixture
def captured(revenue_service, sample_company, sample_fy, sample_accounts):
    """Twelve months of domestic, export and expense amounts."""
    revenue_service.upsert(sample_company.id, sample_accounts["domestic"], sample_fy.id, [100] * 12)
    revenue_service.upsert(sample_company.id, sample_accounts["export"], sample_fy.id, [50] * 12)
    revenue_service.upsert(sample_company.id, sample_accounts["expense"], sample_fy.id, [20] * 12)
    return sample_fy


def test_revenue_set(invoke, sample_company, sample_fy, sample_accounts):
    result = invoke(
        "revenue", "set", "Acme Manufacturing", "FY 2024/25", "1000", "1200", "900", "--account", "Local Sales"
    )

    assert result.exit_code == 0
    assert "total R 3,100.00" in result.output


def test_revenue_set_replaces_existing_row(invoke, sample_company, sample_fy, sample_accounts):
    first = invoke("revenue", "set", "Acme Manufacturing", "active", "1000", "--account", "Local Sales")
    second = invoke("revenue", "set", "Acme Manufacturing", "active", "250", "--account", "Local Sales")

    assert "Saved revenue row 1:" in first.output
    assert "Saved revenue row 1: total R 250.00" in second.output


def test_revenue_set_too_many_amounts(invoke, sample_company, sample_fy):
    result = invoke("revenue", "set", "Acme Manufacturing", "active", *["1"] * 13)

    assert result.exit_code == 1
    assert "At most 12 monthly amounts" in result.output


def test_revenue_set_unknown_account(invoke, sample_company, sample_fy):
    result = invoke("revenue", "set", "Acme Manufacturing", "active", "10", "--account", "Nope")

    assert result.exit_code == 1
    assert "Account 'Nope' not found" in result.output


def test_revenue_set_invalid_amount(invoke, sample_company, sample_fy):
    result = invoke("revenue", "set", "Acme Manufacturing", "active", "lots")

    assert result.exit_code == 1
    assert "Could not parse amount" in result.output


def test_revenue_edit_coalesces_edits(invoke, sample_company, sample_fy, sample_accounts):
    invoke("revenue", "set", "Acme Manufacturing", "active", "1000", "1200", "900", "--account", "Local Sales")

    result = invoke(
        "revenue",
        "edit",
        "Acme Manufacturing",
        "active",
        "--account",
        "Local Sales",
        "--set",
        "1=1500",
        "--set",
        "2=1750",
        "--set",
        "1=1600",
        "--debounce",
        "30",
    )

    assert result.exit_code == 0
    assert "Saved 1 row(s); total R 4,250.00" in result.output
    assert "Mar" in result.output

    result = invoke("revenue", "totals", "Acme Manufacturing", "active")
    assert "R 4,250.00" in result.output


def test_revenue_edit_negative_becomes_zero(invoke, sample_company, sample_fy):
    result = invoke("revenue", "edit", "Acme Manufacturing", "active", "--set", "3=-50", "--set", "4=20")

    assert result.exit_code == 0
    assert "total R 20.00" in result.output


def test_revenue_edit_bad_assignment(invoke, sample_company, sample_fy):
    result = invoke("revenue", "edit", "Acme Manufacturing", "active", "--set", "13=5")

    assert result.exit_code == 1
    assert "Month must be a number from 1 to 12" in result.output


def test_revenue_show(invoke, captured):
    result = invoke("revenue", "show", "Acme Manufacturing")

    assert result.exit_code == 0
    assert "FY 2024/25 (active)" in result.output
    assert "Local Sales" in result.output
    assert "Exports" in result.output


def test_revenue_show_empty(invoke, sample_company):
    result = invoke("revenue", "show", "Acme Manufacturing")

    assert "No revenue captured." in result.output


def test_revenue_totals(invoke, captured):
    result = invoke("revenue", "totals", "Acme Manufacturing", "FY 2024/25", "--monthly")

    assert result.exit_code == 0
    assert "R 1,800.00 (2 rows)" in result.output
    assert "R 240.00 (1 rows)" in result.output
    assert "R 1,560.00" in result.output
    assert "Revenue by month:" in result.output


def test_revenue_quarterly(invoke, captured):
    result = invoke("revenue", "quarterly", "Acme Manufacturing", "FY 2024/25", "--accounts")

    assert result.exit_code == 0
    assert "Q1: R 450.00 (Mar, Apr, May)" in " ".join(result.output.split())
    assert "Export share: 33.3%" in result.output
    assert "Export Revenue" in result.output


def test_revenue_quarterly_all_years(invoke, captured):
    result = invoke("revenue", "quarterly", "Acme Manufacturing")

    assert result.exit_code == 0
    assert "FY 2024/25" in result.output


def test_revenue_delete(invoke, captured, revenue_service, sample_company, sample_accounts):
    stats = revenue_service.find_stats(sample_company.id, sample_accounts["export"], captured.id)

    result = invoke("revenue", "delete", str(stats.id))
    assert result.exit_code == 0
    assert f"Deleted revenue row {stats.id}" in result.output

    result = invoke("revenue", "delete", str(stats.id))
    assert result.exit_code == 1
    assert "not found" in result.output


def test_revenue_clear_year(invoke, captured):
    result = invoke("revenue", "clear-year", "Acme Manufacturing", "FY 2024/25", "--yes")

    assert result.exit_code == 0
    assert "Deleted 3 revenue row(s)" in result.output
    assert "No revenue captured." in invoke("revenue", "show", "Acme Manufacturing").output


def test_revenue_edit_without_debounce_saves_every_month(invoke, sample_company, sample_fy, sample_accounts):
    assignments = []
    for position in range(1, 13):
        assignments += ["--set", f"{position}={position * 100}"]

    result = invoke(
        "revenue", "edit", "Acme Manufacturing", "active", "--account", "Local Sales", *assignments, "--debounce", "0"
    )

    assert result.exit_code == 0, result.output
    assert "total R 7,800.00" in result.output
    totals = invoke("revenue", "totals", "Acme Manufacturing", "active")
    assert "R 7,800.00" in totals.output
