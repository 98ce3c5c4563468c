"""Tests for financial year commands."""

from finboard.cli.main import cli


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "fy" in result.output
    assert "costs" in result.output


def test_fy_create_defaults(invoke):
    result = invoke("fy", "create", "--start-year", "2024")

    assert result.exit_code == 0
    assert "Created financial year 'FY 2024/25'" in result.output


def test_fy_create_calendar_year(invoke):
    result = invoke("fy", "create", "--start-year", "2024", "--start-month", "1", "--active")
    assert result.exit_code == 0
    assert "'FY 2024/24'" in result.output

    result = invoke("fy", "show", "active")
    assert result.exit_code == 0
    assert "January 2024" in result.output
    assert "December 2024" in result.output
    assert "Q2: April, May, June" in result.output


def test_fy_create_duplicate_fails(invoke, sample_fy):
    result = invoke("fy", "create", "--start-year", "2024")

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "already exists" in result.output


def test_fy_create_invalid_range(invoke):
    result = invoke("fy", "create", "--start-year", "2024", "--end-year", "2023")

    assert result.exit_code == 1
    assert "End year must be greater than or equal to start year" in result.output


def test_fy_list(invoke, sample_fy):
    invoke("fy", "create", "--start-year", "2025")

    result = invoke("fy", "list")
    assert result.exit_code == 0
    assert "FY 2024/25" in result.output
    assert "FY 2025/26" in result.output
    assert "03/2024 - 02/2025 (active)" in result.output

    result = invoke("fy", "list", "--active")
    assert "FY 2025/26" not in result.output


def test_fy_list_empty(invoke):
    result = invoke("fy", "list")

    assert result.exit_code == 0
    assert "No financial years found." in result.output


def test_fy_show_months_and_quarters(invoke, sample_fy):
    result = invoke("fy", "show", "FY 2024/25")

    assert result.exit_code == 0
    assert " 1. March 2024" in result.output
    assert "12. February 2025" in result.output
    assert "Q4: December, January, February" in result.output


def test_fy_show_unknown(invoke):
    result = invoke("fy", "show", "FY 1999/00")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_fy_update_and_activate(invoke, sample_fy):
    other = invoke("fy", "create", "--start-year", "2025")
    assert other.exit_code == 0

    result = invoke("fy", "update", "FY 2025/26", "--name", "Next Year")
    assert result.exit_code == 0

    result = invoke("fy", "activate", "Next Year")
    assert result.exit_code == 0
    assert "Activated 'Next Year'" in result.output

    result = invoke("fy", "list", "--active")
    assert "Next Year" in result.output
    assert "FY 2024/25" not in result.output


def test_fy_delete_requires_confirmation(invoke, sample_fy):
    result = invoke("fy", "delete", "FY 2024/25", input="n\n")

    assert "Deletion cancelled." in result.output
    assert "FY 2024/25" in invoke("fy", "list").output

    result = invoke("fy", "delete", "FY 2024/25", "--yes")
    assert result.exit_code == 0
    assert "No financial years found." in invoke("fy", "list").output


def test_fy_delete_blocked_by_revenue(invoke, revenue_service, sample_fy, sample_company):
    revenue_service.upsert(sample_company.id, None, sample_fy.id, [100])

    result = invoke("fy", "delete", str(sample_fy.id), "--yes")

    assert result.exit_code == 1
    assert "1 revenue row" in result.output


def test_fy_summary(invoke, sample_fy):
    result = invoke("fy", "summary")

    assert result.exit_code == 0
    assert "Total years:  1" in result.output
    assert "Range:        2024 - 2025" in result.output


def test_fy_which(invoke, sample_fy):
    result = invoke("fy", "which", "2025-01-15")
    assert result.exit_code == 0
    assert "2025-01-15 is in FY 2024/25" in result.output

    result = invoke("fy", "which", "2023-01-15")
    assert "No financial year contains 2023-01-15." in result.output


def test_fy_which_invalid_date(invoke, sample_fy):
    result = invoke("fy", "which", "someday soon")

    assert result.exit_code == 1
    assert "Could not parse date" in result.output


def test_fy_create_reversed_months_in_one_year(invoke):
    result = invoke("fy", "create", "--start-year", "2024", "--end-year", "2024", "--start-month", "6", "--end-month", "3")

    assert result.exit_code == 1
    assert "End month cannot be before start month" in result.output
