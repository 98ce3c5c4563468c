"""Tests for metrics commands."""

import pytest


@pytest.fixture
def sales_type(invoke, sample_company):
    invoke("metrics", "add-group", "sales", "Sales", "--show-margin")
    invoke("metrics", "add-type", "SALES", "local", "Local sales")
    invoke("metrics", "add-type", "SALES", "staff", "Headcount", "--unit", "people", "--period", "yearly")
    return "LOCAL"


def test_add_and_list_groups(invoke):
    result = invoke("metrics", "add-group", "sales", "Sales")
    assert result.exit_code == 0
    assert "Created metric group SALES" in result.output

    invoke("metrics", "add-group", "costs", "Costs")
    result = invoke("metrics", "list-groups")
    assert "  1. SALES" in result.output
    assert "  2. COSTS" in result.output


def test_duplicate_group_code(invoke):
    invoke("metrics", "add-group", "SALES", "Sales")
    result = invoke("metrics", "add-group", "sales", "Other")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_reorder_groups(invoke):
    invoke("metrics", "add-group", "A", "First")
    invoke("metrics", "add-group", "B", "Second")

    result = invoke("metrics", "reorder", "B", "A")
    assert result.exit_code == 0

    output = invoke("metrics", "list-groups").output
    assert output.index("Second") < output.index("First")


def test_list_types(invoke, sales_type):
    result = invoke("metrics", "list-types", "SALES")

    assert result.exit_code == 0
    assert "LOCAL" in result.output
    assert "[YEARLY, people]" in result.output


def test_add_type_unknown_group(invoke):
    result = invoke("metrics", "add-type", "NOPE", "X", "Whatever")

    assert result.exit_code == 1
    assert "Metric group 'NOPE' not found" in result.output


def test_add_record_sums_quarters(invoke, sales_type):
    result = invoke(
        "metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "100", "--q2", "120", "--q4", "140"
    )

    assert result.exit_code == 0
    assert "total 360.00 ZAR" in result.output


def test_add_record_yearly_keeps_total(invoke, sales_type):
    result = invoke("metrics", "add-record", "STAFF", "Acme Manufacturing", "2024", "--q1", "9", "--total", "35")

    assert result.exit_code == 0
    assert "total 35.00 people" in result.output


def test_add_record_twice_conflicts(invoke, sales_type):
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "1")
    result = invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "2")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_update_record(invoke, sales_type):
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "100", "--q2", "120")

    result = invoke("metrics", "update-record", "1", "--set", "q2=130", "--set", "q3=10")
    assert result.exit_code == 0
    assert "total 240.00 ZAR" in result.output

    result = invoke("metrics", "update-record", "1", "--set", "q1=")
    assert "total 140.00 ZAR" in result.output


def test_update_record_rejects_unknown_field(invoke, sales_type):
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "1")

    result = invoke("metrics", "update-record", "1", "--set", "q5=1")
    assert result.exit_code == 1
    assert "Unknown metric record fields: q5" in result.output

    result = invoke("metrics", "update-record", "1", "--set", "q1")
    assert result.exit_code == 1
    assert "Expected FIELD=VALUE" in result.output


def test_list_and_delete_records(invoke, sales_type):
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2023", "--q1", "5")
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "7")

    result = invoke("metrics", "list-records", "Acme Manufacturing", "--year", "2024")
    assert "2024" in result.output
    assert "| 2023 |" not in result.output

    assert invoke("metrics", "delete-record", "1").exit_code == 0
    result = invoke("metrics", "delete-record", "1")
    assert result.exit_code == 1
    assert "Metric record 1 not found" in result.output


def test_show_hierarchy(invoke, sales_type):
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "50", "--margin", "12.5")

    result = invoke("metrics", "show", "Acme Manufacturing")

    assert result.exit_code == 0
    assert "Sales [SALES]" in result.output
    assert "2024: 50.00 ZAR  margin 12.5%" in result.output
    assert "(no records)" in result.output


def test_delete_group_cascades(invoke, sales_type):
    invoke("metrics", "add-record", "LOCAL", "Acme Manufacturing", "2024", "--q1", "50")

    result = invoke("metrics", "delete-group", "SALES", "--yes")
    assert result.exit_code == 0

    assert "No metric types found." in invoke("metrics", "list-types").output
    assert "No metric records found." in invoke("metrics", "list-records", "Acme Manufacturing").output


def test_delete_type(invoke, sales_type):
    result = invoke("metrics", "delete-type", "STAFF", "--yes")

    assert result.exit_code == 0
    assert "STAFF" not in invoke("metrics", "list-types").output
