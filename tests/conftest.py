"""Shared pytest fixtures for finboard tests."""

import os
import tempfile

import pytest

from finboard.database.factories import create_sqlite_database
from finboard.domain.company import CompanyService, IndustryService
from finboard.domain.company_account import CompanyAccountService
from finboard.domain.cost_category import CostCategoryService
from finboard.domain.costing import CostingStatsService
from finboard.domain.financial_year import FinancialYearService
from finboard.domain.metrics import MetricsService
from finboard.domain.revenue import RevenueStatsService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def financial_year_service(temp_db):
    """Create a FinancialYearService with a temporary database."""
    return FinancialYearService(temp_db)


@pytest.fixture
def industry_service(temp_db):
    return IndustryService(temp_db)


@pytest.fixture
def company_service(temp_db):
    return CompanyService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create a CompanyAccountService with a temporary database."""
    return CompanyAccountService(temp_db)


@pytest.fixture
def cost_category_service(temp_db):
    return CostCategoryService(temp_db)


@pytest.fixture
def metrics_service(temp_db):
    return MetricsService(temp_db)


@pytest.fixture
def revenue_service(temp_db):
    return RevenueStatsService(temp_db)


@pytest.fixture
def costing_service(temp_db):
    return CostingStatsService(temp_db)


@pytest.fixture
def sample_fy(financial_year_service):
    """Financial year running March 2024 to February 2025."""
    fy_id = financial_year_service.create_financial_year(
        fy_start_year=2024, fy_end_year=2025, start_month=3, end_month=2, is_active=True
    )
    return financial_year_service.get_financial_year(fy_id)


@pytest.fixture
def sample_company(company_service):
    """Create a sample company for testing."""
    company_id = company_service.create_company(name="Acme Manufacturing")
    return company_service.get_company(company_id)


@pytest.fixture
def sample_accounts(account_service, sample_company):
    """Domestic, export and expense accounts for the sample company."""
    return {
        "domestic": account_service.create_account(
            sample_company.id, "Local Sales", account_type="domestic_revenue"
        ),
        "export": account_service.create_account(
            sample_company.id, "Exports", account_type="export_revenue"
        ),
        "expense": account_service.create_account(
            sample_company.id, "Overheads", account_type="expense"
        ),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""
    from finboard.cli.main import cli

    def _invoke(*args, input=None):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)

    return _invoke
