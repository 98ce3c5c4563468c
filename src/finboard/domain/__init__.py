"""Domain layer for finboard application.

Services are resolved lazily so that the database layer can import
``finboard.domain.entities`` without pulling in the services that depend on it.
"""

_SERVICES = {
    "FinancialYearService": "finboard.domain.financial_year",
    "CompanyService": "finboard.domain.company",
    "IndustryService": "finboard.domain.company",
    "CompanyAccountService": "finboard.domain.company_account",
    "CostCategoryService": "finboard.domain.cost_category",
    "MetricsService": "finboard.domain.metrics",
    "RevenueStatsService": "finboard.domain.revenue",
    "CostingStatsService": "finboard.domain.costing",
    "IndustryReportService": "finboard.domain.industry_reports",
    "DebouncedSaver": "finboard.domain.autosave",
    "MonthlyGridEditor": "finboard.domain.autosave",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
