"""Resource wrappers mapping operations to backend endpoints."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from finboard.api.client import ApiClient

API_ROOT = "/api-nodes"


class _Resource:
    path = ""

    def __init__(self, client: ApiClient):
        self.client = client

    def _url(self, endpoint: str) -> str:
        return f"{API_ROOT}/{self.path}/{endpoint}"


class FinancialYearsResource(_Resource):
    path = "financial-years"

    def list(self) -> list[dict]:
        return self.client.get(self._url("list-financial-years.php"))

    def get(self, financial_year_id: int) -> dict:
        return self.client.get(self._url("get-financial-year.php"), params={"id": financial_year_id})

    def create(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("add-financial-year.php"), dict(data))

    def update(self, financial_year_id: int, data: Mapping[str, Any]) -> dict:
        return self.client.put(
            self._url("update-financial-year.php"), dict(data), params={"id": financial_year_id}
        )

    def delete(self, financial_year_id: int) -> Any:
        return self.client.delete(self._url("delete-financial-year.php"), params={"id": financial_year_id})

    def active(self) -> list[dict]:
        return self.client.get(self._url("get-active-years.php"))

    def set_active(self, financial_year_id: int) -> dict:
        return self.client.post(self._url("set-active-year.php"), params={"id": financial_year_id})

    def summary(self) -> dict:
        return self.client.get(self._url("get-summary.php"))


class CompanyAccountsResource(_Resource):
    path = "company-accounts"

    def list(
        self,
        company_id: Optional[int] = None,
        account_type: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> list[dict]:
        params = {
            "company_id": company_id,
            "account_type": account_type,
            "is_active": None if is_active is None else int(is_active),
        }
        return self.client.get(self._url("list-company-accounts.php"), params=params)

    def get(self, account_id: int) -> dict:
        return self.client.get(self._url("get-company-account.php"), params={"id": account_id})

    def by_type(self, company_id: int, account_type: str) -> list[dict]:
        return self.client.get(
            self._url("get-accounts-by-type.php"),
            params={"company_id": company_id, "account_type": account_type},
        )

    def summary(self, company_id: Optional[int] = None) -> dict:
        return self.client.get(self._url("accounts-summary.php"), params={"company_id": company_id})


class CostCategoriesResource(_Resource):
    path = "cost-categories"

    def list(self, active_only: bool = False) -> list[dict]:
        params = {"active_only": 1} if active_only else None
        return self.client.get(self._url("list-cost-categories.php"), params=params)

    def get(self, category_id: int) -> dict:
        return self.client.get(self._url("get-cost-category.php"), params={"id": category_id})

    def create(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("add-cost-category.php"), dict(data))

    def update(self, category_id: int, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("update-cost-category.php"), {"id": category_id, **data})

    def delete(self, category_id: int) -> Any:
        return self.client.get(self._url("delete-cost-category.php"), params={"id": category_id})

    def direct(self) -> list[dict]:
        return self.client.get(self._url("get-direct-categories.php"))

    def operational(self) -> list[dict]:
        return self.client.get(self._url("get-operational-categories.php"))


class MetricsResource(_Resource):
    path = "metrics"

    def list_groups(self) -> list[dict]:
        return self.client.get(self._url("list-metric-groups.php"))

    def add_group(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("add-metric-group.php"), dict(data))

    def update_group(self, group_id: int, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("update-metric-group.php"), {"id": group_id, **data})

    def delete_group(self, group_id: int) -> Any:
        return self.client.post(self._url("delete-metric-group.php"), {"id": group_id})

    def list_types(self, group_id: int) -> list[dict]:
        return self.client.get(self._url("list-metric-types.php"), params={"group_id": group_id})

    def add_type(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("add-metric-type.php"), dict(data))

    def delete_type(self, type_id: int) -> Any:
        return self.client.post(self._url("delete-metric-type.php"), {"id": type_id})

    def list_records(self, metric_type_id: int, company_id: int) -> list[dict]:
        return self.client.get(
            self._url("list-metric-records.php"),
            params={"metric_type_id": metric_type_id, "company_id": company_id},
        )

    def add_record(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("add-metric-record.php"), dict(data))

    def update_record(self, record_id: int, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("update-metric-record.php"), {"id": record_id, **data})

    def delete_record(self, record_id: int) -> Any:
        return self.client.post(self._url("delete-metric-record.php"), {"id": record_id})

    def full_metrics(self, company_id: int) -> list[dict]:
        return self.client.get(self._url("full-metrics.php"), params={"company_id": company_id})


class CostingStatsResource(_Resource):
    path = "company-costing-yearly-stats"

    def list(self, **filters) -> list[dict]:
        return self.client.get(self._url("list-company-costing-yearly-stats.php"), params=filters)

    def get(self, stats_id: int) -> dict:
        return self.client.get(
            self._url("get-company-costing-yearly-stats.php"), params={"id": stats_id}
        )

    def create(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("add-company-costing-yearly-stats.php"), dict(data))

    def update(self, stats_id: int, data: Mapping[str, Any]) -> dict:
        return self.client.post(
            self._url("update-company-costing-yearly-stats.php"), {"id": stats_id, **data}
        )

    def update_monthly_values(self, stats_id: int, months: Sequence) -> dict:
        payload = {"id": stats_id, "monthly_data": {f"m{i}": v for i, v in enumerate(months, start=1)}}
        return self.client.post(self._url("update-monthly-values.php"), payload)

    def upsert(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("upsert-company-costing.php"), dict(data))

    def delete(self, stats_id: int) -> Any:
        return self.client.get(
            self._url("delete-company-costing-yearly-stats.php"), params={"id": stats_id}
        )

    def summary(self, company_id: int, financial_year_id: int) -> dict:
        return self.client.get(
            self._url("get-company-costing-summary.php"),
            params={"company_id": company_id, "financial_year_id": financial_year_id},
        )

    def copy_to_new_year(self, company_id: int, from_year_id: int, to_year_id: int) -> Any:
        return self.client.post(
            self._url("copy-costing-to-new-year.php"),
            {"company_id": company_id, "from_year_id": from_year_id, "to_year_id": to_year_id},
        )

    def quarterly_costs(
        self, company_id: int, financial_year_id: Optional[int] = None, by_category: bool = False
    ) -> Any:
        params = {
            "company_id": company_id,
            "financial_year_id": financial_year_id,
            "by_category": "true" if by_category else None,
        }
        return self.client.get(self._url("get-quarterly-costs.php"), params=params)


class RevenueStatsResource(_Resource):
    path = "company-financial-yearly-stats"

    def list(self, **filters) -> list[dict]:
        return self.client.get(self._url("list-yearly-stats.php"), params=filters)

    def get(self, stats_id: int) -> dict:
        return self.client.get(self._url("get-yearly-stats.php"), params={"id": stats_id})

    def upsert(self, data: Mapping[str, Any]) -> dict:
        return self.client.post(self._url("upsert-yearly-stats.php"), dict(data))

    def delete(self, stats_id: int) -> Any:
        return self.client.get(self._url("delete-yearly-stats.php"), params={"id": stats_id})

    def yearly_totals(self, company_id: int, financial_year_id: int) -> dict:
        return self.client.get(
            self._url("get-yearly-totals.php"),
            params={"company_id": company_id, "financial_year_id": financial_year_id},
        )

    def quarterly_revenue(self, company_id: int, financial_year_id: Optional[int] = None) -> Any:
        return self.client.get(
            self._url("get-quarterly-revenue.php"),
            params={"company_id": company_id, "financial_year_id": financial_year_id},
        )


class IndustryReportsResource(_Resource):
    """Industry report endpoints answer with ``{"data": [...], "total": n}``."""

    path = "industry"

    def _rows(self, endpoint: str, params: Optional[dict] = None) -> list[dict]:
        payload = self.client.get(self._url(endpoint), params=params)
        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    def companies_per_industry(self) -> list[dict]:
        return self._rows("companies-per-industry.php")

    def financial_by_industry(self) -> list[dict]:
        return self._rows("financial-by-industry.php")

    def employment_by_industry(self) -> list[dict]:
        return self._rows("employment-by-industry.php")

    def top_industries(self, limit: int = 5) -> list[dict]:
        return self._rows("top-industries.php", params={"limit": limit})


class Backend:
    """All resource wrappers over one ApiClient."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.financial_years = FinancialYearsResource(client)
        self.company_accounts = CompanyAccountsResource(client)
        self.cost_categories = CostCategoriesResource(client)
        self.metrics = MetricsResource(client)
        self.costing_stats = CostingStatsResource(client)
        self.revenue_stats = RevenueStatsResource(client)
        self.industry_reports = IndustryReportsResource(client)
