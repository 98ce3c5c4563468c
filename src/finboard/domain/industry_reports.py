"""Industry-level reports over companies."""

from finboard.database.base import Database
from finboard.domain.aggregation import ZERO, round_money


class IndustryReportService:
    """Aggregates company counts, turnover and headcount per industry."""

    def __init__(self, db: Database):
        self.db = db

    def _companies_by_industry(self):
        industries = self.db.list_industries()
        companies = self.db.list_companies()
        grouped = {industry.id: [] for industry in industries}
        for company in companies:
            if company.industry_id in grouped:
                grouped[company.industry_id].append(company)
        return industries, grouped

    def companies_per_industry(self) -> list[dict]:
        """Company count per industry with its parent sector, most companies first."""
        industries, grouped = self._companies_by_industry()
        names = {industry.id: industry.name for industry in industries}
        rows = [
            {
                "industry_id": industry.id,
                "industry": industry.name,
                "parent_industry": names.get(industry.parent_id),
                "total_companies": len(grouped[industry.id]),
            }
            for industry in industries
        ]
        return sorted(rows, key=lambda r: (-r["total_companies"], r["industry"]))

    def financial_by_industry(self) -> list[dict]:
        """Average and total reported turnover per industry, highest total first.

        Companies without a reported turnover are counted but do not affect
        the average.
        """
        industries, grouped = self._companies_by_industry()
        rows = []
        for industry in industries:
            companies = grouped[industry.id]
            turnovers = [c.turnover_actual for c in companies if c.turnover_actual is not None]
            total = sum(turnovers, ZERO)
            average = round_money(total / len(turnovers)) if turnovers else None
            rows.append(
                {
                    "industry_id": industry.id,
                    "industry": industry.name,
                    "avg_turnover": average,
                    "total_turnover": round_money(total),
                    "total_companies": len(companies),
                }
            )
        return sorted(rows, key=lambda r: (-r["total_turnover"], r["industry"]))

    def employment_by_industry(self) -> list[dict]:
        """Permanent, temporary and total headcount per industry, largest first."""
        industries, grouped = self._companies_by_industry()
        rows = []
        for industry in industries:
            companies = grouped[industry.id]
            permanent = sum(c.permanent_employees for c in companies)
            temporary = sum(c.temporary_employees for c in companies)
            rows.append(
                {
                    "industry_id": industry.id,
                    "industry": industry.name,
                    "permanent": permanent,
                    "temporary": temporary,
                    "total_employees": permanent + temporary,
                }
            )
        return sorted(rows, key=lambda r: (-r["total_employees"], r["industry"]))

    def top_industries(self, limit: int = 5) -> list[dict]:
        """Industries with the most companies."""
        if limit < 1:
            return []
        return [
            {"industry_id": r["industry_id"], "industry": r["industry"], "total": r["total_companies"]}
            for r in self.companies_per_industry()
            if r["total_companies"] > 0
        ][:limit]

