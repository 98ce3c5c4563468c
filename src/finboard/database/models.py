"""SQLAlchemy models for finboard database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONTH_COLUMNS = tuple(f"m{i}" for i in range(1, 13))


def _now() -> datetime:
    return datetime.now(UTC)


class FinancialYear(Base):
    """Financial year model."""

    __tablename__ = "financial_years"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    start_month = Column(Integer, nullable=False)
    end_month = Column(Integer, nullable=False)
    fy_start_year = Column(Integer, nullable=False)
    fy_end_year = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (UniqueConstraint("fy_start_year", "fy_end_year", name="uq_fy_period"),)


class Industry(Base):
    """Industry model with optional parent sector."""

    __tablename__ = "industries"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    parent_id = Column(Integer, ForeignKey("industries.id"), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    parent = relationship("Industry", remote_side=[id], backref="children")
    companies = relationship("Company", back_populates="industry")


class Company(Base):
    """Company model."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    industry_id = Column(Integer, ForeignKey("industries.id"), nullable=True)
    turnover_actual = Column(Numeric(14, 2), nullable=True)
    permanent_employees = Column(Integer, default=0, nullable=False)
    temporary_employees = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    industry = relationship("Industry", back_populates="companies")
    accounts = relationship("CompanyAccount", back_populates="company", cascade="all, delete-orphan")


class CompanyAccount(Base):
    """Company account model."""

    __tablename__ = "company_accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    account_name = Column(String, nullable=False)
    account_type = Column(String, nullable=False, default="domestic_revenue")
    description = Column(String, nullable=True)
    account_number = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("company_id", "account_name", name="uq_company_account_name"),)

    company = relationship("Company", back_populates="accounts")


class CostCategory(Base):
    """Cost category model."""

    __tablename__ = "cost_categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    cost_type = Column(String, nullable=False, default="direct")
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


class MetricGroup(Base):
    """Metric group model."""

    __tablename__ = "metric_groups"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    show_total = Column(Boolean, default=True, nullable=False)
    show_margin = Column(Boolean, default=False, nullable=False)
    graph_color = Column(String, nullable=True)
    order_no = Column(Integer, default=0, nullable=False)

    types = relationship("MetricType", back_populates="group", cascade="all, delete-orphan")


class MetricType(Base):
    """Metric type model."""

    __tablename__ = "metric_types"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("metric_groups.id"), nullable=False)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    unit = Column(String, default="ZAR", nullable=False)
    show_total = Column(Boolean, default=True, nullable=False)
    show_margin = Column(Boolean, default=False, nullable=False)
    graph_color = Column(String, nullable=True)
    period_type = Column(String, default="QUARTERLY", nullable=False)

    group = relationship("MetricGroup", back_populates="types")
    records = relationship("MetricRecord", back_populates="metric_type", cascade="all, delete-orphan")


class MetricRecord(Base):
    """Metric record model."""

    __tablename__ = "metric_records"

    id = Column(Integer, primary_key=True)
    metric_type_id = Column(Integer, ForeignKey("metric_types.id"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    year = Column(Integer, nullable=False)
    q1 = Column(Numeric(14, 2), nullable=True)
    q2 = Column(Numeric(14, 2), nullable=True)
    q3 = Column(Numeric(14, 2), nullable=True)
    q4 = Column(Numeric(14, 2), nullable=True)
    total = Column(Numeric(14, 2), nullable=True)
    margin_pct = Column(Numeric(7, 2), nullable=True)
    notes = Column(String, nullable=True)
    unit = Column(String, default="ZAR", nullable=False)

    __table_args__ = (
        UniqueConstraint("metric_type_id", "company_id", "year", name="uq_metric_record_year"),
    )

    metric_type = relationship("MetricType", back_populates="records")


class _MonthlyValues:
    """Twelve monthly columns plus a maintained total."""

    m1 = Column(Numeric(14, 2), default=0, nullable=False)
    m2 = Column(Numeric(14, 2), default=0, nullable=False)
    m3 = Column(Numeric(14, 2), default=0, nullable=False)
    m4 = Column(Numeric(14, 2), default=0, nullable=False)
    m5 = Column(Numeric(14, 2), default=0, nullable=False)
    m6 = Column(Numeric(14, 2), default=0, nullable=False)
    m7 = Column(Numeric(14, 2), default=0, nullable=False)
    m8 = Column(Numeric(14, 2), default=0, nullable=False)
    m9 = Column(Numeric(14, 2), default=0, nullable=False)
    m10 = Column(Numeric(14, 2), default=0, nullable=False)
    m11 = Column(Numeric(14, 2), default=0, nullable=False)
    m12 = Column(Numeric(14, 2), default=0, nullable=False)
    total_amount = Column(Numeric(16, 2), default=0, nullable=False)


class RevenueYearlyStats(_MonthlyValues, Base):
    """Company financial (revenue) yearly stats model."""

    __tablename__ = "company_financial_yearly_stats"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("company_accounts.id"), nullable=True)
    financial_year_id = Column(Integer, ForeignKey("financial_years.id"), nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "account_id", "financial_year_id", name="uq_revenue_stats"),
    )


class CostingYearlyStats(_MonthlyValues, Base):
    """Company costing yearly stats model."""

    __tablename__ = "company_costing_yearly_stats"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    financial_year_id = Column(Integer, ForeignKey("financial_years.id"), nullable=False)
    cost_type = Column(String, nullable=False, default="direct")
    category_id = Column(Integer, ForeignKey("cost_categories.id"), nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "company_id", "financial_year_id", "cost_type", "category_id", name="uq_costing_stats"
        ),
    )

    category = relationship("CostCategory")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Enforce foreign keys on SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Auto-save timers write through the shared session from their own threads
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
