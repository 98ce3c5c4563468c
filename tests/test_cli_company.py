"""Tests for company and industry commands."""


def test_industry_create_and_list(invoke):
    assert invoke("industry", "create", "Manufacturing").exit_code == 0
    result = invoke("industry", "create", "Food Processing", "--parent", "Manufacturing")
    assert result.exit_code == 0
    assert "Created industry 'Food Processing'" in result.output

    result = invoke("industry", "list")
    assert "Food Processing (in Manufacturing)" in result.output


def test_industry_create_unknown_parent(invoke):
    result = invoke("industry", "create", "Bakeries", "--parent", "Food")

    assert result.exit_code == 1
    assert "Industry 'Food' not found" in result.output


def test_company_create_and_show(invoke):
    invoke("industry", "create", "Retail")
    result = invoke(
        "company",
        "create",
        "Corner Shop",
        "--industry",
        "Retail",
        "--turnover",
        "R 1 250 000",
        "--permanent",
        "4",
        "--temporary",
        "1",
    )
    assert result.exit_code == 0
    assert "Created company 'Corner Shop'" in result.output

    result = invoke("company", "show", "Corner Shop")
    assert result.exit_code == 0
    assert "Industry:  Retail" in result.output
    assert "Turnover:  R 1,250,000.00" in result.output
    assert "4 permanent, 1 temporary" in result.output


def test_company_create_duplicate(invoke, sample_company):
    result = invoke("company", "create", "Acme Manufacturing")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_company_list(invoke, sample_company):
    result = invoke("company", "list")

    assert result.exit_code == 0
    assert "Acme Manufacturing" in result.output


def test_industry_reports(invoke, industry_service, company_service):
    retail = industry_service.create_industry("Retail")
    company_service.create_company(name="Shop", industry_id=retail, permanent_employees=3)

    result = invoke("industry", "report", "companies")
    assert result.exit_code == 0
    assert "Retail" in result.output

    result = invoke("industry", "report", "employment")
    assert "3 permanent" in result.output

    result = invoke("industry", "report", "top")
    assert "1. Retail (1)" in result.output

    result = invoke("industry", "report", "financial")
    assert result.exit_code == 0
