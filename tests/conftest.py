"""Shared pytest fixtures for UG Finanzplan tests."""

import json

import pytest

from ug_finanzplan.core.config import set_config_path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Each test reads and writes its own config.json. Resets the cached config after."""
    path = tmp_path / "config.json"
    set_config_path(str(path))
    yield path
    set_config_path(None)


@pytest.fixture
def sample_plan_data():
    """A small but complete plan in the plan-file layout.

    Revenue €10,000/month, one Geschäftsführer at €4,000, €1,000 of
    operating costs, one laptop in March 2026 and a 12-month zero-interest
    loan of €12,000.
    """
    return {
        "company": {"companyName": "Beispiel UG", "stammkapital": 1000, "hebesatz": 400},
        "plan": {"name": "Testplan", "startYear": 2026, "startingLiquidity": 5000},
        "revenue": {"revenueModel": "fixed", "fixedMonthlyRevenue": 10000, "months": {}},
        "personnel": {
            "employees": [
                {
                    "id": "gf",
                    "role": "Geschäftsführer",
                    "monthlySalary": 4000,
                    "startMonth": "2026-01",
                    "isGeschaeftsfuehrer": True,
                },
            ],
        },
        "operatingCosts": {
            "items": [
                {"id": "rent", "name": "Miete", "amount": 600},
                {"id": "marketing", "name": "Marketing", "amount": 400},
            ],
        },
        "investments": {
            "items": [
                {"id": "laptop", "name": "Laptop", "amount": 2000, "month": "2026-03", "category": "equipment"},
            ],
        },
        "loans": {
            "loans": [
                {
                    "id": "bank",
                    "name": "Hausbank",
                    "amount": 12000,
                    "interestRate": 0,
                    "termMonths": 12,
                    "startMonth": "2026-01",
                },
            ],
        },
    }


@pytest.fixture
def plan_file(tmp_path, sample_plan_data):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(sample_plan_data), encoding="utf-8")
    return path
