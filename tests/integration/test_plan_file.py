"""Plan files: reading, writing and exporting calculation results."""

import csv
import json
from decimal import Decimal

import pytest

from ug_finanzplan.core.builder import PlanBuilder
from ug_finanzplan.core.config import AppConfig, save_config
from ug_finanzplan.core.exceptions import PlanFileError
from ug_finanzplan.core.finance import calculate_liquidity
from ug_finanzplan.core.models import InvestmentCategory, LegacyOperatingCosts, RevenueModel
from ug_finanzplan.data.plan_file import (
    export_months_csv,
    export_result_json,
    load_plan,
    plan_from_dict,
    plan_to_dict,
    save_plan,
)


class TestReadPlan:
    def test_sample_plan(self, plan_file):
        plan_input = load_plan(plan_file)
        assert plan_input.company.company_name == "Beispiel UG"
        assert plan_input.company.stammkapital == Decimal("1000")
        assert plan_input.plan.start_year == 2026
        assert plan_input.plan.starting_liquidity == Decimal("5000")
        assert plan_input.revenue.model == RevenueModel.FIXED
        assert plan_input.employees[0].is_geschaeftsfuehrer
        assert [c.amount for c in plan_input.operating_costs] == [Decimal("600"), Decimal("400")]
        assert plan_input.investments[0].category == InvestmentCategory.EQUIPMENT
        assert plan_input.loans[0].key == "bank"
        assert plan_input.loans[0].interest_rate == Decimal("0")

    def test_minimal_plan_uses_config_defaults(self):
        save_config(AppConfig(default_hebesatz=410, company_name="Konfig UG"))
        plan_input = plan_from_dict({"plan": {"startYear": 2026}})
        assert plan_input.company.hebesatz == 410
        assert plan_input.company.company_name == "Konfig UG"
        assert plan_input.revenue is None
        assert plan_input.operating_costs == []

    def test_wizard_revenue_months(self):
        plan_input = plan_from_dict({
            "plan": {"startYear": 2026},
            "revenue": {
                "revenueModel": "custom",
                "months": {"2026-01": {"unitPrice": 50, "unitsSold": 10, "total": 500}, "2026-02": 800},
            },
        })
        assert plan_input.revenue.months == {"2026-01": Decimal("500"), "2026-02": Decimal("800")}

    def test_legacy_categories(self):
        plan_input = plan_from_dict({
            "plan": {"startYear": 2026},
            "operatingCosts": {
                "categories": {"rent": 500, "telephoneInternet": 60, "chamberFees": 20},
                "monthlyOverrides": {"2026-03": {"softwareLicenses": 300}},
            },
        })
        costs = plan_input.operating_costs
        assert isinstance(costs, LegacyOperatingCosts)
        assert costs.telephone_internet == Decimal("60")
        assert costs.chamber_fees == Decimal("20")
        assert costs.monthly_overrides == {"2026-03": {"software_licenses": Decimal("300")}}

    def test_loaded_plan_calculates(self, plan_file):
        result = calculate_liquidity(load_plan(plan_file))
        # 5000 + 10000 − 4000 − 1000 − 1000 loan = 9000
        assert result.months["2026-01"].end_balance == Decimal("9000.00")
        assert result.months["2026-03"].investment_costs == Decimal("2000.00")


class TestInvalidPlans:
    def test_missing_start_year(self):
        with pytest.raises(PlanFileError, match="startYear"):
            plan_from_dict({"plan": {}})

    def test_bad_month_key(self):
        with pytest.raises(PlanFileError, match="startMonth"):
            plan_from_dict({
                "plan": {"startYear": 2026},
                "personnel": {"employees": [{"role": "GF", "monthlySalary": 3000, "startMonth": "01/2026"}]},
            })

    def test_bad_number(self):
        with pytest.raises(PlanFileError, match="amount"):
            plan_from_dict({
                "plan": {"startYear": 2026},
                "loans": {"loans": [{"amount": "viel", "termMonths": 12, "startMonth": "2026-01"}]},
            })

    def test_unknown_revenue_model(self):
        with pytest.raises(PlanFileError):
            plan_from_dict({"plan": {"startYear": 2026}, "revenue": {"revenueModel": "magic"}})

    def test_unknown_category(self):
        with pytest.raises(PlanFileError):
            plan_from_dict({"plan": {"startYear": 2026}, "operatingCosts": {"categories": {"yacht": 1}}})

    def test_missing_file(self, tmp_path):
        with pytest.raises(PlanFileError, match="not found"):
            load_plan(tmp_path / "missing.json")

    def test_not_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("plan: yes")
        with pytest.raises(PlanFileError):
            load_plan(path)

    def test_not_an_object(self):
        with pytest.raises(PlanFileError):
            plan_from_dict([1, 2, 3])


class TestWritePlan:
    def test_save_and_load(self, tmp_path):
        original = (
            PlanBuilder(start_year=2026, starting_liquidity=2500, name="Runde")
            .company("Runde UG", stammkapital=1000, hebesatz=410)
            .growth_revenue(1000, 8000)
            .add_employee("GF", 3000, "2026-01", is_geschaeftsfuehrer=True)
            .legacy_costs(rent=400, monthly_overrides={"2026-06": {"marketing": 1200}})
            .add_investment("Laptop", 1800, "2026-01", InvestmentCategory.EQUIPMENT)
            .add_loan("KfW", 25000, 0.045, 60, "2026-01", grace_period_months=6, provision_fee=100)
            .build()
        )
        path = tmp_path / "plan.json"
        save_plan(original, path)
        loaded = load_plan(path)

        assert calculate_liquidity(loaded) == calculate_liquidity(original)
        assert loaded.company == original.company
        assert loaded.loans[0].provision_fee == Decimal("100")

    def test_dict_uses_camel_case(self):
        data = plan_to_dict(PlanBuilder(2026).legacy_costs(office_supplies=30).build())
        assert data["plan"]["startYear"] == 2026
        assert data["operatingCosts"]["categories"]["officeSupplies"] == 30.0


class TestExport:
    def test_csv(self, plan_file, tmp_path):
        out = tmp_path / "out" / "months.csv"
        rows = export_months_csv(calculate_liquidity(load_plan(plan_file)), out)
        assert rows == 36
        with out.open(encoding="utf-8") as f:
            records = list(csv.DictReader(f))
        assert len(records) == 36
        assert records[0]["month"] == "2026-01"
        assert Decimal(records[0]["end_balance"]) == Decimal("9000.00")

    def test_json(self, plan_file, tmp_path):
        out = tmp_path / "result.json"
        export_result_json(calculate_liquidity(load_plan(plan_file)), out)
        data = json.loads(out.read_text())
        assert len(data["months"]) == 36
        assert data["months"]["2026-01"]["end_balance"] == "9000.00"
        assert set(data["yearSummaries"]) == {"2026", "2027", "2028"}
        assert data["yearSummaries"]["2026"]["year"] == 2026
