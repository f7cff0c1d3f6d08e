"""Tests for core.builder.PlanBuilder."""

from decimal import Decimal

import pytest

from ug_finanzplan.core.builder import DEFAULT_EXPENSE_ITEMS, PlanBuilder
from ug_finanzplan.core.config import AppConfig, save_config
from ug_finanzplan.core.exceptions import InvalidMonthKeyError
from ug_finanzplan.core.models import (
    InvestmentCategory,
    LegacyOperatingCosts,
    RevenueModel,
)


class TestDefaults:
    def test_company_defaults_from_config(self):
        save_config(AppConfig(default_hebesatz=410, default_stammkapital=Decimal("500"), company_name="Konfig UG"))
        plan_input = PlanBuilder(start_year=2026).build()
        assert plan_input.company.hebesatz == 410
        assert plan_input.company.stammkapital == Decimal("500")
        assert plan_input.company.company_name == "Konfig UG"

    def test_empty_plan(self):
        plan_input = PlanBuilder(start_year=2027, starting_liquidity=1000, name="Plan A").build()
        assert plan_input.plan.start_year == 2027
        assert plan_input.plan.starting_liquidity == Decimal("1000")
        assert plan_input.plan.name == "Plan A"
        assert plan_input.revenue is None
        assert plan_input.employees == []
        assert plan_input.operating_costs == []
        assert plan_input.loans == []

    def test_company_keeps_unset_values(self):
        plan_input = PlanBuilder(start_year=2026).company("Neu UG", city="Berlin").build()
        assert plan_input.company.company_name == "Neu UG"
        assert plan_input.company.hebesatz == 400
        assert plan_input.company.stammkapital == Decimal("1")
        assert plan_input.company.city == "Berlin"


class TestSteps:
    def test_revenue_models(self):
        assert PlanBuilder(2026).fixed_revenue(5000).build().revenue.model == RevenueModel.FIXED
        growth = PlanBuilder(2026).growth_revenue(1000, 9000).build().revenue
        assert growth.model == RevenueModel.GROWTH
        assert growth.growth_end_revenue == Decimal("9000")
        custom = PlanBuilder(2026).custom_revenue({"2026-05": 700}).build().revenue
        assert custom.model == RevenueModel.CUSTOM
        assert custom.months == {"2026-05": Decimal("700")}

    def test_custom_revenue_validates_keys(self):
        with pytest.raises(InvalidMonthKeyError):
            PlanBuilder(2026).custom_revenue({"Mai 2026": 700})

    def test_employee_ids(self):
        plan_input = (
            PlanBuilder(2026)
            .add_employee("GF", 3000, "2026-01", is_geschaeftsfuehrer=True)
            .add_employee("Dev", 4500, "2026-07", end_month="2027-06")
            .build()
        )
        assert [e.id for e in plan_input.employees] == ["employee-1", "employee-2"]
        assert plan_input.employees[0].is_geschaeftsfuehrer
        assert plan_input.employees[1].end_month == "2027-06"

    def test_employee_validates_month(self):
        with pytest.raises(InvalidMonthKeyError):
            PlanBuilder(2026).add_employee("Dev", 4500, "2026-13")

    def test_default_cost_items(self):
        items = PlanBuilder(2026).with_default_cost_items().build().operating_costs
        assert len(items) == len(DEFAULT_EXPENSE_ITEMS) == 7
        assert sum(i.amount for i in items) == Decimal("900")
        assert items[0].id == "rent"

    def test_legacy_costs_replace_items(self):
        plan_input = (
            PlanBuilder(2026)
            .add_cost_item("Miete", 300)
            .legacy_costs(rent=400, accounting=150)
            .build()
        )
        costs = plan_input.operating_costs
        assert isinstance(costs, LegacyOperatingCosts)
        assert costs.rent == Decimal("400")
        assert costs.accounting == Decimal("150")
        assert costs.marketing == Decimal("0")

    def test_legacy_costs_reject_unknown_category(self):
        with pytest.raises(TypeError):
            PlanBuilder(2026).legacy_costs(yacht=1000)

    def test_investment_and_loan(self):
        plan_input = (
            PlanBuilder(2026)
            .add_investment("Transporter", 25000, "2026-04", InvestmentCategory.VEHICLES)
            .add_loan("KfW", 50000, 0.045, 60, "2026-01", grace_period_months=6, provision_fee=200)
            .build()
        )
        investment = plan_input.investments[0]
        assert investment.category == InvestmentCategory.VEHICLES
        assert investment.id == "investment-1"
        loan = plan_input.loans[0]
        assert loan.interest_rate == Decimal("0.045")
        assert loan.grace_period_months == 6
        assert loan.provision_fee == Decimal("200")
        assert loan.key == "loan-1"

    def test_build_returns_independent_lists(self):
        builder = PlanBuilder(2026).add_employee("GF", 3000, "2026-01")
        first = builder.build()
        builder.add_employee("Dev", 4000, "2026-02")
        assert len(first.employees) == 1
        assert len(builder.build().employees) == 2
