"""PlanBuilder — assembles a complete LiquidityInput step by step.

Mirrors the planning wizard: company → revenue → personnel → operating
costs → investments → loans. Each step records plain values; build()
returns one immutable LiquidityInput for calculate_liquidity.

    plan_input = (
        PlanBuilder(start_year=2026, starting_liquidity=10000)
        .company("Beispiel UG", stammkapital=1000, hebesatz=410)
        .fixed_revenue(8000)
        .add_employee("Geschäftsführer", 3000, "2026-01", is_geschaeftsfuehrer=True)
        .with_default_cost_items()
        .add_loan("KfW Startgeld", 50000, 0.045, 60, "2026-01", grace_period_months=6)
        .build()
    )
"""

from typing import Optional

from .config import get_config
from .models import (
    CompanyFacts,
    Employee,
    Investment,
    InvestmentCategory,
    LegacyOperatingCosts,
    LiquidityInput,
    Loan,
    OperatingCostItem,
    PlanWindow,
    RevenueModel,
    RevenuePlan,
)
from .money import to_decimal
from .months import parse_month_key

#: Starting cost positions of a new plan (per month).
DEFAULT_EXPENSE_ITEMS: list[tuple[str, str, int, str]] = [
    # id, name, amount, description
    ("rent", "Miete", 200, "Büro, Coworking, Lager"),
    ("telephoneInternet", "Telefon & Internet", 50, "Festnetz, Mobil, DSL"),
    ("travelCosts", "Fahrt-/Reisekosten", 150, "PKW, Benzin, Leasing"),
    ("insurance", "Versicherungen", 50, "Betriebshaftpflicht, etc."),
    ("marketing", "Marketing", 200, "Web, Social Media, Werbung"),
    ("softwareLicenses", "Software Lizenzen", 100, "Zoom, Microsoft, SaaS"),
    ("accounting", "Steuerberater", 150, "Buchhaltung, DATEV"),
]


class PlanBuilder:
    def __init__(self, start_year: int, starting_liquidity=0, name: str = ""):
        cfg = get_config()
        self._plan = PlanWindow(
            start_year=start_year,
            starting_liquidity=to_decimal(starting_liquidity),
            name=name,
        )
        self._company = CompanyFacts(
            company_name=cfg.company_name,
            stammkapital=cfg.default_stammkapital,
            hebesatz=cfg.default_hebesatz,
        )
        self._revenue: Optional[RevenuePlan] = None
        self._employees: list[Employee] = []
        self._cost_items: list[OperatingCostItem] = []
        self._legacy_costs: Optional[LegacyOperatingCosts] = None
        self._investments: list[Investment] = []
        self._loans: list[Loan] = []

    # -- Step 1: company ---------------------------------------------------

    def company(
        self,
        company_name: str,
        stammkapital=None,
        hebesatz: Optional[int] = None,
        kontokorrent=0,
        founding_date: Optional[str] = None,
        city: str = "",
    ) -> "PlanBuilder":
        self._company = CompanyFacts(
            company_name=company_name,
            stammkapital=(
                to_decimal(stammkapital) if stammkapital is not None
                else self._company.stammkapital
            ),
            hebesatz=int(hebesatz) if hebesatz is not None else self._company.hebesatz,
            kontokorrent=to_decimal(kontokorrent),
            founding_date=founding_date,
            city=city,
        )
        return self

    # -- Step 2: revenue ---------------------------------------------------

    def fixed_revenue(self, monthly_amount) -> "PlanBuilder":
        self._revenue = RevenuePlan(
            model=RevenueModel.FIXED,
            fixed_monthly_revenue=to_decimal(monthly_amount),
        )
        return self

    def growth_revenue(self, start_amount, end_amount) -> "PlanBuilder":
        self._revenue = RevenuePlan(
            model=RevenueModel.GROWTH,
            growth_start_revenue=to_decimal(start_amount),
            growth_end_revenue=to_decimal(end_amount),
        )
        return self

    def custom_revenue(self, months: dict) -> "PlanBuilder":
        for key in months:
            parse_month_key(key)
        self._revenue = RevenuePlan(
            model=RevenueModel.CUSTOM,
            months={key: to_decimal(value) for key, value in months.items()},
        )
        return self

    # -- Step 3: personnel -------------------------------------------------

    def add_employee(
        self,
        role: str,
        monthly_salary,
        start_month: str,
        end_month: Optional[str] = None,
        is_geschaeftsfuehrer: bool = False,
    ) -> "PlanBuilder":
        parse_month_key(start_month)
        if end_month:
            parse_month_key(end_month)
        self._employees.append(Employee(
            role=role,
            monthly_salary=to_decimal(monthly_salary),
            start_month=start_month,
            end_month=end_month,
            is_geschaeftsfuehrer=is_geschaeftsfuehrer,
            id=f"employee-{len(self._employees) + 1}",
        ))
        return self

    # -- Step 4: operating costs -------------------------------------------

    def add_cost_item(self, name: str, amount, description: str = "", id: str = "") -> "PlanBuilder":
        self._legacy_costs = None
        self._cost_items.append(OperatingCostItem(
            name=name,
            amount=to_decimal(amount),
            description=description,
            id=id or f"cost-{len(self._cost_items) + 1}",
        ))
        return self

    def with_default_cost_items(self) -> "PlanBuilder":
        for item_id, name, amount, description in DEFAULT_EXPENSE_ITEMS:
            self.add_cost_item(name, amount, description, id=item_id)
        return self

    def legacy_costs(self, monthly_overrides: Optional[dict] = None, **categories) -> "PlanBuilder":
        """Use the ten-bucket cost form instead of cost items."""
        self._cost_items = []
        self._legacy_costs = LegacyOperatingCosts(
            **{name: to_decimal(value) for name, value in categories.items()},
            monthly_overrides={
                month: {k: to_decimal(v) for k, v in overrides.items()}
                for month, overrides in (monthly_overrides or {}).items()
            },
        )
        return self

    # -- Step 5: investments -----------------------------------------------

    def add_investment(
        self,
        name: str,
        amount,
        month: str,
        category: InvestmentCategory = InvestmentCategory.OTHER,
    ) -> "PlanBuilder":
        parse_month_key(month)
        self._investments.append(Investment(
            name=name,
            amount=to_decimal(amount),
            month=month,
            category=InvestmentCategory(category),
            id=f"investment-{len(self._investments) + 1}",
        ))
        return self

    # -- Step 6: loans -----------------------------------------------------

    def add_loan(
        self,
        name: str,
        amount,
        interest_rate,
        term_months: int,
        start_month: str,
        grace_period_months: int = 0,
        provision_fee=None,
    ) -> "PlanBuilder":
        parse_month_key(start_month)
        self._loans.append(Loan(
            name=name,
            amount=to_decimal(amount),
            interest_rate=to_decimal(interest_rate),
            term_months=int(term_months),
            start_month=start_month,
            grace_period_months=int(grace_period_months),
            provision_fee=to_decimal(provision_fee) if provision_fee is not None else None,
            id=f"loan-{len(self._loans) + 1}",
        ))
        return self

    # -- Review ------------------------------------------------------------

    def build(self) -> LiquidityInput:
        operating_costs = self._legacy_costs if self._legacy_costs is not None else list(self._cost_items)
        return LiquidityInput(
            company=self._company,
            plan=self._plan,
            revenue=self._revenue,
            employees=list(self._employees),
            operating_costs=operating_costs,
            investments=list(self._investments),
            loans=list(self._loans),
        )
