"""Data models for the UG financial plan.

Inputs (company facts, revenue, personnel, costs, investments, loans) and
engine outputs (monthly calculations, year summaries, report rows) are
frozen dataclasses. The engine never mutates a record it was handed; every
call produces fresh output records.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class RevenueModel(str, Enum):
    FIXED = "fixed"
    GROWTH = "growth"
    CUSTOM = "custom"


class InvestmentCategory(str, Enum):
    EQUIPMENT = "equipment"
    SOFTWARE = "software"
    FURNITURE = "furniture"
    VEHICLES = "vehicles"
    OTHER = "other"


#: Fixed buckets of the legacy operating-cost form, in display order.
LEGACY_COST_CATEGORIES: dict[str, str] = {
    "rent": "Miete",
    "telephone_internet": "Telefon & Internet",
    "travel_costs": "Fahrt-/Reisekosten",
    "insurance": "Versicherungen",
    "marketing": "Marketing",
    "software_licenses": "Software Lizenzen",
    "accounting": "Steuerberater",
    "office_supplies": "Bürobedarf",
    "chamber_fees": "IHK-Beiträge",
    "other": "Sonstiges",
}


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompanyFacts:
    company_name: str = ""
    stammkapital: Decimal = Decimal("1")  # UG minimum is €1
    hebesatz: int = 400  # Gewerbesteuer-Hebesatz in %, e.g. 410 for Berlin
    kontokorrent: Decimal = Decimal("0")  # overdraft limit, informational only
    founding_date: Optional[str] = None
    city: str = ""


@dataclass(frozen=True)
class PlanWindow:
    start_year: int
    starting_liquidity: Decimal = Decimal("0")
    name: str = ""


@dataclass(frozen=True)
class RevenuePlan:
    model: RevenueModel = RevenueModel.FIXED
    fixed_monthly_revenue: Decimal = Decimal("0")
    growth_start_revenue: Decimal = Decimal("0")  # month 1
    growth_end_revenue: Decimal = Decimal("0")    # month 36
    months: dict[str, Decimal] = field(default_factory=dict)  # "2026-01" -> amount


@dataclass(frozen=True)
class Employee:
    role: str
    monthly_salary: Decimal
    start_month: str
    end_month: Optional[str] = None
    is_geschaeftsfuehrer: bool = False
    id: str = ""

    def is_active(self, month: str) -> bool:
        """Active from start_month through end_month, both inclusive."""
        return self.start_month <= month and (
            not self.end_month or self.end_month >= month
        )


@dataclass(frozen=True)
class OperatingCostItem:
    name: str
    amount: Decimal  # per month
    description: str = ""
    id: str = ""


@dataclass(frozen=True)
class LegacyOperatingCosts:
    """Ten fixed monthly cost buckets with optional per-month overrides."""
    rent: Decimal = Decimal("0")
    telephone_internet: Decimal = Decimal("0")
    travel_costs: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    marketing: Decimal = Decimal("0")
    software_licenses: Decimal = Decimal("0")
    accounting: Decimal = Decimal("0")
    office_supplies: Decimal = Decimal("0")
    chamber_fees: Decimal = Decimal("0")
    other: Decimal = Decimal("0")
    # "2026-03" -> {"marketing": Decimal("900")} replaces that bucket for the month
    monthly_overrides: dict[str, dict[str, Decimal]] = field(default_factory=dict)


#: Operating costs arrive either as a list of named items or in the legacy
#: category shape; core.finance.liquidity.normalize_operating_costs folds
#: both into one list of named amounts.
OperatingCosts = Union[list[OperatingCostItem], LegacyOperatingCosts]


@dataclass(frozen=True)
class Investment:
    name: str
    amount: Decimal
    month: str
    category: InvestmentCategory = InvestmentCategory.OTHER
    id: str = ""


@dataclass(frozen=True)
class Loan:
    name: str
    amount: Decimal
    interest_rate: Decimal  # annual, as a fraction: 0.035 = 3.5%
    term_months: int
    start_month: str
    grace_period_months: int = 0  # tilgungsfreie Zeit
    provision_fee: Optional[Decimal] = None  # Bereitstellungsentgelt, charged once
    id: str = ""

    @property
    def key(self) -> str:
        """Identifier used in per-loan balance maps."""
        return self.id or self.name


@dataclass(frozen=True)
class LiquidityInput:
    company: CompanyFacts
    plan: PlanWindow
    revenue: Optional[RevenuePlan] = None
    employees: list[Employee] = field(default_factory=list)
    operating_costs: Optional[OperatingCosts] = None
    investments: list[Investment] = field(default_factory=list)
    loans: list[Loan] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Calculation results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaxResult:
    """Körperschaftsteuer, Soli and Gewerbesteuer on one taxable profit."""
    koerperschaftsteuer: Decimal = Decimal("0")    # 15%
    solidaritaetszuschlag: Decimal = Decimal("0")  # 5.5% of KSt
    gewerbesteuer: Decimal = Decimal("0")          # 3.5% × Hebesatz
    total_taxes: Decimal = Decimal("0")
    effective_tax_rate: Decimal = Decimal("0")     # percent of profit


@dataclass(frozen=True)
class VATResult:
    vat_collected: Decimal  # Umsatzsteuer on sales
    vat_paid: Decimal       # Vorsteuer on purchases
    vat_payable: Decimal    # Zahllast; negative means a refund
    net_revenue: Decimal
    gross_revenue: Decimal


@dataclass(frozen=True)
class AnnualVATResult:
    total_vat_collected: Decimal
    total_vat_paid: Decimal
    total_vat_payable: Decimal
    quarterly_payments: tuple[Decimal, Decimal, Decimal, Decimal]


@dataclass(frozen=True)
class LoanPayment:
    month: str
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    provision_fee: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanSchedule:
    payments: list[LoanPayment]
    total_interest: Decimal
    total_principal: Decimal
    total_provision_fees: Decimal


@dataclass(frozen=True)
class MonthlyLoanCosts:
    total_payment: Decimal = Decimal("0")
    total_principal: Decimal = Decimal("0")
    total_interest: Decimal = Decimal("0")
    total_provision_fees: Decimal = Decimal("0")
    remaining_balances: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyCalculation:
    month: str
    # Inflows
    revenue: Decimal
    other_income: Decimal
    total_inflows: Decimal
    # Outflows
    personnel_costs: Decimal
    operating_costs: Decimal
    investment_costs: Decimal
    loan_interest: Decimal
    loan_principal: Decimal
    loan_provision_fees: Decimal
    total_outflows: Decimal
    # Balance
    net_cashflow: Decimal
    start_balance: Decimal
    end_balance: Decimal
    # Prorated tax estimates (annualized year-to-date profit / 12)
    koerperschaftsteuer: Decimal
    solidaritaetszuschlag: Decimal
    gewerbesteuer: Decimal
    # Sum of all loans still outstanding after this month
    loan_remaining_balance: Decimal

    @property
    def year(self) -> int:
        return int(self.month[:4])


@dataclass(frozen=True)
class YearSummary:
    year: int
    total_revenue: Decimal
    total_costs: Decimal  # personnel + operating + investment + loan interest
    gross_profit: Decimal
    operating_profit: Decimal
    profit_before_tax: Decimal
    total_taxes: Decimal
    net_profit: Decimal
    end_liquidity: Decimal
    ug_reserve: Decimal
    stammkapital_end: Decimal  # capital incl. accumulated reserves after this year


@dataclass(frozen=True)
class LiquidityResult:
    months: dict[str, MonthlyCalculation]  # ordered "YYYY-MM" -> record
    year_summaries: dict[int, YearSummary]

    def months_of_year(self, year: int) -> list[MonthlyCalculation]:
        prefix = f"{year}-"
        return [m for key, m in self.months.items() if key.startswith(prefix)]


@dataclass(frozen=True)
class BWARow:
    label: str
    values: tuple[Decimal, Decimal, Decimal]
    percents: tuple[Decimal, Decimal, Decimal]

    @property
    def is_subtotal(self) -> bool:
        """Rows labelled "= ..." are subtotals and rendered emphasized."""
        return self.label.startswith("=")


@dataclass(frozen=True)
class BWAData:
    company_name: str
    years: tuple[int, int, int]
    rows: list[BWARow]


@dataclass(frozen=True)
class LiquidityPlanRow:
    label: str
    values: tuple[Decimal, ...]  # one per month of the year
    total: Decimal
    is_header: bool = False
    is_highlight: bool = False


@dataclass(frozen=True)
class LiquidityPlanYear:
    year: int
    opening_balance: Decimal
    total_revenue: Decimal
    total_costs: Decimal
    closing_balance: Decimal
    rows: list[LiquidityPlanRow]
