"""Plan files (JSON) and export of calculation results.

A plan file holds everything the planning wizard collects, in the same
camelCase layout the wizard exports:

    {
      "company":  {"companyName": "...", "stammkapital": 1000, "hebesatz": 410},
      "plan":     {"name": "...", "startYear": 2026, "startingLiquidity": 10000},
      "revenue":  {"revenueModel": "fixed", "fixedMonthlyRevenue": 8000, "months": {}},
      "personnel":      {"employees": [...]},
      "operatingCosts": {"items": [...]}   or   {"categories": {...}, "monthlyOverrides": {...}},
      "investments":    {"items": [...]},
      "loans":          {"loans": [...]}
    }

Numbers are read through str() into Decimal. Everything except
plan.startYear is optional; missing company values fall back to
config.json defaults.
"""

import csv
import json
import logging
from dataclasses import fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

from ..core.config import get_config
from ..core.exceptions import InvalidMonthKeyError, PlanFileError
from ..core.models import (
    LEGACY_COST_CATEGORIES,
    CompanyFacts,
    Employee,
    Investment,
    InvestmentCategory,
    LegacyOperatingCosts,
    LiquidityInput,
    LiquidityResult,
    Loan,
    MonthlyCalculation,
    OperatingCostItem,
    PlanWindow,
    RevenueModel,
    RevenuePlan,
)
from ..core.months import parse_month_key

logger = logging.getLogger(__name__)

# snake_case bucket name <-> camelCase key in plan files
_CATEGORY_KEYS: dict[str, str] = {
    name: name.split("_")[0] + "".join(p.title() for p in name.split("_")[1:])
    for name in LEGACY_COST_CATEGORIES
}
_CATEGORY_NAMES = {camel: snake for snake, camel in _CATEGORY_KEYS.items()}


def _dec(value: Any, where: str) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        raise PlanFileError(f"{where}: expected a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise PlanFileError(f"{where}: expected a number, got {value!r}") from exc


def _int(value: Any, where: str, default: Optional[int] = None) -> int:
    if value is None:
        if default is None:
            raise PlanFileError(f"{where} is required")
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise PlanFileError(f"{where}: expected an integer, got {value!r}") from exc


def _month(value: Any, where: str) -> str:
    try:
        parse_month_key(value)
    except InvalidMonthKeyError as exc:
        raise PlanFileError(f"{where}: {exc}") from exc
    return value


def _section(data: dict, key: str) -> dict:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise PlanFileError(f"'{key}' must be an object")
    return section


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _revenue_from_dict(data: dict) -> Optional[RevenuePlan]:
    if not data:
        return None
    try:
        model = RevenueModel(data.get("revenueModel", "fixed"))
    except ValueError as exc:
        raise PlanFileError(f"revenue.revenueModel: {exc}") from exc

    months: dict[str, Decimal] = {}
    for key, entry in (data.get("months") or {}).items():
        _month(key, "revenue.months")
        # wizard exports store {"unitPrice", "unitsSold", "total"} per month
        value = entry.get("total") if isinstance(entry, dict) else entry
        months[key] = _dec(value, f"revenue.months[{key}]")

    return RevenuePlan(
        model=model,
        fixed_monthly_revenue=_dec(data.get("fixedMonthlyRevenue"), "revenue.fixedMonthlyRevenue"),
        growth_start_revenue=_dec(data.get("growthStartRevenue"), "revenue.growthStartRevenue"),
        growth_end_revenue=_dec(data.get("growthEndRevenue"), "revenue.growthEndRevenue"),
        months=months,
    )


def _operating_costs_from_dict(data: dict):
    if "categories" in data:
        categories = data.get("categories") or {}
        values = {
            _CATEGORY_NAMES.get(key, key): _dec(value, f"operatingCosts.categories.{key}")
            for key, value in categories.items()
        }
        unknown = set(values) - set(LEGACY_COST_CATEGORIES)
        if unknown:
            raise PlanFileError(f"operatingCosts.categories: unknown categories {sorted(unknown)}")
        overrides = {
            _month(month, "operatingCosts.monthlyOverrides"): {
                _CATEGORY_NAMES.get(key, key): _dec(value, f"operatingCosts.monthlyOverrides[{month}]")
                for key, value in (entries or {}).items()
                if value is not None
            }
            for month, entries in (data.get("monthlyOverrides") or {}).items()
        }
        return LegacyOperatingCosts(**values, monthly_overrides=overrides)

    return [
        OperatingCostItem(
            name=item.get("name", ""),
            amount=_dec(item.get("amount"), f"operatingCosts.items[{i}].amount"),
            description=item.get("description", ""),
            id=str(item.get("id", "")),
        )
        for i, item in enumerate(data.get("items") or [])
    ]


def plan_from_dict(data: dict) -> LiquidityInput:
    """Build a LiquidityInput from the plan-file dict.

    Raises:
        PlanFileError: missing startYear, malformed numbers or month keys.
    """
    if not isinstance(data, dict):
        raise PlanFileError("Plan file must contain a JSON object")
    cfg = get_config()

    company_data = _section(data, "company")
    company = CompanyFacts(
        company_name=company_data.get("companyName", cfg.company_name),
        stammkapital=(
            _dec(company_data["stammkapital"], "company.stammkapital")
            if company_data.get("stammkapital") is not None
            else cfg.default_stammkapital
        ),
        hebesatz=_int(company_data.get("hebesatz"), "company.hebesatz", cfg.default_hebesatz),
        kontokorrent=_dec(company_data.get("kontokorrent"), "company.kontokorrent"),
        founding_date=company_data.get("foundingDate"),
        city=company_data.get("city", ""),
    )

    plan_data = _section(data, "plan")
    plan = PlanWindow(
        start_year=_int(plan_data.get("startYear"), "plan.startYear"),
        starting_liquidity=_dec(plan_data.get("startingLiquidity"), "plan.startingLiquidity"),
        name=plan_data.get("name", ""),
    )

    employees = [
        Employee(
            role=e.get("role", ""),
            monthly_salary=_dec(e.get("monthlySalary"), f"personnel.employees[{i}].monthlySalary"),
            start_month=_month(e.get("startMonth"), f"personnel.employees[{i}].startMonth"),
            end_month=(
                _month(e["endMonth"], f"personnel.employees[{i}].endMonth")
                if e.get("endMonth") else None
            ),
            is_geschaeftsfuehrer=bool(e.get("isGeschaeftsfuehrer", False)),
            id=str(e.get("id", "")),
        )
        for i, e in enumerate(_section(data, "personnel").get("employees") or [])
    ]

    investments = []
    for i, item in enumerate(_section(data, "investments").get("items") or []):
        try:
            category = InvestmentCategory(item.get("category", "other"))
        except ValueError as exc:
            raise PlanFileError(f"investments.items[{i}].category: {exc}") from exc
        investments.append(Investment(
            name=item.get("name", ""),
            amount=_dec(item.get("amount"), f"investments.items[{i}].amount"),
            month=_month(item.get("month"), f"investments.items[{i}].month"),
            category=category,
            id=str(item.get("id", "")),
        ))

    loans = [
        Loan(
            name=loan.get("name", ""),
            amount=_dec(loan.get("amount"), f"loans[{i}].amount"),
            interest_rate=_dec(loan.get("interestRate"), f"loans[{i}].interestRate"),
            term_months=_int(loan.get("termMonths"), f"loans[{i}].termMonths"),
            start_month=_month(loan.get("startMonth"), f"loans[{i}].startMonth"),
            grace_period_months=_int(loan.get("gracePeriodMonths"), f"loans[{i}].gracePeriodMonths", 0),
            provision_fee=(
                _dec(loan["provisionFee"], f"loans[{i}].provisionFee")
                if loan.get("provisionFee") is not None else None
            ),
            id=str(loan.get("id", "")),
        )
        for i, loan in enumerate(_section(data, "loans").get("loans") or [])
    ]

    return LiquidityInput(
        company=company,
        plan=plan,
        revenue=_revenue_from_dict(_section(data, "revenue")),
        employees=employees,
        operating_costs=_operating_costs_from_dict(_section(data, "operatingCosts")),
        investments=investments,
        loans=loans,
    )


def load_plan(path: Path) -> LiquidityInput:
    """Read a plan file.

    Raises:
        PlanFileError: file missing, not JSON, or invalid content.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PlanFileError(f"Plan file not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise PlanFileError(f"Cannot read plan file {path}: {exc}") from exc
    logger.debug("Loaded plan file %s", path)
    return plan_from_dict(data)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _num(value: Decimal) -> float:
    return float(value)


def plan_to_dict(plan_input: LiquidityInput) -> dict:
    """Inverse of plan_from_dict."""
    company = plan_input.company
    revenue = plan_input.revenue or RevenuePlan()
    costs = plan_input.operating_costs

    if isinstance(costs, LegacyOperatingCosts):
        costs_data: dict = {
            "categories": {
                _CATEGORY_KEYS[name]: _num(getattr(costs, name)) for name in LEGACY_COST_CATEGORIES
            },
            "monthlyOverrides": {
                month: {_CATEGORY_KEYS.get(k, k): _num(v) for k, v in overrides.items()}
                for month, overrides in costs.monthly_overrides.items()
            },
        }
    else:
        costs_data = {
            "items": [
                {"id": c.id, "name": c.name, "amount": _num(c.amount), "description": c.description}
                for c in costs or []
            ],
        }

    return {
        "company": {
            "companyName": company.company_name,
            "stammkapital": _num(company.stammkapital),
            "hebesatz": company.hebesatz,
            "kontokorrent": _num(company.kontokorrent),
            "foundingDate": company.founding_date,
            "city": company.city,
        },
        "plan": {
            "name": plan_input.plan.name,
            "startYear": plan_input.plan.start_year,
            "startingLiquidity": _num(plan_input.plan.starting_liquidity),
        },
        "revenue": {
            "revenueModel": revenue.model.value,
            "fixedMonthlyRevenue": _num(revenue.fixed_monthly_revenue),
            "growthStartRevenue": _num(revenue.growth_start_revenue),
            "growthEndRevenue": _num(revenue.growth_end_revenue),
            "months": {key: {"total": _num(value)} for key, value in revenue.months.items()},
        },
        "personnel": {
            "employees": [
                {
                    "id": e.id,
                    "role": e.role,
                    "monthlySalary": _num(e.monthly_salary),
                    "startMonth": e.start_month,
                    "endMonth": e.end_month,
                    "isGeschaeftsfuehrer": e.is_geschaeftsfuehrer,
                }
                for e in plan_input.employees
            ],
        },
        "operatingCosts": costs_data,
        "investments": {
            "items": [
                {
                    "id": i.id,
                    "name": i.name,
                    "amount": _num(i.amount),
                    "month": i.month,
                    "category": i.category.value,
                }
                for i in plan_input.investments
            ],
        },
        "loans": {
            "loans": [
                {
                    "id": loan.id,
                    "name": loan.name,
                    "amount": _num(loan.amount),
                    "interestRate": _num(loan.interest_rate),
                    "termMonths": loan.term_months,
                    "startMonth": loan.start_month,
                    "gracePeriodMonths": loan.grace_period_months,
                    "provisionFee": _num(loan.provision_fee) if loan.provision_fee is not None else None,
                }
                for loan in plan_input.loans
            ],
        },
    }


def save_plan(plan_input: LiquidityInput, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(plan_to_dict(plan_input), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def result_to_dict(result: LiquidityResult) -> dict:
    """JSON-ready dict of a liquidity result; amounts as strings to keep cents exact."""
    return {
        "months": {
            key: {f.name: str(getattr(m, f.name)) if f.name != "month" else m.month for f in fields(m)}
            for key, m in result.months.items()
        },
        "yearSummaries": {
            str(year): {f.name: str(getattr(s, f.name)) if f.name != "year" else s.year for f in fields(s)}
            for year, s in result.year_summaries.items()
        },
    }


def export_result_json(result: LiquidityResult, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(result_to_dict(result), indent=2), encoding="utf-8")


def export_months_csv(result: LiquidityResult, path: Path) -> int:
    """Write one CSV row per month. Returns the number of rows written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = [f.name for f in fields(MonthlyCalculation)]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        for m in result.months.values():
            writer.writerow({name: getattr(m, name) for name in columns})
    return len(result.months)
