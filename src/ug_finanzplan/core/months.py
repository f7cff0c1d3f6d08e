"""Month keys in the fixed-width "YYYY-MM" format.

Keys are zero-padded, so plain string comparison orders them
chronologically ("2025-09" < "2025-10"). The engine relies on that for
employee activity, loan start and investment posting checks.
"""

import re

from .exceptions import InvalidMonthKeyError

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")

#: Length of every plan: 3 calendar years.
PLAN_YEARS = 3
PLAN_MONTHS = PLAN_YEARS * 12


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    """Split "2026-03" into (2026, 3).

    Raises:
        InvalidMonthKeyError: key is not "YYYY-MM" with a month in 1..12.
    """
    match = _MONTH_KEY.match(key) if isinstance(key, str) else None
    if not match:
        raise InvalidMonthKeyError(f"Invalid month key {key!r}, expected 'YYYY-MM'")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthKeyError(f"Invalid month {month} in key {key!r}")
    return year, month


def add_months(key: str, count: int) -> str:
    """Shift a month key by `count` months (negative counts go back)."""
    year, month = parse_month_key(key)
    index = year * 12 + (month - 1) + count
    return month_key(index // 12, index % 12 + 1)


def generate_month_keys(start_year: int, num_years: int = PLAN_YEARS) -> list[str]:
    """All month keys from January of start_year, num_years long."""
    return [
        month_key(year, month)
        for year in range(start_year, start_year + num_years)
        for month in range(1, 13)
    ]
