from __future__ import annotations

import math
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Tuple

from ..config import DEFAULT_LAYOUT, NOT_AVAILABLE


MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

CURRENCY_SYMBOLS = {"USD": "$"}

# leading decimal prefix, so "12.5kg" reads as 12.5
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")

_MAX_FRACTION = Decimal("0.001")
# wide enough for any finite float at three fraction digits
_WIDE = Context(prec=400)


def or_default(value: Optional[str], default: str = NOT_AVAILABLE) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text if text else default


def parse_amount(text: Optional[str]) -> float:
    """Parse decimal text; anything unparsable or non-finite is 0."""
    if text is None:
        return 0.0
    match = _NUMBER_PREFIX.match(str(text))
    if not match:
        return 0.0
    try:
        value = float(match.group(1))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def format_number(value: float) -> str:
    """Group thousands and keep at most three fraction digits: 1234.5 -> 1,234.5"""
    rounded = Decimal(repr(value)).quantize(_MAX_FRACTION, rounding=ROUND_HALF_UP, context=_WIDE)
    if rounded == 0:
        return "0"
    whole, _, fraction = f"{rounded:,.3f}".partition(".")
    fraction = fraction.rstrip("0")
    return f"{whole}.{fraction}" if fraction else whole


def currency_symbol(code: Optional[str]) -> str:
    code = (code or "").strip()
    return CURRENCY_SYMBOLS.get(code, code)


def format_currency(amount_text: Optional[str], currency_code: Optional[str]) -> str:
    return f"{currency_symbol(currency_code)}{format_number(parse_amount(amount_text))}"


def _leading_int(text: str) -> Optional[int]:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def split_period(
    token: Optional[str],
    fallback_year: int = DEFAULT_LAYOUT.fallback_year,
    fallback_month: int = DEFAULT_LAYOUT.fallback_month,
) -> Tuple[int, int]:
    """
    Split a "YYYY-MM" token into (year, month).

    Missing or non-numeric parts take the fallback values. A month outside
    1..12 rolls into the neighbouring year, so 2024-13 is January 2025.
    """
    parts = (token or "").split("-")
    year_text = parts[0] if parts else ""
    month_text = parts[1] if len(parts) > 1 else ""

    year = _leading_int(year_text) if year_text else None
    month = _leading_int(month_text) if month_text else None
    if year is None or year < 1:
        year = fallback_year
    if month is None:
        month = fallback_month

    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    if year < 1:
        return fallback_year, fallback_month
    return year, month


def format_period(
    token: Optional[str],
    fallback_year: int = DEFAULT_LAYOUT.fallback_year,
    fallback_month: int = DEFAULT_LAYOUT.fallback_month,
) -> str:
    year, month = split_period(token, fallback_year, fallback_month)
    return f"{MONTH_NAMES[month - 1]} {year}"


def humanize_designation(code: Optional[str]) -> str:
    if not code or not str(code).strip():
        return NOT_AVAILABLE
    return str(code).replace("_", " ").upper()


def truncated_id(value: Optional[str], length: int = DEFAULT_LAYOUT.id_prefix_len) -> str:
    return str(value or "")[:length].upper()


def format_payment_date(value: Optional[str]) -> str:
    """ISO date or datetime -> M/D/YYYY. Unrecognised text is shown as given."""
    text = (value or "").strip()
    if not text:
        return ""
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
