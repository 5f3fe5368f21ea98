from __future__ import annotations

import pytest

from payslip.pipeline.formatting import (
    format_currency,
    format_number,
    format_payment_date,
    format_period,
    humanize_designation,
    parse_amount,
    split_period,
    truncated_id,
)


@pytest.mark.parametrize(
    "amount, currency, expected",
    [
        ("5000", "USD", "$5,000"),
        ("1234567.891", "USD", "$1,234,567.891"),
        ("1234.5", "USD", "$1,234.5"),
        ("0", "USD", "$0"),
        ("5000", "EUR", "EUR5,000"),
        ("-250", "USD", "$-250"),
    ],
)
def test_format_currency(amount: str, currency: str, expected: str) -> None:
    assert format_currency(amount, currency) == expected


@pytest.mark.parametrize("bad", ["abc", "", None, "NaN", "Infinity", "--5"])
def test_malformed_amount_renders_zero(bad) -> None:
    assert parse_amount(bad) == 0.0
    assert format_currency(bad, "USD") == "$0"


def test_amount_reads_leading_number() -> None:
    assert parse_amount("12.5kg") == 12.5
    assert parse_amount(" 7 ") == 7.0


def test_format_number_rounds_to_three_places() -> None:
    assert format_number(1234.5678) == "1,234.568"
    assert format_number(0.0004) == "0"
    assert format_number(-0.0) == "0"
    assert format_number(1e21) == "1,000,000,000,000,000,000,000"


def test_format_period() -> None:
    assert format_period("2024-03") == "March 2024"
    assert format_period("2023-12") == "December 2023"


@pytest.mark.parametrize("token", ["", None, "abcd-ef", "-"])
def test_malformed_period_falls_back(token) -> None:
    assert split_period(token) == (2024, 1)
    assert format_period(token) == "January 2024"


def test_period_partial_tokens() -> None:
    assert split_period("2025") == (2025, 1)
    assert split_period("2025-xx") == (2025, 1)
    assert split_period("2024-13") == (2025, 1)
    assert split_period("2024-00") == (2023, 12)
    assert split_period("", fallback_year=2030, fallback_month=7) == (2030, 7)


def test_humanize_designation() -> None:
    assert humanize_designation("software_engineer") == "SOFTWARE ENGINEER"
    assert humanize_designation("hr") == "HR"
    assert humanize_designation(None) == "N/A"
    assert humanize_designation("  ") == "N/A"


def test_truncated_id() -> None:
    assert truncated_id("a1b2c3d4-0000-4000") == "A1B2C3D4"
    assert truncated_id("abc") == "ABC"
    assert truncated_id(None) == ""


def test_format_payment_date() -> None:
    assert format_payment_date("2024-06-30") == "6/30/2024"
    assert format_payment_date("2024-07-01T09:30:00Z") == "7/1/2024"
    assert format_payment_date("next friday") == "next friday"
    assert format_payment_date(None) == ""
