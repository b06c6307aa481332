"""Text helpers for the loan form.

Parsing and display of amounts typed with thousands separators. None of
these functions raise on bad input: parsing yields NaN (rejected later by
validation) and formatting falls back to a zero amount.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from bnpl_calculator.config import DEFAULT_CURRENCY_SYMBOL

_PLAIN_NUMBER = re.compile(r"^-?\d*(\.\d+)?$")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def parse_amount(text: str | None) -> Decimal:
    """
    Convert user text such as " 1,250,000.50 " to a Decimal.

    Returns:
        Decimal("NaN") for empty or unparsable text
    """
    if text is None:
        return Decimal("NaN")

    cleaned = text.replace(",", "").strip()
    if not cleaned:
        return Decimal("NaN")

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal("NaN")


def group_thousands(text: str) -> str:
    """
    Re-group digits with commas while the user types, keeping the decimal part.

    Text that is not a plain number is returned unchanged.
    """
    trimmed = text.strip().replace(",", "")
    if trimmed == "":
        return ""
    if not _PLAIN_NUMBER.match(trimmed):
        return text

    int_part, _, frac_part = trimmed.partition(".")
    with_commas = _THOUSANDS.sub(",", int_part)
    return f"{with_commas}.{frac_part}" if frac_part else with_commas


def format_currency(
    amount: Decimal | int | float | None,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """
    Render an amount for display, e.g. -1234.5 -> "-₦1,234.50".

    Whole amounts drop the cents ("₦64,000"). Non-finite values and None
    render as a zero amount.
    """
    if amount is None:
        return f"{symbol}0"

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        return f"{symbol}0"

    if not value.is_finite():
        return f"{symbol}0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    if value == value.to_integral_value():
        body = f"{value:,.0f}"
    else:
        body = f"{value:,.2f}"
    return f"{sign}{symbol}{body}"
