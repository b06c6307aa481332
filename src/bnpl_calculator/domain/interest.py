"""Tiered interest rate table.

Rates are percentages keyed by balance tier and tenure bucket. The tier is
taken from the financed balance after charges have been applied.
"""

from __future__ import annotations

from decimal import Decimal


TIER_THRESHOLDS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("1000000"), "D"),
    (Decimal("500000"), "C"),
    (Decimal("200000"), "B"),
)
BASE_TIER = "A"

RATE_TABLE: dict[str, dict[int, Decimal]] = {
    "A": {3: Decimal("12"), 4: Decimal("12"), 6: Decimal("11"), 9: Decimal("10"), 12: Decimal("9.5")},
    "B": {3: Decimal("11.5"), 4: Decimal("11.5"), 6: Decimal("10.5"), 9: Decimal("9.5"), 12: Decimal("9")},
    "C": {3: Decimal("11"), 4: Decimal("11"), 6: Decimal("10"), 9: Decimal("9"), 12: Decimal("8.5")},
    "D": {3: Decimal("10"), 4: Decimal("10"), 6: Decimal("9"), 9: Decimal("8"), 12: Decimal("7.5")},
}


def tenure_bucket(tenure: Decimal | int) -> int:
    """
    Map a tenure in months to the column of the rate table.

    <=3 -> 3, 4 -> 4, (4, 6] -> 6, (6, 9] -> 9, >9 -> 12
    """
    if tenure <= 3:
        return 3
    if tenure == 4:
        return 4
    if tenure <= 6:
        return 6
    if tenure <= 9:
        return 9
    return 12


def balance_tier(financed_balance: Decimal) -> str:
    for floor, tier in TIER_THRESHOLDS:
        if financed_balance >= floor:
            return tier
    return BASE_TIER
