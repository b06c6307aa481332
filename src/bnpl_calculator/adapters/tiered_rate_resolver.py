from __future__ import annotations

from decimal import Decimal

from bnpl_calculator.domain.interest import RATE_TABLE, balance_tier, tenure_bucket
from bnpl_calculator.domain.loan import LoanInputs
from bnpl_calculator.ports.interest_rate_resolver import InterestRateResolver, RateQuote


class TieredRateResolver(InterestRateResolver):
    """
    Rate looked up from the tier table.

    - Tier comes from the financed balance (A < 200k <= B < 500k <= C < 1M <= D)
    - Column comes from the tenure bucket (3, 4, 6, 9, 12)
    - The tenure itself is not clamped; only the lookup is bucketed
    """

    def __init__(self, rate_table: dict[str, dict[int, Decimal]] = RATE_TABLE) -> None:
        self._rate_table = rate_table

    def resolve(self, financed_balance: Decimal, inputs: LoanInputs) -> RateQuote:
        tier = balance_tier(financed_balance)
        bucket = tenure_bucket(inputs.tenure)
        return RateQuote(
            rate=self._rate_table[tier][bucket],
            tenure=int(inputs.tenure),
            tier=tier,
            tenure_bucket=bucket,
        )
