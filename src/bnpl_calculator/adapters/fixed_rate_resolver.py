from __future__ import annotations

from decimal import Decimal

from bnpl_calculator.domain.loan import LoanInputs
from bnpl_calculator.ports.interest_rate_resolver import InterestRateResolver, RateQuote


FIXED_INTEREST_RATE = Decimal("7.5")
FIXED_RATE_TENURE_RANGE = (1, 4)


class FixedRateResolver(InterestRateResolver):
    """
    Constant business rate regardless of balance.

    - Tenure is clamped into tenure_range (1-4 months by default)
    """

    def __init__(
        self,
        rate: Decimal = FIXED_INTEREST_RATE,
        tenure_range: tuple[int, int] = FIXED_RATE_TENURE_RANGE,
    ) -> None:
        low, high = tenure_range
        if low < 1 or low > high:
            raise ValueError(f"invalid tenure range: {tenure_range}")
        self._rate = rate
        self._tenure_range = tenure_range

    def resolve(self, financed_balance: Decimal, inputs: LoanInputs) -> RateQuote:
        low, high = self._tenure_range
        tenure = min(max(int(inputs.tenure), low), high)
        return RateQuote(rate=self._rate, tenure=tenure)
