from __future__ import annotations

from decimal import Decimal

from bnpl_calculator.domain.errors import InternalError
from bnpl_calculator.domain.loan import LoanInputs
from bnpl_calculator.ports.interest_rate_resolver import InterestRateResolver, RateQuote


class ManualRateResolver(InterestRateResolver):
    """Uses the rate typed in by the caller (inputs.interest_rate)."""

    requires_interest_rate = True

    def resolve(self, financed_balance: Decimal, inputs: LoanInputs) -> RateQuote:
        if inputs.interest_rate is None:
            raise InternalError("Manual rate resolver needs an interest rate")
        return RateQuote(rate=inputs.interest_rate, tenure=int(inputs.tenure))
