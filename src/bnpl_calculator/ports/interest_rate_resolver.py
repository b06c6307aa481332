from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from bnpl_calculator.domain.loan import LoanInputs


@dataclass(frozen=True, slots=True)
class RateQuote:
    """Interest rate to apply plus the terms it was quoted for."""

    rate: Decimal  # percent, e.g. Decimal("10") = 10%
    tenure: int  # months the repayment is spread over (may be clamped)
    tier: str | None = None
    tenure_bucket: int | None = None


class InterestRateResolver(ABC):
    """
    Port for interest rate lookup.

    Called after the financed balance is known, so implementations may key
    the rate on the balance without creating a cycle with the charges policy.

    Contract (Preconditions):
        - inputs have been validated by the caller (UseCase)
        - financed_balance is >= 0
    """

    requires_interest_rate: bool = False

    @abstractmethod
    def resolve(self, financed_balance: Decimal, inputs: LoanInputs) -> RateQuote:
        """
        Quote a rate for a validated request.

        Args:
            financed_balance: Balance after down payment and charges policy
            inputs: Validated loan inputs

        Returns:
            RateQuote with the rate in percent and the tenure to use
        """
        ...
