from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP

from bnpl_calculator.adapters.fixed_rate_resolver import FixedRateResolver
from bnpl_calculator.adapters.manual_rate_resolver import ManualRateResolver
from bnpl_calculator.adapters.tiered_rate_resolver import TieredRateResolver
from bnpl_calculator.domain.errors import InternalError
from bnpl_calculator.domain.loan import (
    ErrorSet,
    LoanInputs,
    LoanResult,
    LoanValidationError,
    fixed_charges,
    is_exact_minimum,
    minimum_down_payment,
)
from bnpl_calculator.domain.policy import (
    ChargesMode,
    ChargesPolicy,
    LoanPolicy,
    RateSource,
    TotalRepaymentBasis,
)
from bnpl_calculator.ports.interest_rate_resolver import InterestRateResolver

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0")


def _to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def rate_resolver_for(source: RateSource) -> InterestRateResolver:
    """Default resolver for each rate source."""
    if source is RateSource.FIXED:
        return FixedRateResolver()
    if source is RateSource.MANUAL:
        return ManualRateResolver()
    return TieredRateResolver()


@dataclass(frozen=True, slots=True)
class CalculationOutcome:
    """Either a LoanResult or a non-empty ErrorSet, never both."""

    result: LoanResult | None = None
    errors: ErrorSet = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.result is not None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> LoanResult:
        """
        Return the result, or raise when the inputs were rejected.

        Raises:
            LoanValidationError: With one field error per rejected input
        """
        if self.result is None:
            raise LoanValidationError.from_error_set(self.errors)
        return self.result


@dataclass(frozen=True, slots=True)
class _ChargesAllocation:
    effective_down_payment: Decimal
    charges_applied_upfront: Decimal = ZERO
    charges_added_to_repayment: Decimal = ZERO


class CalculateLoan:
    """
    BNPL loan calculation.

    Steps, in order:
    1. Validate every input field (errors are collected, not raised)
    2. Compute fixed charges (merchant percentage fee + adjustment fee)
    3. Apply the charges policy to get the effective down payment and the
       amount capitalized into the balance
    4. financed_balance = max(0, item_cost - effective_down_payment) + capitalized
    5. Resolve the interest rate from the financed balance
    6. interest_amount = rate% of financed_balance (flat, charged each month)
    7. monthly_repayment = financed_balance / tenure + interest_amount
    8. total_repayment = monthly_repayment * tenure (+ down payment for BORROWER_OUTLAY)

    Rounding policy:
    - Intermediate values keep full Decimal precision
    - Reported amounts are rounded to cents using ROUND_HALF_UP
    - total_repayment is computed from the rounded monthly repayment
    """

    def __init__(
        self,
        policy: LoanPolicy | None = None,
        rate_resolver: InterestRateResolver | None = None,
    ) -> None:
        self._policy = policy or LoanPolicy()
        self._rate_resolver = rate_resolver or rate_resolver_for(self._policy.rate_source)

    @property
    def policy(self) -> LoanPolicy:
        return self._policy

    def execute(self, inputs: LoanInputs) -> CalculationOutcome:
        errors = inputs.validate(
            self._policy.down_payment_rule,
            requires_interest_rate=self._rate_resolver.requires_interest_rate,
        )
        if errors:
            logger.info(
                "Loan calculation rejected",
                extra={"invalid_fields": sorted(errors)},
            )
            return CalculationOutcome(errors=errors)

        charges = fixed_charges(inputs.item_cost, inputs.merchant_fee)
        allocation = self._allocate_charges(inputs, charges.total)

        financed_balance = (
            max(ZERO, inputs.item_cost - allocation.effective_down_payment)
            + allocation.charges_added_to_repayment
        )

        quote = self._rate_resolver.resolve(financed_balance, inputs)
        if quote.tenure <= 0:
            raise InternalError("Rate resolver quoted a non-positive tenure", tenure=quote.tenure)

        tenure = Decimal(quote.tenure)
        interest_amount = quote.rate / Decimal("100") * financed_balance
        monthly_repayment = _to_cents(financed_balance / tenure + interest_amount)

        total_repayment = monthly_repayment * tenure
        if self._policy.total_repayment_basis is TotalRepaymentBasis.BORROWER_OUTLAY:
            total_repayment += inputs.down_payment

        result = LoanResult(
            effective_down_payment=_to_cents(allocation.effective_down_payment),
            financed_balance=_to_cents(financed_balance),
            interest_rate=quote.rate,
            interest_amount=_to_cents(interest_amount),
            monthly_repayment=monthly_repayment,
            total_repayment=_to_cents(total_repayment),
            charges_applied_upfront=_to_cents(allocation.charges_applied_upfront),
            charges_added_to_repayment=_to_cents(allocation.charges_added_to_repayment),
            percentage_fee=charges.percentage_fee,
            adjustment_fee=charges.adjustment_fee,
            total_fixed_charges=charges.total,
            tenure=quote.tenure,
            rate_tier=quote.tier,
            tenure_bucket=quote.tenure_bucket,
        )

        logger.debug(
            "Loan calculated",
            extra={
                "financed_balance": str(result.financed_balance),
                "interest_rate": str(result.interest_rate),
                "tenure_months": result.tenure,
                "charges_policy": self._policy.charges_policy.value,
            },
        )
        return CalculationOutcome(result=result)

    def _allocate_charges(self, inputs: LoanInputs, charges: Decimal) -> _ChargesAllocation:
        down_payment = inputs.down_payment
        policy = self._policy.charges_policy

        if policy is ChargesPolicy.SELECTABLE:
            if inputs.charges_mode is ChargesMode.REPAYMENT:
                return _ChargesAllocation(down_payment, charges_added_to_repayment=charges)
            return _ChargesAllocation(down_payment, charges_applied_upfront=charges)

        # The exact-30% branch is checked first so it wins over "above" inside the tolerance
        if is_exact_minimum(down_payment, inputs.item_cost):
            if policy is ChargesPolicy.THRESHOLD_SUBTRACT:
                return _ChargesAllocation(down_payment + charges, charges_applied_upfront=charges)
            return _ChargesAllocation(down_payment, charges_added_to_repayment=charges)

        if down_payment > minimum_down_payment(inputs.item_cost):
            return _ChargesAllocation(down_payment - charges, charges_applied_upfront=charges)

        return _ChargesAllocation(down_payment)
