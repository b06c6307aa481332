from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DownPaymentRule(str, Enum):
    """How the 30% minimum down payment is enforced."""

    STRICT = "strict"
    TOLERANT = "tolerant"
    FEE_AWARE = "fee_aware"


class ChargesPolicy(str, Enum):
    """How fixed charges affect the down payment and the financed balance."""

    THRESHOLD_SUBTRACT = "threshold_subtract"
    CAPITALIZE_ON_THRESHOLD = "capitalize_on_threshold"
    SELECTABLE = "selectable"


class ChargesMode(str, Enum):
    """Borrower's choice under the selectable charges policy."""

    UPFRONT = "upfront"
    REPAYMENT = "repayment"


class RateSource(str, Enum):
    FIXED = "fixed"
    MANUAL = "manual"
    TIERED = "tiered"


class TotalRepaymentBasis(str, Enum):
    """
    What total_repayment adds up.

    - LENDER_COST: installments only (what the lender collects)
    - BORROWER_OUTLAY: installments plus the down payment (what the borrower spends)
    """

    LENDER_COST = "lender_cost"
    BORROWER_OUTLAY = "borrower_outlay"


@dataclass(frozen=True, slots=True)
class LoanPolicy:
    """
    The business-rule variants a calculator instance applies.

    Chosen once at construction time so the calculation itself never has to
    guess which revision of a rule is in force.
    """

    down_payment_rule: DownPaymentRule = DownPaymentRule.TOLERANT
    charges_policy: ChargesPolicy = ChargesPolicy.THRESHOLD_SUBTRACT
    rate_source: RateSource = RateSource.TIERED
    total_repayment_basis: TotalRepaymentBasis = TotalRepaymentBasis.BORROWER_OUTLAY
