from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from bnpl_calculator.domain.errors import ValidationError
from bnpl_calculator.domain.policy import ChargesMode, DownPaymentRule


ErrorSet = dict[str, str]

MINIMUM_DOWN_PAYMENT_RATIO = Decimal("0.30")
# Absorbs rounding from upstream formatting when comparing against the 30% mark
DOWN_PAYMENT_TOLERANCE = Decimal("0.5")
ADJUSTMENT_FEE = Decimal("6000")
DEFAULT_MERCHANT_FEE = Decimal("1.5")
# Upper bounds keep every reported amount well inside the 28-digit Decimal context
MAXIMUM_AMOUNT = Decimal("1000000000000000")
MAXIMUM_TENURE = 120
MAXIMUM_PERCENTAGE = Decimal("100")

ITEM_COST_MESSAGE = "Item cost must be greater than 0"
ITEM_COST_TOO_LARGE_MESSAGE = "Item cost is too large"
DOWN_PAYMENT_INVALID_MESSAGE = "Down payment must be a valid amount"
DOWN_PAYMENT_NEGATIVE_MESSAGE = "Down payment cannot be negative"
DOWN_PAYMENT_TOO_LARGE_MESSAGE = "Down payment is too large"
DOWN_PAYMENT_MINIMUM_MESSAGE = "Down payment cannot be less than 30%"
TENURE_MESSAGE = "Tenure must be greater than 0"
TENURE_WHOLE_MONTHS_MESSAGE = "Tenure must be a whole number of months"
TENURE_TOO_LONG_MESSAGE = f"Tenure cannot exceed {MAXIMUM_TENURE} months"
MERCHANT_FEE_MESSAGE = "Merchant fee cannot be negative"
MERCHANT_FEE_TOO_LARGE_MESSAGE = "Merchant fee cannot exceed 100%"
INTEREST_RATE_MESSAGE = "Interest rate must be greater than 0"
INTEREST_RATE_TOO_LARGE_MESSAGE = "Interest rate cannot exceed 100%"


class LoanValidationError(ValidationError):
    """Raised by callers that want an exception instead of an error set."""

    @classmethod
    def from_error_set(cls, errors: ErrorSet) -> LoanValidationError:
        return cls(
            errors=[
                {"field": field, "message": message, "code": "INVALID_VALUE"}
                for field, message in errors.items()
            ]
        )


def _to_decimal(name: str, value: object) -> Decimal:
    # Floats go through str() so 1.1 stays 1.1 and nan/inf map onto Decimal specials
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a number, got bool")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    raise TypeError(f"{name} must be a number, got {type(value).__name__}")


def _is_positive(value: Decimal) -> bool:
    return value.is_finite() and value > 0


def _is_non_negative(value: Decimal) -> bool:
    return value.is_finite() and value >= 0


@dataclass(frozen=True, slots=True)
class FixedCharges:
    percentage_fee: Decimal
    adjustment_fee: Decimal

    @property
    def total(self) -> Decimal:
        return self.percentage_fee + self.adjustment_fee


def fixed_charges(item_cost: Decimal, merchant_fee: Decimal) -> FixedCharges:
    """Merchant percentage fee on the item cost (rounded to cents) plus the flat adjustment fee."""
    percentage_fee = item_cost * (merchant_fee / Decimal("100"))
    return FixedCharges(
        percentage_fee=percentage_fee.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
        adjustment_fee=ADJUSTMENT_FEE,
    )


def minimum_down_payment(item_cost: Decimal) -> Decimal:
    return item_cost * MINIMUM_DOWN_PAYMENT_RATIO


def is_exact_minimum(down_payment: Decimal, item_cost: Decimal) -> bool:
    """True when the down payment sits on the 30% mark, within the tolerance."""
    return abs(down_payment - minimum_down_payment(item_cost)) <= DOWN_PAYMENT_TOLERANCE


@dataclass(frozen=True, slots=True)
class LoanInputs:
    item_cost: Decimal
    down_payment: Decimal
    tenure: Decimal
    merchant_fee: Decimal = DEFAULT_MERCHANT_FEE
    charges_mode: ChargesMode = ChargesMode.UPFRONT
    interest_rate: Decimal | None = None

    def __post_init__(self) -> None:
        for name in ("item_cost", "down_payment", "tenure", "merchant_fee"):
            object.__setattr__(self, name, _to_decimal(name, getattr(self, name)))
        if self.interest_rate is not None:
            object.__setattr__(
                self, "interest_rate", _to_decimal("interest_rate", self.interest_rate)
            )
        object.__setattr__(self, "charges_mode", ChargesMode(self.charges_mode))

    def validate(
        self,
        down_payment_rule: DownPaymentRule,
        requires_interest_rate: bool = False,
    ) -> ErrorSet:
        """
        Check every field and collect one message per failing field.

        Non-finite values (NaN from unparsable form input) fail the rule of
        their own field. Amounts above MAXIMUM_AMOUNT, tenures above
        MAXIMUM_TENURE and percentages above 100 are rejected so the
        calculation always fits the Decimal context. The 30% rule is only
        checked once item_cost is valid.

        Returns:
            Empty dict when the inputs can be calculated
        """
        errors: ErrorSet = {}

        item_cost_valid = _is_positive(self.item_cost)
        if not item_cost_valid:
            errors["item_cost"] = ITEM_COST_MESSAGE
        elif self.item_cost > MAXIMUM_AMOUNT:
            errors["item_cost"] = ITEM_COST_TOO_LARGE_MESSAGE
            item_cost_valid = False

        if not self.down_payment.is_finite():
            errors["down_payment"] = DOWN_PAYMENT_INVALID_MESSAGE
        elif self.down_payment < 0:
            errors["down_payment"] = DOWN_PAYMENT_NEGATIVE_MESSAGE
        elif self.down_payment > MAXIMUM_AMOUNT:
            errors["down_payment"] = DOWN_PAYMENT_TOO_LARGE_MESSAGE
        elif item_cost_valid and self._below_minimum(down_payment_rule):
            errors["down_payment"] = DOWN_PAYMENT_MINIMUM_MESSAGE

        if not _is_positive(self.tenure):
            errors["tenure"] = TENURE_MESSAGE
        elif self.tenure != self.tenure.to_integral_value():
            errors["tenure"] = TENURE_WHOLE_MONTHS_MESSAGE
        elif self.tenure > MAXIMUM_TENURE:
            errors["tenure"] = TENURE_TOO_LONG_MESSAGE

        if not _is_non_negative(self.merchant_fee):
            errors["merchant_fee"] = MERCHANT_FEE_MESSAGE
        elif self.merchant_fee > MAXIMUM_PERCENTAGE:
            errors["merchant_fee"] = MERCHANT_FEE_TOO_LARGE_MESSAGE

        if requires_interest_rate:
            if self.interest_rate is None or not _is_positive(self.interest_rate):
                errors["interest_rate"] = INTEREST_RATE_MESSAGE
            elif self.interest_rate > MAXIMUM_PERCENTAGE:
                errors["interest_rate"] = INTEREST_RATE_TOO_LARGE_MESSAGE

        return errors

    def _below_minimum(self, rule: DownPaymentRule) -> bool:
        minimum = minimum_down_payment(self.item_cost)

        if rule is DownPaymentRule.STRICT:
            return self.down_payment < minimum
        if rule is DownPaymentRule.TOLERANT:
            return self.down_payment + DOWN_PAYMENT_TOLERANCE < minimum

        # FEE_AWARE: the down payment must still cover 30% once charges are taken out
        if is_exact_minimum(self.down_payment, self.item_cost):
            return False
        merchant_fee = self.merchant_fee
        if not _is_non_negative(merchant_fee) or merchant_fee > MAXIMUM_PERCENTAGE:
            merchant_fee = Decimal("0")
        charges = fixed_charges(self.item_cost, merchant_fee)
        return self.down_payment - charges.total < minimum


@dataclass(frozen=True, slots=True)
class LoanResult:
    effective_down_payment: Decimal
    financed_balance: Decimal
    interest_rate: Decimal
    interest_amount: Decimal
    monthly_repayment: Decimal
    total_repayment: Decimal
    charges_applied_upfront: Decimal
    charges_added_to_repayment: Decimal
    percentage_fee: Decimal
    adjustment_fee: Decimal
    total_fixed_charges: Decimal
    tenure: int
    rate_tier: str | None = None
    tenure_bucket: int | None = None
