from decimal import Decimal

import pytest

from bnpl_calculator.domain.loan import (
    LoanInputs,
    fixed_charges,
    is_exact_minimum,
)
from bnpl_calculator.domain.policy import ChargesMode, DownPaymentRule


# ============================================================================
# INPUT COERCION
# ============================================================================


def test_ints_and_floats_are_coerced_to_decimal():
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000.5, tenure=3, merchant_fee=1.5)

    assert inputs.item_cost == Decimal("100000")
    assert inputs.down_payment == Decimal("30000.5")
    assert inputs.tenure == Decimal("3")
    assert inputs.merchant_fee == Decimal("1.5")


def test_float_nan_becomes_decimal_nan():
    inputs = LoanInputs(item_cost=float("nan"), down_payment=0, tenure=3)

    assert inputs.item_cost.is_nan()


def test_charges_mode_accepts_its_value():
    inputs = LoanInputs(item_cost=1, down_payment=1, tenure=1, charges_mode="repayment")

    assert inputs.charges_mode is ChargesMode.REPAYMENT


def test_rejects_text_amounts():
    """Text must be parsed at the boundary, never inside the domain."""
    with pytest.raises(TypeError, match="item_cost must be a number"):
        LoanInputs(item_cost="100000", down_payment=0, tenure=3)


# ============================================================================
# FIELD VALIDATION
# ============================================================================


@pytest.mark.parametrize("item_cost", [0, -100_000, Decimal("NaN"), Decimal("Infinity")])
def test_item_cost_must_be_positive(item_cost):
    inputs = LoanInputs(item_cost=item_cost, down_payment=30_000, tenure=3)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors["item_cost"] == "Item cost must be greater than 0"


def test_down_payment_rule_is_skipped_when_item_cost_is_invalid():
    inputs = LoanInputs(item_cost=0, down_payment=0, tenure=3)

    errors = inputs.validate(DownPaymentRule.STRICT)

    assert "down_payment" not in errors


@pytest.mark.parametrize("tenure", [0, -3, Decimal("NaN")])
def test_tenure_must_be_positive(tenure):
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=tenure)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors["tenure"] == "Tenure must be greater than 0"


def test_tenure_must_be_whole_months():
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=Decimal("2.5"))

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"tenure": "Tenure must be a whole number of months"}


@pytest.mark.parametrize("merchant_fee", [Decimal("-0.01"), Decimal("NaN")])
def test_merchant_fee_cannot_be_negative(merchant_fee):
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=3, merchant_fee=merchant_fee)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"merchant_fee": "Merchant fee cannot be negative"}


def test_negative_down_payment():
    inputs = LoanInputs(item_cost=100_000, down_payment=-1, tenure=3)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"down_payment": "Down payment cannot be negative"}


def test_unparsable_down_payment():
    inputs = LoanInputs(item_cost=100_000, down_payment=Decimal("NaN"), tenure=3)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"down_payment": "Down payment must be a valid amount"}


def test_collects_every_failing_field():
    """Validation is not short-circuited: each bad field gets its own message."""
    inputs = LoanInputs(item_cost=0, down_payment=-1, tenure=0, merchant_fee=-1)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {
        "item_cost": "Item cost must be greater than 0",
        "down_payment": "Down payment cannot be negative",
        "tenure": "Tenure must be greater than 0",
        "merchant_fee": "Merchant fee cannot be negative",
    }


@pytest.mark.parametrize("interest_rate", [None, 0, -5, Decimal("NaN")])
def test_interest_rate_required_only_when_asked(interest_rate):
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=3, interest_rate=interest_rate)

    assert inputs.validate(DownPaymentRule.TOLERANT) == {}
    assert inputs.validate(DownPaymentRule.TOLERANT, requires_interest_rate=True) == {
        "interest_rate": "Interest rate must be greater than 0"
    }


# ============================================================================
# DOWN PAYMENT RULES
# ============================================================================


def test_strict_rejects_below_thirty_percent():
    inputs = LoanInputs(item_cost=100_000, down_payment=20_000, tenure=3, merchant_fee=0)

    errors = inputs.validate(DownPaymentRule.STRICT)

    assert errors == {"down_payment": "Down payment cannot be less than 30%"}


def test_strict_rejects_rounding_shortfall():
    inputs = LoanInputs(item_cost=100_000, down_payment=Decimal("29999.6"), tenure=3)

    assert "down_payment" in inputs.validate(DownPaymentRule.STRICT)


def test_tolerant_absorbs_rounding_shortfall():
    inputs = LoanInputs(item_cost=100_000, down_payment=Decimal("29999.6"), tenure=3)

    assert inputs.validate(DownPaymentRule.TOLERANT) == {}


def test_tolerant_still_rejects_real_shortfall():
    inputs = LoanInputs(item_cost=100_000, down_payment=Decimal("29999.4"), tenure=3)

    assert inputs.validate(DownPaymentRule.TOLERANT) == {
        "down_payment": "Down payment cannot be less than 30%"
    }


@pytest.mark.parametrize("rule", list(DownPaymentRule))
def test_exact_thirty_percent_is_accepted_by_every_rule(rule):
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=3)

    assert inputs.validate(rule) == {}


def test_fee_aware_requires_thirty_percent_after_charges():
    """35,000 - 6,000 charges leaves 29,000, below the 30,000 minimum."""
    inputs = LoanInputs(item_cost=100_000, down_payment=35_000, tenure=3, merchant_fee=0)

    assert inputs.validate(DownPaymentRule.FEE_AWARE) == {
        "down_payment": "Down payment cannot be less than 30%"
    }


def test_fee_aware_accepts_when_charges_are_covered():
    inputs = LoanInputs(item_cost=100_000, down_payment=37_500, tenure=3, merchant_fee=Decimal("1.5"))

    assert inputs.validate(DownPaymentRule.FEE_AWARE) == {}


def test_fee_aware_exempts_exact_minimum_within_tolerance():
    inputs = LoanInputs(item_cost=100_000, down_payment=Decimal("30000.4"), tenure=3)

    assert inputs.validate(DownPaymentRule.FEE_AWARE) == {}


# ============================================================================
# CHARGES
# ============================================================================


def test_fixed_charges_add_percentage_fee_and_adjustment_fee():
    charges = fixed_charges(Decimal("100000"), Decimal("1.5"))

    assert charges.percentage_fee == Decimal("1500.00")
    assert charges.adjustment_fee == Decimal("6000")
    assert charges.total == Decimal("7500.00")


def test_zero_merchant_fee_leaves_adjustment_fee():
    assert fixed_charges(Decimal("100000"), Decimal("0")).total == Decimal("6000")


def test_percentage_fee_rounds_to_cents():
    charges = fixed_charges(Decimal("333.33"), Decimal("1.5"))

    assert charges.percentage_fee == Decimal("5.00")


def test_higher_merchant_fee_never_lowers_charges():
    fees = [Decimal(f) for f in ("0", "0.25", "0.5", "1.5", "3", "10")]

    totals = [fixed_charges(Decimal("250000"), fee).total for fee in fees]

    assert totals == sorted(totals)


@pytest.mark.parametrize(
    "down_payment,expected",
    [
        (Decimal("30000"), True),
        (Decimal("29999.5"), True),
        (Decimal("30000.5"), True),
        (Decimal("30000.51"), False),
        (Decimal("29999.49"), False),
    ],
)
def test_exact_minimum_tolerance(down_payment, expected):
    assert is_exact_minimum(down_payment, Decimal("100000")) is expected


# ============================================================================
# UPPER BOUNDS
# ============================================================================


def test_item_cost_above_maximum_is_too_large():
    inputs = LoanInputs(item_cost=Decimal("1000000000000000.01"), down_payment=30_000, tenure=3)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"item_cost": "Item cost is too large"}


def test_item_cost_at_maximum_is_accepted():
    inputs = LoanInputs(
        item_cost=Decimal("1000000000000000"),
        down_payment=Decimal("300000000000000"),
        tenure=3,
    )

    assert inputs.validate(DownPaymentRule.FEE_AWARE) == {}


def test_down_payment_above_maximum_is_too_large():
    inputs = LoanInputs(item_cost=100_000, down_payment=Decimal("1e16"), tenure=3)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"down_payment": "Down payment is too large"}


def test_tenure_above_maximum():
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=121)

    errors = inputs.validate(DownPaymentRule.TOLERANT)

    assert errors == {"tenure": "Tenure cannot exceed 120 months"}


def test_merchant_fee_above_one_hundred_percent():
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=3, merchant_fee=Decimal("1e30"))

    errors = inputs.validate(DownPaymentRule.FEE_AWARE)

    assert errors == {"merchant_fee": "Merchant fee cannot exceed 100%"}


def test_interest_rate_above_one_hundred_percent():
    inputs = LoanInputs(item_cost=100_000, down_payment=30_000, tenure=3, interest_rate=101)

    errors = inputs.validate(DownPaymentRule.TOLERANT, requires_interest_rate=True)

    assert errors == {"interest_rate": "Interest rate cannot exceed 100%"}
