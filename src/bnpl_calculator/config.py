from __future__ import annotations

import os
from enum import Enum
from typing import TypeVar

from bnpl_calculator.domain.policy import (
    ChargesPolicy,
    DownPaymentRule,
    LoanPolicy,
    RateSource,
    TotalRepaymentBasis,
)

DEFAULT_CURRENCY_SYMBOL = "₦"

E = TypeVar("E", bound=Enum)


def _enum_from_env(name: str, enum_type: type[E], default: E) -> E:
    raw = os.getenv(name)

    if not raw:
        return default

    try:
        return enum_type(raw.strip().lower())
    except ValueError:
        allowed = sorted(member.value for member in enum_type)
        raise RuntimeError(f"{name} must be one of {allowed}, got {raw!r}") from None


def load_policy() -> LoanPolicy:
    defaults = LoanPolicy()
    return LoanPolicy(
        down_payment_rule=_enum_from_env(
            "BNPL_DOWN_PAYMENT_RULE", DownPaymentRule, defaults.down_payment_rule
        ),
        charges_policy=_enum_from_env(
            "BNPL_CHARGES_POLICY", ChargesPolicy, defaults.charges_policy
        ),
        rate_source=_enum_from_env("BNPL_RATE_SOURCE", RateSource, defaults.rate_source),
        total_repayment_basis=_enum_from_env(
            "BNPL_TOTAL_REPAYMENT_BASIS", TotalRepaymentBasis, defaults.total_repayment_basis
        ),
    )


def currency_symbol() -> str:
    return os.getenv("BNPL_CURRENCY_SYMBOL") or DEFAULT_CURRENCY_SYMBOL
