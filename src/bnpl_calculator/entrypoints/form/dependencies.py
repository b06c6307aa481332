"""
Factories for the objects a form needs.

Key principle: the calculator is stateless and may be shared; sessions hold
per-user state and must be created fresh for every form.
"""

from __future__ import annotations

from bnpl_calculator.config import load_policy
from bnpl_calculator.use_cases.calculate_loan import CalculateLoan
from bnpl_calculator.use_cases.calculator_session import CalculatorSession


def get_calculate_loan_use_case() -> CalculateLoan:
    """
    Returns a CalculateLoan configured from the environment.

    Reads the BNPL_* policy variables on every call so tests and long-lived
    processes pick up changes.

    Raises:
        RuntimeError: If a policy variable holds an unknown value
    """
    return CalculateLoan(policy=load_policy())


def new_calculator_session(calculator: CalculateLoan | None = None) -> CalculatorSession:
    """
    Creates the state holder for one form.

    Args:
        calculator: Shared calculator; a configured one is built if omitted

    Returns:
        CalculatorSession with no result and no errors
    """
    return CalculatorSession(calculator or get_calculate_loan_use_case())
