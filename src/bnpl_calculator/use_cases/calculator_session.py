"""Per-session calculator state.

Holds the last calculation a user asked for so a form can keep showing it
until the next explicit calculate, and can drop stale errors as soon as the
inputs are edited.
"""

from __future__ import annotations

import logging

from bnpl_calculator.domain.loan import ErrorSet, LoanInputs, LoanResult
from bnpl_calculator.use_cases.calculate_loan import CalculateLoan, CalculationOutcome

logger = logging.getLogger(__name__)


class CalculatorSession:
    """
    Owns the "current result / current errors" slot for one user session.

    - Created by the caller (one per form), never shared
    - calculate() overwrites the slot (last write wins)
    - A rejected calculation clears the previous result so stale numbers
      are never shown next to fresh errors
    """

    def __init__(self, calculator: CalculateLoan | None = None) -> None:
        self._calculator = calculator or CalculateLoan()
        self._result: LoanResult | None = None
        self._errors: ErrorSet = {}

    @property
    def result(self) -> LoanResult | None:
        return self._result

    @property
    def errors(self) -> ErrorSet:
        return dict(self._errors)

    @property
    def is_calculated(self) -> bool:
        return self._result is not None

    def calculate(self, inputs: LoanInputs) -> CalculationOutcome:
        outcome = self._calculator.execute(inputs)
        self._result = outcome.result
        self._errors = dict(outcome.errors)
        return outcome

    def clear_errors(self) -> None:
        """Forget validation messages, e.g. when the user edits a field."""
        self._errors = {}

    def reset(self) -> None:
        logger.debug("Calculator session reset")
        self._result = None
        self._errors = {}
