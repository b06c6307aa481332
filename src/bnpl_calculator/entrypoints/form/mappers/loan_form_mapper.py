from __future__ import annotations

from bnpl_calculator.config import currency_symbol
from bnpl_calculator.domain.loan import ErrorSet, LoanInputs, LoanResult
from bnpl_calculator.entrypoints.form.dtos.loan_form import (
    FieldErrorDTO,
    LoanFormDTO,
    LoanSummaryDTO,
)
from bnpl_calculator.entrypoints.form.formatting import format_currency, parse_amount


class LoanFormMapper:
    """Maps between form DTOs and domain models for the loan calculator."""

    @staticmethod
    def to_domain_inputs(dto: LoanFormDTO) -> LoanInputs:
        """
        Converts form DTO to domain LoanInputs.

        Handles text → Decimal conversion at the boundary. Unparsable text
        becomes Decimal("NaN") and is reported by the calculator's own
        validation, so every field gets its message in a single pass.

        Args:
            dto: Form DTO with raw text values

        Returns:
            LoanInputs with Decimal values
        """
        interest_rate = None
        if dto.interest_rate is not None and dto.interest_rate.strip():
            interest_rate = parse_amount(dto.interest_rate)

        return LoanInputs(
            item_cost=parse_amount(dto.item_cost),
            down_payment=parse_amount(dto.down_payment),
            tenure=parse_amount(dto.tenure),
            merchant_fee=parse_amount(dto.merchant_fee),
            charges_mode=dto.charges_mode,
            interest_rate=interest_rate,
        )

    @staticmethod
    def to_summary(result: LoanResult, symbol: str | None = None) -> LoanSummaryDTO:
        """
        Converts domain LoanResult to display DTO.

        Args:
            result: Calculated loan
            symbol: Currency symbol; defaults to the configured one

        Returns:
            Summary DTO with formatted currency strings
        """
        symbol = symbol if symbol is not None else currency_symbol()

        return LoanSummaryDTO(
            effective_down_payment=format_currency(result.effective_down_payment, symbol),
            financed_balance=format_currency(result.financed_balance, symbol),
            interest_rate=f"{result.interest_rate.normalize():f}%",
            interest_amount=format_currency(result.interest_amount, symbol),
            monthly_repayment=format_currency(result.monthly_repayment, symbol),
            total_repayment=format_currency(result.total_repayment, symbol),
            charges_applied_upfront=format_currency(result.charges_applied_upfront, symbol),
            charges_added_to_repayment=format_currency(result.charges_added_to_repayment, symbol),
            tenure=result.tenure,
        )

    @staticmethod
    def to_field_errors(errors: ErrorSet) -> list[FieldErrorDTO]:
        return [
            FieldErrorDTO(field=field, message=message, code="INVALID_VALUE")
            for field, message in errors.items()
        ]
