from pydantic import BaseModel, ConfigDict, Field

from bnpl_calculator.domain.policy import ChargesMode


class LoanFormDTO(BaseModel):
    """Raw values as typed into the loan form."""

    item_cost: str = Field(
        description="Item price, thousands separators allowed",
        examples=["100,000"],
    )
    down_payment: str = Field(
        description="Down payment, at least 30% of the item cost",
        examples=["30,000"],
    )
    tenure: str = Field(
        description="Number of monthly installments",
        examples=["3"],
    )
    merchant_fee: str = Field(
        default="1.5",
        description="Merchant fee as a percentage of the item cost (e.g., '1.5' = 1.5%)",
        examples=["1.5"],
    )
    interest_rate: str | None = Field(
        default=None,
        description="Interest rate in percent. Only used when the rate is entered manually",
        examples=["7.5"],
    )
    charges_mode: ChargesMode = Field(
        default=ChargesMode.UPFRONT,
        description="Pay charges now ('upfront') or spread them over the installments ('repayment')",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "item_cost": "100,000",
                "down_payment": "30,000",
                "tenure": "3",
                "merchant_fee": "1.5",
                "charges_mode": "upfront",
            }
        }
    )


class LoanSummaryDTO(BaseModel):
    """Calculated loan, formatted for display."""

    effective_down_payment: str = Field(examples=["₦37,500"])
    financed_balance: str = Field(examples=["₦62,500"])
    interest_rate: str = Field(description="Applied rate, e.g. '12%'", examples=["12%"])
    interest_amount: str = Field(examples=["₦7,500"])
    monthly_repayment: str = Field(examples=["₦28,333.33"])
    total_repayment: str = Field(examples=["₦114,999.99"])
    charges_applied_upfront: str = Field(examples=["₦7,500"])
    charges_added_to_repayment: str = Field(examples=["₦0"])
    tenure: int = Field(description="Months the repayment is spread over", examples=[3])


class FieldErrorDTO(BaseModel):
    """Message to show under a single form field."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "down_payment",
                "message": "Down payment cannot be less than 30%",
                "code": "INVALID_VALUE",
            }
        }
    )
