"""
Request body schemas for the expense API.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator


class ExpenseValidationError(ValueError):
    """Raised when a request body does not match its schema."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    @classmethod
    def from_pydantic(cls, error: ValidationError) -> "ExpenseValidationError":
        first = error.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "body"
        return cls(first["msg"], field)


class ExpenseIn(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)
    category: Literal["Food", "Travel", "Academics", "Entertainment", "Essentials", "Shopping", "Misc"]
    note: Optional[str] = None
    paymentType: Literal["manual", "upi"] = "manual"
    date: Optional[datetime] = None
    rawMessage: Optional[str] = None
    isImpulsive: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def reject_bool_amount(cls, value):
        if isinstance(value, bool):
            raise ValueError("Amount must be a number")
        return value

    @field_validator("date")
    @classmethod
    def store_as_naive_utc(cls, value):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class ParseUpiIn(BaseModel):
    message: str


def validate_expense_payload(data) -> dict:
    """
    Check a create-expense body and return column values for the Expense model.

    Raises
    ------
    ExpenseValidationError
        For the first invalid field, naming it in ``field``.
    """
    try:
        payload = ExpenseIn.model_validate(data)
    except ValidationError as error:
        raise ExpenseValidationError.from_pydantic(error)

    values = {
        "amount": payload.amount,
        "category": payload.category,
        "note": payload.note,
        "payment_type": payload.paymentType,
        "raw_message": payload.rawMessage,
        "is_impulsive": payload.isImpulsive,
    }
    if payload.date is not None:
        values["date"] = payload.date
    return values


def validate_parse_payload(data) -> str:
    try:
        return ParseUpiIn.model_validate(data).message
    except ValidationError as error:
        raise ExpenseValidationError.from_pydantic(error)
