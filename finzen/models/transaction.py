"""Transaction data models."""
from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from finzen.utils.timestamp import parse_calendar_date


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionBase(BaseModel):
    """Fields shared by new and stored transactions."""

    model_config = ConfigDict(use_enum_values=True)

    user_id: str = Field(..., description="Owning user identifier")
    type: TransactionType = Field(..., description="'income' or 'expense'")
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Non-negative amount")
    category: str = Field(..., min_length=1, description="Category label")
    description: str = Field(default="", description="Free-text description")
    date: date

    @field_validator("description", mode="before")
    @classmethod
    def _empty_description(cls, v):
        return v or ""

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, v):
        return parse_calendar_date(v)


class TransactionCreate(TransactionBase):
    """Transaction creation model (includes user_id). Categories are stored lower-case."""

    @field_validator("category")
    @classmethod
    def _normalize_category(cls, v: str) -> str:
        return v.strip().lower()


class Transaction(TransactionBase):
    """Stored transaction as returned by the data service; the category is kept as stored."""

    id: str
    created_at: Optional[datetime] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME.value

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE.value

    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "id": "3f0c6a5e-8d2b-4c1e-9f4a-2b7d1e6c9a10",
                "user_id": "b1d4c2e0-7a3f-4e59-8c61-0f2a9d3e4b57",
                "type": "expense",
                "amount": 45.99,
                "category": "alimentación",
                "description": "Compra del supermercado",
                "date": "2024-01-15",
                "created_at": "2024-01-15T10:30:00Z",
            }
        },
    )
