"""Raw form payloads, as typed by the user.

Amounts stay strings here; ``finzen.services.forms`` turns them into
validated create-records.
"""
from typing import Optional
from pydantic import BaseModel


class TransactionForm(BaseModel):
    type: str = "expense"
    amount: str = ""
    category: str = ""
    description: str = ""
    date: Optional[str] = None


class SavingsGoalForm(BaseModel):
    title: str = ""
    target_amount: str = ""
    current_amount: str = "0"
    deadline: Optional[str] = None
    icon: str = "target"
