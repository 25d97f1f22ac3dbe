"""Derived view models: totals, breakdowns, goal progress, dashboard and history."""
from typing import List
from pydantic import BaseModel, Field
from finzen.models.goal import SavingsGoal
from finzen.models.tip import FinancialTip
from finzen.models.transaction import Transaction


class Totals(BaseModel):
    """Income, expenses and their difference."""

    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0


class CategoryTotal(BaseModel):
    """Summed expense amount for one category."""

    category: str
    total: float
    share: float = Field(default=0.0, description="Percent of the window's total expenses")


class MonthlySnapshot(Totals):
    """Totals restricted to one calendar month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    income_count: int = 0
    expense_count: int = 0
    top_categories: List[CategoryTotal] = Field(default_factory=list)


class GoalProgress(BaseModel):
    """Progress of one savings goal."""

    goal: SavingsGoal
    raw_percent: float = Field(..., description="Unclamped current/target ratio in percent")
    percent: int = Field(..., description="Raw percent rounded half-up, for labels")
    bar_width: float = Field(..., ge=0.0, le=100.0, description="Progress bar width, clamped")
    remaining_amount: float = 0.0
    valid: bool = Field(default=True, description="False when the goal has no positive target")


class DashboardView(BaseModel):
    """Everything the dashboard screen shows."""

    totals: Totals
    monthly: MonthlySnapshot
    top_categories: List[CategoryTotal] = Field(default_factory=list)
    goals: List[GoalProgress] = Field(default_factory=list)
    tips: List[FinancialTip] = Field(default_factory=list)
    transaction_count: int = 0


class TransactionRow(BaseModel):
    """A history entry with its display labels."""

    transaction: Transaction
    amount_label: str
    date_label: str


class HistoryView(BaseModel):
    """Filtered transaction history."""

    transactions: List[TransactionRow] = Field(default_factory=list)
    count: int = 0
    available_categories: List[str] = Field(default_factory=list)
    filters_active: bool = False
