from .transaction import Transaction, TransactionBase, TransactionCreate, TransactionType
from .goal import SavingsGoal, SavingsGoalCreate, GoalIcon, GOAL_ICON_LABELS
from .tip import FinancialTip
from .auth import AuthUser, AuthSession, SignUpRequest, SignInRequest, SignUpResponse
from .forms import TransactionForm, SavingsGoalForm
from .summary import (
    Totals,
    CategoryTotal,
    MonthlySnapshot,
    GoalProgress,
    DashboardView,
    TransactionRow,
    HistoryView,
)

__all__ = [
    "Transaction",
    "TransactionBase",
    "TransactionCreate",
    "TransactionType",
    "SavingsGoal",
    "SavingsGoalCreate",
    "GoalIcon",
    "GOAL_ICON_LABELS",
    "FinancialTip",
    "AuthUser",
    "AuthSession",
    "SignUpRequest",
    "SignInRequest",
    "SignUpResponse",
    "TransactionForm",
    "SavingsGoalForm",
    "Totals",
    "CategoryTotal",
    "MonthlySnapshot",
    "GoalProgress",
    "DashboardView",
    "TransactionRow",
    "HistoryView",
]
