from .aggregator import TransactionAggregator
from .filters import TransactionFilter, TypeFilter, DateWindow, available_categories
from .goals import GoalProgressCalculator
from .forms import validate_transaction_form, validate_goal_form, CATEGORIES
from .dashboard import DashboardService, DashboardState

__all__ = [
    "TransactionAggregator",
    "TransactionFilter",
    "TypeFilter",
    "DateWindow",
    "available_categories",
    "GoalProgressCalculator",
    "validate_transaction_form",
    "validate_goal_form",
    "CATEGORIES",
    "DashboardService",
    "DashboardState",
]
