"""Client-side filtering of the transaction history."""
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Iterable, List, Optional
from finzen.models.transaction import Transaction

ALL = "all"


class TypeFilter(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


class DateWindow(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class TransactionFilter:
    """
    Type, category and date-window selectors combined with AND.

    Each selector is an independent predicate, so the order in which they are
    applied never changes the result. Output keeps the input order.
    """

    def __init__(
        self,
        type: TypeFilter = TypeFilter.ALL,
        category: str = ALL,
        period: DateWindow = DateWindow.ALL,
    ):
        self.type = TypeFilter(type)
        self.category = category or ALL
        self.period = DateWindow(period)

    @property
    def is_active(self) -> bool:
        """True when any selector narrows the history."""
        return (
            self.type != TypeFilter.ALL
            or self.category != ALL
            or self.period != DateWindow.ALL
        )

    def matches_type(self, tx: Transaction) -> bool:
        return self.type == TypeFilter.ALL or tx.type == self.type.value

    def matches_category(self, tx: Transaction) -> bool:
        return self.category == ALL or tx.category == self.category

    def matches_period(self, tx: Transaction, now: datetime) -> bool:
        if self.period == DateWindow.ALL:
            return True
        if self.period == DateWindow.TODAY:
            return tx.date == now.date()
        if self.period == DateWindow.WEEK:
            # Rolling 7x24h window, the date counts from its local midnight
            return datetime.combine(tx.date, time.min, tzinfo=now.tzinfo) >= now - timedelta(days=7)
        return tx.date.year == now.year and tx.date.month == now.month

    def matches(self, tx: Transaction, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now()
        return (
            self.matches_type(tx)
            and self.matches_category(tx)
            and self.matches_period(tx, now)
        )

    def apply(
        self,
        transactions: Iterable[Transaction],
        now: Optional[datetime] = None,
    ) -> List[Transaction]:
        """
        Return the transactions passing every active selector.

        Args:
            transactions: Full history, as loaded
            now: Reference moment for the date window. If None, uses local now.
        """
        now = now or datetime.now()
        return [tx for tx in transactions if self.matches(tx, now)]


def available_categories(transactions: Iterable[Transaction]) -> List[str]:
    """Distinct categories across all transactions, in first-seen order.

    Computed from the unfiltered list, independent of any active selector.
    """
    seen = {}
    for tx in transactions:
        seen.setdefault(tx.category, None)
    return list(seen)
