"""Aggregation of transactions into balances and category breakdowns."""
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from finzen.config import settings
from finzen.models.summary import CategoryTotal, MonthlySnapshot, Totals
from finzen.models.transaction import Transaction


class TransactionAggregator:
    """Derives totals, a monthly snapshot and a category breakdown.

    All methods are pure functions of the supplied transactions (and the
    reference date); input order does not matter.
    """

    def __init__(self, top_limit: Optional[int] = None):
        self.top_limit = settings.top_category_limit if top_limit is None else top_limit

    def calculate_totals(self, transactions: Iterable[Transaction]) -> Totals:
        """
        Sum income and expenses over every supplied transaction.

        Returns:
            Totals with ``balance = income - expenses``
        """
        income = 0.0
        expenses = 0.0
        for tx in transactions:
            if tx.is_income:
                income += tx.amount
            elif tx.is_expense:
                expenses += tx.amount
        return Totals(income=income, expenses=expenses, balance=income - expenses)

    def category_breakdown(
        self,
        transactions: Iterable[Transaction],
        limit: Optional[int] = None,
    ) -> List[CategoryTotal]:
        """
        Rank expense categories by summed amount.

        Categories are keyed exactly as stored. Equal totals keep the order in
        which their category was first encountered.

        Args:
            transactions: Transactions to group; income is ignored
            limit: Maximum number of categories (defaults to ``top_limit``)

        Returns:
            Up to ``limit`` CategoryTotal entries, largest first
        """
        limit = self.top_limit if limit is None else limit

        by_category: Dict[str, float] = {}
        for tx in transactions:
            if not tx.is_expense:
                continue
            by_category[tx.category] = by_category.get(tx.category, 0.0) + tx.amount

        total_expenses = sum(by_category.values())
        # sorted() is stable and dicts keep insertion order
        ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)[:limit]

        return [
            CategoryTotal(
                category=category,
                total=total,
                share=(total / total_expenses * 100) if total_expenses > 0 else 0.0,
            )
            for category, total in ranked
        ]

    def monthly_snapshot(
        self,
        transactions: Iterable[Transaction],
        as_of: Optional[datetime] = None,
    ) -> MonthlySnapshot:
        """
        Totals for the calendar month containing ``as_of``.

        Args:
            transactions: All loaded transactions
            as_of: Reference moment. If None, uses the local current time.

        Returns:
            MonthlySnapshot with totals, per-type counts and the month's breakdown
        """
        reference = as_of or datetime.now()
        in_month = [
            tx for tx in transactions
            if tx.date.year == reference.year and tx.date.month == reference.month
        ]
        totals = self.calculate_totals(in_month)

        return MonthlySnapshot(
            year=reference.year,
            month=reference.month,
            income=totals.income,
            expenses=totals.expenses,
            balance=totals.balance,
            income_count=sum(1 for tx in in_month if tx.is_income),
            expense_count=sum(1 for tx in in_month if tx.is_expense),
            top_categories=self.category_breakdown(in_month),
        )
