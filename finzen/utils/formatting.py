"""Display formatting for amounts and dates."""
from datetime import date, timedelta
from typing import Optional

_MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_money(amount: float) -> str:
    """Two decimals with a thousands separator, e.g. ``1,234.50``."""
    return f"{amount:,.2f}"


def format_signed_money(amount: float, transaction_type: str) -> str:
    """History row amount: ``+`` for income, ``-`` for expense."""
    sign = "+" if transaction_type == "income" else "-"
    return f"{sign}{format_money(abs(amount))}"


def format_relative_date(d: date, today: Optional[date] = None) -> str:
    """'Today', 'Yesterday', otherwise day and short month (``5 Mar``)."""
    today = today or date.today()
    if d == today:
        return "Today"
    if d == today - timedelta(days=1):
        return "Yesterday"
    return f"{d.day} {_MONTH_ABBR[d.month - 1]}"
