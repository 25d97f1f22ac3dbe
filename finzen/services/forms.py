"""Validation of the transaction and savings-goal forms.

Each validator turns raw user input into a create-record or raises
FormValidationError carrying one message to show next to the form. A failed
validation means no write is attempted.
"""
import math
from datetime import date
from typing import Dict, List, Optional
from pydantic import ValidationError
from finzen.errors import FormValidationError
from finzen.models.forms import SavingsGoalForm, TransactionForm
from finzen.models.goal import GoalIcon, SavingsGoalCreate
from finzen.models.transaction import TransactionCreate, TransactionType

EXPENSE_CATEGORIES = [
    "alimentación",
    "transporte",
    "entretenimiento",
    "salud",
    "educación",
    "vivienda",
    "servicios",
    "ropa",
    "otros",
]

INCOME_CATEGORIES = [
    "salario",
    "freelance",
    "negocio",
    "inversiones",
    "regalo",
    "otros",
]

CATEGORIES: Dict[str, List[str]] = {
    TransactionType.EXPENSE.value: EXPENSE_CATEGORIES,
    TransactionType.INCOME.value: INCOME_CATEGORIES,
}


def parse_amount(raw: str, field: str = "Amount", allow_blank_as: Optional[float] = None) -> float:
    """Parse a user-typed amount. Must be a finite, non-negative number."""
    text = (raw or "").strip()
    if not text:
        if allow_blank_as is not None:
            return allow_blank_as
        raise FormValidationError(f"{field} is required")
    try:
        value = float(text)
    except ValueError:
        raise FormValidationError(f"{field} must be a number") from None
    if not math.isfinite(value):
        raise FormValidationError(f"{field} must be a number")
    if value < 0:
        raise FormValidationError(f"{field} cannot be negative")
    return value


def parse_optional_date(raw: Optional[str], field: str = "Date") -> Optional[date]:
    text = (raw or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise FormValidationError(f"{field} must be a valid date (YYYY-MM-DD)") from None


def _first_error(e: ValidationError) -> str:
    errors = e.errors(include_url=False)
    if not errors:
        return "Invalid input"
    err = errors[0]
    location = ".".join(str(part) for part in err.get("loc", ()))
    return f"{location}: {err['msg']}" if location else err["msg"]


def validate_transaction_form(
    form: TransactionForm,
    user_id: str,
    today: Optional[date] = None,
) -> TransactionCreate:
    """
    Validate the new-transaction form.

    A blank category falls back to the first predefined category of the
    selected type; a blank date falls back to today.

    Raises:
        FormValidationError: with a human-readable message
    """
    tx_type = (form.type or "").strip().lower()
    if tx_type not in CATEGORIES:
        raise FormValidationError("Transaction type must be 'income' or 'expense'")

    amount = parse_amount(form.amount)
    category = (form.category or "").strip().lower() or CATEGORIES[tx_type][0]
    tx_date = parse_optional_date(form.date) or today or date.today()

    try:
        return TransactionCreate(
            user_id=user_id,
            type=tx_type,
            amount=amount,
            category=category,
            description=(form.description or "").strip(),
            date=tx_date,
        )
    except ValidationError as e:
        raise FormValidationError(_first_error(e)) from e


def validate_goal_form(form: SavingsGoalForm, user_id: str) -> SavingsGoalCreate:
    """
    Validate the new-goal form.

    Raises:
        FormValidationError: with a human-readable message
    """
    title = (form.title or "").strip()
    if not title:
        raise FormValidationError("Goal name is required")

    target = parse_amount(form.target_amount, field="Target amount")
    if target <= 0:
        raise FormValidationError("Target amount must be greater than zero")
    current = parse_amount(form.current_amount, field="Current amount", allow_blank_as=0.0)

    icon = (form.icon or "").strip() or GoalIcon.TARGET.value
    if icon not in {i.value for i in GoalIcon}:
        raise FormValidationError(f"Unknown icon '{icon}'")

    try:
        return SavingsGoalCreate(
            user_id=user_id,
            title=title,
            target_amount=target,
            current_amount=current,
            deadline=parse_optional_date(form.deadline, field="Deadline"),
            icon=icon,
        )
    except ValidationError as e:
        raise FormValidationError(_first_error(e)) from e
