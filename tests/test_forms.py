"""Tests for form validation."""
from datetime import date
import pytest
from finzen.errors import FormValidationError
from finzen.models.forms import SavingsGoalForm, TransactionForm
from finzen.services.forms import validate_goal_form, validate_transaction_form

TODAY = date(2024, 6, 15)


def test_transaction_form_valid():
    record = validate_transaction_form(
        TransactionForm(
            type="income",
            amount="1500.50",
            category="  Freelance ",
            description="Logo design",
            date="2024-06-10",
        ),
        user_id="user_1",
        today=TODAY,
    )

    assert record.user_id == "user_1"
    assert record.type == "income"
    assert record.amount == 1500.5
    assert record.category == "freelance"
    assert record.description == "Logo design"
    assert record.date == date(2024, 6, 10)


def test_transaction_form_defaults():
    """Blank category and date fall back to the first category and today."""
    record = validate_transaction_form(TransactionForm(amount="12"), user_id="user_1", today=TODAY)

    assert record.type == "expense"
    assert record.category == "alimentación"
    assert record.date == TODAY
    assert record.description == ""

    record = validate_transaction_form(TransactionForm(type="income", amount="3"), "user_1", today=TODAY)
    assert record.category == "salario"


@pytest.mark.parametrize(
    "amount, message",
    [
        ("", "Amount is required"),
        ("abc", "Amount must be a number"),
        ("nan", "Amount must be a number"),
        ("inf", "Amount must be a number"),
        ("-4", "Amount cannot be negative"),
    ],
)
def test_transaction_form_bad_amount(amount, message):
    with pytest.raises(FormValidationError) as exc:
        validate_transaction_form(TransactionForm(amount=amount), "user_1", today=TODAY)
    assert exc.value.message == message


def test_transaction_form_bad_type():
    with pytest.raises(FormValidationError, match="income"):
        validate_transaction_form(TransactionForm(type="transfer", amount="5"), "user_1")


def test_transaction_form_bad_date():
    with pytest.raises(FormValidationError, match="valid date"):
        validate_transaction_form(TransactionForm(amount="5", date="15/06/2024"), "user_1")


def test_goal_form_valid():
    record = validate_goal_form(
        SavingsGoalForm(
            title=" New laptop ",
            target_amount="1200",
            current_amount="",
            deadline="2024-12-24",
            icon="smartphone",
        ),
        user_id="user_1",
    )

    assert record.title == "New laptop"
    assert record.target_amount == 1200.0
    assert record.current_amount == 0.0
    assert record.deadline == date(2024, 12, 24)
    assert record.icon == "smartphone"


def test_goal_form_defaults():
    record = validate_goal_form(SavingsGoalForm(title="Rainy day", target_amount="500"), "user_1")

    assert record.icon == "target"
    assert record.deadline is None
    assert record.current_amount == 0.0


@pytest.mark.parametrize(
    "form, message",
    [
        (SavingsGoalForm(title="  ", target_amount="10"), "Goal name is required"),
        (SavingsGoalForm(title="Car", target_amount=""), "Target amount is required"),
        (SavingsGoalForm(title="Car", target_amount="0"), "Target amount must be greater than zero"),
        (SavingsGoalForm(title="Car", target_amount="10", current_amount="-1"), "Current amount cannot be negative"),
        (SavingsGoalForm(title="Car", target_amount="10", icon="rocket"), "Unknown icon 'rocket'"),
    ],
)
def test_goal_form_invalid(form, message):
    with pytest.raises(FormValidationError) as exc:
        validate_goal_form(form, "user_1")
    assert exc.value.message == message
