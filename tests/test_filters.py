"""Tests for history filtering."""
import itertools
from datetime import date, datetime
import pytest
from finzen.services.filters import (
    DateWindow,
    TransactionFilter,
    TypeFilter,
    available_categories,
)

NOW = datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def history(make_transaction):
    """History in load order: newest date first."""
    return [
        make_transaction("expense", 20.0, "transporte", date(2024, 6, 20)),
        make_transaction("income", 900.0, "salario", date(2024, 6, 15)),
        make_transaction("expense", 35.0, "alimentación", date(2024, 6, 15)),
        make_transaction("expense", 12.0, "alimentación", date(2024, 6, 9)),
        make_transaction("expense", 60.0, "ropa", date(2024, 6, 8)),
        make_transaction("income", 150.0, "freelance", date(2024, 6, 1)),
        make_transaction("expense", 45.0, "alimentación", date(2024, 5, 31)),
        make_transaction("expense", 80.0, "salud", date(2023, 6, 14)),
    ]


def ids(transactions):
    return [tx.id for tx in transactions]


def test_no_filters_returns_everything_in_order(history):
    selection = TransactionFilter()
    assert not selection.is_active
    assert ids(selection.apply(history, now=NOW)) == ids(history)


def test_type_filter(history):
    result = TransactionFilter(type=TypeFilter.INCOME).apply(history, now=NOW)
    assert [tx.category for tx in result] == ["salario", "freelance"]

    result = TransactionFilter(type="expense").apply(history, now=NOW)
    assert all(tx.type == "expense" for tx in result)
    assert len(result) == 6


def test_category_filter(history):
    result = TransactionFilter(category="alimentación").apply(history, now=NOW)
    assert [tx.amount for tx in result] == [35.0, 12.0, 45.0]


def test_today_is_calendar_day(history):
    result = TransactionFilter(period=DateWindow.TODAY).apply(history, now=NOW)
    assert [tx.date for tx in result] == [date(2024, 6, 15), date(2024, 6, 15)]


def test_week_is_rolling_seven_days(history):
    """Cutoff is 2024-06-08 12:00; a date counts from its midnight."""
    result = TransactionFilter(period=DateWindow.WEEK).apply(history, now=NOW)
    dates = [tx.date for tx in result]

    assert date(2024, 6, 9) in dates
    assert date(2024, 6, 8) not in dates
    # Future-dated entries are not cut off
    assert date(2024, 6, 20) in dates


def test_week_cutoff_moves_with_time_of_day(history):
    early = datetime(2024, 6, 15, 0, 0)
    result = TransactionFilter(period=DateWindow.WEEK).apply(history, now=early)
    assert date(2024, 6, 8) in [tx.date for tx in result]


def test_month_matches_month_and_year(history):
    result = TransactionFilter(period=DateWindow.MONTH).apply(history, now=NOW)
    dates = [tx.date for tx in result]

    assert all(d.year == 2024 and d.month == 6 for d in dates)
    assert date(2023, 6, 14) not in dates
    assert len(dates) == 6


def test_filters_combine_with_and(history):
    selection = TransactionFilter(type="expense", category="alimentación", period="week")
    result = selection.apply(history, now=NOW)

    assert selection.is_active
    assert [(tx.amount, tx.date) for tx in result] == [
        (35.0, date(2024, 6, 15)),
        (12.0, date(2024, 6, 9)),
    ]


def test_filter_order_does_not_matter(history):
    single = [
        TransactionFilter(type="expense"),
        TransactionFilter(category="alimentación"),
        TransactionFilter(period="month"),
    ]
    combined = ids(TransactionFilter(type="expense", category="alimentación", period="month").apply(history, now=NOW))

    for order in itertools.permutations(single):
        result = history
        for selection in order:
            result = selection.apply(result, now=NOW)
        assert ids(result) == combined


def test_available_categories_ignore_active_filters(history):
    narrowed = TransactionFilter(type="income").apply(history, now=NOW)

    assert available_categories(history) == [
        "transporte", "salario", "alimentación", "ropa", "freelance", "salud",
    ]
    assert len(available_categories(narrowed)) == 2


def test_unknown_selector_rejected():
    with pytest.raises(ValueError):
        TransactionFilter(period="year")
