"""Tests for transaction aggregation."""
from datetime import date, datetime
import pytest
from finzen.services.aggregator import TransactionAggregator

AS_OF = datetime(2024, 6, 15, 9, 30)


@pytest.fixture
def aggregator():
    return TransactionAggregator(top_limit=5)


def test_empty_list(aggregator):
    """Empty input gives zero totals and no breakdown."""
    totals = aggregator.calculate_totals([])
    monthly = aggregator.monthly_snapshot([], as_of=AS_OF)

    assert totals.balance == 0
    assert totals.income == 0
    assert totals.expenses == 0
    assert monthly.income == 0
    assert monthly.expenses == 0
    assert monthly.balance == 0
    assert aggregator.category_breakdown([]) == []


def test_balance_is_income_minus_expenses(aggregator, make_transaction):
    transactions = [
        make_transaction("income", 1200.0, "salario", date(2023, 12, 1)),
        make_transaction("expense", 300.25, "vivienda", date(2024, 2, 3)),
        make_transaction("income", 80.5, "regalo", date(2024, 6, 1)),
        make_transaction("expense", 19.75, "transporte", date(2024, 6, 2)),
    ]
    totals = aggregator.calculate_totals(transactions)

    assert totals.income == 1280.5
    assert totals.expenses == 320.0
    assert totals.balance == totals.income - totals.expenses


def test_monthly_snapshot_example(aggregator, make_transaction):
    """Income in January, food this month and last month."""
    transactions = [
        make_transaction("income", 100.0, "salario", date(2024, 1, 10)),
        make_transaction("expense", 40.0, "food", date(2024, 6, 3)),
        make_transaction("expense", 10.0, "food", date(2024, 5, 20)),
    ]

    monthly = aggregator.monthly_snapshot(transactions, as_of=AS_OF)
    totals = aggregator.calculate_totals(transactions)

    assert monthly.expenses == 40.0
    assert monthly.income == 0.0
    assert [(c.category, c.total) for c in monthly.top_categories] == [("food", 40.0)]
    assert totals.balance == 50.0


def test_monthly_snapshot_ignores_same_month_other_year(aggregator, make_transaction):
    transactions = [
        make_transaction("expense", 25.0, "ropa", date(2023, 6, 15)),
        make_transaction("expense", 5.0, "ropa", date(2024, 6, 30)),
        make_transaction("income", 70.0, "freelance", date(2024, 6, 1)),
    ]
    monthly = aggregator.monthly_snapshot(transactions, as_of=AS_OF)

    assert monthly.year == 2024
    assert monthly.month == 6
    assert monthly.expenses == 5.0
    assert monthly.income == 70.0
    assert monthly.balance == 65.0
    assert monthly.income_count == 1
    assert monthly.expense_count == 1


def test_breakdown_top_five_sorted(aggregator, make_transaction):
    amounts = {"a": 10, "b": 70, "c": 30, "d": 50, "e": 20, "f": 60, "g": 40}
    transactions = [make_transaction("expense", float(v), k) for k, v in amounts.items()]
    transactions.append(make_transaction("income", 999.0, "salario"))

    breakdown = aggregator.category_breakdown(transactions)
    totals = [c.total for c in breakdown]

    assert len(breakdown) == 5
    assert [c.category for c in breakdown] == ["b", "f", "d", "g", "c"]
    assert totals == sorted(totals, reverse=True)
    assert sum(totals) <= aggregator.calculate_totals(transactions).expenses


def test_breakdown_sums_per_category_and_skips_income(aggregator, make_transaction):
    transactions = [
        make_transaction("expense", 12.0, "salud"),
        make_transaction("income", 500.0, "salud"),
        make_transaction("expense", 8.0, "salud"),
    ]
    breakdown = aggregator.category_breakdown(transactions)

    assert len(breakdown) == 1
    assert breakdown[0].total == 20.0
    assert breakdown[0].share == 100.0


def test_breakdown_keys_are_case_sensitive(aggregator, make_transaction):
    transactions = [
        make_transaction("expense", 5.0, "ocio"),
        make_transaction("expense", 5.0, "Ocio"),
    ]

    breakdown = aggregator.category_breakdown(transactions)

    assert transactions[1].category == "Ocio"
    assert {c.category for c in breakdown} == {"ocio", "Ocio"}


def test_breakdown_ties_keep_first_seen_order(aggregator, make_transaction):
    transactions = [
        make_transaction("expense", 15.0, "transporte"),
        make_transaction("expense", 30.0, "vivienda"),
        make_transaction("expense", 15.0, "alimentación"),
        make_transaction("expense", 15.0, "ropa"),
    ]
    breakdown = aggregator.category_breakdown(transactions)

    assert [c.category for c in breakdown] == ["vivienda", "transporte", "alimentación", "ropa"]

    # Reversed input reverses the tie order, not the ranking
    breakdown = aggregator.category_breakdown(list(reversed(transactions)))
    assert [c.category for c in breakdown] == ["vivienda", "ropa", "alimentación", "transporte"]


def test_breakdown_share_of_total_expenses(aggregator, make_transaction):
    transactions = [
        make_transaction("expense", 75.0, "vivienda"),
        make_transaction("expense", 25.0, "ropa"),
    ]
    breakdown = aggregator.category_breakdown(transactions)

    assert breakdown[0].share == 75.0
    assert breakdown[1].share == 25.0


def test_breakdown_zero_amounts_share(aggregator, make_transaction):
    breakdown = aggregator.category_breakdown([make_transaction("expense", 0.0, "otros")])
    assert breakdown[0].share == 0.0


def test_explicit_zero_limit_gives_empty_breakdown(make_transaction):
    transactions = [make_transaction("expense", 5.0, "ocio")]

    assert TransactionAggregator(top_limit=0).category_breakdown(transactions) == []
    assert len(TransactionAggregator().category_breakdown(transactions)) == 1
