"""Shared fixtures."""
import itertools
from datetime import date, datetime, timezone
import pytest
from finzen.adapters.mock import MockDataBackend, MockIdentityProvider
from finzen.models.goal import SavingsGoal
from finzen.models.transaction import Transaction


@pytest.fixture
def make_transaction():
    """Factory for stored transactions with sensible defaults."""
    counter = itertools.count(1)

    def _make(type="expense", amount=10.0, category="otros", on=date(2024, 6, 15), description=""):
        n = next(counter)
        return Transaction(
            id=f"tx_{n}",
            user_id="user_1",
            type=type,
            amount=amount,
            category=category,
            description=description,
            date=on,
            created_at=datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def make_goal():
    counter = itertools.count(1)

    def _make(target=200.0, current=0.0, title="Trip", icon="plane"):
        n = next(counter)
        return SavingsGoal(
            id=f"goal_{n}",
            user_id="user_1",
            title=title,
            target_amount=target,
            current_amount=current,
            icon=icon,
        )

    return _make


@pytest.fixture
def mock_data():
    return MockDataBackend()


@pytest.fixture
def mock_identity():
    return MockIdentityProvider()
