"""Typed stores over the remote table service.

Each store issues the reads/writes for one table and maps the loosely-typed
rows into validated records. Rows that fail validation are logged and
skipped so they never reach the aggregation code.
"""
import logging
from typing import List, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from finzen.adapters.base import DataBackend, Row
from finzen.config import settings
from finzen.errors import RemoteServiceError
from finzen.models.goal import SavingsGoal, SavingsGoalCreate
from finzen.models.tip import FinancialTip
from finzen.models.transaction import Transaction, TransactionCreate
from finzen.utils.privacy import obfuscate_text

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def rows_to_records(rows: List[Row], model: Type[RecordT], table: str) -> List[RecordT]:
    """Validate rows into ``model`` instances, dropping the ones that do not fit."""
    records = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid %s row %s: %s",
                table,
                row.get("id", "?") if isinstance(row, dict) else "?",
                e.errors(include_url=False),
            )
    return records


class TransactionStore:
    """Storage for transactions."""

    table = "transactions"

    def __init__(self, backend: DataBackend):
        self.backend = backend

    async def get_transactions(
        self,
        user_id: str,
        access_token: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Get a user's most recent transactions, newest date first."""
        rows = await self.backend.select(
            self.table,
            filters={"user_id": user_id},
            order=("date", True),
            limit=limit or settings.transaction_page_size,
            access_token=access_token,
        )
        return rows_to_records(rows, Transaction, self.table)

    async def add_transaction(
        self,
        transaction: TransactionCreate,
        access_token: Optional[str] = None,
    ) -> Transaction:
        """Insert a transaction and return it as stored."""
        row = await self.backend.insert(
            self.table,
            transaction.model_dump(mode="json"),
            access_token=access_token,
        )
        logger.info(
            "Added %s transaction",
            transaction.type,
            extra={"category": transaction.category, "description": obfuscate_text(transaction.description)},
        )
        try:
            return Transaction.model_validate(row)
        except ValidationError as e:
            raise RemoteServiceError(f"Data service returned an invalid transaction: {e}") from e

    async def delete_transaction(
        self,
        user_id: str,
        transaction_id: str,
        access_token: Optional[str] = None,
    ) -> bool:
        """Delete one of the user's transactions. Returns False if nothing matched."""
        removed = await self.backend.delete(
            self.table,
            filters={"id": transaction_id, "user_id": user_id},
            access_token=access_token,
        )
        if removed:
            logger.info("Deleted transaction %s", transaction_id)
        return removed > 0


class GoalStore:
    """Storage for savings goals."""

    table = "savings_goals"

    def __init__(self, backend: DataBackend):
        self.backend = backend

    async def get_goals(self, user_id: str, access_token: Optional[str] = None) -> List[SavingsGoal]:
        """Get all of a user's goals, newest first."""
        rows = await self.backend.select(
            self.table,
            filters={"user_id": user_id},
            order=("created_at", True),
            access_token=access_token,
        )
        return rows_to_records(rows, SavingsGoal, self.table)

    async def add_goal(self, goal: SavingsGoalCreate, access_token: Optional[str] = None) -> SavingsGoal:
        row = await self.backend.insert(self.table, goal.model_dump(mode="json"), access_token=access_token)
        logger.info("Added savings goal", extra={"icon": goal.icon})
        try:
            return SavingsGoal.model_validate(row)
        except ValidationError as e:
            raise RemoteServiceError(f"Data service returned an invalid goal: {e}") from e


class TipStore:
    """Read-only access to financial tips."""

    table = "financial_tips"

    def __init__(self, backend: DataBackend):
        self.backend = backend

    async def get_tips(self, access_token: Optional[str] = None, limit: Optional[int] = None) -> List[FinancialTip]:
        rows = await self.backend.select(
            self.table,
            limit=limit or settings.tip_fetch_limit,
            access_token=access_token,
        )
        return rows_to_records(rows, FinancialTip, self.table)
