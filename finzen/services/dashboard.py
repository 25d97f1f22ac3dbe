"""Dashboard loading, shared state and derived views."""
import asyncio
import logging
from collections import OrderedDict
from datetime import date, datetime
from typing import List, Optional
from finzen.adapters.base import DataBackend
from finzen.config import settings
from finzen.errors import AuthenticationError
from finzen.models.forms import SavingsGoalForm, TransactionForm
from finzen.models.goal import SavingsGoal
from finzen.models.summary import DashboardView, HistoryView, TransactionRow
from finzen.models.tip import FinancialTip
from finzen.models.transaction import Transaction
from finzen.services.aggregator import TransactionAggregator
from finzen.services.filters import TransactionFilter, available_categories
from finzen.services.forms import validate_goal_form, validate_transaction_form
from finzen.services.goals import GoalProgressCalculator
from finzen.storage.stores import GoalStore, TipStore, TransactionStore
from finzen.utils.formatting import format_relative_date, format_signed_money

logger = logging.getLogger(__name__)


class DashboardState:
    """
    Loaded collections for one user.

    Loads are numbered as they start. Results of a load are applied only if
    no later-started load has been applied already, so the newest load wins
    whatever order the loads complete in. A collection whose read failed is
    passed as None and keeps its previous value.
    """

    def __init__(self):
        self.transactions: List[Transaction] = []
        self.goals: List[SavingsGoal] = []
        self.tips: List[FinancialTip] = []
        self.loaded_at: Optional[datetime] = None
        self._started = 0
        self._applied = 0
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def generation(self) -> int:
        """Generation of the load currently reflected in the state."""
        return self._applied

    def begin_load(self) -> int:
        self._started += 1
        self._in_flight += 1
        return self._started

    def abandon(self) -> None:
        """Mark a load as finished without applying anything."""
        self._in_flight = max(self._in_flight - 1, 0)

    def apply(
        self,
        generation: int,
        transactions: Optional[List[Transaction]] = None,
        goals: Optional[List[SavingsGoal]] = None,
        tips: Optional[List[FinancialTip]] = None,
    ) -> bool:
        """Apply a finished load. Returns False if it was superseded and discarded."""
        self._in_flight = max(self._in_flight - 1, 0)
        if generation < self._applied:
            logger.debug("Discarding stale load %s (current %s)", generation, self._applied)
            return False

        if transactions is not None:
            self.transactions = transactions
        if goals is not None:
            self.goals = goals
        if tips is not None:
            self.tips = tips
        self._applied = generation
        self.loaded_at = datetime.now()
        return True


class DashboardService:
    """Single writer of per-user DashboardState; builds the dashboard and history views."""

    def __init__(self, backend: DataBackend, max_users: Optional[int] = None):
        self.transactions = TransactionStore(backend)
        self.goals = GoalStore(backend)
        self.tips = TipStore(backend)
        self.aggregator = TransactionAggregator()
        self.progress = GoalProgressCalculator()
        self.max_users = settings.max_cached_users if max_users is None else max_users
        self._states: "OrderedDict[str, DashboardState]" = OrderedDict()

    def state_for(self, user_id: str) -> DashboardState:
        """Get (or create) the user's state; the least recently used state is evicted past ``max_users``."""
        state = self._states.get(user_id)
        if state is None:
            state = DashboardState()
            self._states[user_id] = state
        self._states.move_to_end(user_id)
        while len(self._states) > max(self.max_users, 1):
            evicted, _ = self._states.popitem(last=False)
            logger.debug("Evicted dashboard state", extra={"user_id": evicted})
        return state

    def forget(self, user_id: str) -> None:
        """Drop the user's loaded state, e.g. on sign-out."""
        self._states.pop(user_id, None)

    async def load(self, user_id: str, access_token: Optional[str] = None) -> DashboardState:
        """
        Load transactions, goals and tips concurrently into the user's state.

        Failed reads are logged and leave the previous collection in place.
        An AuthenticationError from any read is raised after the others settle.
        """
        state = self.state_for(user_id)
        generation = state.begin_load()

        try:
            results = await asyncio.gather(
                self.transactions.get_transactions(user_id, access_token),
                self.goals.get_goals(user_id, access_token),
                self.tips.get_tips(access_token),
                return_exceptions=True,
            )
        except BaseException:
            state.abandon()
            raise

        loaded = []
        auth_error = None
        for name, result in zip(("transactions", "goals", "tips"), results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    state.abandon()
                    raise result
                if isinstance(result, AuthenticationError):
                    auth_error = result
                logger.error("Error loading %s for dashboard: %s", name, result)
                loaded.append(None)
            else:
                loaded.append(result)

        state.apply(generation, *loaded)
        if auth_error is not None:
            raise auth_error
        return state

    def build_view(self, state: DashboardState, as_of: Optional[datetime] = None) -> DashboardView:
        """Derive the dashboard figures from already-loaded state."""
        return DashboardView(
            totals=self.aggregator.calculate_totals(state.transactions),
            monthly=self.aggregator.monthly_snapshot(state.transactions, as_of=as_of),
            top_categories=self.aggregator.category_breakdown(state.transactions),
            goals=self.progress.progress_all(state.goals),
            tips=state.tips[: settings.tip_display_limit],
            transaction_count=len(state.transactions),
        )

    def build_history(
        self,
        state: DashboardState,
        selection: TransactionFilter,
        now: Optional[datetime] = None,
    ) -> HistoryView:
        """Apply the history selectors to the loaded transactions."""
        now = now or datetime.now()
        matching = selection.apply(state.transactions, now=now)
        return HistoryView(
            transactions=[
                TransactionRow(
                    transaction=tx,
                    amount_label=format_signed_money(tx.amount, tx.type),
                    date_label=format_relative_date(tx.date, today=now.date()),
                )
                for tx in matching
            ],
            count=len(matching),
            available_categories=available_categories(state.transactions),
            filters_active=selection.is_active,
        )

    async def add_transaction(
        self,
        user_id: str,
        form: TransactionForm,
        access_token: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Transaction:
        """Validate and store a new transaction, then reload the dashboard."""
        record = validate_transaction_form(form, user_id, today=today)
        created = await self.transactions.add_transaction(record, access_token)
        await self.load(user_id, access_token)
        return created

    async def delete_transaction(
        self,
        user_id: str,
        transaction_id: str,
        access_token: Optional[str] = None,
    ) -> bool:
        deleted = await self.transactions.delete_transaction(user_id, transaction_id, access_token)
        if deleted:
            await self.load(user_id, access_token)
        return deleted

    async def add_goal(
        self,
        user_id: str,
        form: SavingsGoalForm,
        access_token: Optional[str] = None,
    ) -> SavingsGoal:
        record = validate_goal_form(form, user_id)
        created = await self.goals.add_goal(record, access_token)
        await self.load(user_id, access_token)
        return created
