"""In-memory adapters for running and testing without a Supabase project."""
import secrets
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple
from finzen.adapters.base import DataBackend, IdentityProvider, Row
from finzen.errors import AuthenticationError, RemoteServiceError
from finzen.models.auth import AuthSession, AuthUser, SignUpResponse


# Seed content for the financial_tips table
MOCK_TIPS = [
    {
        "title": "Pay yourself first",
        "content": "Move a fixed share of every paycheck into savings before you spend anything.",
        "category": "saving",
    },
    {
        "title": "Track small expenses",
        "content": "Coffee and snacks add up. Logging them for a month shows where money leaks.",
        "category": "budgeting",
    },
    {
        "title": "Build an emergency fund",
        "content": "Aim for three to six months of essential expenses in an easy-to-reach account.",
        "category": "saving",
    },
    {
        "title": "Use the 50/30/20 rule",
        "content": "Split income into needs (50%), wants (30%) and savings or debt payments (20%).",
        "category": "budgeting",
    },
    {
        "title": "Review subscriptions",
        "content": "Cancel services you have not used in the last month.",
        "category": "spending",
    },
    {
        "title": "Set deadlines for goals",
        "content": "A goal with a date turns into a monthly amount you can plan around.",
        "category": "goals",
    },
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class MockDataBackend(DataBackend):
    """Dictionary-backed table service with PostgREST-like semantics.

    ``failing_tables`` makes every operation on the named tables raise
    RemoteServiceError, to exercise failure handling.
    """

    def __init__(self, seed_tips: bool = True):
        self.tables: Dict[str, List[Row]] = {
            "transactions": [],
            "savings_goals": [],
            "financial_tips": [],
        }
        self.failing_tables: Set[str] = set()
        if seed_tips:
            for tip in MOCK_TIPS:
                self.tables["financial_tips"].append(
                    {"id": str(uuid.uuid4()), "created_at": _now_iso(), **tip}
                )

    def _table(self, table: str) -> List[Row]:
        if table in self.failing_tables:
            raise RemoteServiceError(f"Simulated failure on table {table}", status_code=503)
        if table not in self.tables:
            raise RemoteServiceError(f"relation \"{table}\" does not exist", status_code=404)
        return self.tables[table]

    @staticmethod
    def _matches(row: Row, filters: Optional[Dict[str, Any]]) -> bool:
        return all(str(row.get(column)) == str(value) for column, value in (filters or {}).items())

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> List[Row]:
        rows = [dict(row) for row in self._table(table) if self._matches(row, filters)]
        if order:
            column, descending = order
            rows.sort(key=lambda r: str(r.get(column) or ""), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def insert(
        self,
        table: str,
        row: Row,
        *,
        access_token: Optional[str] = None,
    ) -> Row:
        rows = self._table(table)
        stored = {"id": str(uuid.uuid4()), "created_at": _now_iso(), **row}
        if table == "savings_goals":
            stored.setdefault("completed", False)
        rows.append(stored)
        return dict(stored)

    async def delete(
        self,
        table: str,
        *,
        filters: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> int:
        if not filters:
            raise ValueError("Refusing to delete without filters")
        rows = self._table(table)
        kept = [row for row in rows if not self._matches(row, filters)]
        removed = len(rows) - len(kept)
        rows[:] = kept
        return removed


class MockIdentityProvider(IdentityProvider):
    """Accounts and sessions kept in process memory."""

    def __init__(self):
        self._accounts: Dict[str, Dict[str, Any]] = {}
        self._sessions: Dict[str, str] = {}

    def _issue_session(self, email: str) -> AuthSession:
        account = self._accounts[email]
        token = secrets.token_urlsafe(24)
        self._sessions[token] = email
        return AuthSession(
            access_token=token,
            refresh_token=secrets.token_urlsafe(16),
            user=account["user"],
        )

    async def sign_up(self, email: str, password: str, full_name: str) -> SignUpResponse:
        email = email.strip().lower()
        if email in self._accounts:
            raise AuthenticationError("User already registered")
        if len(password) < 6:
            raise AuthenticationError("Password should be at least 6 characters")
        user = AuthUser(id=str(uuid.uuid4()), email=email, full_name=full_name)
        self._accounts[email] = {"password": password, "user": user}
        session = self._issue_session(email)
        return SignUpResponse(user=user, session=session)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        email = email.strip().lower()
        account = self._accounts.get(email)
        if not account or not secrets.compare_digest(account["password"], password):
            raise AuthenticationError("Invalid login credentials")
        return self._issue_session(email)

    async def sign_out(self, access_token: str) -> None:
        self._sessions.pop(access_token, None)

    async def get_user(self, access_token: str) -> AuthUser:
        email = self._sessions.get(access_token)
        if email is None:
            raise AuthenticationError("Session expired or invalid")
        return self._accounts[email]["user"]
