"""Base interfaces for the remote identity and data services."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple
from finzen.models.auth import AuthSession, AuthUser, SignUpResponse

Row = Dict[str, Any]


class IdentityProvider(ABC):
    """Abstract base class for identity providers."""

    @abstractmethod
    async def sign_up(self, email: str, password: str, full_name: str) -> SignUpResponse:
        """
        Register a new account.

        Args:
            email: Login email
            password: Plain-text password, sent once to the provider
            full_name: Stored as user metadata

        Returns:
            SignUpResponse; its session is None while confirmation is pending
        """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for a session. Raises AuthenticationError on rejection."""

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Invalidate a session."""

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser:
        """Resolve the user behind an access token. Raises AuthenticationError if invalid."""


class DataBackend(ABC):
    """Abstract base class for the remote table service.

    Rows are plain dictionaries as delivered by the service; mapping them to
    typed records is the job of ``finzen.storage``.
    """

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> List[Row]:
        """
        Read rows from a table.

        Args:
            table: Table name
            filters: Column equality filters, combined with AND
            order: (column, descending) pair
            limit: Maximum number of rows
            access_token: User token for row-level security

        Returns:
            List of row dictionaries
        """

    @abstractmethod
    async def insert(
        self,
        table: str,
        row: Row,
        *,
        access_token: Optional[str] = None,
    ) -> Row:
        """Insert one row and return it as stored (with id and created_at)."""

    @abstractmethod
    async def delete(
        self,
        table: str,
        *,
        filters: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> int:
        """Delete rows matching all filters and return how many were removed."""
