"""Supabase adapters: GoTrue for identity, PostgREST for tables."""
import logging
from typing import Any, Dict, List, Optional, Tuple
import httpx
from finzen.adapters.base import DataBackend, IdentityProvider, Row
from finzen.config import settings
from finzen.errors import AuthenticationError, RemoteServiceError
from finzen.models.auth import AuthSession, AuthUser, SignUpResponse
from finzen.utils.privacy import mask_email

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    """Pull the human-readable message out of a GoTrue/PostgREST error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {resp.status_code}"


def _user_from_payload(data: Dict[str, Any]) -> AuthUser:
    metadata = data.get("user_metadata") or {}
    return AuthUser(
        id=data["id"],
        email=data.get("email") or "",
        full_name=metadata.get("full_name"),
    )


def _session_from_payload(data: Dict[str, Any]) -> AuthSession:
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        user=_user_from_payload(data["user"]),
    )


class _SupabaseClient:
    """Shared HTTP plumbing for both adapters."""

    def __init__(
        self,
        url: str = "",
        anon_key: str = "",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = (url or settings.supabase_url).rstrip("/")
        self.anon_key = anon_key or settings.supabase_anon_key
        if not self.url or not self.anon_key:
            raise ValueError("Supabase URL and anon key required")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.transport = transport

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        headers = self._headers(access_token)
        if extra_headers:
            headers.update(extra_headers)
        try:
            async with httpx.AsyncClient(
                base_url=self.url, timeout=self.timeout, transport=self.transport
            ) as client:
                return await client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Supabase %s %s failed: %s", method, path, e)
            raise RemoteServiceError(f"Could not reach the data service: {e}") from e


class SupabaseIdentityProvider(_SupabaseClient, IdentityProvider):
    """Identity provider backed by Supabase Auth (GoTrue)."""

    async def sign_up(self, email: str, password: str, full_name: str) -> SignUpResponse:
        resp = await self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name}},
        )
        if resp.status_code >= 400:
            logger.warning("Sign-up rejected for %s: %s", mask_email(email), resp.status_code)
            raise AuthenticationError(_error_message(resp))

        data = resp.json()
        # Projects with email confirmation return a bare user, others a session.
        if data.get("access_token"):
            session = _session_from_payload(data)
            return SignUpResponse(user=session.user, session=session)
        return SignUpResponse(user=_user_from_payload(data))

    async def sign_in(self, email: str, password: str) -> AuthSession:
        resp = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if resp.status_code >= 400:
            logger.info("Sign-in rejected for %s", mask_email(email))
            raise AuthenticationError(_error_message(resp))
        return _session_from_payload(resp.json())

    async def sign_out(self, access_token: str) -> None:
        resp = await self._request("POST", "/auth/v1/logout", access_token=access_token)
        if resp.status_code >= 400 and resp.status_code != 401:
            raise RemoteServiceError(_error_message(resp), status_code=resp.status_code)

    async def get_user(self, access_token: str) -> AuthUser:
        resp = await self._request("GET", "/auth/v1/user", access_token=access_token)
        if resp.status_code in (401, 403):
            raise AuthenticationError("Session expired or invalid")
        if resp.status_code >= 400:
            raise RemoteServiceError(_error_message(resp), status_code=resp.status_code)
        return _user_from_payload(resp.json())


class SupabaseDataBackend(_SupabaseClient, DataBackend):
    """Table access through the PostgREST API."""

    @staticmethod
    def _filter_params(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    def _check(self, resp: httpx.Response, table: str) -> None:
        if resp.status_code in (401, 403):
            raise AuthenticationError("Not allowed to access " + table)
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.error("PostgREST error on %s (%s): %s", table, resp.status_code, message)
            raise RemoteServiceError(message, status_code=resp.status_code)

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> List[Row]:
        params: Dict[str, Any] = {"select": "*"}
        params.update(self._filter_params(filters))
        if order:
            column, descending = order
            params["order"] = f"{column}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = limit

        resp = await self._request("GET", f"/rest/v1/{table}", access_token=access_token, params=params)
        self._check(resp, table)
        return resp.json()

    async def insert(
        self,
        table: str,
        row: Row,
        *,
        access_token: Optional[str] = None,
    ) -> Row:
        resp = await self._request(
            "POST",
            f"/rest/v1/{table}",
            access_token=access_token,
            json=row,
            extra_headers={"Prefer": "return=representation"},
        )
        self._check(resp, table)
        data = resp.json()
        if isinstance(data, list):
            if not data:
                raise RemoteServiceError(f"Insert into {table} returned no row")
            return data[0]
        return data

    async def delete(
        self,
        table: str,
        *,
        filters: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> int:
        if not filters:
            raise ValueError("Refusing to delete without filters")
        resp = await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            access_token=access_token,
            params=self._filter_params(filters),
            extra_headers={"Prefer": "return=representation"},
        )
        self._check(resp, table)
        if not resp.content:
            return 0
        return len(resp.json() or [])
