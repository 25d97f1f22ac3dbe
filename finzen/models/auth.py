"""Identity models."""
from typing import Optional
from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """Authenticated user as reported by the identity provider."""

    id: str
    email: str
    full_name: Optional[str] = None


class AuthSession(BaseModel):
    """Session returned by sign-in (and by sign-up when no confirmation is required)."""

    access_token: str
    refresh_token: Optional[str] = None
    user: AuthUser


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    """Sign-up outcome. ``session`` is None while email confirmation is pending."""

    user: AuthUser
    session: Optional[AuthSession] = None
