"""Pydantic schemas for the auth API."""

from typing import Optional

from pydantic import BaseModel


class AuthUrlResponse(BaseModel):
    auth_url: str


class AuthStatusResponse(BaseModel):
    authenticated: bool
    reason: Optional[str] = None
    expires_at: Optional[int] = None


class LogoutResponse(BaseModel):
    logged_out: bool
    token_removed: bool
