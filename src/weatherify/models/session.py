"""Session and login-redirect models."""

from __future__ import annotations

from enum import Enum

import httpx
from pydantic import BaseModel, ConfigDict, Field


LOGIN_SUCCESS_PARAM = "login_success"
LOGIN_ERROR_PARAM = "login_error"


class SessionState(str, Enum):
    """Client view of the backend session.

    The backend session cookie is the source of truth; the client only keeps
    this flag.
    """

    UNKNOWN = "unknown"  # Still loading
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"

    @classmethod
    def from_logged_in(cls, logged_in: bool) -> SessionState:
        return cls.AUTHENTICATED if logged_in else cls.UNAUTHENTICATED


class SessionStatus(BaseModel):
    """Body of the backend session-status endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    logged_in: bool = Field(..., alias="loggedIn")
    user_display_name: str | None = Field(default=None, alias="userDisplayName")


class LoginMarkers(BaseModel):
    """One-time query parameters left by the backend's login redirect."""

    success: bool = False
    error: str | None = None

    @classmethod
    def from_url(cls, url: str) -> LoginMarkers:
        """Read the login markers from a page URL."""
        params = httpx.URL(url).params
        return cls(
            success=params.get(LOGIN_SUCCESS_PARAM) == "true",
            error=params.get(LOGIN_ERROR_PARAM) or None,
        )


def strip_login_markers(url: str) -> str:
    """Return the URL with both login marker parameters removed."""
    stripped = (
        httpx.URL(url)
        .copy_remove_param(LOGIN_SUCCESS_PARAM)
        .copy_remove_param(LOGIN_ERROR_PARAM)
    )
    return str(stripped)
