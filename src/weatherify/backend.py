"""HTTP client for the Weatherify playlist backend.

## Endpoints

| Operation | Method | Path |
|-----------|--------|------|
| Session status | GET | /api/v1/auth/spotify/status |
| Login (browser redirect) | GET | /api/v1/auth/spotify/login |
| Logout | GET | /api/v1/auth/spotify/logout |
| Generate playlist | POST | /api/v1/playlist/generate |

## Credentials

The backend tracks the user with a session cookie. Every request goes through
one `httpx.AsyncClient`, so cookies set by one response are sent with the
next. A cookie obtained elsewhere (e.g. after a browser login) can be seeded
via `SESSION_COOKIE`.

## Errors

- Non-success status -> BackendError with `status_code` and, when the body
  carries one, the backend's `message`
- Malformed success body -> BackendError
- Network failure -> httpx.HTTPError propagates unchanged
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from weatherify.config import Settings
from weatherify.models.session import SessionStatus
from weatherify.models.weather import Mood

logger = logging.getLogger(__name__)

STATUS_PATH = "/api/v1/auth/spotify/status"
LOGIN_PATH = "/api/v1/auth/spotify/login"
LOGOUT_PATH = "/api/v1/auth/spotify/logout"
GENERATE_PATH = "/api/v1/playlist/generate"


class BackendError(Exception):
    """Raised when the backend answers with an error or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # Message supplied by the backend itself, if any
        self.detail = detail

    @property
    def is_rejection(self) -> bool:
        """Whether the backend answered with a non-success status."""
        return self.status_code is not None and self.status_code >= 400


def _error_message(response: httpx.Response) -> str | None:
    """Extract the backend's `message` field from an error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str) and data["message"]:
        return data["message"]
    return None


class BackendClient:
    """Credentialed client for the playlist backend.

    Example:
        ```python
        async with BackendClient("http://127.0.0.1:8080") as backend:
            status = await backend.get_session_status()
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        cookies: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            cookies=cookies,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> BackendClient:
        cookies = None
        if settings.session_cookie:
            cookies = {settings.session_cookie_name: settings.session_cookie}
        return cls(
            settings.backend_base_url,
            timeout=settings.request_timeout_seconds,
            cookies=cookies,
            transport=transport,
        )

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def login_url(self) -> str:
        """Absolute URL the browser is sent to for a login redirect."""
        return f"{self.base_url}{LOGIN_PATH}"

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        message = _error_message(response)
        logger.debug(f"Backend {action} failed: {response.status_code} {response.text}")
        raise BackendError(
            message or f"Backend {action} failed with status {response.status_code}",
            status_code=response.status_code,
            detail=message,
        )

    async def get_session_status(self) -> SessionStatus:
        """Ask the backend whether the current session is logged in."""
        response = await self._client.get(STATUS_PATH)
        self._raise_for_status(response, "session status")
        try:
            return SessionStatus.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BackendError(
                f"Malformed session status response: {e}",
                status_code=response.status_code,
            ) from e

    async def logout(self) -> None:
        """End the backend session."""
        response = await self._client.get(LOGOUT_PATH)
        self._raise_for_status(response, "logout")

    async def generate_playlist(self, mood: Mood) -> str:
        """Ask the backend to build a playlist for a mood.

        Returns:
            The playlist URL
        """
        response = await self._client.post(GENERATE_PATH, json={"weather": mood.value})
        self._raise_for_status(response, "playlist generation")
        try:
            data = response.json()
            playlist_url = data["playlistUrl"]
        except (ValueError, KeyError, TypeError) as e:
            raise BackendError(
                f"Malformed playlist response: {e}",
                status_code=response.status_code,
            ) from e
        if not isinstance(playlist_url, str) or not playlist_url:
            raise BackendError(
                "Malformed playlist response: empty playlistUrl",
                status_code=response.status_code,
            )
        return playlist_url
