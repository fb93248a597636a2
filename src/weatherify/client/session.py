"""Backend session status, login and logout.

## Page-load path selection

Evaluated once per page load, from the current URL:

1. `login_success=true`: the backend just completed a login. Mark the session
   authenticated, notify, refresh the weather and strip the markers.
2. `login_error=<reason>`: the login failed. Mark unauthenticated, notify
   with the reason and strip the markers.
3. Otherwise ask the backend's session-status endpoint.

## Logout

Logout is best-effort. If the backend refuses or cannot be reached, the
session status is queried again rather than trusting the local flag.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from weatherify.backend import BackendClient, BackendError
from weatherify.client.navigation import Navigator
from weatherify.client.notifications import NotificationPresenter
from weatherify.client.store import SessionResolved, Store
from weatherify.models.session import LoginMarkers, SessionState, strip_login_markers

logger = logging.getLogger(__name__)

LOGIN_SUCCESS_MESSAGE = "Login successful!"
LOGIN_FAILED_MESSAGE = "Login failed: {reason}"
LOGOUT_SUCCESS_MESSAGE = "Successfully logged out."
LOGOUT_FAILED_MESSAGE = "Logout failed."
LOGOUT_ERROR_MESSAGE = "An error occurred during logout."


class SessionStatusChecker:
    """Tracks whether the user holds an authenticated backend session."""

    def __init__(
        self,
        store: Store,
        backend: BackendClient,
        navigator: Navigator,
        notifications: NotificationPresenter,
        on_login_success: Callable[[], Any] | None = None,
    ):
        self.store = store
        self.backend = backend
        self.navigator = navigator
        self.notifications = notifications
        self.on_login_success = on_login_success
        self._initialized = False

    @property
    def state(self) -> SessionState:
        return self.store.state.session.state

    async def initialize(self) -> SessionState:
        """Run the page-load path selection. Only the first call has effect."""
        if self._initialized:
            logger.debug("Session already initialized for this page load")
            return self.state
        self._initialized = True

        markers = LoginMarkers.from_url(self.navigator.current_url)

        if markers.success:
            logger.info("Login successful callback detected from URL")
            self.store.dispatch(SessionResolved(SessionState.AUTHENTICATED))
            self.notifications.show(LOGIN_SUCCESS_MESSAGE)
            if self.on_login_success is not None:
                self.on_login_success()
            self._strip_markers()
        elif markers.error is not None:
            logger.error(f"Login error detected from URL: {markers.error}")
            self.store.dispatch(SessionResolved(SessionState.UNAUTHENTICATED))
            self.notifications.show(LOGIN_FAILED_MESSAGE.format(reason=markers.error))
            self._strip_markers()
        else:
            await self.check_status()

        return self.state

    def _strip_markers(self) -> None:
        self.navigator.replace_url(strip_login_markers(self.navigator.current_url))

    async def check_status(self) -> SessionState:
        """Query the backend for the session state.

        Any failure is treated as logged out.
        """
        try:
            status = await self.backend.get_session_status()
        except BackendError as e:
            logger.error(f"Failed to check login status: {e.status_code} {e}")
            self.store.dispatch(SessionResolved(SessionState.UNAUTHENTICATED))
            return self.state
        except httpx.HTTPError as e:
            logger.error(f"Error checking login status: {e}")
            self.store.dispatch(SessionResolved(SessionState.UNAUTHENTICATED))
            return self.state

        if status.logged_in:
            logger.info(f"User is logged in (session active). User: {status.user_display_name}")
        else:
            logger.info("User is not logged in (no active session)")

        self.store.dispatch(
            SessionResolved(
                SessionState.from_logged_in(status.logged_in),
                user_display_name=status.user_display_name,
            )
        )
        return self.state

    def login(self) -> None:
        """Send the browsing context to the backend's login redirect."""
        logger.info(f"Redirecting to backend for login: {self.backend.login_url}")
        self.navigator.assign(self.backend.login_url)

    async def logout(self) -> SessionState:
        try:
            await self.backend.logout()
        except BackendError as e:
            logger.error(f"Logout failed: {e.status_code} {e}")
            self.notifications.show(LOGOUT_FAILED_MESSAGE)
            return await self.check_status()
        except httpx.HTTPError as e:
            logger.error(f"Logout error: {e}")
            self.notifications.show(LOGOUT_ERROR_MESSAGE)
            return await self.check_status()

        self.store.dispatch(SessionResolved(SessionState.UNAUTHENTICATED))
        self.notifications.show(LOGOUT_SUCCESS_MESSAGE)
        return self.state
