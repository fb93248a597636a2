"""Transient, auto-dismissing notifications.

Each notification gets a token. Its hide timer only clears the notification
if that token is still the one on screen, so a timer scheduled for an older
message never dismisses a newer one.
"""

from __future__ import annotations

import asyncio
import itertools
import logging

from weatherify.client.store import Notification, NotificationHidden, NotificationShown, Store

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 3.0


class NotificationPresenter:
    """Shows one notification at a time; the newest replaces the previous."""

    def __init__(self, store: Store, duration: float = DEFAULT_DURATION_SECONDS):
        self.store = store
        self.duration = duration
        self._tokens = itertools.count(1)
        self._timers: dict[int, asyncio.TimerHandle] = {}

    def show(self, message: str) -> int:
        """Display a message and schedule its hide. Must run inside an event loop.

        Returns:
            The notification's token
        """
        token = next(self._tokens)
        self.store.dispatch(NotificationShown(Notification(token=token, message=message)))
        loop = asyncio.get_running_loop()
        self._timers[token] = loop.call_later(self.duration, self.hide, token)
        logger.debug(f"Notification {token}: {message}")
        return token

    def hide(self, token: int) -> None:
        """Hide a notification if it is still the one on screen."""
        handle = self._timers.pop(token, None)
        if handle is not None:
            handle.cancel()
        self.store.dispatch(NotificationHidden(token))

    @property
    def current(self) -> str | None:
        notification = self.store.state.notification.current
        return notification.message if notification else None

    def close(self) -> None:
        """Cancel all pending hide timers."""
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
