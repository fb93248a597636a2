"""Mood-matched playlist requests."""

from __future__ import annotations

import logging

import httpx

from weatherify.backend import BackendClient, BackendError
from weatherify.client.navigation import Navigator
from weatherify.client.notifications import NotificationPresenter
from weatherify.client.store import GenerateSettled, GenerateStarted, Store
from weatherify.models.weather import Mood

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Weather data not ready yet, please try again."
IN_PROGRESS_MESSAGE = "In progress!"
SUCCESS_MESSAGE = "Playlist created and music started!"
FAILED_MESSAGE = "Failed to create playlist."
ERROR_MESSAGE = "An error occurred while generating the playlist."


class PlaylistRequester:
    """Asks the backend for a playlist and opens the result.

    Only one request may be in flight; further calls are ignored until it
    settles.
    """

    def __init__(
        self,
        store: Store,
        backend: BackendClient,
        navigator: Navigator,
        notifications: NotificationPresenter,
    ):
        self.store = store
        self.backend = backend
        self.navigator = navigator
        self.notifications = notifications

    @property
    def in_flight(self) -> bool:
        return self.store.state.session.generating

    async def generate(self, mood: Mood | None = None) -> str | None:
        """Request a playlist for a mood (defaults to the current mood).

        Returns:
            The playlist URL, or None if nothing was generated
        """
        if mood is None:
            mood = self.store.state.weather.mood

        if not mood.is_set:
            self.notifications.show(NOT_READY_MESSAGE)
            return None

        if self.in_flight:
            logger.info("Playlist request already in progress, ignoring")
            return None

        logger.info(f"Sending weather to backend: {mood.value}")
        self.store.dispatch(GenerateStarted())
        self.notifications.show(IN_PROGRESS_MESSAGE)

        try:
            playlist_url = await self.backend.generate_playlist(mood)
        except BackendError as e:
            logger.error(f"Generate error: {e.status_code} {e}")
            if e.is_rejection:
                self.notifications.show(e.detail or FAILED_MESSAGE)
            else:
                self.notifications.show(ERROR_MESSAGE)
            return None
        except httpx.HTTPError as e:
            logger.error(f"Generate error: {e}")
            self.notifications.show(ERROR_MESSAGE)
            return None
        finally:
            self.store.dispatch(GenerateSettled())

        logger.info(f"Playlist URL: {playlist_url}")
        self.notifications.show(SUCCESS_MESSAGE)
        self.navigator.open_new(playlist_url)
        return playlist_url
