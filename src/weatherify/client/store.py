"""Client state container.

State is split into three independent slices:

- weather: the latest mood classification and location name
- session: the backend session flag and playlist-request progress
- notification: the single notification currently on screen

Components never mutate state directly. They dispatch events; `reduce`
computes the next state and every subscriber is told about the event.
Slices are disjoint, so tasks updating different slices cannot conflict.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable

from weatherify.models.session import SessionState
from weatherify.models.weather import Mood

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A transient user-facing message, identified by its token."""

    token: int
    message: str


@dataclass(frozen=True)
class WeatherSlice:
    mood: Mood = Mood.UNKNOWN
    location_name: str = ""


@dataclass(frozen=True)
class SessionSlice:
    state: SessionState = SessionState.UNKNOWN
    user_display_name: str | None = None
    generating: bool = False


@dataclass(frozen=True)
class NotificationSlice:
    current: Notification | None = None


@dataclass(frozen=True)
class AppState:
    weather: WeatherSlice = field(default_factory=WeatherSlice)
    session: SessionSlice = field(default_factory=SessionSlice)
    notification: NotificationSlice = field(default_factory=NotificationSlice)


# Events


@dataclass(frozen=True)
class WeatherResolved:
    mood: Mood
    location_name: str


@dataclass(frozen=True)
class SessionResolved:
    state: SessionState
    user_display_name: str | None = None


@dataclass(frozen=True)
class GenerateStarted:
    pass


@dataclass(frozen=True)
class GenerateSettled:
    pass


@dataclass(frozen=True)
class NotificationShown:
    notification: Notification


@dataclass(frozen=True)
class NotificationHidden:
    token: int


Event = (
    WeatherResolved
    | SessionResolved
    | GenerateStarted
    | GenerateSettled
    | NotificationShown
    | NotificationHidden
)

Listener = Callable[[Event, AppState], None]


def reduce(state: AppState, event: Event) -> AppState:
    """Compute the next state for an event."""
    if isinstance(event, WeatherResolved):
        # A new sample always replaces the previous mood, even with UNKNOWN
        return replace(
            state,
            weather=WeatherSlice(mood=event.mood, location_name=event.location_name),
        )

    if isinstance(event, SessionResolved):
        display_name = (
            event.user_display_name
            if event.state == SessionState.AUTHENTICATED
            else None
        )
        return replace(
            state,
            session=replace(
                state.session,
                state=event.state,
                user_display_name=display_name,
            ),
        )

    if isinstance(event, GenerateStarted):
        return replace(state, session=replace(state.session, generating=True))

    if isinstance(event, GenerateSettled):
        return replace(state, session=replace(state.session, generating=False))

    if isinstance(event, NotificationShown):
        return replace(state, notification=NotificationSlice(current=event.notification))

    if isinstance(event, NotificationHidden):
        current = state.notification.current
        if current is None or current.token != event.token:
            # Stale timer for a notification that was already replaced
            return state
        return replace(state, notification=NotificationSlice())

    raise TypeError(f"Unknown event: {event!r}")


class Store:
    """Holds the current AppState and notifies subscribers of events."""

    def __init__(self, state: AppState | None = None):
        self._state = state or AppState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, event: Event) -> AppState:
        self._state = reduce(self._state, event)
        logger.debug(f"Dispatched {event!r}")
        for listener in list(self._listeners):
            listener(event, self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
