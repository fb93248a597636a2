"""View model derived from client state."""

from __future__ import annotations

from dataclasses import dataclass

from weatherify.client.store import AppState
from weatherify.models.session import SessionState
from weatherify.models.weather import Mood

TITLE = "Weatherify"
SUBTITLE = "Generate a playlist based on weather"

MOOD_ICONS: dict[Mood, str] = {
    Mood.SUNNY: "sunny",
    Mood.CLOUDY: "cloudy",
    Mood.RAINY: "rainy",
}


@dataclass(frozen=True)
class ViewModel:
    """Everything the UI needs to draw one frame."""

    loading: bool
    title: str
    subtitle: str
    active_mood: Mood
    show_login: bool
    show_generate: bool
    show_logout: bool
    generate_enabled: bool
    notification: str | None

    def mood_enabled(self, mood: Mood) -> bool:
        """Only the icon of the current mood is enabled."""
        return mood == self.active_mood


def render_view(state: AppState) -> ViewModel:
    session = state.session
    authenticated = session.state == SessionState.AUTHENTICATED
    location = state.weather.location_name
    notification = state.notification.current

    return ViewModel(
        loading=session.state == SessionState.UNKNOWN,
        title=TITLE,
        subtitle=f"{SUBTITLE} in {location}" if location else SUBTITLE,
        active_mood=state.weather.mood,
        show_login=not authenticated,
        show_generate=authenticated,
        show_logout=authenticated,
        generate_enabled=authenticated and not session.generating,
        notification=notification.message if notification else None,
    )


def render_text(view: ViewModel) -> str:
    """Render a view model for a terminal."""
    if view.loading:
        return "Loading..."

    lines = []
    if view.notification:
        lines.append(f"** {view.notification} **")

    icons = [
        f"[{label.upper()}]" if view.mood_enabled(mood) else f"({label})"
        for mood, label in MOOD_ICONS.items()
    ]
    lines.append(" ".join(icons))
    lines.append(view.title)
    lines.append(view.subtitle)

    actions = []
    if view.show_login:
        actions.append("login")
    if view.show_generate:
        actions.append("generate" if view.generate_enabled else "generate (busy)")
    if view.show_logout:
        actions.append("logout")
    lines.append("Actions: " + ", ".join(actions))
    return "\n".join(lines)
