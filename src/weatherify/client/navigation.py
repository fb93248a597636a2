"""Browsing-context abstraction.

The client needs four things from its host environment: the URL it was
loaded from, a way to rewrite that URL without reloading, a full-page
redirect, and a way to open a link in a new browsing context.
"""

from __future__ import annotations

import logging
import webbrowser
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Navigator(ABC):
    """Host browsing context."""

    @property
    @abstractmethod
    def current_url(self) -> str:
        """URL of the current page."""

    @abstractmethod
    def replace_url(self, url: str) -> None:
        """Rewrite the current URL in history without reloading."""

    @abstractmethod
    def assign(self, url: str) -> None:
        """Navigate the whole browsing context to another URL."""

    @abstractmethod
    def open_new(self, url: str) -> None:
        """Open a URL in a new browsing context."""


class BrowserNavigator(Navigator):
    """Navigator backed by the system web browser."""

    def __init__(self, current_url: str):
        self._current_url = current_url

    @property
    def current_url(self) -> str:
        return self._current_url

    def replace_url(self, url: str) -> None:
        logger.debug(f"Replacing current URL with {url}")
        self._current_url = url

    def assign(self, url: str) -> None:
        logger.info(f"Redirecting to {url}")
        self._current_url = url
        if not webbrowser.open(url):
            logger.warning(f"Could not open a browser; visit {url} manually")

    def open_new(self, url: str) -> None:
        logger.info(f"Opening {url} in a new tab")
        if not webbrowser.open_new_tab(url):
            logger.warning(f"Could not open a browser; visit {url} manually")
