"""
Navigation event router.

Windows report their location and title at their own pace (the in-page
tracker also polls, since some navigations fire no event). Each report is
relayed at once to every listener: no buffering, no coalescing, no dedup.
Delivery is best effort: a failing listener is logged and skipped, nothing is
retried, and nothing pushes back on the reporter.

The router never reads or writes the registry, so a listener may see an event
slightly before or after the registry reflects it. Call `locate` for the
authoritative location.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from scrapbox_tabs.models.events import NavigationEvent, SessionEvent

logger = logging.getLogger(__name__)

Listener = Callable[[NavigationEvent], None]


class NavigationRouter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Add a listener. Returns a function that removes it again."""
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    pass
        return remove

    def on_event(self, listener: Optional[Listener]) -> None:
        """Set a single listener (replaces all)."""
        with self._lock:
            self._listeners = [listener] if listener is not None else []

    def report(self, key: str, uri: str, title: Optional[str] = None) -> None:
        self._emit(NavigationEvent(kind=SessionEvent.SESSION_NAVIGATED, key=key, uri=uri, title=title))

    def report_title(self, key: str, uri: str, title: Optional[str] = None) -> None:
        self._emit(NavigationEvent(kind=SessionEvent.SESSION_TITLE_UPDATED, key=key, uri=uri, title=title))

    def _emit(self, event: NavigationEvent) -> None:
        logger.debug("%s: %s -> %s (%s)", event.kind, event.key, event.uri, event.title)
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.warning("Listener %r failed for %s", listener, event.kind, exc_info=True)
