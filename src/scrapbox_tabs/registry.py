"""
Session registry — the one authoritative map of open sessions.

Every read and write takes the same lock for its whole critical section, and
nothing inside a critical section awaits or does I/O, so the registry is safe
to share between coroutines and threads alike.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Iterator, Optional
from urllib.parse import unquote

import httpx

from scrapbox_tabs.errors import NotFound


@dataclass(frozen=True)
class Session:
    key: str
    uri: str
    title: Optional[str] = None

    @property
    def display_title(self) -> str:
        if self.title and self.title.strip():
            return self.title
        return fallback_title(self.uri)


def fallback_title(uri: str) -> str:
    """Page name from a Scrapbox URI: /project/Page_name -> "Page name"."""
    try:
        url = httpx.URL(uri)
    except httpx.InvalidURL:
        return uri
    segments = [s for s in url.path.split("/") if s]
    if segments:
        return unquote(segments[-1]).replace("_", " ")
    return url.host or uri


class SessionRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}

    def open(self, key: str, uri: str, title: Optional[str] = None) -> None:
        with self._lock:
            self._sessions[key] = Session(key, uri, title)

    def close(self, key: str) -> bool:
        with self._lock:
            return self._sessions.pop(key, None) is not None

    def navigate(self, key: str, uri: str) -> None:
        with self._lock:
            current = self._sessions.get(key)
            if current is None:
                raise NotFound(key)
            # A stale title would describe the previous page.
            title = current.title if current.uri == uri else None
            self._sessions[key] = replace(current, uri=uri, title=title)

    def record(self, key: str, uri: str, title: Optional[str]) -> bool:
        """Store a location and title reported by the window itself.

        Returns False, changing nothing, when `key` is not open: reports can
        trail a close.
        """
        with self._lock:
            if key not in self._sessions:
                return False
            self._sessions[key] = Session(key, uri, title)
            return True

    def locate(self, key: str) -> str:
        return self.get(key).uri

    def get(self, key: str) -> Session:
        with self._lock:
            session = self._sessions.get(key)
        if session is None:
            raise NotFound(key)
        return session

    def list(self) -> Iterator[tuple[str, str]]:
        """(key, uri) pairs from a snapshot, in the order sessions were opened."""
        with self._lock:
            snapshot = [(s.key, s.uri) for s in self._sessions.values()]
        return iter(snapshot)

    def sessions(self) -> list[Session]:
        with self._lock:
            return list(self._sessions.values())

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
