"""
Session lifecycle: Absent -> Open -> Absent, with navigate as Open -> Open.

A registry entry always has a window behind it: the window is built first and
the session registered only once the host reports success. Opens and closes of
one key are serialized, so a slow destroy cannot tear down a window that a
later open of the same key already built.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from scrapbox_tabs.errors import ConstructFailed
from scrapbox_tabs.host import WindowHost, WindowOptions
from scrapbox_tabs.registry import SessionRegistry

logger = logging.getLogger(__name__)


def _validate_uri(key: str, uri: str) -> None:
    try:
        url = httpx.URL(uri)
    except httpx.InvalidURL as e:
        raise ConstructFailed(key, f"Invalid URL: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConstructFailed(key, f"Invalid URL: {uri!r}")


class SessionController:
    def __init__(self, registry: SessionRegistry, host: WindowHost):
        self._registry = registry
        self._host = host
        self._key_locks: dict[str, asyncio.Lock] = {}

    def _key_lock(self, key: str) -> asyncio.Lock:
        lock = self._key_locks.get(key)
        if lock is None:
            lock = self._key_locks[key] = asyncio.Lock()
        return lock

    async def open(self, key: str, uri: str, options: Optional[WindowOptions] = None) -> None:
        _validate_uri(key, uri)
        async with self._key_lock(key):
            try:
                await self._host.create_window(key, uri, options or WindowOptions())
            except ConstructFailed:
                raise
            except Exception as e:
                raise ConstructFailed(key, str(e) or type(e).__name__) from e
            self._registry.open(key, uri)
        logger.info("Opened session %s -> %s", key, uri)

    async def close(self, key: str) -> None:
        async with self._key_lock(key):
            if not self._registry.close(key):
                return
            try:
                await self._host.destroy_window(key)
            except Exception as e:
                logger.warning("Failed to destroy window %s: %s", key, e)
        logger.info("Closed session %s", key)

    def switch_to(self, key: str) -> str:
        """Check that `key` is open before the host focuses it. Returns its location."""
        uri = self._registry.locate(key)
        logger.info("Switched to session %s with URL %s", key, uri)
        return uri

    def navigate(self, key: str, uri: str) -> None:
        self._registry.navigate(key, uri)
        logger.info("Navigated session %s to URL %s", key, uri)

    def record_report(self, key: str, uri: str, title: Optional[str]) -> None:
        """Store what a window reported about itself. Reports for closed sessions are dropped."""
        if not self._registry.record(key, uri, title or None):
            logger.debug("Report for unknown session %s ignored", key)
