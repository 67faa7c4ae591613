"""
Credential bridge — borrow the cookies of whichever session is logged in.

Cookies live in the windowing host, per window, so the bridge asks the host
about each open session in turn: the primary session first, then the rest in
registry order. Nothing is cached; a session may log in or out at any time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, NamedTuple, Optional

import httpx

from scrapbox_tabs.registry import SessionRegistry

if TYPE_CHECKING:
    from scrapbox_tabs.host import WindowHost

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_KEY = "main"


class Cookie(NamedTuple):
    name: str
    value: str


class CredentialSet:
    """Ordered cookies for one origin, taken from exactly one session."""

    __slots__ = ("origin", "cookies", "source")

    def __init__(self, origin: str = "", cookies: Iterable[Cookie] = (), source: Optional[str] = None):
        self.origin = origin
        self.cookies = tuple(Cookie(*c) for c in cookies)
        self.source = source if self.cookies else None

    def header(self) -> str:
        return "; ".join(f"{c.name}={c.value}" for c in self.cookies)

    def __bool__(self) -> bool:
        return bool(self.cookies)

    def __len__(self) -> int:
        return len(self.cookies)

    def __iter__(self):
        return iter(self.cookies)

    def __repr__(self) -> str:
        # Values are secrets; names are enough to debug with.
        names = [c.name for c in self.cookies]
        return f"CredentialSet(origin={self.origin!r}, source={self.source!r}, names={names!r})"


def origin_of(url: str) -> str:
    """Normalize any URL to scheme://host[:port]."""
    parsed = httpx.URL(url)
    if not parsed.scheme or not parsed.host:
        raise ValueError(f"Not an absolute URL: {url!r}")
    origin = f"{parsed.scheme}://{parsed.host}"
    if parsed.port is not None:
        origin += f":{parsed.port}"
    return origin


class CredentialBridge:
    def __init__(self, registry: SessionRegistry, host: WindowHost, primary_key: str = DEFAULT_PRIMARY_KEY):
        self._registry = registry
        self._host = host
        self._primary_key = primary_key

    @property
    def primary_key(self) -> str:
        return self._primary_key

    async def harvest(self, origin: str) -> CredentialSet:
        """Cookies for `origin` from the first session holding any, else an empty set."""
        origin = origin_of(origin)
        keys = self._registry.keys()
        if self._primary_key in keys:
            keys.remove(self._primary_key)
            keys.insert(0, self._primary_key)

        for key in keys:
            cookies = await self._cookies_from(key, origin)
            if cookies:
                logger.debug("Using %d cookies from session %s for %s", len(cookies), key, origin)
                return CredentialSet(origin, cookies, source=key)

        logger.debug("No session holds cookies for %s, proceeding without authentication", origin)
        return CredentialSet(origin)

    async def _cookies_from(self, key: str, origin: str) -> list[Cookie]:
        try:
            return list(await self._host.credentials_for(key, origin))
        except Exception as e:
            # The window may have gone away between the snapshot and the lookup.
            logger.warning("Failed to get cookies from session %s: %s", key, e)
            return []
