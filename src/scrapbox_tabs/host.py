"""
Windowing host interface.

The host owns the real browser windows and their cookie stores. The session
layer only asks it to build or destroy a window and to read the cookies a
window holds for an origin.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from pydantic import BaseModel

from scrapbox_tabs.bridge import Cookie, origin_of

logger = logging.getLogger(__name__)


class WindowOptions(BaseModel):
    title: str = "Scrapbox"
    width: float = 1200.0
    height: float = 800.0
    min_width: float = 800.0
    min_height: float = 600.0
    center: bool = True
    resizable: bool = True
    visible: bool = False  # shown by the host once the page script is installed


class WindowHost(Protocol):
    async def create_window(self, key: str, uri: str, options: WindowOptions) -> None: ...

    async def destroy_window(self, key: str) -> None: ...

    async def credentials_for(self, key: str, origin: str) -> Sequence[Cookie]: ...


class StaticCookieHost:
    """Headless host: windows are bookkeeping only, every window shares one cookie jar.

    Used where there is no real webview, e.g. the CLI, which authenticates with
    a cookie the user saved beforehand.
    """

    def __init__(self, cookies: Optional[dict[str, str]] = None, origin: Optional[str] = None):
        self._cookies = [Cookie(name, value) for name, value in (cookies or {}).items()]
        self._origin = origin_of(origin) if origin else None
        self._windows: dict[str, str] = {}

    @property
    def windows(self) -> dict[str, str]:
        return dict(self._windows)

    async def create_window(self, key: str, uri: str, options: WindowOptions) -> None:
        logger.debug("Creating headless window %s -> %s (%s)", key, uri, options.title)
        self._windows[key] = uri

    async def destroy_window(self, key: str) -> None:
        self._windows.pop(key, None)

    async def credentials_for(self, key: str, origin: str) -> Sequence[Cookie]:
        if key not in self._windows:
            return []
        if self._origin and self._origin != origin:
            return []
        return list(self._cookies)
