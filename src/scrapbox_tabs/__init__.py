"""
scrapbox-tabs — multi-window Scrapbox session coordination.

Tracks what each browsing session is viewing, relays navigation events to a
coordinator, and borrows the cookies of whichever session is logged in to
call the Scrapbox API.
"""

from scrapbox_tabs.client import ScrapboxTabs, AsyncScrapboxTabs
from scrapbox_tabs.registry import Session, SessionRegistry
from scrapbox_tabs.bridge import Cookie, CredentialSet, CredentialBridge
from scrapbox_tabs.host import WindowHost, WindowOptions, StaticCookieHost
from scrapbox_tabs.router import NavigationRouter
from scrapbox_tabs.errors import (
    ScrapboxTabsError,
    NotFound,
    ConstructFailed,
    FetchFailed,
    RemoteRejected,
    DecodeFailed,
)
from scrapbox_tabs.models.events import NavigationEvent, SessionEvent
from scrapbox_tabs.models.page import Page, PageSet, PageUser

__version__ = "0.1.0"
__all__ = [
    "ScrapboxTabs",
    "AsyncScrapboxTabs",
    "Session",
    "SessionRegistry",
    "Cookie",
    "CredentialSet",
    "CredentialBridge",
    "WindowHost",
    "WindowOptions",
    "StaticCookieHost",
    "NavigationRouter",
    "ScrapboxTabsError",
    "NotFound",
    "ConstructFailed",
    "FetchFailed",
    "RemoteRejected",
    "DecodeFailed",
    "NavigationEvent",
    "SessionEvent",
    "Page",
    "PageSet",
    "PageUser",
]
