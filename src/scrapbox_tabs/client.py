"""
AsyncScrapboxTabs / ScrapboxTabs — the commands the surrounding app calls.
"""

import asyncio
from typing import Any, AsyncGenerator, Callable, Optional
from urllib.parse import quote

import httpx

from scrapbox_tabs.bridge import DEFAULT_PRIMARY_KEY, CredentialBridge, CredentialSet
from scrapbox_tabs.controller import SessionController
from scrapbox_tabs.host import WindowHost, WindowOptions
from scrapbox_tabs.models.events import NavigationEvent
from scrapbox_tabs.models.page import PageSet
from scrapbox_tabs.pages import DEFAULT_LIMIT, DEFAULT_SKIP, DEFAULT_SORT, PagesAPI
from scrapbox_tabs.registry import Session, SessionRegistry
from scrapbox_tabs.router import Listener, NavigationRouter
from scrapbox_tabs.transport.http import DEFAULT_BASE_URL, HttpClient


class AsyncScrapboxTabs:
    """Async session coordinator (primary)."""

    def __init__(
        self,
        host: WindowHost,
        base_url: str = DEFAULT_BASE_URL,
        primary_key: str = DEFAULT_PRIMARY_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self.registry = SessionRegistry()
        self.router = NavigationRouter()
        self.bridge = CredentialBridge(self.registry, host, primary_key=primary_key)
        self.controller = SessionController(self.registry, host)
        self.http = HttpClient(base_url=self._base_url, transport=transport)
        self.pages = PagesAPI(self.http)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "AsyncScrapboxTabs":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.http.close()

    # Sessions

    async def open_session(self, key: str, uri: str, options: Optional[WindowOptions] = None) -> None:
        await self.controller.open(key, uri, options)

    async def close_session(self, key: str) -> None:
        await self.controller.close(key)

    def switch_session(self, key: str) -> str:
        return self.controller.switch_to(key)

    def navigate_session(self, key: str, uri: str) -> None:
        self.controller.navigate(key, uri)

    def locate(self, key: str) -> str:
        return self.registry.locate(key)

    def list_sessions(self) -> list[Session]:
        return self.registry.sessions()

    # Events

    def report_navigation(self, key: str, uri: str, title: Optional[str] = None) -> None:
        """Relay a window's navigation to listeners. Never fails."""
        self.router.report(key, uri, title)
        self.controller.record_report(key, uri, title)

    def report_title(self, key: str, uri: str, title: Optional[str] = None) -> None:
        self.router.report_title(key, uri, title)
        self.controller.record_report(key, uri, title)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        return self.router.add_listener(listener)

    async def subscribe(self) -> AsyncGenerator[NavigationEvent, None]:
        """Yield every relayed event until the consumer stops iterating.

        Reports may come from other threads; they are handed to this loop's
        queue thread-safely. The queue is unbounded, so a slow consumer never
        blocks a reporter.
        """
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[NavigationEvent] = asyncio.Queue()

        def _handler(event: NavigationEvent) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, event)

        remove_listener = self.router.add_listener(_handler)
        try:
            while True:
                yield await queue.get()
        finally:
            remove_listener()

    # Pages

    async def harvest(self) -> CredentialSet:
        return await self.bridge.harvest(self._base_url)

    async def fetch_project_pages(
        self,
        project: str,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> PageSet:
        """Fetch a project's pages with cookies borrowed from any logged-in session.

        Cookies are looked up again on every call. `timeout` bounds the whole
        call and raises TimeoutError; without it the call may take as long as
        the network does.
        """
        async def _fetch() -> PageSet:
            credentials = await self.harvest()
            return await self.pages.fetch_pages(
                project,
                skip=DEFAULT_SKIP if skip is None else skip,
                limit=DEFAULT_LIMIT if limit is None else limit,
                sort=sort or DEFAULT_SORT,
                credentials=credentials,
            )

        if timeout is None:
            return await _fetch()
        return await asyncio.wait_for(_fetch(), timeout=timeout)

    def project_url(self, project: str) -> str:
        return f"{self._base_url}/{quote(project, safe='')}"


class ScrapboxTabs:
    """Sync wrapper around AsyncScrapboxTabs. Runs the event loop internally."""

    def __init__(self, host: WindowHost, **kwargs: Any):
        self._async = AsyncScrapboxTabs(host, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def registry(self) -> SessionRegistry:
        return self._async.registry

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def open_session(self, key: str, uri: str, options: Optional[WindowOptions] = None) -> None:
        self._run(self._async.open_session(key, uri, options))

    def close_session(self, key: str) -> None:
        self._run(self._async.close_session(key))

    def switch_session(self, key: str) -> str:
        return self._async.switch_session(key)

    def navigate_session(self, key: str, uri: str) -> None:
        self._async.navigate_session(key, uri)

    def locate(self, key: str) -> str:
        return self._async.locate(key)

    def list_sessions(self) -> list[Session]:
        return self._async.list_sessions()

    def report_navigation(self, key: str, uri: str, title: Optional[str] = None) -> None:
        self._async.report_navigation(key, uri, title)

    def report_title(self, key: str, uri: str, title: Optional[str] = None) -> None:
        self._async.report_title(key, uri, title)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        return self._async.add_listener(listener)

    def fetch_project_pages(self, project: str, **kwargs: Any) -> PageSet:
        return self._run(self._async.fetch_project_pages(project, **kwargs))

    def project_url(self, project: str) -> str:
        return self._async.project_url(project)
