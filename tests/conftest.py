"""Shared fixtures: a fake windowing host and a mocked Scrapbox API."""

import json
from typing import Any, Optional

import httpx
import pytest

from scrapbox_tabs import AsyncScrapboxTabs, Cookie, SessionRegistry, WindowOptions


class FakeHost:
    """In-memory windowing host with per-window cookie jars."""

    def __init__(self) -> None:
        self.windows: dict[str, str] = {}
        self.options: dict[str, WindowOptions] = {}
        self.jars: dict[str, dict[str, list[Cookie]]] = {}
        self.fail_create: Optional[Exception] = None
        self.fail_cookies: set[str] = set()
        self.cookie_lookups: list[str] = []

    def login(self, key: str, origin: str, **cookies: str) -> None:
        self.jars.setdefault(key, {})[origin] = [Cookie(n, v) for n, v in cookies.items()]

    async def create_window(self, key: str, uri: str, options: WindowOptions) -> None:
        if self.fail_create is not None:
            raise self.fail_create
        self.windows[key] = uri
        self.options[key] = options

    async def destroy_window(self, key: str) -> None:
        self.windows.pop(key, None)

    async def credentials_for(self, key: str, origin: str) -> list[Cookie]:
        self.cookie_lookups.append(key)
        if key in self.fail_cookies:
            raise RuntimeError(f"webview {key} is gone")
        return self.jars.get(key, {}).get(origin, [])


def page_json(id: str = "p1", title: str = "Hello", **extra: Any) -> dict[str, Any]:
    return {"id": id, "title": title, "user": {"id": "u1"}, **extra}


def page_set_json(project: str = "demo", pages: Optional[list] = None, skip: int = 0,
                  limit: int = 20, count: Optional[int] = None) -> dict[str, Any]:
    pages = pages if pages is not None else [page_json()]
    return {
        "projectName": project,
        "skip": skip,
        "limit": limit,
        "count": len(pages) if count is None else count,
        "pages": pages,
    }


class Recorder:
    """httpx.MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status: int = 200, body: Any = None, raw: Optional[bytes] = None):
        self.status = status
        self.body = page_set_json() if body is None else body
        self.raw = raw
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status, content=self.raw)
        return httpx.Response(self.status, content=json.dumps(self.body).encode(),
                              headers={"Content-Type": "application/json"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def app(host: FakeHost, recorder: Recorder) -> AsyncScrapboxTabs:
    return AsyncScrapboxTabs(host, transport=httpx.MockTransport(recorder))
