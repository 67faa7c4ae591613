"""
REST HTTP client for the Scrapbox API.

Maps transport failures, rejected statuses and undecodable bodies onto the
three fetch errors. No retries and no timeout of its own: the caller bounds
the call.
"""

from typing import Any, Optional

import httpx

from scrapbox_tabs.errors import DecodeFailed, FetchFailed, RemoteRejected

DEFAULT_BASE_URL = "https://scrapbox.io"
USER_AGENT = "scrapbox-tabs/0.1.0"


class HttpClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=None,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get(self, path: str, cookie_header: Optional[str] = None) -> Any:
        headers = {"Cookie": cookie_header} if cookie_header else None
        try:
            resp = await self._client.get(path, headers=headers)
        except httpx.TransportError as e:
            raise FetchFailed(str(e) or type(e).__name__) from e
        if not resp.is_success:
            raise RemoteRejected(resp.status_code, authenticated=bool(cookie_header))
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeFailed(str(e)) from e

    async def close(self) -> None:
        await self._client.aclose()
