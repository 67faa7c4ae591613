"""
Live tests against the real Scrapbox API.

Requires environment variables:
  SCRAPBOX_INTEGRATION   — set to run these tests at all
  SCRAPBOX_PROJECT       — (optional) public project, defaults to "help"
  SCRAPBOX_PRIVATE       — (optional) private project readable with SCRAPBOX_SID
  SCRAPBOX_SID           — (optional) connect.sid cookie of a logged-in user

Run: SCRAPBOX_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from scrapbox_tabs import AsyncScrapboxTabs, RemoteRejected, StaticCookieHost

SKIP = not os.environ.get("SCRAPBOX_INTEGRATION")
PROJECT = os.environ.get("SCRAPBOX_PROJECT", "help")
PRIVATE = os.environ.get("SCRAPBOX_PRIVATE", "")
SID = os.environ.get("SCRAPBOX_SID", "")

pytestmark = pytest.mark.skipif(SKIP, reason="SCRAPBOX_INTEGRATION not set")


class TestPublicProject:

    @pytest.mark.asyncio
    async def test_fetch_first_page_unauthenticated(self):
        async with AsyncScrapboxTabs(StaticCookieHost()) as app:
            result = await app.fetch_project_pages(PROJECT, limit=5, timeout=30)
        assert result.project_name == PROJECT
        assert 0 < len(result.pages) <= 5
        assert result.count >= len(result.pages)
        print(f"  {PROJECT}: {result.count} pages, first: {result.pages[0].title}")


class TestPrivateProject:

    @pytest.mark.asyncio
    @pytest.mark.skipif(not PRIVATE, reason="SCRAPBOX_PRIVATE not set")
    async def test_rejected_without_cookie(self):
        async with AsyncScrapboxTabs(StaticCookieHost()) as app:
            with pytest.raises(RemoteRejected):
                await app.fetch_project_pages(PRIVATE, timeout=30)

    @pytest.mark.asyncio
    @pytest.mark.skipif(not (PRIVATE and SID), reason="SCRAPBOX_PRIVATE / SCRAPBOX_SID not set")
    async def test_borrowed_cookie_unlocks_project(self):
        host = StaticCookieHost(cookies={"connect.sid": SID})
        async with AsyncScrapboxTabs(host) as app:
            await app.open_session("main", app.project_url(PRIVATE))
            result = await app.fetch_project_pages(PRIVATE, limit=1, timeout=30)
        assert result.project_name == PRIVATE
