"""
Pages REST API — GET /api/pages/{project}.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional
from urllib.parse import quote

from pydantic import ValidationError

from scrapbox_tabs.bridge import CredentialSet
from scrapbox_tabs.errors import DecodeFailed
from scrapbox_tabs.models.page import Page, PageSet
from scrapbox_tabs.transport.http import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_SKIP = 0
DEFAULT_LIMIT = 20
DEFAULT_SORT = "updated"
# Sorts the web UI offers. Others are passed through for the server to judge.
SORT_KEYS = {"updated", "created", "accessed", "linked", "views", "title", "updatedbyMe"}


def pages_path(project: str, skip: int = DEFAULT_SKIP, limit: int = DEFAULT_LIMIT, sort: str = DEFAULT_SORT) -> str:
    return f"/api/pages/{quote(project, safe='')}?skip={skip}&limit={limit}&sort={quote(sort, safe='')}"


class PagesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def fetch_pages(
        self,
        project: str,
        skip: int = DEFAULT_SKIP,
        limit: int = DEFAULT_LIMIT,
        sort: str = DEFAULT_SORT,
        credentials: Optional[CredentialSet] = None,
    ) -> PageSet:
        """Fetch one page of a project's page list.

        Cookies are sent only when `credentials` is non-empty; an empty set is
        simply an unauthenticated request, which works for public projects.
        """
        path = pages_path(project, skip, limit, sort)
        cookie_header = credentials.header() if credentials else None
        logger.debug("Fetching %s%s (%d cookies)", self._http.base_url, path, len(credentials or ()))

        body = await self._http.get(path, cookie_header=cookie_header)
        try:
            page_set = PageSet.model_validate(body)
        except ValidationError as e:
            raise DecodeFailed(str(e)) from e

        logger.info("Fetched %d pages from project %s", len(page_set.pages), project)
        return page_set

    async def iter_pages(
        self,
        project: str,
        limit: int = DEFAULT_LIMIT,
        sort: str = DEFAULT_SORT,
        credentials: Optional[CredentialSet] = None,
    ) -> AsyncGenerator[Page, None]:
        """Walk every page of a project, one request per `limit` pages."""
        skip = DEFAULT_SKIP
        while True:
            page_set = await self.fetch_pages(project, skip=skip, limit=limit, sort=sort, credentials=credentials)
            for page in page_set.pages:
                yield page
            if not page_set.has_more:
                return
            skip = page_set.next_skip
