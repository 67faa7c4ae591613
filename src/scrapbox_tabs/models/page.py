"""
Scrapbox page-list models — the body of GET /api/pages/{project}.

Only id, title and user are guaranteed on a page; everything else decodes
to None when the server leaves it out.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


class PageUser(BaseModel):
    id: str


class Page(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    user: PageUser
    image: Optional[str] = None
    descriptions: list[str] = Field(default_factory=list)
    last_update_user: Optional[PageUser] = Field(default=None, alias="lastUpdateUser")
    pin: Optional[int] = None
    views: Optional[int] = None
    linked: Optional[int] = None
    created: Optional[int] = None     # epoch seconds
    updated: Optional[int] = None
    accessed: Optional[int] = None
    lines_count: Optional[int] = Field(default=None, alias="linesCount")
    chars_count: Optional[int] = Field(default=None, alias="charsCount")
    helpfeels: Optional[list[str]] = None

    @property
    def is_pinned(self) -> bool:
        return bool(self.pin and self.pin > 0)

    def url(self, base_url: str, project: str) -> str:
        """Browse URL of this page, e.g. https://scrapbox.io/help/Cursor."""
        return f"{base_url.rstrip('/')}/{quote(project, safe='')}/{quote(self.title.replace(' ', '_'), safe='')}"


class PageSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(alias="projectName")
    skip: int
    limit: int
    count: int
    pages: list[Page] = Field(default_factory=list)

    @property
    def next_skip(self) -> int:
        return self.skip + len(self.pages)

    @property
    def has_more(self) -> bool:
        return bool(self.pages) and self.next_skip < self.count
