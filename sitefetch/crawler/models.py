# sitefetch/crawler/models.py
"""
Data models for the sitefetch crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Mapping


@dataclass(slots=True, frozen=True)
class CrawlTarget:
    """A URL waiting in the crawl queue.

    ``skip_match`` forces the fetch regardless of path patterns (seed URL only).
    """

    url: str
    skip_match: bool = False


@dataclass(slots=True, frozen=True)
class Page:
    """Title, requested URL and markdown content of a crawled page."""

    title: str
    url: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class FetchedPage:
    """HTML accepted by the fetch policy.

    ``url`` is the requested URL, ``final_url`` the one after redirects.
    """

    url: str
    final_url: str
    html: str


@dataclass(slots=True)
class FetchResponse:
    """Fully read HTTP response, the shape expected from a ``fetch`` callable."""

    status: int
    url: str
    body: str = ""
    reason: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self.body


# pathname -> Page, in completion order
FetchSiteResult = Dict[str, Page]
