# File: tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest
from sitefetch.crawler.models import FetchResponse, Page
from sitefetch.logger import init_logging


def html_page(title: str, text: str, links: Optional[List[str]] = None) -> str:
    """Build a small HTML document with a paragraph and inline links."""
    anchors = " ".join(f'<a href="{href}">{href}</a>' for href in links or [])
    return (
        f"<html><head><title>{title}</title></head>"
        f"<body><p>{text}</p><p>{anchors}</p></body></html>"
    )


class FakeSite:
    """In-memory ``fetch`` replacement: URL -> FetchResponse, records every call."""

    def __init__(self, delay: float = 0.0) -> None:
        self.routes: Dict[str, FetchResponse] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[str] = []
        self.headers: List[Dict[str, str]] = []
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    def add(
        self,
        url: str,
        body: str = "",
        *,
        status: int = 200,
        content_type: str = "text/html; charset=utf-8",
        final_url: Optional[str] = None,
        reason: str = "OK",
    ) -> None:
        self.routes[url] = FetchResponse(
            status=status,
            url=final_url or url,
            body=body,
            reason=reason,
            headers={"content-type": content_type},
        )

    def fail(self, url: str, exc: Exception) -> None:
        self.errors[url] = exc

    def count(self, url: str) -> int:
        return self.calls.count(url)

    async def __call__(self, url: str, headers: Dict[str, str]) -> FetchResponse:
        self.calls.append(url)
        self.headers.append(headers)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url in self.errors:
                raise self.errors[url]
            response = self.routes.get(url)
            if response is None:
                return FetchResponse(status=404, url=url, reason="Not Found")
            return response
        finally:
            self.in_flight -= 1


@pytest.fixture()
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture()
def make_site():
    """Factory for FakeSite instances with a response delay."""
    return FakeSite


@pytest.fixture()
def page_html():
    return html_page


@pytest.fixture()
def sample_pages() -> Dict[str, Page]:
    return {
        "/": Page(title="Home", url="https://example.com/", content="# Welcome"),
        "/docs": Page(title="Docs", url="https://example.com/docs", content="Read the docs"),
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests bind the logger to CliRunner streams; restore the default handler."""
    yield
    init_logging()
