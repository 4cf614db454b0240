# sitefetch/crawler/fetcher.py
"""
Fetcher module: performs one GET per URL and applies the acceptance policy
(status, content type, cross-domain redirects).

The body is read only after the policy accepts the response, so rejected
downloads (binary files, error pages) are closed as soon as headers arrive.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from aiohttp import ClientError, ClientResponse, ClientSession
from sitefetch.config import CrawlOptions, FetchCallable
from sitefetch.crawler.models import FetchedPage
from sitefetch.utils import url_host


class HttpResponse:
    """Ответ aiohttp с ленивым чтением тела."""

    def __init__(self, resp: ClientResponse) -> None:
        self._resp = resp
        self.status = resp.status
        self.url = str(resp.url)
        self.reason = resp.reason or ""
        self.headers = resp.headers

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        try:
            return await self._resp.text(errors="replace")
        finally:
            self._resp.release()

    def close(self) -> None:
        self._resp.close()


class HttpTransport:
    """Default ``fetch`` implementation backed by an aiohttp session."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def __call__(self, url: str, headers: Dict[str, str]) -> HttpResponse:
        resp = await self.session.get(url, headers=headers, allow_redirects=True)
        return HttpResponse(resp)


def close_response(res: Any) -> None:
    """Closes *res* if the transport returned something closable."""
    close = getattr(res, "close", None)
    if callable(close):
        close()


class Fetcher:
    """Fetches pages through *transport* and rejects what the crawler must skip."""

    def __init__(self, transport: FetchCallable, options: CrawlOptions) -> None:
        self.transport = transport
        self.options = options
        self.logger = logging.getLogger("sitefetch")

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.options.user_agent}

    async def request(self, url: str) -> Any:
        """Raw GET through the transport, no policy applied. The caller closes the response."""
        return await self.transport(url, self.headers)

    async def fetch(self, url: str) -> Optional[FetchedPage]:
        """
        Fetch *url* and return its HTML.

        Returns None on transport errors, non-2xx status, non-HTML content
        or a redirect to another host (unless cross-domain redirects are followed).
        """
        res = None
        try:
            res = await self.request(url)

            if not res.ok:
                self.logger.warning("Failed to fetch %s: %s %s", url, res.status, getattr(res, "reason", ""))
                return None

            content_type = res.headers.get("content-type") or ""
            if "text/html" not in content_type.lower():
                self.logger.warning("Not a HTML page: %s", url)
                return None

            final_url = str(res.url or url)
            host, final_host = url_host(url), url_host(final_url)
            if final_host != host and not self.options.follow_domain_redirects:
                self.logger.warning("Redirected from %s to %s", host, final_host)
                return None

            html = await res.text()
        except (ClientError, asyncio.TimeoutError) as exc:
            self.logger.warning("Failed to fetch %s: %s", url, str(exc) or type(exc).__name__)
            return None
        finally:
            if res is not None:
                close_response(res)

        return FetchedPage(url=url, final_url=final_url, html=html)
