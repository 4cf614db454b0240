# === FILE: sitefetch/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from sitefetch.config import CrawlOptions
from sitefetch.crawler.fetcher import Fetcher, HttpTransport, close_response
from sitefetch.crawler.link_extractor import extract_links, page_title, parse_page, select_content
from sitefetch.crawler.models import CrawlTarget, FetchSiteResult, Page
from sitefetch.parser.content import ContentExtractor
from sitefetch.parser.sitemap_parser import parse_sitemap
from sitefetch.utils import is_valid_url, match_path, url_host, url_origin, url_pathname

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Асинхронный краулер одного сайта: очередь с ограничением параллельности,
    дедупликация по pathname, лимит страниц и засев из sitemap.xml."""

    def __init__(self, options: Optional[CrawlOptions] = None, extractor: Optional[ContentExtractor] = None) -> None:
        self.options = options or CrawlOptions()
        self.extractor = extractor or ContentExtractor()
        self.pages: FetchSiteResult = {}
        self.visited: Set[str] = set()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = logging.getLogger("sitefetch")
        self._queue: asyncio.Queue[CrawlTarget] = asyncio.Queue()

    async def __aenter__(self) -> AsyncCrawler:
        transport = self.options.fetch
        if transport is None:
            self.session = ClientSession(timeout=ClientTimeout(total=self.options.timeout))
            transport = HttpTransport(self.session)
        self.fetcher = Fetcher(transport, self.options)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, url: str) -> FetchSiteResult:
        if not is_valid_url(url):
            raise ValueError(f"Invalid URL: {url!r}")
        if not self.fetcher:
            raise RuntimeError("Crawler not initialized, use 'async with AsyncCrawler(...)'")

        self.logger.info("Started fetching %s with a concurrency of %d", url, self.options.concurrency)
        start = time.monotonic()

        sitemap_urls: List[str] = []
        if self.options.enable_sitemap:
            sitemap_urls = await self._load_sitemap(url)

        # the seed goes first so it is always admitted before the limit can be reached
        self._enqueue(url, skip_match=True)
        for sitemap_url in sitemap_urls:
            self._enqueue(sitemap_url, skip_match=False)

        workers = [asyncio.create_task(self._worker()) for _ in range(self.options.concurrency)]
        try:
            await self._queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        duration = time.monotonic() - start
        self.logger.info(
            "Finished: %d pages (%d visited) in %.2f s", len(self.pages), len(self.visited), duration
        )
        return self.pages

    def _enqueue(self, url: str, skip_match: bool = False) -> None:
        self._queue.put_nowait(CrawlTarget(url, skip_match))

    async def _worker(self) -> None:
        while True:
            target = await self._queue.get()
            try:
                await self._visit(target)
            except Exception as exc:
                self.logger.warning("Failed to process %s: %s", target.url, exc)
            finally:
                self._queue.task_done()

    def _limit_reached(self) -> bool:
        return self.options.limit is not None and len(self.pages) >= self.options.limit

    async def _visit(self, target: CrawlTarget) -> None:
        url = target.url
        pathname = url_pathname(url)

        # check-and-mark must not be separated by an await
        if pathname in self.visited or self._limit_reached():
            return
        self.visited.add(pathname)

        if not target.skip_match and self.options.match and not match_path(pathname, self.options.match):
            self.logger.debug("Skipped %s: not matched", url)
            return

        self.logger.info("Fetching %s", url)
        fetched = await self.fetcher.fetch(url)
        if fetched is None or self._limit_reached():
            return

        soup = parse_page(fetched.html)
        for link in extract_links(soup, fetched.final_url):
            if url_pathname(link) not in self.visited:
                self._enqueue(link)

        html = select_content(soup, self.options.selector_for(pathname))
        if not html:
            self.logger.warning("No readable content on %s", pathname)
            return

        extracted = await asyncio.to_thread(self.extractor.extract, html, page_title(soup))
        if extracted is None:
            self.logger.warning("No readable content on %s", pathname)
            return

        if self._limit_reached():
            return
        self.pages[pathname] = Page(title=extracted.title, url=url, content=extracted.content)

    async def _load_sitemap(self, url: str) -> List[str]:
        """Возвращает URL из /sitemap.xml того же хоста, при любой ошибке пустой список."""
        sitemap_url = f"{url_origin(url)}/sitemap.xml"
        self.logger.info("Fetching sitemap at %s", sitemap_url)
        res = None
        try:
            res = await self.fetcher.request(sitemap_url)
            if not res.ok:
                self.logger.warning("Unable to fetch sitemap: %s %s", res.status, getattr(res, "reason", ""))
                return []
            urls = parse_sitemap(await res.text())
        except Exception as exc:
            self.logger.warning("Unable to get or parse sitemap: %s", exc)
            return []
        finally:
            if res is not None:
                close_response(res)

        host = url_host(url)
        same_host: List[str] = []
        for loc in urls:
            if is_valid_url(loc) and url_host(loc) == host:
                same_host.append(loc)
            else:
                self.logger.debug("Skipped sitemap URL %s: other host", loc)
        if same_host:
            self.logger.info("Located %d URLs in sitemap:\n\t%s", len(same_host), "\n\t".join(same_host))
        return same_host
