# === FILE: sitefetch/scanner.py ===
"""
Модуль-обёртка для запуска обхода сайта.
"""
from typing import Any, Optional

from sitefetch.config import CrawlOptions
from sitefetch.crawler.crawler import AsyncCrawler
from sitefetch.crawler.models import FetchSiteResult
from sitefetch.utils import is_valid_url


async def fetch_site(url: str, options: Optional[CrawlOptions] = None, **kwargs: Any) -> FetchSiteResult:
    """
    Обходит сайт начиная с url и возвращает словарь pathname -> Page.

    Parameters
    ----------
    url : str
        Абсолютный http(s) URL стартовой страницы.
    options : CrawlOptions, optional
        Параметры обхода. Если не заданы, строятся из kwargs.

    Returns
    -------
    FetchSiteResult
        Страницы в порядке завершения загрузки.

    Raises
    ------
    ValueError
        Если url не является абсолютным http(s) URL.
    """
    if not is_valid_url(url):
        raise ValueError(f"Invalid URL: {url!r}")
    if options is None:
        options = CrawlOptions(**kwargs)
    elif kwargs:
        options = CrawlOptions(**{**options.model_dump(), **kwargs})

    async with AsyncCrawler(options) as crawler:
        pages = await crawler.crawl(url)
    return pages

__all__ = ["fetch_site"]
