"""
sitefetch package initializer.
Defines package version and exposes the crawl API.
"""
__version__ = "0.1.0"

from sitefetch.config import CrawlOptions
from sitefetch.crawler.models import Page
from sitefetch.report import serialize_pages
from sitefetch.scanner import fetch_site

__all__ = ["CrawlOptions", "Page", "fetch_site", "serialize_pages", "__version__"]
