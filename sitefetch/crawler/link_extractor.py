# sitefetch/crawler/link_extractor.py
"""
HTML cleanup and same-host link extraction for sitefetch.
"""
from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from sitefetch.utils import remove_duplicates, resolve_url, url_host

#: nodes removed before link collection and content extraction
NOISE_SELECTOR = "script,style,link,img,video"


def parse_page(html: str) -> BeautifulSoup:
    """Parse HTML and drop non-content nodes."""
    soup = BeautifulSoup(html, "html.parser")
    for node in soup.select(NOISE_SELECTOR):
        node.decompose()
    return soup


def extract_links(soup: BeautifulSoup, page_url: str) -> List[str]:
    """
    Extract absolute links pointing to the same host as *page_url*.

    *page_url* should be the final (post-redirect) URL of the page.
    """
    host = url_host(page_url)
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str) or not href_val.strip():
            continue
        try:
            absolute = resolve_url(href_val, page_url)
            same_host = url_host(absolute) == host
        except ValueError:
            # malformed href, e.g. a bad port or IPv6 literal
            continue
        if same_host:
            links.append(absolute)
    return remove_duplicates(links)


def page_title(soup: BeautifulSoup) -> str:
    """Return the ``<title>`` text or an empty string."""
    title_tag = soup.find("title")
    return title_tag.get_text(strip=True) if title_tag else ""


def select_content(soup: BeautifulSoup, selector: Optional[str]) -> str:
    """Return the HTML of the first node matching *selector*, or the whole document."""
    if not selector:
        return str(soup)
    node = soup.select_one(selector)
    return str(node) if node is not None else ""
