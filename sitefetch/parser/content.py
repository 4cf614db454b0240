# sitefetch/parser/content.py
"""
Main-content extraction: readability picks the article, markdownify renders it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from markdownify import ATX, markdownify
from readability import Document
from readability.readability import Unparseable

__all__ = ("ExtractedContent", "ContentExtractor")

# readability's placeholder when the document has no <title>
_NO_TITLE = "[no-title]"


@dataclass(slots=True, frozen=True)
class ExtractedContent:
    title: str
    content: str


class ContentExtractor:
    """Turns cleaned page HTML into a title and markdown body."""

    def __init__(self, heading_style: str = ATX) -> None:
        self.heading_style = heading_style
        self.logger = logging.getLogger("sitefetch")

    def extract(self, html: str, fallback_title: str = "") -> Optional[ExtractedContent]:
        """Return the article as markdown, or ``None`` when nothing readable is found."""
        try:
            document = Document(html)
            article_html = document.summary(html_partial=True)
            title = document.short_title()
        except Unparseable as exc:
            self.logger.debug("Readability failed: %s", exc)
            return None

        content = markdownify(article_html, heading_style=self.heading_style).strip()
        if not content:
            return None

        if not title or title == _NO_TITLE:
            title = fallback_title
        return ExtractedContent(title=title.strip(), content=content)
