# File: sitefetch/parser/sitemap_parser.py
"""sitefetch.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from typing import List

from lxml import etree


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def parse_sitemap(xml_content: str) -> List[str]:
    """Разбирает sitemap.xml и возвращает URL из ``urlset/url/loc``.

    Args:
        xml_content: строка с содержимым sitemap.xml.

    Returns:
        Список URL в порядке следования в документе.

    Raises:
        ValueError: документ не разбирается как XML, корень не ``urlset``
            или в нём нет ни одного ``url``.

    Пример:
    ```python
    from sitefetch.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        content = f.read()
    urls = parse_sitemap(content)
    print(urls)
    ```
    """
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False)
    try:
        root = etree.fromstring(xml_content.encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ValueError(f"invalid sitemap.xml: {exc}") from exc

    if root is None or _local_name(root) != "urlset":
        raise ValueError("invalid sitemap.xml")

    entries = [child for child in root if isinstance(child.tag, str) and _local_name(child) == "url"]
    if not entries:
        raise ValueError("invalid sitemap.xml")

    urls: List[str] = []
    for entry in entries:
        loc = entry.find("{*}loc")
        if loc is not None and loc.text and loc.text.strip():
            urls.append(loc.text.strip())
    return urls
