# File: sitefetch/report/serializer.py
"""
Сериализация страниц для sitefetch.

Поддерживаются два формата: ``json`` (массив объектов ``{title, url, content}``)
и ``text`` (блоки ``<page>…</page>``, разделённые пустой строкой).
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Mapping, Optional, Union

from sitefetch.crawler.models import Page

Format = Literal["json", "text"]

_PAGE_TEMPLATE = """<page>
  <title>{title}</title>
  <url>{url}</url>
  <content>{content}</content>
</page>"""


def serialize_pages(pages: Mapping[str, Page], fmt: Format) -> str:
    """Сериализует страницы в порядке словаря pages."""
    if fmt == "json":
        return json.dumps([page.to_dict() for page in pages.values()], ensure_ascii=False)
    if fmt != "text":
        raise ValueError(f"Неподдерживаемый формат: {fmt}")

    return "\n\n".join(
        _PAGE_TEMPLATE.format(title=page.title, url=page.url, content=page.content).strip()
        for page in pages.values()
    )


def render_pages(
    pages: Mapping[str, Page],
    output_path: Union[Path, str],
    fmt: Optional[Format] = None,
) -> Path:
    """
    Сохраняет страницы в файл по указанному пути.

    :param pages: результат fetch_site
    :param output_path: путь к файлу
    :param fmt: формат; по умолчанию ``json`` для суффикса ``.json``, иначе ``text``
    :return: Path сохранённого файла

    Пример:
    ```python
    from sitefetch.report import render_pages
    path = render_pages(pages, 'site.json')
    print(f"Saved to: {path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    if fmt is None:
        fmt = "json" if output.suffix.lower() == ".json" else "text"

    output.write_text(serialize_pages(pages, fmt), encoding="utf-8")
    return output
