"""sitefetch.report: Сериализация результатов обхода (JSON и текст) и сохранение в файл."""

from __future__ import annotations

from sitefetch.report.serializer import render_pages, serialize_pages

__all__ = ["render_pages", "serialize_pages"]
