# === FILE: sitefetch/config.py ===
"""
Модуль для загрузки и валидации параметров обхода сайта sitefetch.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.3"
)

ContentSelector = Union[str, Callable[[str], Optional[str]]]
FetchCallable = Callable[[str, Dict[str, str]], Awaitable[Any]]


class CrawlOptions(BaseModel):
    """Параметры одного обхода. Не меняются во время работы краулера."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    concurrency: int = Field(3, ge=1, description="Сколько страниц загружается одновременно.")
    match: Optional[List[str]] = Field(
        None, description="Glob-шаблоны pathname; загружаются только совпавшие страницы."
    )
    content_selector: Optional[ContentSelector] = Field(
        None, description="CSS-селектор основного контента или функция pathname -> селектор."
    )
    limit: Optional[int] = Field(None, ge=1, description="Максимальное число страниц в результате.")
    fetch: Optional[FetchCallable] = Field(
        None, description="Собственная функция загрузки URL вместо aiohttp."
    )
    enable_sitemap: bool = Field(False, description="Засеять очередь из /sitemap.xml.")
    follow_domain_redirects: bool = Field(
        False, description="Обрабатывать страницы, перенаправленные на другой домен."
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")

    @field_validator("match", mode="before")
    def _empty_match_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)) and not v:
            return None
        return v

    def selector_for(self, pathname: str) -> Optional[str]:
        """Возвращает CSS-селектор контента для страницы pathname."""
        if callable(self.content_selector):
            return self.content_selector(pathname) or None
        return self.content_selector or None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlOptions:
    """
    Читает YAML или JSON, накладывает overrides (значения None пропускаются)
    и возвращает проверенный объект CrawlOptions.
    Без файла конфигурация строится только из overrides.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlOptions(**data)
