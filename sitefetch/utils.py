# File: sitefetch/utils.py
"""sitefetch.utils: Утилиты для работы с URL и сопоставления путей по glob-шаблонам."""

from __future__ import annotations

import ipaddress
import re
from typing import Collection, Dict, Iterable, List, Sequence
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from sitefetch.logger import logger

__all__: Sequence[str] = (
    "is_valid_url",
    "url_host",
    "url_pathname",
    "url_origin",
    "resolve_url",
    "match_path",
    "remove_duplicates",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_REGEX_CACHE: Dict[str, re.Pattern[str]] = {}
# символы, запрещённые в имени хоста
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20\x7f#%/:<>?@\[\\\]^|\"'`{}]")
# безопасные символы пути: экранирование "%XX" сохраняется как есть
_PATH_SAFE = "/%:@!$&'()*+,;=~[]|^"


def _valid_host(host: str) -> bool:
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True
    return not _FORBIDDEN_HOST_CHARS.search(host)


def is_valid_url(url: str) -> bool:
    """Проверяет, что URL абсолютный, использует http(s), содержит корректный хост и порт."""
    try:
        parsed = urlsplit(url)
        # .port бросает ValueError для нечислового порта или вне 0-65535
        parsed.port
        valid = (
            parsed.scheme in ("http", "https")
            and bool(parsed.hostname)
            and _valid_host(parsed.hostname)
        )
    except ValueError as exc:
        logger.debug("URL validation error %s: %s", url, exc)
        return False
    logger.debug("URL valid: %s -> %s", url, valid)
    return valid


def url_host(url: str) -> str:
    """Возвращает хост URL в нижнем регистре, с портом только если он нестандартный."""
    parsed = urlsplit(url)
    host = (parsed.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port
    if port is not None and port != _DEFAULT_PORTS.get(parsed.scheme.lower()):
        host = f"{host}:{port}"
    return host


def url_pathname(url: str) -> str:
    """Возвращает путь URL без query и fragment; пустой путь считается "/".

    Путь приводится к percent-encoded виду, как ``URL.pathname`` в браузере:
    ``/a b`` и ``/a%20b`` дают один и тот же ключ.
    """
    return quote(urlsplit(url).path, safe=_PATH_SAFE) or "/"


def url_origin(url: str) -> str:
    """Возвращает scheme://host[:port] для URL."""
    parsed = urlsplit(url)
    return urlunsplit((parsed.scheme.lower(), url_host(url), "", "", ""))


def resolve_url(href: str, base_url: str) -> str:
    """Разрешает ссылку относительно base_url и отбрасывает fragment."""
    absolute = urljoin(base_url, href.strip())
    parsed = urlsplit(absolute)
    return urlunsplit((parsed.scheme, parsed.netloc, parsed.path or "/", parsed.query, ""))


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


# --------------------------------------------------------------------------- #
# Glob matching                                                               #
# --------------------------------------------------------------------------- #


def _translate(pattern: str) -> str:
    """Переводит glob-шаблон в регулярное выражение (без якорей)."""
    out: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] == "/":
                    # "**/" may also match zero segments
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "/" and pattern[i + 1:] == "**":
            # trailing "/**" also matches the directory itself
            out.append("(?:/.*)?")
            break
        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                if body[0] in "!^":
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end + 1
                continue
        elif c == "{":
            end = pattern.find("}", i)
            if end == -1:
                out.append(re.escape(c))
            else:
                options = pattern[i + 1:end].split(",")
                out.append("(?:" + "|".join(_translate(o) for o in options) + ")")
                i = end + 1
                continue
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def _compile(pattern: str) -> re.Pattern[str]:
    if pattern not in _REGEX_CACHE:
        _REGEX_CACHE[pattern] = re.compile(rf"\A{_translate(pattern)}\Z")
    return _REGEX_CACHE[pattern]


def match_path(pathname: str, patterns: Iterable[str]) -> bool:
    """Проверяет pathname по списку glob-шаблонов.

    ``*`` и ``?`` работают в пределах одного сегмента, ``**`` через несколько сегментов.
    Шаблоны с префиксом ``!`` исключают совпавшие пути. Если заданы только
    исключающие шаблоны, подходит любой путь, не попавший под исключение.
    """
    positive: List[str] = []
    negative: List[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            negative.append(pattern[1:])
        else:
            positive.append(pattern)

    if any(_compile(p).match(pathname) for p in negative):
        return False
    if not positive:
        return True
    return any(_compile(p).match(pathname) for p in positive)
