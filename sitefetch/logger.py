# File: sitefetch/logger.py
"""Логирование sitefetch.

Все модули пишут в именованный логгер ``sitefetch``. Консольный вывод идёт в
stderr, потому что stdout занят результатом обхода (текст страниц).
Файл логов необязателен и ротируется по размеру.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "sitefetch"

# ротация файла логов: 5 МБ, три архива
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUP_COUNT: Final[int] = 3


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = LOG_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает логгер ``sitefetch``: stderr и, если задан *log_file*, файл.

    С ``replace_handlers=False`` новые обработчики добавляются к существующим.
    """
    formatter = logging.Formatter(log_format)
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    # sys.stderr берётся в момент вызова, чтобы CliRunner мог его подменить
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    lg.addHandler(console)

    if log_file is not None:
        file_handler = RotatingFileHandler(
            str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        lg.addHandler(file_handler)

    lg.propagate = False
    return lg


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    *,
    silent: bool = False,
) -> logging.Logger:
    """Настройка для CLI: ``silent`` оставляет в логе только ошибки."""
    return configure(level="ERROR" if silent else level, log_file=log_file)


logger: logging.Logger = init_logging()

__all__ = ["LOG_FORMAT", "LOGGER_NAME", "logger", "configure", "init_logging"]
