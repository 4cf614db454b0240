# === FILE: sitefetch/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска sitefetch через командную строку.

Опции:
  -o, --outfile PATH         Сохранить результат в файл (.json → JSON, иначе текст)
  --concurrency INT          Сколько страниц загружать одновременно
  -m, --match PATTERN        Glob-шаблон pathname (можно указать несколько раз)
  --content-selector CSS     CSS-селектор основного контента
  --limit INT                Макс. число страниц в результате
  --sitemap/--no-sitemap     Засеять очередь из /sitemap.xml
  --follow-domain-redirects  Обрабатывать редиректы на другой домен
  -c, --config PATH          YAML/JSON файл с параметрами обхода
  --log-level LEVEL          Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH            Файл для логов (stderr, если не указан)
  --silent                   Выводить в лог только ошибки

Дополнительно:
  --version, -v              Показать версию sitefetch

Пример:
  sitefetch https://example.com/docs -m "/docs/**" --limit 50 -o docs.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from sitefetch import __version__
from sitefetch.config import load_config
from sitefetch.logger import init_logging
from sitefetch.report import render_pages, serialize_pages
from sitefetch.scanner import fetch_site

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='sitefetch, version %(version)s')
@click.argument('url')
@click.option(
    '--outfile', '-o', 'outfile',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить результат в файл (stdout, если не указан)'
)
@click.option('--concurrency', type=int, default=None, help='Число одновременных загрузок (default: 3)')
@click.option('--match', '-m', 'match', multiple=True, help='Glob-шаблон pathname')
@click.option('--content-selector', 'content_selector', default=None, help='CSS-селектор контента')
@click.option('--limit', type=int, default=None, help='Макс. число страниц в результате')
@click.option(
    '--sitemap/--no-sitemap', 'enable_sitemap',
    default=None,
    help='Засеять очередь из /sitemap.xml'
)
@click.option(
    '--follow-domain-redirects', 'follow_domain_redirects',
    is_flag=True, default=None,
    help='Обрабатывать страницы, перенаправленные на другой домен'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option('--silent', is_flag=True, help='Выводить в лог только ошибки')
def cli(url, outfile, concurrency, match, content_selector, limit, enable_sitemap,
        follow_domain_redirects, config_path, log_level, log_file, silent):
    """Загрузить сайт начиная с URL и сохранить содержимое страниц."""
    init_logging(log_level, log_file, silent=silent)
    try:
        options = load_config(
            config_path,
            concurrency=concurrency,
            match=list(match) or None,
            content_selector=content_selector,
            limit=limit,
            enable_sitemap=enable_sitemap,
            follow_domain_redirects=follow_domain_redirects or None,
        )
    except (ValidationError, ValueError, TypeError, OSError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        pages = asyncio.run(fetch_site(url, options))
    except ValueError as e:
        print_error(f'Некорректный URL: {e}')

    if outfile is None:
        click.echo(serialize_pages(pages, 'text'))
        return

    try:
        saved = render_pages(pages, outfile)
    except OSError as e:
        print_error(f'Ошибка при сохранении результата: {e}')
    click.echo(f'Saved {len(pages)} pages: {saved}')


if __name__ == "__main__":
    cli()
